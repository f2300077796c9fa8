"""ASGI plumbing behind ServeMux: dispatch, error mapping, response sending."""
