"""HTTP primitives exchanged by handlers and middleware."""

from perch.http.headers import Headers
from perch.http.query import QueryParams
from perch.http.request import Request
from perch.http.response import Response

__all__ = ["Headers", "QueryParams", "Request", "Response"]
