"""Query string of a request."""

from urllib.parse import parse_qsl


class QueryParams:
    """Decoded query string; a repeated key resolves to its first value.

    ``raw`` is the undecoded ``query_string`` from the scope, which
    ``Request.url`` appends verbatim.
    """

    __slots__ = ("_values", "raw")

    def __init__(self, query_string: bytes = b"") -> None:
        values: dict[str, str] = {}
        for key, value in parse_qsl(query_string.decode("latin-1"), keep_blank_values=True):
            values.setdefault(key, value)
        self.raw = query_string
        self._values = values

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)
