"""Request headers as middleware reads them."""

from collections.abc import Mapping


class Headers:
    """Case-insensitive, read-only view over the ASGI header pairs.

    Middleware only ever asks for one value (``content-type``, ``origin``,
    ``access-control-request-method``), so a repeated name resolves to its
    first occurrence. ``raw`` keeps the pairs exactly as the server sent them.
    """

    __slots__ = ("_first", "raw")

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        first: dict[str, str] = {}
        for name, value in raw:
            first.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
        self.raw = raw
        self._first = first

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str]) -> "Headers":
        """Headers for a hand-built ``Request``, e.g. in tests."""
        return cls(
            tuple(
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in headers.items()
            )
        )

    def __getitem__(self, name: str) -> str:
        return self._first[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._first

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._first.get(name.lower(), default)
