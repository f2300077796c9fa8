"""Request multiplexer with trie-based path matching.

``ServeMux`` is the registry the binder writes into. It accepts
``"METHOD /path"`` keys (or a bare ``"/path"`` for every method), owns
all pattern parsing, and is itself an ASGI application.
"""

import logging
import re
from dataclasses import dataclass

from perch._internal.asgi import Receive, Scope, Send
from perch.config import MuxConfig
from perch.errors import ConfigurationError, MethodNotAllowed, NotFound
from perch.middleware.protocol import Handler
from perch.routing.params import CONVERTERS
from perch.routing.route import MuxMatch, PathSegment, Pattern, Registration

logger = logging.getLogger("perch.routing")

# RFC 9110 token characters
_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [PathSegment("users"), PathSegment("{id:int}", ..., param_type="int")]
        "/files/{path:path}" -> [PathSegment("files"), PathSegment("{path:path}", ...)]

    Raises ``ConfigurationError`` for anything the matcher cannot honour.
    """
    if not path.startswith("/"):
        msg = f"Route path {path!r} must start with '/'."
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    seen_names: set[str] = set()
    parts = [part for part in path.strip("/").split("/") if part]
    for index, part in enumerate(parts):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route path {path!r} uses <param> placeholders; "
                "perch expects {param} (e.g. /users/{id})."
            )
            raise ConfigurationError(msg)

        if not (part.startswith("{") and part.endswith("}")):
            if "{" in part or "}" in part:
                msg = f"Route path {path!r} has a malformed segment {part!r}."
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part))
            continue

        inner = part[1:-1]
        param_name, _, param_type = inner.partition(":")
        param_type = param_type or "str"
        if not param_name.isidentifier():
            msg = f"Route path {path!r} has an invalid parameter name {param_name!r}."
            raise ConfigurationError(msg)
        if param_type not in CONVERTERS:
            msg = f"Route path {path!r} uses unknown converter {param_type!r}."
            raise ConfigurationError(msg)
        if param_type == "path" and index != len(parts) - 1:
            msg = f"Route path {path!r}: a {{name:path}} segment must be last."
            raise ConfigurationError(msg)
        if param_name in seen_names:
            msg = f"Route path {path!r} repeats parameter {param_name!r}."
            raise ConfigurationError(msg)
        seen_names.add(param_name)
        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=param_name,
                param_type=param_type,
            )
        )
    return segments


def parse_pattern(key: str) -> Pattern:
    """Split a registration key into method and path.

    ``"GET /users"`` -> method ``"GET"``; ``"/users"`` -> method ``""``.
    """
    key = key.strip()
    if key.startswith("/"):
        method, path = "", key
    else:
        method, _, path = key.partition(" ")
        path = path.strip()
        if not _METHOD_RE.match(method):
            msg = f"Pattern {key!r} has an invalid method {method!r}."
            raise ConfigurationError(msg)
    return Pattern(method=method, path=path, segments=tuple(parse_path(path)))


class _TrieNode:
    """A node in the pattern trie."""

    __slots__ = ("catch_all", "children", "param_child", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all edge (path converter)
        self.catch_all: _ParamEdge | None = None
        # Registrations at this node, keyed by method ("" = every method)
        self.routes_by_method: dict[str, Registration] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


class ServeMux:
    """Pattern registry and ASGI dispatcher.

    Usage::

        mux = ServeMux()
        mux.handle("GET /users/{id:int}", show_user)
        mux.handle("/health", health)   # every method
        match = mux.lookup("GET", "/users/42")

    Precedence is decided here, not by callers: static segments beat
    parameters, parameters beat ``{name:path}``, and an exact method
    registration beats the every-method one on the same path.
    """

    __slots__ = ("_registrations", "_root", "config")

    def __init__(self, config: MuxConfig | None = None) -> None:
        self.config: MuxConfig = config or MuxConfig()
        self._root = _TrieNode()
        self._registrations: list[Registration] = []

    def handle(self, key: str, handler: Handler) -> None:
        """Register *handler* under *key*.

        Raises ``ConfigurationError`` for malformed keys or when the same
        method is already registered on an equivalent path.
        """
        pattern = parse_pattern(key)
        node = self._root

        for seg in pattern.segments:
            if seg.is_param and seg.param_type == "path":
                node.catch_all = self._param_edge(node.catch_all, seg, pattern)
                node = node.catch_all.node
            elif seg.is_param:
                node.param_child = self._param_edge(node.param_child, seg, pattern)
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        existing = node.routes_by_method.get(pattern.method)
        if existing is not None:
            msg = f"Pattern {str(pattern)!r} conflicts with {str(existing.pattern)!r}."
            raise ConfigurationError(msg)

        registration = Registration(pattern=pattern, handler=handler)
        node.routes_by_method[pattern.method] = registration
        self._registrations.append(registration)
        logger.debug("registered %s", pattern)

    @staticmethod
    def _param_edge(edge: _ParamEdge | None, seg: PathSegment, pattern: Pattern) -> _ParamEdge:
        """Reuse the parameter edge at this level or create it."""
        name = seg.param_name or ""
        if edge is None:
            regex = CONVERTERS[seg.param_type]
            return _ParamEdge(
                param_name=name,
                param_type=seg.param_type,
                regex=re.compile(f"^{regex}$"),
                node=_TrieNode(),
            )
        if edge.param_name != name or edge.param_type != seg.param_type:
            msg = (
                f"Pattern {str(pattern)!r} declares {seg.value!r} where another "
                f"pattern already uses {{{edge.param_name}:{edge.param_type}}}."
            )
            raise ConfigurationError(msg)
        return edge

    @property
    def registrations(self) -> list[Registration]:
        """Every registration, in the order it was made."""
        return list(self._registrations)

    def lookup(self, method: str, path: str) -> MuxMatch:
        """Find the handler for *method* and *path*.

        Returns a ``MuxMatch`` on success.
        Raises ``NotFound`` if no pattern matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {})
        if result is None:
            raise NotFound(f"No route matches {method} {path!r}")

        node, params = result
        routes = node.routes_by_method

        registration = routes.get(method)
        if registration is None and method == "HEAD" and self.config.head_falls_back_to_get:
            registration = routes.get("GET")
        if registration is None:
            registration = routes.get("")
        if registration is None:
            allowed = set(routes)
            if "GET" in allowed and self.config.head_falls_back_to_get:
                allowed.add("HEAD")
            raise MethodNotAllowed(frozenset(allowed))

        return MuxMatch(registration=registration, path_params=params)

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[_TrieNode, dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        if index == len(parts):
            if node.routes_by_method:
                return node, params
            return None

        part = parts[index]

        # 1. Static child (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Parameter child
        if node.param_child is not None:
            edge = node.param_child
            if edge.regex.match(part):
                new_params = {**params, edge.param_name: part}
                result = self._match_node(edge.node, parts, index + 1, new_params)
                if result is not None:
                    return result

        # 3. Catch-all consumes the rest
        if node.catch_all is not None and node.catch_all.node.routes_by_method:
            remaining = "/".join(parts[index:])
            return node.catch_all.node, {**params, node.catch_all.param_name: remaining}

        return None

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send)
            return

        from perch.server.handler import handle_request

        await handle_request(scope, receive, send, mux=self)


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge lifespan startup and shutdown; the mux has no hooks."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
