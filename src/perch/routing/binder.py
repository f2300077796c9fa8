"""Binder — flatten route tables and register them with a multiplexer.

The binder is the only place where an Action's middlewares are actually
wrapped around its handler. It never parses paths: every pattern error
comes from the multiplexer and propagates unchanged.
"""

import logging
from typing import Protocol

from perch.middleware.protocol import Handler, chain
from perch.routing.table import ANY_METHOD, RouteTable, merge_routes
from perch.server.negotiation import as_handler

logger = logging.getLogger("perch.routing")


class Multiplexer(Protocol):
    """Anything that can register a handler under a ``"METHOD /path"`` key."""

    def handle(self, key: str, handler: Handler) -> None: ...


def pattern_key(method: str, path: str) -> str:
    """Registration key for *method* on *path*.

    ``ANY_METHOD`` yields the bare path, which the mux reads as "every method".
    """
    if method == ANY_METHOD:
        return path
    return f"{method} {path}"


def bind_routes_to_mux(mux: Multiplexer, *tables: RouteTable) -> None:
    """Merge *tables* and register every chained Action with *mux*.

    Tables are merged with ``merge_routes`` first, so a path declared in a
    later table replaces the earlier declaration as a whole.
    """
    # Multiplexers other than ServeMux carry no MuxConfig
    config = getattr(mux, "config", None)
    in_thread = bool(getattr(config, "sync_handlers_in_thread", False))

    merged = merge_routes(*tables)
    for path, methods in merged.items():
        for method, action in methods.items():
            key = pattern_key(method, path)
            terminal = as_handler(action.handler, in_thread=in_thread)
            mux.handle(key, chain(terminal, *action.middlewares))
            logger.debug("bound %s (%d middleware)", key, len(action.middlewares))
