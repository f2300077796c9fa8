"""Action — a terminal handler plus its ordered middlewares."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from perch.middleware.protocol import Middleware


@dataclass(frozen=True, slots=True)
class Action:
    """What answers one ``(path, method)`` pair.

    ``middlewares`` are applied in order at bind time: the first one is
    the outermost wrapper. Adding middlewares produces a new Action.
    """

    handler: Callable[..., Any]
    middlewares: tuple[Middleware, ...] = ()

    def with_middleware(self, *middlewares: Middleware) -> "Action":
        """Return a new Action with *middlewares* appended after the current ones."""
        return Action(self.handler, (*self.middlewares, *middlewares))


def new_handler(handler: Callable[..., Any], *middlewares: Middleware) -> Action:
    """Pair *handler* with *middlewares*, kept in the given order.

    The handler is not validated here. A ``None`` handler only fails
    once a request reaches it.
    """
    return Action(handler, middlewares)
