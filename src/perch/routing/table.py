"""Route tables — declarative ``path -> method -> Action`` mappings.

Tables are plain dicts so they can be written as literals::

    users: RouteTable = {
        "/list": {"GET": new_handler(list_users, enforce_json)},
        "/{id}": {"GET": new_handler(get_user), "DELETE": new_handler(drop_user)},
        "/ping": {ANY_METHOD: new_handler(pong)},
    }

Every function here is copy-on-write: inputs are never mutated and the
returned table shares no dicts with them. Actions are immutable, so they
are shared freely.

Collision policy: when two tables declare the same full path, the later
one replaces the earlier path's whole method mapping. Methods are never
merged across tables.
"""

from typing import TypeAlias

from perch.middleware.protocol import Middleware
from perch.routing.action import Action

# Method key that matches every HTTP method not registered explicitly
ANY_METHOD = ""

MethodMap: TypeAlias = dict[str, Action]
RouteTable: TypeAlias = dict[str, MethodMap]
GroupRoute: TypeAlias = dict[str, RouteTable]


def new_group_route(prefix: str, *tables: RouteTable) -> RouteTable:
    """Prepend *prefix* to every path of every table.

    A later table whose prefixed path collides with an earlier one wins
    the whole path.
    """
    result: RouteTable = {}
    for table in tables:
        for path, methods in table.items():
            result[prefix + path] = dict(methods)
    return result


def set_middleware(table: RouteTable, *middlewares: Middleware) -> RouteTable:
    """Append *middlewares* to every Action of *table*.

    The new middlewares land after whatever each Action already carries,
    so they run inside the existing ones. Returns a new table.
    """
    return {
        path: {method: action.with_middleware(*middlewares) for method, action in methods.items()}
        for path, methods in table.items()
    }


def new_group(group: GroupRoute, *middlewares: Middleware) -> RouteTable:
    """Flatten a prefix -> table mapping and layer *middlewares* on every Action."""
    flat: RouteTable = {}
    for prefix, table in group.items():
        flat.update(new_group_route(prefix, table))
    return set_middleware(flat, *middlewares)


def merge_routes(*tables: RouteTable) -> RouteTable:
    """Combine *tables* into one fresh table, later tables winning whole paths.

    TODO: revisit whether a same-path collision between unrelated tables
    should merge per method instead of replacing the whole mapping.
    """
    merged: RouteTable = {}
    for table in tables:
        for path, methods in table.items():
            merged[path] = dict(methods)
    return merged
