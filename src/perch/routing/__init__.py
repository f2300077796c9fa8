"""Routing — declarative route tables, composition, and binding.

Route tables are nested dicts (``path -> method -> Action``). They are
prefixed and layered with ``new_group``, merged with ``merge_routes`` and
registered with a multiplexer by ``bind_routes_to_mux``.
"""

from perch.routing.action import Action, new_handler
from perch.routing.binder import Multiplexer, bind_routes_to_mux, pattern_key
from perch.routing.mux import ServeMux
from perch.routing.table import (
    ANY_METHOD,
    GroupRoute,
    MethodMap,
    RouteTable,
    merge_routes,
    new_group,
    new_group_route,
    set_middleware,
)

__all__ = [
    "ANY_METHOD",
    "Action",
    "GroupRoute",
    "MethodMap",
    "Multiplexer",
    "RouteTable",
    "ServeMux",
    "bind_routes_to_mux",
    "merge_routes",
    "new_group",
    "new_group_route",
    "new_handler",
    "pattern_key",
    "set_middleware",
]
