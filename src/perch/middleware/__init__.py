"""Middleware — plain ``Handler -> Handler`` wrappers, no inheritance required.

A middleware is any callable matching:
    def mw(next: Handler) -> Handler

``chain(handler, m1, m2)`` builds ``m1(m2(handler))``; ``m1`` sees the
request first.

Bundled middleware (optional, the routing core does not use them):
    CORSMiddleware -- Cross-Origin Resource Sharing
    RecoveryMiddleware -- Exceptions become 500 responses
    enforce_json -- Reject non-JSON request bodies
"""

from perch.middleware.content_type import enforce_json
from perch.middleware.cors import CORSConfig, CORSMiddleware
from perch.middleware.protocol import Handler, Middleware, chain
from perch.middleware.recovery import RecoveryMiddleware

__all__ = [
    "CORSConfig",
    "CORSMiddleware",
    "Handler",
    "Middleware",
    "RecoveryMiddleware",
    "chain",
    "enforce_json",
]
