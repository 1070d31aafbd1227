"""Routing: ordered route table with exact-match dispatch.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

from paydesk.routing.route import DispatchResult, MissReason, RouteMatch, RouteMiss, RouteRule
from paydesk.routing.router import RouteTable, Router, normalize_path

__all__ = [
    "DispatchResult",
    "MissReason",
    "RouteMatch",
    "RouteMiss",
    "RouteRule",
    "RouteTable",
    "Router",
    "normalize_path",
]
