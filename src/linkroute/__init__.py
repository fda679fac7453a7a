"""
linkroute - Connector routing for box-and-line diagrams

Computes the path of a link between two anchored terminals: straight,
bezier, or orthogonal (Manhattan) with optional obstacle avoidance.

Example:
    >>> from linkroute import Direction, Point, Terminal, get_link
    >>> link = get_link(
    ...     [Terminal(Point(0, 0), Direction.E), Terminal(Point(100, 50), Direction.W)],
    ...     {"type": "manhattan"},
    ... )
    >>> [p.as_tuple() for p in link.points]
    [(0, 0), (50.0, 0), (50.0, 50), (100, 50)]

Debug Mode Example:
    >>> trace = RouteTrace()
    >>> points = compute_points(link, trace=trace)
    >>> print(trace.summary())
"""

from .autoroute import AutoRouter
from .box import Box, Channel, Side, find_channel
from .config import LinkConfig
from .geometry import Direction, Point, route_direction
from .links import (
    Link,
    LinkType,
    Terminal,
    compute_points,
    control_points,
    get_link,
)
from .manhattan import build_route, merge_segments, process_positions, route_internal
from .png_renderer import PNGRenderer, render_to_png
from .scene import RoutingContext, SceneGraph, collect_routing_context
from .tracer import DetourRecord, RouteStage, RouteTrace

__version__ = "0.9.1"

__all__ = [
    # Main API
    "get_link",
    "compute_points",
    "control_points",
    "Link",
    "LinkType",
    "Terminal",
    "LinkConfig",
    # Geometry
    "Point",
    "Direction",
    "route_direction",
    "Box",
    "Side",
    "Channel",
    "find_channel",
    # Orthogonal routing
    "route_internal",
    "process_positions",
    "merge_segments",
    "build_route",
    "AutoRouter",
    # Scene graph
    "SceneGraph",
    "RoutingContext",
    "collect_routing_context",
    # Rendering
    "PNGRenderer",
    "render_to_png",
    # Debug/Tracing (for development and debugging)
    "RouteTrace",
    "RouteStage",
    "DetourRecord",
]
