"""
Links between diagram terminals.

A Link is an immutable snapshot of two terminals (position and exit
direction), a style configuration and, for auto-routed links, the obstacle
context. Its point sequence is derived on demand by compute_points(), which
dispatches on the link type:

- direct / entityRelations: straight from start to end
- bezier: start and end, plus control points from control_points()
- manhattan: an orthogonal route, optionally steered around obstacles

Links are rebuilt, not mutated, when a terminal moves.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from .autoroute import AutoRouter
from .config import LinkConfig
from .geometry import Direction, Point
from .manhattan import merge_segments, process_positions, route_internal
from .scene import RoutingContext
from .tracer import RouteTrace

logger = logging.getLogger(__name__)


class LinkType(Enum):
    """Route variants, keyed by the style "type" value."""

    DIRECT = "direct"
    BEZIER = "bezier"
    ENTITY_RELATIONS = "entityRelations"
    MANHATTAN = "manhattan"


@dataclass(frozen=True)
class Terminal:
    """A link end: where it attaches and the direction it must leave in."""

    point: Point
    direction: Direction


@dataclass(frozen=True)
class Link:
    """
    A connector between two terminals.

    Attributes:
        kind: Route variant.
        start: Start terminal position.
        end: End terminal position.
        start_normal: Exit direction at the start.
        end_normal: Exit direction at the end.
        config: Style configuration.
        start_marker: Marker drawn at the start, opaque to routing.
        end_marker: Marker drawn at the end, opaque to routing.
        context: Obstacles to avoid when config.auto_route is set.
    """

    kind: LinkType
    start: Point
    end: Point
    start_normal: Direction
    end_normal: Direction
    config: LinkConfig = field(default_factory=LinkConfig)
    start_marker: Any = None
    end_marker: Any = None
    context: Optional[RoutingContext] = None

    def __post_init__(self):
        if self.kind == LinkType.MANHATTAN:
            for normal in (self.start_normal, self.end_normal):
                if not normal.is_cardinal:
                    raise ValueError(
                        f"manhattan links need N/S/E/W exit normals, got {normal.name}"
                    )

    @property
    def points(self) -> List[Point]:
        """The point sequence, recomputed on every access."""
        return compute_points(self)

    @property
    def control_points(self) -> Optional[Tuple[Point, Point]]:
        return control_points(self)

    @cached_property
    def length(self) -> float:
        """Total length of the link's polyline, in pixels."""
        points = self.points
        return sum(a.distance(b) for a, b in zip(points, points[1:]))

    def relative_position(
        self, x: Union[float, str], offset_x: float = 0, offset_y: float = 0
    ) -> Tuple[float, float]:
        """
        Position at a distance along the link, e.g. for a label.

        Args:
            x: Distance along the link. Numbers in [-1, 1] are fractions of
               the length; "50%" is a fraction and "12px" an absolute
               distance. Negative values count back from the end.
            offset_x: Added to the resulting x
            offset_y: Added to the resulting y

        Returns:
            (x, y) tuple
        """
        total = self.length
        if isinstance(x, str):
            text = x.strip()
            if text.endswith("%"):
                p = float(text[:-1]) / 100 * total
            elif text.endswith("px"):
                p = float(text[:-2])
            else:
                p = float(text)
                if -1 <= p <= 1:
                    p *= total
        else:
            p = x * total if -1 <= x <= 1 else x
        if p < 0:
            p = total + p
        p = min(max(p, 0), total)

        points = self.points
        point = points[-1]
        for a, b in zip(points, points[1:]):
            d = a.distance(b)
            if p <= d:
                point = a.translated(a.direction_to(b).scaled(p))
                break
            p -= d
        return (point.x + offset_x, point.y + offset_y)

    def render(self, view):
        """Hand the link to a renderer implementing render_link()."""
        return view.render_link(self)

    def __str__(self) -> str:
        return f"{self.kind.value} link {self.start} -> {self.end}"


def get_link(
    terminals: Sequence[Terminal],
    shape_config: Optional[Mapping[str, Any]] = None,
    start_marker: Any = None,
    end_marker: Any = None,
    context: Optional[RoutingContext] = None,
) -> Optional[Link]:
    """
    Create a link from two terminals and a flat style mapping.

    Args:
        terminals: (start, end) terminals
        shape_config: Style mapping; "type" selects the variant
        start_marker: Marker at the start
        end_marker: Marker at the end
        context: Obstacle context for auto-routed Manhattan links

    Returns:
        The Link, or None when the type is not supported
    """
    config = LinkConfig.from_mapping(shape_config)
    try:
        kind = LinkType(config.type)
    except ValueError:
        logger.warning(f"link type not supported: {config.type}")
        return None

    start, end = terminals
    return Link(
        kind=kind,
        start=start.point,
        end=end.point,
        start_normal=start.direction,
        end_normal=end.direction,
        config=config,
        start_marker=start_marker,
        end_marker=end_marker,
        context=context,
    )


def compute_points(link: Link, trace: Optional[RouteTrace] = None) -> List[Point]:
    """
    Compute the point sequence of a link.

    Args:
        link: The link
        trace: Optional RouteTrace recording each routing stage

    Returns:
        Points from link.start to link.end inclusive
    """
    if trace is not None:
        trace.link_type = link.kind.value

    if link.kind in (LinkType.DIRECT, LinkType.BEZIER, LinkType.ENTITY_RELATIONS):
        return [link.start, link.end]
    if link.kind == LinkType.MANHATTAN:
        return _manhattan_points(link, trace)
    raise ValueError(f"unhandled link type: {link.kind}")


def _manhattan_points(link: Link, trace: Optional[RouteTrace]) -> List[Point]:
    config = link.config
    positions = route_internal(
        link.start, link.end, link.start_normal, link.end_normal, config.min_buffer
    )
    points = process_positions(
        link.start, link.end, positions, link.start_normal.is_horizontal
    )
    if trace is not None:
        trace.add_stage("initial_route", {"positions": positions}, points)

    merge_segments(points)
    if trace is not None:
        trace.add_stage("merged", {"num_points": len(points)}, points)

    if config.auto_route:
        context = link.context
        if context is None:
            logger.debug("autoRoute set but no routing context given; skipping")
        elif len(context.boxes) > 1:
            router = AutoRouter(
                min_buffer=config.min_buffer,
                max_channel_width=config.max_channel_width,
                trace=trace,
            )
            router.route(
                points,
                context.container,
                context.boxes,
                context.start_box,
                context.end_box,
            )
            if trace is not None:
                trace.add_stage(
                    "auto_routed", {"num_boxes": len(context.boxes)}, points
                )

    merge_segments(points)
    if trace is not None:
        trace.add_stage("final", {"num_points": len(points)}, points)
    return points


def control_points(link: Link) -> Optional[Tuple[Point, Point]]:
    """
    Cubic curve control points for a bezier link, None for other types.

    Each control point sits on the midline between the ends, in line with
    its terminal along the terminal's exit axis.
    """
    if link.kind != LinkType.BEZIER:
        return None
    s, e = link.start, link.end
    if link.start_normal.x == 0:
        first = Point(s.x, (s.y + e.y) / 2)
    else:
        first = Point((s.x + e.x) / 2, s.y)
    if link.end_normal.x == 0:
        second = Point(e.x, (s.y + e.y) / 2)
    else:
        second = Point((s.x + e.x) / 2, e.y)
    return (first, second)
