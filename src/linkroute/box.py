"""
Obstacle boxes and routing channels.

A Box is an axis-aligned rectangle in diagram coordinates. The auto-router
asks which side of a box a path segment strikes, and then looks for the
channel: the open strip of space next to that side, bounded by the nearest
neighbouring boxes or by the container.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence

from .geometry import Point


class Side(IntEnum):
    """Side of a box struck by a segment."""

    LEFT = 0
    TOP = 1
    RIGHT = 2
    BOTTOM = 3
    INSIDE = 4  # Segment starts inside the box

    @property
    def is_vertical_edge(self) -> bool:
        """LEFT and RIGHT edges are vertical lines."""
        return self in (Side.LEFT, Side.RIGHT)


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle with (x, y) at the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"box dimensions must be >= 0, got {self.width}x{self.height}"
            )

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def get_left(self) -> Point:
        """Midpoint of the left edge."""
        return Point(self.left, self.center.y)

    def get_right(self) -> Point:
        """Midpoint of the right edge."""
        return Point(self.right, self.center.y)

    def get_top(self) -> Point:
        """Midpoint of the top edge."""
        return Point(self.center.x, self.top)

    def get_bottom(self) -> Point:
        """Midpoint of the bottom edge."""
        return Point(self.center.x, self.bottom)

    def contains(self, point: Point) -> bool:
        """True when the point lies strictly inside the box."""
        return self.left < point.x < self.right and self.top < point.y < self.bottom

    def distance(self, point: Point) -> float:
        """Distance from a point to the box; zero inside or on the border."""
        dx = max(self.left - point.x, 0, point.x - self.right)
        dy = max(self.top - point.y, 0, point.y - self.bottom)
        return (dx * dx + dy * dy) ** 0.5

    def detect_intersection(self, start: Point, end: Point) -> Optional[Side]:
        """
        Find the side through which the segment start->end enters the box.

        Only the open interior counts: a segment running along an edge or
        touching a corner does not intersect. Uses Liang-Barsky clipping.

        Returns:
            The entered Side, Side.INSIDE if the segment starts inside the
            box, or None if there is no intersection
        """
        dx = end.x - start.x
        dy = end.y - start.y
        t_enter, t_exit = 0.0, 1.0
        entered: Optional[Side] = None

        for p, q, side in (
            (-dx, start.x - self.left, Side.LEFT),
            (dx, self.right - start.x, Side.RIGHT),
            (-dy, start.y - self.top, Side.TOP),
            (dy, self.bottom - start.y, Side.BOTTOM),
        ):
            if p == 0:
                # Parallel to this edge: must be strictly on the inner side
                if q <= 0:
                    return None
                continue
            t = q / p
            if p < 0:
                if t > t_exit:
                    return None
                if t >= t_enter:
                    t_enter, entered = t, side
            else:
                if t < t_enter:
                    return None
                t_exit = min(t_exit, t)

        if t_exit <= t_enter:
            return None
        if entered is None:
            return Side.INSIDE
        return entered


@dataclass
class Channel:
    """
    Open rectangular strip next to one side of a box.

    horizontal is True for channels above or below a box (a horizontal
    band that a vertical segment can slide across), False for channels to
    the left or right.
    """

    left: float
    right: float
    top: float
    bottom: float
    horizontal: bool

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def overlaps(self, box: Box) -> bool:
        """True when the channel and the box share interior area."""
        return (
            self.left < box.right
            and box.left < self.right
            and self.top < box.bottom
            and box.top < self.bottom
        )


def find_channel(
    container: Box,
    index: int,
    boxes: Sequence[Box],
    side: Side,
    max_channel_width: float,
) -> Channel:
    """
    Compute the channel adjacent to one side of boxes[index].

    The bound facing away from the box is the nearest edge of any other box
    lying wholly beyond the struck edge, or the container edge when there is
    none; either way the channel is never wider than max_channel_width on
    that axis. The two remaining bounds are narrowed to the closest box
    edges among boxes overlapping the channel's span.

    Args:
        container: Bounds of the container holding all boxes
        index: Index of the struck box in boxes
        boxes: All obstacle boxes
        side: Struck side (LEFT, TOP, RIGHT or BOTTOM)
        max_channel_width: Cap on the channel depth away from the box

    Returns:
        The Channel for that side

    Raises:
        ValueError: If side is Side.INSIDE
    """
    box = boxes[index]
    others = [other for i, other in enumerate(boxes) if i != index]

    if side == Side.LEFT:
        right = box.left
        edges = [o.right for o in others if o.right < right]
        left = max(edges) if edges else container.left
        left = min(max(left, right - max_channel_width), right)
        top, bottom = _narrow(others, box.center.y, left, right, vertical=True)
        return Channel(left, right, _or(top, container.top),
                       _or(bottom, container.bottom), horizontal=False)

    if side == Side.RIGHT:
        left = box.right
        edges = [o.left for o in others if o.left > left]
        right = min(edges) if edges else container.right
        right = max(min(right, left + max_channel_width), left)
        top, bottom = _narrow(others, box.center.y, left, right, vertical=True)
        return Channel(left, right, _or(top, container.top),
                       _or(bottom, container.bottom), horizontal=False)

    if side == Side.TOP:
        bottom = box.top
        edges = [o.bottom for o in others if o.bottom < bottom]
        top = max(edges) if edges else container.top
        top = min(max(top, bottom - max_channel_width), bottom)
        left, right = _narrow(others, box.center.x, top, bottom, vertical=False)
        return Channel(_or(left, container.left), _or(right, container.right),
                       top, bottom, horizontal=True)

    if side == Side.BOTTOM:
        top = box.bottom
        edges = [o.top for o in others if o.top > top]
        bottom = min(edges) if edges else container.bottom
        bottom = max(min(bottom, top + max_channel_width), top)
        left, right = _narrow(others, box.center.x, top, bottom, vertical=False)
        return Channel(_or(left, container.left), _or(right, container.right),
                       top, bottom, horizontal=True)

    raise ValueError(f"no channel for side {side!r}")


def _narrow(others, pivot, low, high, vertical):
    """
    Find the closest box edges on either side of pivot.

    For vertical=True the span (low, high) is horizontal and the result is
    (top, bottom) among boxes overlapping it; otherwise the span is vertical
    and the result is (left, right). Missing bounds are None.
    """
    before = after = None
    for other in others:
        if vertical:
            span_lo, span_hi = other.left, other.right
            near, far = other.bottom, other.top
        else:
            span_lo, span_hi = other.top, other.bottom
            near, far = other.right, other.left
        if not (span_hi > low and span_lo < high):
            continue
        if near <= pivot and (before is None or near > before):
            before = near
        if far >= pivot and (after is None or far < after):
            after = far
    return before, after


def _or(value, default):
    return default if value is None else value
