"""
Obstacle-avoiding refinement for orthogonal link routes.

The initial Manhattan route ignores everything between its terminals. The
AutoRouter walks that route segment by segment and, whenever a segment runs
into an obstacle box, pushes the path out into the channel beside the box:

1. Find the first box the segment enters (the source box is ignored on the
   first segment and the target box on the last).
2. Take the channel on the struck side and break the segment at its centre.
3. Pick a second channel above/below (or left/right of) the box, on the
   side the rest of the route tends towards, and move the remainder of the
   segment into it.

Segments attached to a terminal are never moved as a whole; a short stub is
split off first so the terminal point itself stays fixed.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .box import Box, Channel, Side, find_channel
from .config import DEFAULT_MAX_CHANNEL_WIDTH, DEFAULT_MIN_BUFFER, MAX_ROUTE_ITERATIONS
from .geometry import Point, route_direction
from .manhattan import merge_segments
from .tracer import RouteTrace

logger = logging.getLogger(__name__)


class AutoRouter:
    """
    Re-routes an orthogonal point sequence around obstacle boxes.

    The router keeps no state between calls; boxes passed in are never
    modified.
    """

    def __init__(
        self,
        min_buffer: float = DEFAULT_MIN_BUFFER,
        max_channel_width: float = DEFAULT_MAX_CHANNEL_WIDTH,
        max_iterations: int = MAX_ROUTE_ITERATIONS,
        trace: Optional[RouteTrace] = None,
    ):
        """
        Initialize the router.

        Args:
            min_buffer: Default stub length split off a fixed terminal
            max_channel_width: Cap on channel depth away from a box
            max_iterations: Detours attempted before giving up
            trace: Optional RouteTrace that receives a record per detour
        """
        self.min_buffer = min_buffer
        self.max_channel_width = max_channel_width
        self.max_iterations = max_iterations
        self.trace = trace

    def route(
        self,
        points: List[Point],
        container: Box,
        boxes: Sequence[Box],
        start_box: Optional[int] = None,
        end_box: Optional[int] = None,
    ) -> List[Point]:
        """
        Move the segments of points out of the way of boxes, in place.

        Args:
            points: Orthogonal route from start terminal to end terminal
            container: Bounds that channels may not extend past
            boxes: Obstacle boxes, including the source and target boxes
            start_box: Index of the source box in boxes, if any
            end_box: Index of the target box in boxes, if any

        Returns:
            The same list, rerouted and merged. The route is best effort:
            when the iteration cap is reached it may still cross a box.
        """
        if len(boxes) < 2 or len(points) < 2:
            return points

        detours = 0
        i = 0
        while i < len(points) - 1:
            current = points[i]
            if current == points[i + 1]:
                i += 1
                continue

            hit = self.first_intersection(points, i, boxes, start_box, end_box)
            if hit is None:
                i += 1
                continue

            if detours >= self.max_iterations:
                logger.warning(
                    f"Auto-route gave up after {detours} detours; "
                    f"segment {i} still crosses box {hit[0]}"
                )
                break
            detours += 1

            index, side = hit
            box = boxes[index]
            channel = self.channel(container, index, boxes, side)

            if side.is_vertical_edge:
                pt = Point(channel.center.x, current.y)
                tendency = self.route_tendency(points, pt, box, side)
                lane = self.channel(
                    container, index, boxes, Side.TOP if tendency < 0 else Side.BOTTOM
                )
                d = self._displacement(points, i, "y", pt.y, lane.top, lane.bottom)
                if (side == Side.LEFT and pt.x <= current.x) or (
                    side == Side.RIGHT and pt.x >= current.x
                ):
                    pt = None
                elif i > 0 and not self.has_intersection(
                    [current, Point(current.x, current.y + d), Point(pt.x, pt.y + d)],
                    boxes,
                ):
                    # Moving the whole segment is enough
                    pt = None
            else:
                pt = Point(current.x, channel.center.y)
                tendency = self.route_tendency(points, pt, box, side)
                lane = self.channel(
                    container, index, boxes, Side.LEFT if tendency < 0 else Side.RIGHT
                )
                d = self._displacement(points, i, "x", pt.x, lane.left, lane.right)
                if (side == Side.TOP and pt.y <= current.y) or (
                    side == Side.BOTTOM and pt.y >= current.y
                ):
                    pt = None
                elif i > 0 and not self.has_intersection(
                    [current, Point(current.x + d, current.y), Point(pt.x + d, pt.y)],
                    boxes,
                ):
                    pt = None

            spliced = pt is not None and pt != current
            logger.debug(
                f"Segment {i} hits box {index} on {side.name}: "
                f"{'splice and ' if spliced else ''}move by {d:g}"
            )
            if self.trace is not None:
                self.trace.add_detour(i, index, side, channel, d, spliced)

            if spliced:
                points.insert(i + 1, pt)
                self.move_segment(points, i + 1, d)
                i += 1
            else:
                self.move_segment(points, i, d)
            i += 1

        return merge_segments(points)

    def channel(
        self, container: Box, index: int, boxes: Sequence[Box], side: Side
    ) -> Channel:
        """Channel beside one side of boxes[index]."""
        return find_channel(container, index, boxes, side, self.max_channel_width)

    def first_intersection(
        self,
        points: Sequence[Point],
        i: int,
        boxes: Sequence[Box],
        start_box: Optional[int] = None,
        end_box: Optional[int] = None,
    ) -> Optional[Tuple[int, Side]]:
        """
        Find the box segment i runs into.

        When several boxes are hit, the one nearest the segment's start
        point wins. Boxes the segment starts inside are ignored.

        Returns:
            (box index, struck side) or None
        """
        start = points[i]
        end = points[i + 1]
        last = len(points) - 2
        found: Optional[Tuple[int, Side]] = None
        found_distance = 0.0

        for j, box in enumerate(boxes):
            if (i == 0 and j == start_box) or (i == last and j == end_box):
                continue
            side = box.detect_intersection(start, end)
            if side is None or side == Side.INSIDE:
                continue
            distance = box.distance(start)
            if found is None or distance < found_distance:
                found = (j, side)
                found_distance = distance
        return found

    @staticmethod
    def has_intersection(points: Sequence[Point], boxes: Sequence[Box]) -> bool:
        """True when any segment of points crosses or starts inside any box."""
        for start, end in zip(points, points[1:]):
            for box in boxes:
                if box.detect_intersection(start, end) is not None:
                    return True
        return False

    @staticmethod
    def route_tendency(
        points: Sequence[Point], break_pt: Point, box: Box, side: Side
    ) -> int:
        """
        Decide which way to go around a box.

        Looks at the axis perpendicular to the struck side: first the
        direction from the break point to the end of the route, then the
        reverse of the overall start-to-end direction, and finally which
        half of the box the break point falls in.

        Returns:
            -1 to pass above/left of the box, 1 to pass below/right
        """
        axis = "y" if side.is_vertical_edge else "x"
        tendency = getattr(route_direction(break_pt, points[-1]), axis)
        if tendency == 0:
            tendency = -getattr(route_direction(points[0], points[-1]), axis)
            if tendency == 0:
                if getattr(break_pt, axis) < getattr(box.center, axis):
                    tendency = -1
                else:
                    tendency = 1
        return tendency

    def move_segment(
        self,
        points: List[Point],
        i: int,
        d: float,
        start_padding: Optional[float] = None,
        end_padding: Optional[float] = None,
    ) -> None:
        """
        Shift segment i sideways by d, in place.

        The first and last points never move: moving a segment attached to
        either of them first splits off a stub of length
        min(padding, segment length / 2) and moves the rest instead.
        Collinear neighbours are separated by a duplicate point so the
        move turns them into a jog rather than dragging them along.

        Args:
            points: The route
            i: Index of the segment to move
            d: Distance to move, perpendicular to the segment
            start_padding: Stub length at the start (default min_buffer)
            end_padding: Stub length at the end (default min_buffer)
        """
        if i == 0:
            padding = self.min_buffer if start_padding is None else start_padding
            length = min(padding, points[0].distance(points[1]) / 2)
            stub = points[0].translated(points[0].direction_to(points[1]).scaled(length))
            points.insert(1, stub)
            self.move_segment(points, 1, d, start_padding, end_padding)
            return

        if i == len(points) - 2:
            padding = self.min_buffer if end_padding is None else end_padding
            length = min(padding, points[-1].distance(points[-2]) / 2)
            stub = points[-1].translated(points[-1].direction_to(points[-2]).scaled(length))
            points.insert(len(points) - 1, stub)
            self.move_segment(points, i, d, start_padding, end_padding)
            return

        if points[i].y == points[i + 1].y:
            if points[i - 1].y == points[i].y:
                points.insert(i + 1, points[i])
                i += 1
            if i < len(points) - 2 and points[i + 1].y == points[i + 2].y:
                points.insert(i + 1, points[i + 1])
            points[i] = Point(points[i].x, points[i].y + d)
            points[i + 1] = Point(points[i + 1].x, points[i + 1].y + d)
        else:
            if points[i - 1].x == points[i].x:
                points.insert(i + 1, points[i])
                i += 1
            if i < len(points) - 2 and points[i + 1].x == points[i + 2].x:
                points.insert(i + 1, points[i + 1])
            points[i] = Point(points[i].x + d, points[i].y)
            points[i + 1] = Point(points[i + 1].x + d, points[i + 1].y)

    @staticmethod
    def _displacement(
        points: Sequence[Point], i: int, axis: str, origin: float, low: float, high: float
    ) -> float:
        """
        Distance to move segment i along axis into the lane (low, high).

        Reuses the line of a neighbouring parallel segment already inside
        the lane, which avoids adding bends; otherwise aims for the middle.
        """
        if i > 1:
            before = getattr(points[i - 1], axis)
            if getattr(points[i - 2], axis) == before and low < before < high:
                return before - origin
        if i < len(points) - 3:
            after = getattr(points[i + 2], axis)
            if getattr(points[i + 3], axis) == after and low < after < high:
                return after - origin
        return (low + high) / 2 - origin
