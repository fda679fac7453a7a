"""
Initial orthogonal (Manhattan) routing.

Builds the minimum-bend axis-aligned path between two terminals whose exit
directions are fixed, without looking at obstacles:

- route_internal() works out the turn coordinates by case analysis on the
  two exit normals
- process_positions() expands those scalars into points
- merge_segments() drops duplicate and collinear points
"""

from typing import List

from .geometry import Direction, Point


def _offset(point: Point, normal: Direction, buffer: float) -> float:
    """Coordinate of point pushed buffer along normal, on the normal's axis."""
    return normal.vector.squared().dot(point.translated(normal.vector.scaled(buffer)))


def route_internal(
    start: Point,
    end: Point,
    start_normal: Direction,
    end_normal: Direction,
    buffer: float,
) -> List[float]:
    """
    Compute the turn coordinates of an orthogonal route.

    The result alternates axes: the first value is the coordinate held by
    the first segment (start.y when leaving horizontally, start.x
    otherwise), each following value is the coordinate of the next
    segment, and the last one is the end coordinate on the final axis.

    Args:
        start: Start terminal position
        end: End terminal position
        start_normal: Exit direction at the start (cardinal)
        end_normal: Exit direction at the end (cardinal)
        buffer: Minimum stub length when a route has to back away from a
                terminal

    Returns:
        List of scalar turn coordinates
    """
    direction = start.direction_to(end)
    average = start.midpoint(end)
    horizontal = start_normal.is_horizontal
    positions = [start.y if horizontal else start.x]
    horizontal = not horizontal

    start_flow = start_normal.dot(direction)
    end_flow = end_normal.dot(direction)
    normals = start_normal.dot(end_normal)

    if normals == 0:
        if not (start_flow >= 0 and end_flow <= 0):
            # Two extra bends: back away from whichever end points the wrong way
            if start_flow < 0:
                positions.append(_offset(start, start_normal, buffer))
            else:
                positions.append(average.y if horizontal else average.x)
            horizontal = not horizontal

            if end_flow > 0:
                positions.append(_offset(end, end_normal, buffer))
            else:
                positions.append(average.y if horizontal else average.x)
            horizontal = not horizontal
    elif normals > 0:
        # Both ends leave the same way: turn beyond whichever end is behind
        if start_flow < 0:
            positions.append(_offset(start, start_normal, buffer))
        else:
            positions.append(_offset(end, end_normal, buffer))
        horizontal = not horizontal
    else:
        if start_flow < 0:
            positions.append(_offset(start, start_normal, buffer))
            horizontal = not horizontal

        positions.append(average.y if horizontal else average.x)
        horizontal = not horizontal

        if end_flow > 0:
            positions.append(_offset(end, end_normal, buffer))
            horizontal = not horizontal

    positions.append(end.y if horizontal else end.x)
    return positions


def process_positions(
    start: Point, end: Point, positions: List[float], horizontal: bool
) -> List[Point]:
    """
    Expand turn coordinates into a point sequence.

    Args:
        start: Start terminal position
        end: End terminal position
        positions: Output of route_internal()
        horizontal: Whether the route leaves the start horizontally

    Returns:
        Points from start to end inclusive
    """
    coords = [start.x if horizontal else start.y]
    coords.extend(positions)
    coords.append(end.x if horizontal == (len(positions) % 2 == 1) else end.y)

    points = [start]
    for i in range(2, len(coords) - 1):
        horizontal = not horizontal
        prev, current = coords[i - 1], coords[i]
        points.append(Point(prev, current) if horizontal else Point(current, prev))
    points.append(end)
    return points


def merge_segments(points: List[Point]) -> List[Point]:
    """
    Remove redundant points in place and return the list.

    Walks from the end towards the start and drops any interior point that
    coincides with a neighbour or sits between two points on the same
    horizontal or vertical line. The first and last points always stay.
    Applying it twice gives the same result as applying it once.
    """
    i = len(points) - 2
    while i >= 1:
        prev, current, following = points[i - 1], points[i], points[i + 1]
        if (
            current == prev
            or current == following
            or prev.x == current.x == following.x
            or prev.y == current.y == following.y
        ):
            del points[i]
            # The point that moved into slot i has a new predecessor
            i = min(i, len(points) - 2)
        else:
            i -= 1
    return points


def build_route(
    start: Point,
    end: Point,
    start_normal: Direction,
    end_normal: Direction,
    buffer: float,
) -> List[Point]:
    """Route start to end orthogonally and return the merged points."""
    positions = route_internal(start, end, start_normal, end_normal, buffer)
    points = process_positions(start, end, positions, start_normal.is_horizontal)
    return merge_segments(points)
