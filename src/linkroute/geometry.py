"""
Geometry primitives for link routing.

Provides the 2-D point type and the compass directions used both as exit
normals on link terminals and as a coarse classification of the vector
between two points.

Coordinates follow screen conventions: x grows to the right and y grows
downward, so NORTH is (0, -1).
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """An immutable 2-D coordinate.

    Equality is exact on both coordinates; no tolerance is applied.
    """

    x: float
    y: float

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other.x) / 2, (self.y + other.y) / 2)

    def direction_to(self, other: "Point") -> "Point":
        """
        Unit vector pointing from this point towards another.

        Returns the zero vector when both points coincide.
        """
        length = self.distance(other)
        if length == 0:
            return Point(0, 0)
        return Point((other.x - self.x) / length, (other.y - self.y) / length)

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def translated(self, vector: "Point") -> "Point":
        return Point(self.x + vector.x, self.y + vector.y)

    def scaled(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def squared(self) -> "Point":
        """Component-wise square, used as an axis mask for unit normals."""
        return Point(self.x * self.x, self.y * self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


class Direction(Enum):
    """The eight compass directions as (dx, dy) vectors."""

    N = (0, -1)
    S = (0, 1)
    E = (1, 0)
    W = (-1, 0)
    NE = (1, -1)
    NW = (-1, -1)
    SE = (1, 1)
    SW = (-1, 1)

    @property
    def x(self) -> int:
        return self.value[0]

    @property
    def y(self) -> int:
        return self.value[1]

    @property
    def vector(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_cardinal(self) -> bool:
        """True for N, S, E and W."""
        return (self.x == 0) != (self.y == 0)

    @property
    def is_horizontal(self) -> bool:
        """True when a link leaving along this normal starts horizontally."""
        return self.x != 0

    def dot(self, other) -> float:
        """Dot product with another Direction or Point."""
        return self.x * other.x + self.y * other.y

    @classmethod
    def from_vector(cls, x: float, y: float) -> "Direction":
        """
        Classify an arbitrary vector by the signs of its components.

        Raises:
            ValueError: If the vector is zero.
        """
        key = ((x > 0) - (x < 0), (y > 0) - (y < 0))
        for direction in cls:
            if direction.value == key:
                return direction
        raise ValueError("cannot classify a zero vector")


def route_direction(start: Point, end: Point) -> Direction:
    """
    Classify the direction from start to end.

    Points sharing an x coordinate are always N or S (S when end is below,
    N otherwise, including when the points coincide); points sharing a y
    coordinate are E or W; anything else is one of the diagonals.
    """
    if start.x == end.x:
        return Direction.S if start.y < end.y else Direction.N
    if start.y == end.y:
        return Direction.E if start.x < end.x else Direction.W
    if start.x < end.x:
        return Direction.SE if start.y < end.y else Direction.NE
    return Direction.SW if start.y < end.y else Direction.NW
