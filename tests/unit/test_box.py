"""Unit tests for the box module."""

import pytest

from linkroute.box import Box, Channel, Side, find_channel
from linkroute.geometry import Point


class TestSide:
    """Tests for Side enum."""

    def test_side_values(self):
        """Test the numeric side encoding."""
        assert Side.LEFT == 0
        assert Side.TOP == 1
        assert Side.RIGHT == 2
        assert Side.BOTTOM == 3
        assert Side.INSIDE == 4

    def test_is_vertical_edge(self):
        """Test LEFT and RIGHT are the vertical edges."""
        assert Side.LEFT.is_vertical_edge
        assert Side.RIGHT.is_vertical_edge
        assert not Side.TOP.is_vertical_edge
        assert not Side.BOTTOM.is_vertical_edge


class TestBox:
    """Tests for Box dataclass."""

    def test_edges(self):
        """Test scalar edge properties."""
        box = Box(10, 20, 100, 50)
        assert box.left == 10
        assert box.right == 110
        assert box.top == 20
        assert box.bottom == 70

    def test_center(self):
        """Test center property."""
        assert Box(10, 20, 100, 50).center == Point(60, 45)

    def test_edge_midpoints(self):
        """Test side midpoint queries."""
        box = Box(0, 0, 10, 20)
        assert box.get_left() == Point(0, 10)
        assert box.get_right() == Point(10, 10)
        assert box.get_top() == Point(5, 0)
        assert box.get_bottom() == Point(5, 20)

    def test_negative_size_raises(self):
        """Test negative dimensions are rejected."""
        with pytest.raises(ValueError):
            Box(0, 0, -1, 10)
        with pytest.raises(ValueError):
            Box(0, 0, 10, -1)

    def test_zero_size_allowed(self):
        """Test zero-area boxes are valid."""
        box = Box(5, 5, 0, 0)
        assert box.center == Point(5, 5)

    def test_contains_is_strict(self):
        """Test contains excludes the border."""
        box = Box(0, 0, 10, 10)
        assert box.contains(Point(5, 5))
        assert not box.contains(Point(0, 5))
        assert not box.contains(Point(11, 5))

    def test_distance(self):
        """Test point-to-box distance."""
        box = Box(0, 0, 10, 10)
        assert box.distance(Point(13, 14)) == 5
        assert box.distance(Point(-2, 5)) == 2
        assert box.distance(Point(5, 5)) == 0
        assert box.distance(Point(10, 10)) == 0


class TestDetectIntersection:
    """Tests for Box.detect_intersection()."""

    @pytest.fixture
    def box(self):
        return Box(40, -10, 20, 70)

    def test_horizontal_eastward_hits_left(self, box):
        """Test a segment moving east enters through the left side."""
        assert box.detect_intersection(Point(0, 0), Point(100, 0)) == Side.LEFT

    def test_horizontal_westward_hits_right(self, box):
        """Test a segment moving west enters through the right side."""
        assert box.detect_intersection(Point(100, 0), Point(0, 0)) == Side.RIGHT

    def test_vertical_downward_hits_top(self, box):
        """Test a segment moving down enters through the top."""
        assert box.detect_intersection(Point(50, -50), Point(50, 100)) == Side.TOP

    def test_vertical_upward_hits_bottom(self, box):
        """Test a segment moving up enters through the bottom."""
        assert box.detect_intersection(Point(50, 100), Point(50, -50)) == Side.BOTTOM

    def test_segment_ending_inside(self, box):
        """Test a segment that stops inside the box still hits it."""
        assert box.detect_intersection(Point(0, 0), Point(50, 0)) == Side.LEFT

    def test_segment_starting_inside(self, box):
        """Test a segment starting inside reports INSIDE."""
        assert box.detect_intersection(Point(50, 0), Point(100, 0)) == Side.INSIDE

    def test_segment_along_edge_misses(self, box):
        """Test running along an edge is not an intersection."""
        assert box.detect_intersection(Point(40, -50), Point(40, 100)) is None
        assert box.detect_intersection(Point(0, 60), Point(100, 60)) is None

    def test_segment_touching_edge_misses(self, box):
        """Test stopping on the border is not an intersection."""
        assert box.detect_intersection(Point(0, 0), Point(40, 0)) is None
        assert box.detect_intersection(Point(60, 0), Point(100, 0)) is None

    def test_segment_passing_by_misses(self, box):
        """Test a segment outside the box misses."""
        assert box.detect_intersection(Point(0, 100), Point(100, 100)) is None
        assert box.detect_intersection(Point(0, 0), Point(30, 0)) is None

    def test_zero_area_box_never_hit(self):
        """Test degenerate boxes have no interior."""
        box = Box(50, 0, 0, 10)
        assert box.detect_intersection(Point(0, 5), Point(100, 5)) is None

    def test_diagonal_segment(self, box):
        """Test non-orthogonal segments are clipped correctly."""
        assert box.detect_intersection(Point(0, -50), Point(100, 150)) == Side.LEFT


class TestChannel:
    """Tests for Channel dataclass."""

    def test_dimensions(self):
        """Test width, height and center."""
        channel = Channel(left=0, right=40, top=-100, bottom=200, horizontal=False)
        assert channel.width == 40
        assert channel.height == 300
        assert channel.center == Point(20, 50)

    def test_overlaps(self):
        """Test overlap only counts shared interior."""
        channel = Channel(0, 40, 0, 40, horizontal=False)
        assert channel.overlaps(Box(30, 30, 20, 20))
        assert not channel.overlaps(Box(40, 0, 10, 10))


class TestFindChannel:
    """Tests for find_channel()."""

    @pytest.fixture
    def boxes(self, source_box, target_box, blocker):
        return [source_box, target_box, blocker]

    def test_left_channel_bounded_by_neighbour(self, container, boxes):
        """Test left channel runs from the nearest box on the left."""
        channel = find_channel(container, 2, boxes, Side.LEFT, 100)
        assert channel == Channel(0, 40, -100, 200, horizontal=False)

    def test_right_channel_bounded_by_neighbour(self, container, boxes):
        """Test right channel runs to the nearest box on the right."""
        channel = find_channel(container, 2, boxes, Side.RIGHT, 100)
        assert channel == Channel(60, 100, -100, 200, horizontal=False)

    def test_bottom_channel_capped(self, container, boxes):
        """Test an unbounded channel is capped at max_channel_width."""
        channel = find_channel(container, 2, boxes, Side.BOTTOM, 100)
        assert channel == Channel(-100, 300, 60, 160, horizontal=True)

    def test_top_channel_reaches_container(self, container, boxes):
        """Test the container bounds a channel narrower than the cap."""
        channel = find_channel(container, 2, boxes, Side.TOP, 100)
        assert channel == Channel(-100, 300, -100, -10, horizontal=True)

    def test_cap_applies_with_distant_neighbour(self):
        """Test a far neighbour does not widen the channel past the cap."""
        container = Box(-1000, -1000, 3000, 3000)
        boxes = [Box(0, 0, 10, 10), Box(500, 0, 10, 10)]
        channel = find_channel(container, 0, boxes, Side.RIGHT, 100)
        assert channel.left == 10
        assert channel.right == 110

    def test_cross_axis_narrowed_by_overlapping_boxes(self):
        """Test top/bottom shrink to boxes overlapping the channel span."""
        container = Box(0, 0, 300, 300)
        struck = Box(100, 100, 50, 50)
        boxes = [
            struck,
            Box(0, 0, 40, 40),  # wholly left: bounds the channel's left side
            Box(80, 0, 40, 50),  # above the span
            Box(70, 200, 50, 20),  # below the span
        ]
        channel = find_channel(container, 0, boxes, Side.LEFT, 100)
        assert channel == Channel(40, 100, 50, 200, horizontal=False)

    @pytest.mark.parametrize("side", [Side.LEFT, Side.TOP, Side.RIGHT, Side.BOTTOM])
    def test_channel_never_overlaps_struck_box(self, container, boxes, side):
        """Test the channel stays outside the struck box."""
        for index in range(len(boxes)):
            channel = find_channel(container, index, boxes, side, 100)
            assert not channel.overlaps(boxes[index])

    @pytest.mark.parametrize("side", [Side.LEFT, Side.TOP, Side.RIGHT, Side.BOTTOM])
    def test_channel_respects_cap(self, side):
        """Test the constrained axis never exceeds the cap without neighbours."""
        container = Box(-1000, -1000, 3000, 3000)
        boxes = [Box(0, 0, 10, 10), Box(0, 0, 0, 0)]
        channel = find_channel(container, 0, boxes, side, 25)
        depth = channel.width if side.is_vertical_edge else channel.height
        assert depth <= 25

    def test_box_outside_container_gives_empty_channel(self):
        """Test the channel collapses rather than inverting."""
        container = Box(0, 0, 100, 100)
        boxes = [Box(-50, 10, 10, 10), Box(50, 50, 10, 10)]
        channel = find_channel(container, 0, boxes, Side.LEFT, 100)
        assert channel.width == 0

    def test_inside_side_raises(self, container, boxes):
        """Test INSIDE has no channel."""
        with pytest.raises(ValueError):
            find_channel(container, 2, boxes, Side.INSIDE, 100)
