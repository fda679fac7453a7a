"""Pytest configuration and shared fixtures for linkroute tests."""

import pytest

from linkroute import Box, Direction, Point, RoutingContext, Terminal


@pytest.fixture
def container():
    """Container box large enough to hold every test scene."""
    return Box(-100, -100, 400, 300)


@pytest.fixture
def source_box():
    """Source node: the start terminal sits on its right edge at (0, 0)."""
    return Box(-20, -10, 20, 20)


@pytest.fixture
def target_box():
    """Target node: the end terminal sits on its left edge at (100, 50)."""
    return Box(100, 40, 20, 20)


@pytest.fixture
def blocker():
    """Obstacle straddling x=50 between y=-10 and y=60."""
    return Box(40, -10, 20, 70)


@pytest.fixture
def s_terminals():
    """Terminals for an east-to-west link from (0, 0) to (100, 50)."""
    return [
        Terminal(Point(0, 0), Direction.E),
        Terminal(Point(100, 50), Direction.W),
    ]


@pytest.fixture
def blocked_context(container, source_box, target_box, blocker):
    """Routing context with the blocker between source and target."""
    return RoutingContext(
        container=container,
        boxes=(source_box, target_box, blocker),
        start_box=0,
        end_box=1,
    )
