"""Pytest configuration and shared fixtures for waypath tests."""

import pytest

from waypath import MapSnapshot, Point, Rect, Waypoint, WaypointKind


@pytest.fixture
def straight_corridor():
    """A single horizontal corridor, 400 x 40."""
    return [Rect("hall", 0, 0, 400, 40)]


@pytest.fixture
def l_corridors():
    """A 400 x 20 corridor and a 20 x 200 corridor forming an L-shape."""
    return [
        Rect("main", 200, 100, 400, 20),
        Rect("side", 200, 100, 20, 200),
    ]


@pytest.fixture
def island_corridors():
    """Two corridors separated by a 200 unit gap."""
    return [
        Rect("west", 0, 0, 200, 40),
        Rect("east", 400, 0, 200, 40),
    ]


@pytest.fixture
def linked_portals():
    """Two portals of group P1, one on each island."""
    return [
        Waypoint("P1a", 180, 20, kind=WaypointKind.PORTAL, portal_group_id="P1"),
        Waypoint("P1b", 420, 20, kind=WaypointKind.PORTAL, portal_group_id="P1"),
    ]


@pytest.fixture
def island_snapshot(island_corridors, linked_portals):
    """Two islands linked by portals, with a waypoint on each island."""
    return MapSnapshot(
        corridors=island_corridors,
        walls=[],
        waypoints=[
            Waypoint("west_end", 20, 20, label="West"),
            Waypoint("east_end", 580, 20, label="East"),
        ]
        + linked_portals,
    )


@pytest.fixture
def west_point():
    return Point(20, 20)


@pytest.fixture
def east_point():
    return Point(580, 20)
