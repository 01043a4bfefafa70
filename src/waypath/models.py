"""
Data models for corridor map pathfinding.

This module contains the dataclasses shared by every stage of path finding:
the map geometry supplied by the editor, the points and paths produced by the
search, and the snapshot that groups a whole map together.

Classes:
    Point: An immutable world-space point.
    Rect: A rectangular corridor or wall, optionally rotated.
    Bounds: An axis-aligned bounding box.
    WaypointKind: Plain waypoint or teleport portal.
    Waypoint: A named point on the map.
    Path: An immutable route through the map.
    MapSnapshot: Corridors, walls and waypoints of one map.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Point:
    """A point in world space."""

    x: float
    y: float

    def distance_to(self, other) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """
    A rectangular region of the map.

    Corridors are walkable and may be rotated around their center. Walls block
    occupancy and are always axis-aligned.

    Attributes:
        id: Object id from the editor.
        x: Left edge x-coordinate (before rotation).
        y: Top edge y-coordinate (before rotation).
        width: Width of the rectangle.
        height: Height of the rectangle.
        rotation: Rotation in degrees around the center.
    """

    id: str
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def corners(self) -> List[Tuple[float, float]]:
        """Corners in world space, rotated when the rectangle is rotated."""
        corners = [
            (self.x, self.y),
            (self.x2, self.y),
            (self.x2, self.y2),
            (self.x, self.y2),
        ]
        if not self.rotation:
            return corners

        rad = math.radians(self.rotation)
        cos_a = math.cos(rad)
        sin_a = math.sin(rad)
        cx, cy = self.center_x, self.center_y
        return [
            (
                cx + (px - cx) * cos_a - (py - cy) * sin_a,
                cy + (px - cx) * sin_a + (py - cy) * cos_a,
            )
            for px, py in corners
        ]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""

    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height


class WaypointKind(Enum):
    """Kinds of waypoints. Values match the editor's map type names."""

    WAYPOINT = "waypoint"
    PORTAL = "warppoint"


@dataclass(frozen=True)
class Waypoint:
    """
    A named point on the map.

    Two portals sharing a portal_group_id are linked: reaching one allows an
    instant jump to the other.
    """

    id: str
    x: float
    y: float
    label: str = ""
    kind: WaypointKind = WaypointKind.WAYPOINT
    portal_group_id: Optional[str] = None

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_portal(self) -> bool:
        return self.kind == WaypointKind.PORTAL and bool(self.portal_group_id)


@dataclass(frozen=True)
class Path:
    """
    A route through the map.

    Attributes:
        points: Ordered world points.
        teleport_segment_indices: Index i means points[i] -> points[i + 1] is
            a portal jump, not a walkable line.
    """

    points: Tuple[Point, ...]
    teleport_segment_indices: Tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def is_teleport(self, index: int) -> bool:
        """Check whether the segment starting at index is a portal jump."""
        return index in self.teleport_segment_indices

    def walkable_segments(self) -> List[Tuple[Point, Point]]:
        """Consecutive point pairs, skipping portal jumps."""
        return [
            (self.points[i], self.points[i + 1])
            for i in range(len(self.points) - 1)
            if not self.is_teleport(i)
        ]

    def length(self) -> float:
        """Walked length of the path (portal jumps are free)."""
        return sum(a.distance_to(b) for a, b in self.walkable_segments())


@dataclass
class MapSnapshot:
    """
    Geometry of one map as assembled by the editor.

    Attributes:
        corridors: Walkable rectangles.
        walls: Blocking rectangles.
        waypoints: Named points, including portals.
        version: Map file format version.
    """

    corridors: List[Rect] = field(default_factory=list)
    walls: List[Rect] = field(default_factory=list)
    waypoints: List[Waypoint] = field(default_factory=list)
    version: int = 1

    def get_waypoint(self, waypoint_id: str) -> Optional[Waypoint]:
        """Get a waypoint by id."""
        for waypoint in self.waypoints:
            if waypoint.id == waypoint_id:
                return waypoint
        return None

    def portals(self) -> List[Waypoint]:
        """Portals that belong to a group, in map order."""
        return [w for w in self.waypoints if w.is_portal]

    def portal_groups(self) -> Dict[str, List[Waypoint]]:
        """Portals grouped by portal group id."""
        groups: Dict[str, List[Waypoint]] = {}
        for portal in self.portals():
            groups.setdefault(portal.portal_group_id, []).append(portal)
        return groups
