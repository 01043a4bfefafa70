"""
Route planning between waypoints of a map.

Reproduces the viewer's "find path" flow on top of the pathfinder:
1. Pick a grid size from the largest corridor rotation
2. Move unplaceable endpoints to the nearest valid placement
3. Try a direct route
4. Fall back to portal routing
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import MapSnapshot, Path, Point, Rect
from .pathfinder import OrthogonalPathfinder
from .placement import adjustment_connector, find_nearest_placement
from .portals import PortalRouter
from .tracer import SearchTrace

logger = logging.getLogger(__name__)

# =============================================================================
# PLANNER CONFIGURATION
# =============================================================================

DEFAULT_GRID_SIZE = 5
DEFAULT_FOOTPRINT_SIZE = 5

# (max corridor rotation in degrees, grid size), checked in order. The first
# threshold strictly exceeded by the largest corridor rotation wins.
ROTATION_GRID_SIZES = [
    (40, 10),
    (30, 8),
    (15, 7),
]

# =============================================================================


class PlanningError(ValueError):
    """Raised when a route request is malformed."""

    pass


@dataclass
class PlannedRoute:
    """
    A route between two waypoints of a map.

    Attributes:
        from_id: Id of the starting waypoint.
        to_id: Id of the destination waypoint.
        path: The route itself.
        from_original: Starting waypoint position as placed in the editor.
        to_original: Destination position as placed in the editor.
        from_adjusted: Starting position actually routed from.
        to_adjusted: Destination position actually routed to.
        used_portal: Whether the route teleports through portals.
        grid_size: Grid size the route was searched with.
        from_connector: Connector from from_original to from_adjusted.
        to_connector: Connector from to_original to to_adjusted.
    """

    from_id: str
    to_id: str
    path: Path
    from_original: Point
    to_original: Point
    from_adjusted: Point
    to_adjusted: Point
    used_portal: bool = False
    grid_size: float = DEFAULT_GRID_SIZE
    from_connector: List[Point] = field(default_factory=list)
    to_connector: List[Point] = field(default_factory=list)

    @property
    def points(self):
        return self.path.points


def adaptive_grid_size(corridors: Sequence[Rect], base_grid_size: float) -> float:
    """
    Grid size to use for a set of corridors.

    Axis-aligned rasterization loses precision on rotated corridors, so the
    grid size switches to a fixed value once the largest corridor rotation
    passes a threshold.
    """
    if not corridors:
        return base_grid_size
    max_rotation = max(abs(c.rotation or 0) for c in corridors)
    for threshold, grid_size in ROTATION_GRID_SIZES:
        if max_rotation > threshold:
            return grid_size
    return base_grid_size


class RoutePlanner:
    """
    Plans routes between waypoints of a map.

    Example:
        >>> planner = RoutePlanner(footprint_size=5)
        >>> route = planner.plan(parse_map(SAMPLE_MAP), "start", "end")
        >>> route.points
    """

    def __init__(
        self,
        grid_size: float = DEFAULT_GRID_SIZE,
        footprint_size: float = DEFAULT_FOOTPRINT_SIZE,
        adaptive_grid: bool = True,
        trace: Optional[SearchTrace] = None,
    ):
        """
        Initialize the planner.

        Args:
            grid_size: Base grid size
            footprint_size: Edge length of the agent footprint
            adaptive_grid: Whether to adjust grid size for rotated corridors
            trace: Optional SearchTrace to record every query into
        """
        self.grid_size = grid_size
        self.footprint_size = footprint_size
        self.adaptive_grid = adaptive_grid
        self.trace = trace

    def plan(
        self, snapshot: MapSnapshot, from_id: str, to_id: str
    ) -> Optional[PlannedRoute]:
        """
        Plan a route between two waypoints.

        Args:
            snapshot: Map geometry
            from_id: Starting waypoint id
            to_id: Destination waypoint id

        Returns:
            PlannedRoute, or None if the waypoints are not connected

        Raises:
            PlanningError: If the ids are unknown or identical
            InvalidGeometryError: If the map geometry is malformed
        """
        if from_id == to_id:
            raise PlanningError(
                "Source and destination waypoints must be different"
            )
        source = snapshot.get_waypoint(from_id)
        if source is None:
            raise PlanningError(f"Unknown waypoint: {from_id!r}")
        target = snapshot.get_waypoint(to_id)
        if target is None:
            raise PlanningError(f"Unknown waypoint: {to_id!r}")

        if self.trace is not None:
            self.trace.label = f"{from_id} -> {to_id}"

        return self.plan_between(snapshot, source, target, from_id, to_id)

    def plan_between(
        self,
        snapshot: MapSnapshot,
        source,
        target,
        from_id: str = "",
        to_id: str = "",
    ) -> Optional[PlannedRoute]:
        """
        Plan a route between two arbitrary positions on a map.

        Args:
            snapshot: Map geometry
            source: Start position (anything with x and y)
            target: Destination position (anything with x and y)
            from_id: Label for the start in the result
            to_id: Label for the destination in the result

        Returns:
            PlannedRoute, or None if no route exists
        """
        grid_size = self.grid_size
        if self.adaptive_grid:
            grid_size = adaptive_grid_size(snapshot.corridors, self.grid_size)

        logger.debug(
            "Finding path with grid size %s, footprint size %s",
            grid_size,
            self.footprint_size,
        )

        # A fresh pathfinder per query so the grid reflects current geometry
        pathfinder = OrthogonalPathfinder(
            snapshot.corridors,
            snapshot.walls,
            grid_size,
            self.footprint_size,
            trace=self.trace,
        )

        from_original = Point(source.x, source.y)
        to_original = Point(target.x, target.y)
        from_adjusted = self._adjust(pathfinder, from_original)
        to_adjusted = self._adjust(pathfinder, to_original)

        used_portal = False
        path = pathfinder.find_path(from_adjusted, to_adjusted)
        if path is None:
            path = PortalRouter(pathfinder, snapshot.waypoints).find_path(
                from_adjusted, to_adjusted
            )
            used_portal = path is not None

        if path is None:
            logger.debug("No path found from %s to %s", from_id, to_id)
            return None

        return PlannedRoute(
            from_id=from_id,
            to_id=to_id,
            path=path,
            from_original=from_original,
            to_original=to_original,
            from_adjusted=from_adjusted,
            to_adjusted=to_adjusted,
            used_portal=used_portal,
            grid_size=grid_size,
            from_connector=adjustment_connector(
                from_original, from_adjusted, snapshot.walls
            ),
            to_connector=adjustment_connector(
                to_original, to_adjusted, snapshot.walls
            ),
        )

    def _adjust(self, pathfinder: OrthogonalPathfinder, position: Point) -> Point:
        if pathfinder.can_place_at(position.x, position.y):
            return position
        return find_nearest_placement(
            position, pathfinder.corridors, pathfinder.walls, self.footprint_size
        )
