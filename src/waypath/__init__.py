"""
WayPath - Footprint-aware corridor pathfinding

A Python library for routing an agent with a square footprint through the
corridors of a 2D map, around walls, and through linked teleport portals.

Example:
    >>> from waypath import OrthogonalPathfinder, Point, Rect
    >>> corridors = [Rect("hall", 0, 0, 400, 40)]
    >>> pathfinder = OrthogonalPathfinder(corridors, [], grid_size=5,
    ...                                   footprint_size=5)
    >>> path = pathfinder.find_path(Point(20, 20), Point(380, 20))
    >>> path.points

Map Example:
    >>> from waypath import RoutePlanner, SAMPLE_MAP, parse_map
    >>> route = RoutePlanner().plan(parse_map(SAMPLE_MAP), "start", "end")
    >>> route.used_portal
    False
"""

from .debug import GridInspector, grid_to_ascii
from .geometry import (
    can_place_at,
    footprint_clear_of_walls,
    point_in_rotated_rect,
    world_bounds,
)
from .grid import GridCell, WalkabilityGrid, build_grid
from .models import Bounds, MapSnapshot, Path, Point, Rect, Waypoint, WaypointKind
from .parser import SAMPLE_MAP, MapParseError, MapParser, load_map, parse_map
from .pathfinder import InvalidGeometryError, OrthogonalPathfinder
from .placement import adjustment_connector, find_nearest_placement
from .planner import PlannedRoute, PlanningError, RoutePlanner, adaptive_grid_size
from .png_renderer import RoutePNGRenderer, render_to_png
from .portals import PortalRouter, find_portal_path
from .refine import PathRefiner, optimize
from .search import AStarSearcher, NoPathReason, SearchResult, SearchState
from .tracer import SearchTrace, TraceStage

__version__ = "0.4.0"

__all__ = [
    # Main API
    "OrthogonalPathfinder",
    "RoutePlanner",
    "PlannedRoute",
    "InvalidGeometryError",
    "PlanningError",
    # Models
    "Point",
    "Rect",
    "Bounds",
    "Waypoint",
    "WaypointKind",
    "Path",
    "MapSnapshot",
    # Geometry
    "point_in_rotated_rect",
    "footprint_clear_of_walls",
    "can_place_at",
    "world_bounds",
    # Grid and search
    "GridCell",
    "WalkabilityGrid",
    "build_grid",
    "AStarSearcher",
    "SearchState",
    "SearchResult",
    "NoPathReason",
    # Refinement
    "PathRefiner",
    "optimize",
    # Portals and placement
    "PortalRouter",
    "find_portal_path",
    "find_nearest_placement",
    "adjustment_connector",
    "adaptive_grid_size",
    # Map files
    "MapParser",
    "MapParseError",
    "parse_map",
    "load_map",
    "SAMPLE_MAP",
    # Rendering
    "RoutePNGRenderer",
    "render_to_png",
    # Debug/Tracing (for development and debugging)
    "SearchTrace",
    "TraceStage",
    "GridInspector",
    "grid_to_ascii",
]
