"""
Orthogonal footprint-aware pathfinder.

This is the package's main entry point for point-to-point routing. A
pathfinder is a snapshot of one map's geometry for one footprint size:
construction validates the input and rasterizes the grid, and every
find_path() call then searches that grid independently.

Example:
    >>> pathfinder = OrthogonalPathfinder(corridors, walls, grid_size=5,
    ...                                   footprint_size=5)
    >>> path = pathfinder.find_path(Point(20, 20), Point(380, 20))
    >>> path.points
"""

import logging
import math
from typing import Optional, Sequence

from .geometry import can_place_at
from .grid import WalkabilityGrid, build_grid
from .models import Path, Rect
from .refine import PathRefiner
from .search import AStarSearcher, SearchResult
from .tracer import SearchTrace

logger = logging.getLogger(__name__)


class InvalidGeometryError(ValueError):
    """Raised when pathfinder input geometry or parameters are malformed."""

    pass


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_geometry(
    corridors: Sequence[Rect],
    walls: Sequence[Rect],
    grid_size: float,
    footprint_size: float,
) -> None:
    """
    Check pathfinder input before any work is done.

    Raises:
        InvalidGeometryError: If any parameter or rectangle is malformed
    """
    if not _is_number(grid_size) or not math.isfinite(grid_size) or grid_size <= 0:
        raise InvalidGeometryError(
            f"grid_size must be a positive number, got {grid_size!r}"
        )
    if (
        not _is_number(footprint_size)
        or not math.isfinite(footprint_size)
        or footprint_size < 0
    ):
        raise InvalidGeometryError(
            f"footprint_size must be a non-negative number, got {footprint_size!r}"
        )
    if not corridors:
        raise InvalidGeometryError("At least one corridor is required")

    for kind, rects in (("corridor", corridors), ("wall", walls)):
        for rect in rects:
            values = (rect.x, rect.y, rect.width, rect.height, rect.rotation)
            if not all(_is_number(v) and math.isfinite(v) for v in values):
                raise InvalidGeometryError(
                    f"{kind} {rect.id!r} has non-finite coordinates"
                )
            if rect.width <= 0 or rect.height <= 0:
                raise InvalidGeometryError(
                    f"{kind} {rect.id!r} has zero or negative area "
                    f"({rect.width} x {rect.height})"
                )
            if kind == "wall" and rect.rotation:
                raise InvalidGeometryError(
                    f"wall {rect.id!r} is rotated by {rect.rotation} degrees; "
                    "walls must be axis-aligned"
                )


class OrthogonalPathfinder:
    """
    Finds footprint-aware routes through corridors, avoiding walls.

    Attributes:
        corridors: Walkable rectangles
        walls: Blocking rectangles
        grid_size: Edge length of each grid cell
        footprint_size: Edge length of the agent's square footprint
        grid: The rasterized walkability grid
        trace: Optional trace that every query records into
    """

    def __init__(
        self,
        corridors: Sequence[Rect],
        walls: Sequence[Rect],
        grid_size: float,
        footprint_size: float = 20,
        trace: Optional[SearchTrace] = None,
    ):
        """
        Initialize the pathfinder and build its grid.

        Args:
            corridors: Walkable rectangles (may be rotated)
            walls: Blocking rectangles (never rotated)
            grid_size: Edge length of each grid cell, must be positive
            footprint_size: Edge length of the agent footprint, must be >= 0
            trace: Optional SearchTrace to record stages into

        Raises:
            InvalidGeometryError: If the input is malformed
        """
        validate_geometry(corridors, walls, grid_size, footprint_size)

        self.corridors = tuple(corridors)
        self.walls = tuple(walls)
        self.grid_size = grid_size
        self.footprint_size = footprint_size
        self.trace = trace

        self.grid: WalkabilityGrid = build_grid(
            self.corridors, self.walls, grid_size, footprint_size
        )
        self.searcher = AStarSearcher(
            self.grid, self.corridors, self.walls, footprint_size
        )
        self.refiner = PathRefiner(self.corridors, self.walls, footprint_size)

        if trace is not None:
            trace.add_stage(
                "grid_built",
                {
                    "cols": self.grid.cols,
                    "rows": self.grid.rows,
                    "walkable": self.grid.walkable_count,
                    "grid_size": grid_size,
                    "footprint_size": footprint_size,
                },
            )

    def can_place_at(self, x: float, y: float) -> bool:
        """Check if the footprint can occupy a world position."""
        return can_place_at(x, y, self.footprint_size, self.corridors, self.walls)

    def can_draw_direct_line(self, start, end) -> bool:
        """Check if the footprint can travel straight between two points."""
        return self.refiner.can_draw_direct_line(start, end)

    def search(self, start, end) -> SearchResult:
        """
        Search and refine a path, keeping the diagnostic outcome.

        Args:
            start: Start position (anything with x and y)
            end: End position (anything with x and y)

        Returns:
            SearchResult whose points are refined when a path was found
        """
        result = self.searcher.search(start, end, trace=self.trace)
        if not result.found:
            return result

        optimized = self.refiner.optimize(result.points)
        smoothed = self.refiner.smooth(optimized)
        if self.trace is not None:
            self.trace.add_stage("optimized", {"points": len(optimized)})
            self.trace.add_stage("smoothed", {"points": len(smoothed)})

        result.points = smoothed
        return result

    def find_path(self, start, end) -> Optional[Path]:
        """
        Find a refined path between two world positions.

        Returns:
            Path, or None if the positions are not connected
        """
        result = self.search(start, end)
        if not result.found:
            return None
        return Path(points=tuple(result.points))
