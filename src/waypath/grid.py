"""
Walkability grid for corridor maps.

Rasterizes continuous map geometry into a uniform grid of walkable cells:
- World bounds padded around all corridors and walls
- One placement test per cell, at the cell's center
- 8-connected neighbors with diagonal corner-cut prevention

The grid is immutable once built. Search state is kept outside it (see
search.py) so a grid can be reused by any number of searches.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .geometry import bounds_padding, can_place_at, world_bounds
from .models import Bounds, Rect

logger = logging.getLogger(__name__)

# Neighbor offsets: 4 orthogonal, then 4 diagonal
ORTHOGONAL_DIRECTIONS = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIAGONAL_DIRECTIONS = [(-1, -1), (1, -1), (-1, 1), (1, 1)]


@dataclass(frozen=True)
class GridCell:
    """A single cell of the walkability grid."""

    grid_x: int
    grid_y: int
    world_x: float
    world_y: float
    walkable: bool


@dataclass(frozen=True)
class WalkabilityGrid:
    """
    Immutable grid of walkability flags.

    Cells are stored row-major in a flat tuple; a cell's index is
    grid_y * cols + grid_x.

    Attributes:
        min_x: World x-coordinate of the grid's left edge.
        min_y: World y-coordinate of the grid's top edge.
        grid_size: Edge length of each square cell.
        cols: Number of columns.
        rows: Number of rows.
        walkable: Flat row-major walkability flags.
    """

    min_x: float
    min_y: float
    grid_size: float
    cols: int
    rows: int
    walkable: Tuple[bool, ...]

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    @property
    def walkable_count(self) -> int:
        return sum(self.walkable)

    def in_bounds(self, grid_x: int, grid_y: int) -> bool:
        return 0 <= grid_x < self.cols and 0 <= grid_y < self.rows

    def index(self, grid_x: int, grid_y: int) -> int:
        return grid_y * self.cols + grid_x

    def coords(self, index: int) -> Tuple[int, int]:
        return index % self.cols, index // self.cols

    def is_walkable(self, grid_x: int, grid_y: int) -> bool:
        """Check if a cell exists and is walkable."""
        if not self.in_bounds(grid_x, grid_y):
            return False
        return self.walkable[self.index(grid_x, grid_y)]

    def cell_center(self, grid_x: int, grid_y: int) -> Tuple[float, float]:
        """World-space center of a cell."""
        half = self.grid_size / 2
        return (
            self.min_x + grid_x * self.grid_size + half,
            self.min_y + grid_y * self.grid_size + half,
        )

    def world_to_grid(self, world_x: float, world_y: float) -> Tuple[int, int]:
        """
        Grid coordinates of the cell containing a world point.

        The result may lie outside the grid; use get_cell() to check.
        """
        return (
            math.floor((world_x - self.min_x) / self.grid_size),
            math.floor((world_y - self.min_y) / self.grid_size),
        )

    def get_cell(self, grid_x: int, grid_y: int) -> Optional[GridCell]:
        """Get a cell, or None if it lies outside the grid."""
        if not self.in_bounds(grid_x, grid_y):
            return None
        world_x, world_y = self.cell_center(grid_x, grid_y)
        return GridCell(
            grid_x=grid_x,
            grid_y=grid_y,
            world_x=world_x,
            world_y=world_y,
            walkable=self.walkable[self.index(grid_x, grid_y)],
        )

    def cells(self) -> Iterator[GridCell]:
        """Iterate over all cells, row by row."""
        for grid_y in range(self.rows):
            for grid_x in range(self.cols):
                yield self.get_cell(grid_x, grid_y)

    def neighbors(self, grid_x: int, grid_y: int) -> List[Tuple[int, int]]:
        """
        Walkable neighbors of a cell.

        A diagonal neighbor is only reachable when both orthogonal cells
        bridging the diagonal are walkable, so paths never cut a corner
        formed by two blocked cells.
        """
        result = []
        for dx, dy in ORTHOGONAL_DIRECTIONS:
            if self.is_walkable(grid_x + dx, grid_y + dy):
                result.append((grid_x + dx, grid_y + dy))

        for dx, dy in DIAGONAL_DIRECTIONS:
            if not self.is_walkable(grid_x + dx, grid_y + dy):
                continue
            if not self.is_walkable(grid_x + dx, grid_y):
                continue
            if not self.is_walkable(grid_x, grid_y + dy):
                continue
            result.append((grid_x + dx, grid_y + dy))

        return result


def build_grid(
    corridors: Sequence[Rect],
    walls: Sequence[Rect],
    grid_size: float,
    footprint_size: float,
    bounds: Optional[Bounds] = None,
) -> WalkabilityGrid:
    """
    Rasterize corridors and walls into a walkability grid.

    Args:
        corridors: Walkable rectangles
        walls: Blocking rectangles
        grid_size: Edge length of each cell
        footprint_size: Edge length of the agent footprint
        bounds: World bounds to cover (defaults to the padded map bounds)

    Returns:
        WalkabilityGrid with one placement test per cell center
    """
    if bounds is None:
        bounds = world_bounds(corridors, walls, bounds_padding(footprint_size))

    cols = math.ceil(bounds.width / grid_size)
    rows = math.ceil(bounds.height / grid_size)
    half = grid_size / 2

    walkable = []
    for grid_y in range(rows):
        world_y = bounds.min_y + grid_y * grid_size + half
        for grid_x in range(cols):
            world_x = bounds.min_x + grid_x * grid_size + half
            walkable.append(
                can_place_at(world_x, world_y, footprint_size, corridors, walls)
            )

    grid = WalkabilityGrid(
        min_x=bounds.min_x,
        min_y=bounds.min_y,
        grid_size=grid_size,
        cols=cols,
        rows=rows,
        walkable=tuple(walkable),
    )
    logger.debug("Walkable cells: %d/%d", grid.walkable_count, grid.cell_count)
    return grid
