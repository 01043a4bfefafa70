"""
Debug utilities for waypath.

This module provides tools for understanding why a query did or did not find
a path, by looking at the walkability grid directly.

Key Components:
- grid_to_ascii: Text rendering of a grid, optionally with a path overlaid
- GridInspector: Counts, regions and connectivity of walkable cells

Usage:
    >>> pathfinder = OrthogonalPathfinder(corridors, walls, 5, 5)
    >>> print(grid_to_ascii(pathfinder.grid, path))
    >>> inspector = GridInspector(pathfinder.grid)
    >>> inspector.region_count()
    2
"""

from typing import List, Optional, Set, Tuple

import networkx as nx

from .grid import WalkabilityGrid
from .models import Path

WALKABLE_CHAR = "."
BLOCKED_CHAR = "#"
PATH_CHAR = "o"


def grid_to_ascii(grid: WalkabilityGrid, path: Optional[Path] = None) -> str:
    """
    Render a grid as text, one character per cell.

    Walkable cells are '.', blocked cells '#', and the cells holding path
    points 'o'.

    Example:
        >>> print(grid_to_ascii(grid))
        ####
        #..#
        ####
    """
    path_cells: Set[Tuple[int, int]] = set()
    if path is not None:
        for point in path.points:
            path_cells.add(grid.world_to_grid(point.x, point.y))

    lines: List[str] = []
    for grid_y in range(grid.rows):
        row = []
        for grid_x in range(grid.cols):
            if (grid_x, grid_y) in path_cells:
                row.append(PATH_CHAR)
            elif grid.is_walkable(grid_x, grid_y):
                row.append(WALKABLE_CHAR)
            else:
                row.append(BLOCKED_CHAR)
        lines.append("".join(row))
    return "\n".join(lines)


class GridInspector:
    """
    Utilities for inspecting grid state.

    Provides methods for counting walkable cells, extracting regions and
    finding which cells are connected to each other.
    """

    def __init__(self, grid: WalkabilityGrid):
        """
        Initialize the inspector.

        Args:
            grid: The grid to inspect
        """
        self._grid = grid
        self._graph: Optional[nx.Graph] = None

    def walkable_cells(self) -> List[Tuple[int, int]]:
        """All walkable cells as (grid_x, grid_y), row by row."""
        grid = self._grid
        return [
            (gx, gy)
            for gy in range(grid.rows)
            for gx in range(grid.cols)
            if grid.is_walkable(gx, gy)
        ]

    def walkable_ratio(self) -> float:
        """Fraction of cells that are walkable."""
        if self._grid.cell_count == 0:
            return 0.0
        return self._grid.walkable_count / self._grid.cell_count

    def get_region(self, grid_x: int, grid_y: int, width: int, height: int) -> str:
        """
        Get a rectangular region of the grid as text.

        Cells outside the grid are rendered as blocked.
        """
        lines = []
        for gy in range(grid_y, grid_y + height):
            lines.append(
                "".join(
                    WALKABLE_CHAR if self._grid.is_walkable(gx, gy) else BLOCKED_CHAR
                    for gx in range(grid_x, grid_x + width)
                )
            )
        return "\n".join(lines)

    def connectivity_graph(self) -> nx.Graph:
        """
        Graph of walkable cells linked to the neighbors a search may step to.

        Diagonal links follow the same corner-cut rule as the search.
        """
        if self._graph is None:
            graph = nx.Graph()
            for cell in self.walkable_cells():
                graph.add_node(cell)
                for neighbor in self._grid.neighbors(*cell):
                    graph.add_edge(cell, neighbor)
            self._graph = graph
        return self._graph

    def region_count(self) -> int:
        """Number of disconnected walkable regions."""
        return nx.number_connected_components(self.connectivity_graph())

    def connected(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        """Whether two cells lie in the same walkable region."""
        graph = self.connectivity_graph()
        if a not in graph or b not in graph:
            return False
        return nx.has_path(graph, a, b)

    def connected_world(self, start, end) -> bool:
        """Whether the cells containing two world points are connected."""
        return self.connected(
            self._grid.world_to_grid(start.x, start.y),
            self._grid.world_to_grid(end.x, end.y),
        )
