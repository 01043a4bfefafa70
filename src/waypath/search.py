"""
A* search over a walkability grid.

Implements grid-space shortest path search with:
- 8-directional movement (diagonal cost sqrt(2))
- Euclidean heuristic in grid units
- A slight cost bias towards the goal direction, which favours visually
  direct routes among otherwise equal-cost options
- Deterministic tie-breaking (lowest f, then lowest h, then earliest opened)

Per-search scratch values (g, h, f, parent) live in a SearchState arena keyed
by cell index, never on the grid itself.
"""

import heapq
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .geometry import can_place_at
from .grid import WalkabilityGrid
from .models import Point, Rect
from .tracer import SearchTrace

logger = logging.getLogger(__name__)

# =============================================================================
# SEARCH CONFIGURATION
# =============================================================================

ORTHOGONAL_COST = 1.0
DIAGONAL_COST = math.sqrt(2)

# Multiplier applied to a move heading towards the goal on either axis
GOAL_DIRECTION_BIAS = 0.99

# =============================================================================


class NoPathReason(Enum):
    """Why a search returned no path. Diagnostic only."""

    START_NOT_PLACEABLE = "start_not_placeable"
    END_NOT_PLACEABLE = "end_not_placeable"
    CELL_OUT_OF_GRID = "cell_out_of_grid"
    CELL_NOT_WALKABLE = "cell_not_walkable"
    OPEN_SET_EXHAUSTED = "open_set_exhausted"


class SearchState:
    """
    Scratch values for a single search, one slot per grid cell.

    Attributes:
        g: Cost from the start.
        h: Heuristic estimate to the goal.
        f: g + h.
        parent: Index of the cell we came from, or -1.
        opened: Order in which the cell first entered the open set, or -1.
        closed: Whether the cell has been expanded.
    """

    def __init__(self, cell_count: int):
        self.cell_count = cell_count
        self.reset()

    def reset(self) -> None:
        """Clear all scratch values."""
        n = self.cell_count
        self.g: List[float] = [0.0] * n
        self.h: List[float] = [0.0] * n
        self.f: List[float] = [0.0] * n
        self.parent: List[int] = [-1] * n
        self.opened: List[int] = [-1] * n
        self.closed: List[bool] = [False] * n

    def is_open(self, index: int) -> bool:
        return self.opened[index] >= 0 and not self.closed[index]


@dataclass
class SearchResult:
    """
    Outcome of a grid search.

    Attributes:
        points: Cell centers from start to goal, or None if no path.
        reason: Why no path was found (None on success).
        expanded: Number of cells expanded.
        cells: Grid cells of the path from start to goal (empty if no path).
    """

    points: Optional[List[Point]] = None
    reason: Optional[NoPathReason] = None
    expanded: int = 0
    cells: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.points is not None


def euclidean(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    """Straight-line distance between two grid cells."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return math.sqrt(dx * dx + dy * dy)


def _same_sign(a: int, b: int) -> bool:
    return (a > 0 and b > 0) or (a < 0 and b < 0)


def move_cost(
    current: Tuple[int, int], neighbor: Tuple[int, int], goal: Tuple[int, int]
) -> float:
    """Cost of stepping from current to neighbor while heading for goal."""
    move_x = neighbor[0] - current[0]
    move_y = neighbor[1] - current[1]
    cost = DIAGONAL_COST if move_x != 0 and move_y != 0 else ORTHOGONAL_COST

    to_goal_x = goal[0] - current[0]
    to_goal_y = goal[1] - current[1]
    if _same_sign(to_goal_x, move_x) or _same_sign(to_goal_y, move_y):
        cost *= GOAL_DIRECTION_BIAS
    return cost


class AStarSearcher:
    """
    A* path search between two world positions.

    Example:
        >>> searcher = AStarSearcher(grid, corridors, walls, footprint_size=5)
        >>> result = searcher.search(Point(10, 10), Point(200, 10))
        >>> result.found
        True
    """

    def __init__(
        self,
        grid: WalkabilityGrid,
        corridors: Sequence[Rect],
        walls: Sequence[Rect],
        footprint_size: float,
    ):
        self.grid = grid
        self.corridors = corridors
        self.walls = walls
        self.footprint_size = footprint_size

    def _placeable(self, point) -> bool:
        return can_place_at(
            point.x, point.y, self.footprint_size, self.corridors, self.walls
        )

    def search(
        self, start, end, trace: Optional[SearchTrace] = None
    ) -> SearchResult:
        """
        Search for a path between two world positions.

        Args:
            start: Start position (anything with x and y)
            end: End position (anything with x and y)
            trace: Optional trace to record search stages into

        Returns:
            SearchResult with the unrefined cell-center path, or a reason
        """
        if not self._placeable(start):
            return self._fail(NoPathReason.START_NOT_PLACEABLE, trace)
        if not self._placeable(end):
            return self._fail(NoPathReason.END_NOT_PLACEABLE, trace)

        grid = self.grid
        start_cell = grid.world_to_grid(start.x, start.y)
        end_cell = grid.world_to_grid(end.x, end.y)

        if not grid.in_bounds(*start_cell) or not grid.in_bounds(*end_cell):
            return self._fail(NoPathReason.CELL_OUT_OF_GRID, trace)
        if not grid.is_walkable(*start_cell) or not grid.is_walkable(*end_cell):
            return self._fail(NoPathReason.CELL_NOT_WALKABLE, trace)

        if trace is not None:
            trace.add_stage(
                "endpoints_mapped",
                {"start_cell": start_cell, "end_cell": end_cell},
            )

        state = SearchState(grid.cell_count)
        start_idx = grid.index(*start_cell)
        end_idx = grid.index(*end_cell)

        open_counter = 0
        state.h[start_idx] = euclidean(start_cell, end_cell)
        state.f[start_idx] = state.h[start_idx]
        state.opened[start_idx] = open_counter
        open_counter += 1

        # Heap entries: (f, h, first-opened order, cell index)
        open_heap = [(state.f[start_idx], state.h[start_idx], 0, start_idx)]
        expanded = 0

        while open_heap:
            _, _, _, current_idx = heapq.heappop(open_heap)
            if state.closed[current_idx]:
                continue  # stale entry

            state.closed[current_idx] = True
            expanded += 1

            if current_idx == end_idx:
                cells = self._reconstruct(state, current_idx)
                points = [Point(*grid.cell_center(gx, gy)) for gx, gy in cells]
                if trace is not None:
                    trace.add_stage(
                        "path_found",
                        {"expanded": expanded, "raw_points": len(points)},
                    )
                return SearchResult(points=points, expanded=expanded, cells=cells)

            current = grid.coords(current_idx)
            for neighbor in grid.neighbors(*current):
                neighbor_idx = grid.index(*neighbor)
                if state.closed[neighbor_idx]:
                    continue

                tentative_g = state.g[current_idx] + move_cost(
                    current, neighbor, end_cell
                )

                if state.opened[neighbor_idx] < 0:
                    state.opened[neighbor_idx] = open_counter
                    open_counter += 1
                elif tentative_g >= state.g[neighbor_idx]:
                    continue

                state.parent[neighbor_idx] = current_idx
                state.g[neighbor_idx] = tentative_g
                state.h[neighbor_idx] = euclidean(neighbor, end_cell)
                state.f[neighbor_idx] = tentative_g + state.h[neighbor_idx]
                heapq.heappush(
                    open_heap,
                    (
                        state.f[neighbor_idx],
                        state.h[neighbor_idx],
                        state.opened[neighbor_idx],
                        neighbor_idx,
                    ),
                )

        return self._fail(NoPathReason.OPEN_SET_EXHAUSTED, trace, expanded)

    def _reconstruct(self, state: SearchState, end_idx: int) -> List[Tuple[int, int]]:
        """Follow parent links from the goal back to the start."""
        cells = []
        idx = end_idx
        while idx >= 0:
            cells.append(self.grid.coords(idx))
            idx = state.parent[idx]
        cells.reverse()
        return cells

    def _fail(
        self,
        reason: NoPathReason,
        trace: Optional[SearchTrace],
        expanded: int = 0,
    ) -> SearchResult:
        logger.debug("No path: %s (expanded %d cells)", reason.value, expanded)
        if trace is not None:
            trace.add_stage("no_path", {"reason": reason.value, "expanded": expanded})
        return SearchResult(reason=reason, expanded=expanded)
