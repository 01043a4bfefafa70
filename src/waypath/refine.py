"""
Path refinement for grid search results.

A raw A* path visits every cell center along the way. Refinement reduces it
in two passes:
- optimize: remove collinear points on the grid-stepped polyline
- smooth: greedy visibility shortcutting, validated against the footprint

Both passes only ever drop points, never move or add them.
"""

from typing import List, Sequence

from .geometry import footprint_clear_of_walls, footprint_corners, point_in_any_corridor
from .models import Point, Rect

# Number of steps used to sample a straight segment (steps + 1 samples)
LINE_SAMPLE_STEPS = 50


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _direction(a, b):
    return _sign(b.x - a.x), _sign(b.y - a.y)


def optimize(points: Sequence[Point]) -> List[Point]:
    """
    Remove redundant collinear points.

    An interior point is dropped when the step direction into it equals the
    step direction out of it. First and last points are always kept.
    """
    if len(points) <= 2:
        return list(points)

    simplified = [points[0]]
    for i in range(1, len(points) - 1):
        incoming = _direction(points[i - 1], points[i])
        outgoing = _direction(points[i], points[i + 1])
        if incoming != outgoing:
            simplified.append(points[i])
    simplified.append(points[-1])
    return simplified


class PathRefiner:
    """
    Refines paths against corridor and wall geometry for one footprint size.

    Example:
        >>> refiner = PathRefiner(corridors, walls, footprint_size=5)
        >>> refiner.refine(raw_points)
    """

    def __init__(
        self,
        corridors: Sequence[Rect],
        walls: Sequence[Rect],
        footprint_size: float,
        sample_steps: int = LINE_SAMPLE_STEPS,
    ):
        self.corridors = corridors
        self.walls = walls
        self.footprint_size = footprint_size
        self.sample_steps = sample_steps

    def optimize(self, points: Sequence[Point]) -> List[Point]:
        return optimize(points)

    def refine(self, points: Sequence[Point]) -> List[Point]:
        """Optimize, then smooth."""
        return self.smooth(self.optimize(points))

    def can_draw_direct_line(self, start, end) -> bool:
        """
        Check that the footprint can travel straight from start to end.

        The segment is sampled at fixed, evenly spaced points. At each sample
        the center and the four footprint corners must lie in some corridor,
        and the footprint must be clear of walls.
        """
        steps = self.sample_steps
        for i in range(steps + 1):
            t = i / steps
            x = start.x + (end.x - start.x) * t
            y = start.y + (end.y - start.y) * t

            if not footprint_clear_of_walls(x, y, self.footprint_size, self.walls):
                return False

            test_points = [(x, y)] + footprint_corners(x, y, self.footprint_size)
            for px, py in test_points:
                if not point_in_any_corridor(px, py, self.corridors):
                    return False
        return True

    def smooth(self, points: Sequence[Point]) -> List[Point]:
        """
        Shortcut the path wherever a straight line is valid.

        From each anchor, jump straight to the last point if possible,
        otherwise to the furthest point with a valid direct line, otherwise
        to the next point.
        """
        if len(points) <= 2:
            return list(points)

        last = len(points) - 1
        smoothed = [points[0]]
        current = 0

        while current < last:
            if current < last - 1 and self.can_draw_direct_line(
                points[current], points[last]
            ):
                smoothed.append(points[last])
                break

            furthest = current + 1
            # The last point was already tried above
            for i in range(last - 1, current + 1, -1):
                if self.can_draw_direct_line(points[current], points[i]):
                    furthest = i
                    break

            smoothed.append(points[furthest])
            current = furthest

        return smoothed
