"""
Geometry tests for footprint-aware path finding.

All placement decisions in the package come from the functions in this
module: the grid builder rasterizes with them, the searcher validates
endpoints with them and the refiner validates shortcuts with them. Keeping a
single implementation keeps those stages consistent.

An agent is modelled as an axis-aligned square "footprint" centered on its
position. A position is placeable when the footprint does not overlap any
wall and every test point of the footprint lies inside some corridor.
"""

import math
from typing import List, Sequence, Tuple

from .models import Bounds, Rect

# =============================================================================
# GEOMETRY CONFIGURATION
# =============================================================================

# Footprints smaller than this are tested at their center point only
SMALL_FOOTPRINT_THRESHOLD = 5

# Minimum padding added around the map when computing world bounds
MIN_BOUNDS_PADDING = 50

# Samples used when checking a straight segment against walls
WALL_SEGMENT_SAMPLES = 20

# =============================================================================


def point_in_rotated_rect(px: float, py: float, rect: Rect) -> bool:
    """
    Check if a point lies inside a (possibly rotated) rectangle.

    Rotated rectangles are tested by rotating the point by -rotation around
    the rectangle's center, then testing containment in local space. Edges are
    inclusive.
    """
    if not rect.rotation:
        return rect.x <= px <= rect.x2 and rect.y <= py <= rect.y2

    cx = rect.center_x
    cy = rect.center_y
    angle = math.radians(-rect.rotation)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    local_x = (px - cx) * cos_a - (py - cy) * sin_a + cx
    local_y = (px - cx) * sin_a + (py - cy) * cos_a + cy

    return rect.x <= local_x <= rect.x2 and rect.y <= local_y <= rect.y2


def point_in_any_corridor(px: float, py: float, corridors: Sequence[Rect]) -> bool:
    """Check if a point lies inside at least one corridor."""
    for corridor in corridors:
        if point_in_rotated_rect(px, py, corridor):
            return True
    return False


def footprint_clear_of_walls(
    center_x: float, center_y: float, footprint_size: float, walls: Sequence[Rect]
) -> bool:
    """
    Check that a footprint does not overlap any wall.

    Walls are never rotated, so this is a strict AABB overlap test: touching
    edges do not count as overlap.
    """
    half = footprint_size / 2
    left = center_x - half
    right = center_x + half
    top = center_y - half
    bottom = center_y + half

    for wall in walls:
        if left < wall.x2 and right > wall.x and top < wall.y2 and bottom > wall.y:
            return False
    return True


def footprint_corners(
    center_x: float, center_y: float, footprint_size: float
) -> List[Tuple[float, float]]:
    """The four corners of a footprint centered on a point."""
    half = footprint_size / 2
    return [
        (center_x - half, center_y - half),
        (center_x + half, center_y - half),
        (center_x - half, center_y + half),
        (center_x + half, center_y + half),
    ]


def can_place_at(
    center_x: float,
    center_y: float,
    footprint_size: float,
    corridors: Sequence[Rect],
    walls: Sequence[Rect],
) -> bool:
    """
    Check if an agent footprint can occupy a position.

    Each corner is checked independently, so a footprint may straddle the
    boundary between two overlapping corridors.
    """
    if not footprint_clear_of_walls(center_x, center_y, footprint_size, walls):
        return False

    if footprint_size < SMALL_FOOTPRINT_THRESHOLD:
        test_points = [(center_x, center_y)]
    else:
        test_points = footprint_corners(center_x, center_y, footprint_size)

    return all(point_in_any_corridor(x, y, corridors) for x, y in test_points)


def bounds_padding(footprint_size: float) -> float:
    """Padding around the map for a given footprint size."""
    return max(MIN_BOUNDS_PADDING, footprint_size * 2)


def world_bounds(
    corridors: Sequence[Rect], walls: Sequence[Rect], padding: float
) -> Bounds:
    """
    Compute the padded bounding box of all corridors and walls.

    Rotated corridors contribute their rotated corners. Walls contribute
    their axis-aligned corners.
    """
    min_x = min_y = math.inf
    max_x = max_y = -math.inf

    for corridor in corridors:
        for x, y in corridor.corners():
            min_x = min(min_x, x)
            min_y = min(min_y, y)
            max_x = max(max_x, x)
            max_y = max(max_y, y)

    for wall in walls:
        min_x = min(min_x, wall.x)
        min_y = min(min_y, wall.y)
        max_x = max(max_x, wall.x2)
        max_y = max(max_y, wall.y2)

    return Bounds(
        min_x=min_x - padding,
        min_y=min_y - padding,
        width=max_x - min_x + padding * 2,
        height=max_y - min_y + padding * 2,
    )


def segment_hits_walls(
    start, end, walls: Sequence[Rect], samples: int = WALL_SEGMENT_SAMPLES
) -> bool:
    """
    Check if a straight segment passes through any wall.

    The segment is sampled at samples + 1 evenly spaced points; wall edges
    are inclusive.
    """
    for i in range(samples + 1):
        t = i / samples
        x = start.x + (end.x - start.x) * t
        y = start.y + (end.y - start.y) * t
        for wall in walls:
            if wall.x <= x <= wall.x2 and wall.y <= y <= wall.y2:
                return True
    return False
