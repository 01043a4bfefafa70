"""
Placement adjustment for waypoints the agent cannot occupy.

Editors let users drop waypoints anywhere, including on corridor edges or
inside walls. Before routing, such a waypoint is moved to the nearest valid
position just inside a corridor edge. The connector helpers describe the
short line drawn from the original to the adjusted position.
"""

from typing import List, Sequence

from .geometry import can_place_at, segment_hits_walls
from .models import Point, Rect

# Distance (in world units) under which two positions count as the same
ALIGNMENT_TOLERANCE = 1


def placement_margin(footprint_size: float) -> float:
    """Distance kept between a projected position and the corridor edge."""
    return footprint_size + max(footprint_size * 0.5, footprint_size * 0.3)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def edge_candidates(waypoint, corridor: Rect, margin: float) -> List[Point]:
    """
    Project a point onto the four inset edges of a corridor.

    Returns candidates for the top, bottom, left and right edges, in that
    order, each clamped to the corridor interior minus the margin.
    """
    x_low, x_high = corridor.x + margin, corridor.x2 - margin
    y_low, y_high = corridor.y + margin, corridor.y2 - margin
    clamped_x = _clamp(waypoint.x, x_low, x_high)
    clamped_y = _clamp(waypoint.y, y_low, y_high)
    return [
        Point(clamped_x, y_low),
        Point(clamped_x, y_high),
        Point(x_low, clamped_y),
        Point(x_high, clamped_y),
    ]


def find_nearest_placement(
    waypoint,
    corridors: Sequence[Rect],
    walls: Sequence[Rect],
    footprint_size: float,
) -> Point:
    """
    Find the nearest position where the footprint fits, near a waypoint.

    Corridors too small to hold the footprint plus margin are skipped. If no
    corridor yields a valid candidate, the waypoint's own position is
    returned unchanged.

    Args:
        waypoint: Position to adjust (anything with x and y)
        corridors: Walkable rectangles
        walls: Blocking rectangles
        footprint_size: Edge length of the agent footprint

    Returns:
        The adjusted position, or the original one
    """
    original = Point(waypoint.x, waypoint.y)
    nearest = original
    min_distance = float("inf")
    margin = placement_margin(footprint_size)

    for corridor in corridors:
        if corridor.width < margin * 2 or corridor.height < margin * 2:
            continue

        for candidate in edge_candidates(original, corridor, margin):
            if not can_place_at(
                candidate.x, candidate.y, footprint_size, corridors, walls
            ):
                continue
            distance = original.distance_to(candidate)
            if distance < min_distance:
                min_distance = distance
                nearest = candidate

    return nearest


def adjustment_connector(original, adjusted, walls: Sequence[Rect]) -> List[Point]:
    """
    Polyline from a waypoint's original position to its adjusted position.

    Returns an empty list when the positions coincide or no wall-free
    connector exists. Aligned positions get a straight segment; others get
    an L-shape, horizontal-first when the horizontal offset dominates.
    """
    if original is None or adjusted is None:
        return []

    start = Point(original.x, original.y)
    end = Point(adjusted.x, adjusted.y)
    if start.distance_to(end) <= ALIGNMENT_TOLERANCE:
        return []

    delta_x = end.x - start.x
    delta_y = end.y - start.y
    same_x = abs(delta_x) < ALIGNMENT_TOLERANCE
    same_y = abs(delta_y) < ALIGNMENT_TOLERANCE

    if same_x or same_y:
        return [] if segment_hits_walls(start, end, walls) else [start, end]

    horizontal_corner = Point(end.x, start.y)
    vertical_corner = Point(start.x, end.y)
    horizontal_ok = not segment_hits_walls(
        start, horizontal_corner, walls
    ) and not segment_hits_walls(horizontal_corner, end, walls)
    vertical_ok = not segment_hits_walls(
        start, vertical_corner, walls
    ) and not segment_hits_walls(vertical_corner, end, walls)

    if horizontal_ok and vertical_ok:
        corner = horizontal_corner if abs(delta_x) >= abs(delta_y) else vertical_corner
        return [start, corner, end]
    if horizontal_ok:
        return [start, horizontal_corner, end]
    if vertical_ok:
        return [start, vertical_corner, end]
    return []
