#!/usr/bin/env python3
"""
Demo script for the WayPath corridor pathfinder.

This script walks through routing on a few small maps and prints each
route along with an ASCII view of the walkability grid.
"""

import logging
import sys

from waypath import (
    SAMPLE_MAP,
    GridInspector,
    MapSnapshot,
    OrthogonalPathfinder,
    Point,
    Rect,
    RoutePlanner,
    SearchTrace,
    Waypoint,
    WaypointKind,
    grid_to_ascii,
    parse_map,
    render_to_png,
)


def print_header(title):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def print_path(path):
    if path is None:
        print("No path found.")
        return
    for i, point in enumerate(path.points):
        marker = "  (teleport)" if path.is_teleport(i) else ""
        print(f"  {i}: ({point.x:.1f}, {point.y:.1f}){marker}")
    print(f"  Walked length: {path.length():.1f}")


def demo_1():
    """Demo 1: Straight corridor"""
    print_header("Demo 1: Straight Corridor")

    corridors = [Rect("hall", 0, 0, 200, 30)]
    pathfinder = OrthogonalPathfinder(corridors, [], grid_size=10, footprint_size=5)
    path = pathfinder.find_path(Point(15, 15), Point(185, 15))
    print_path(path)
    print()
    print(grid_to_ascii(pathfinder.grid, path))


def demo_2():
    """Demo 2: Wall in the way"""
    print_header("Demo 2: Routing Around a Wall")

    corridors = [Rect("hall", 0, 0, 200, 60)]
    walls = [Rect("pillar", 90, 0, 20, 35)]
    pathfinder = OrthogonalPathfinder(corridors, walls, grid_size=10, footprint_size=5)
    path = pathfinder.find_path(Point(15, 15), Point(185, 15))
    print_path(path)
    print()
    print(grid_to_ascii(pathfinder.grid, path))


def demo_3():
    """Demo 3: Portals between islands"""
    print_header("Demo 3: Teleporting Between Islands")

    snapshot = MapSnapshot(
        corridors=[Rect("west", 0, 0, 150, 30), Rect("east", 250, 0, 150, 30)],
        waypoints=[
            Waypoint("a", 15, 15, label="A"),
            Waypoint("b", 385, 15, label="B"),
            Waypoint("p1", 135, 15, kind=WaypointKind.PORTAL, portal_group_id="P1"),
            Waypoint("p2", 265, 15, kind=WaypointKind.PORTAL, portal_group_id="P1"),
        ],
    )
    pathfinder = OrthogonalPathfinder(snapshot.corridors, [], 10, 5)
    print(f"Walkable regions: {GridInspector(pathfinder.grid).region_count()}")

    route = RoutePlanner(grid_size=10).plan(snapshot, "a", "b")
    print(f"Used portal: {route.used_portal}")
    print_path(route.path)


def demo_4():
    """Demo 4: Sample map with trace"""
    print_header("Demo 4: Sample Map With Search Trace")

    trace = SearchTrace()
    snapshot = parse_map(SAMPLE_MAP)
    route = RoutePlanner(trace=trace).plan(snapshot, "start", "end")
    print_path(route.path if route else None)
    print()
    print(trace.summary())

    output = render_to_png(snapshot, [route], "sample_route.png")
    print(f"\nRendered route to {output}")


def main():
    """Main demo function."""
    demos = [
        ("Straight Corridor", demo_1),
        ("Wall in the Way", demo_2),
        ("Portals", demo_3),
        ("Sample Map", demo_4),
    ]

    logging.basicConfig(level=logging.DEBUG)

    print("\n" + "=" * 70)
    print("  WAYPATH - DEMONSTRATION")
    print("=" * 70)
    print("\nPress Enter after each demo to continue...")

    for title, demo_func in demos:
        input("\n[Press Enter to continue]")
        demo_func()

    print("\n" + "=" * 70)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nDemo interrupted. Goodbye!")
        sys.exit(0)
