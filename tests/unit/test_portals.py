"""Unit tests for portal routing."""

from waypath import (
    OrthogonalPathfinder,
    Point,
    Rect,
    SearchTrace,
    Waypoint,
    WaypointKind,
)
from waypath.portals import (
    PortalRouter,
    build_portal_graph,
    find_portal_path,
    portal_partners,
)


def portal(portal_id, x, y, group):
    return Waypoint(portal_id, x, y, kind=WaypointKind.PORTAL, portal_group_id=group)


class TestPortalGraph:
    """Tests for build_portal_graph."""

    def test_pairs_linked(self, linked_portals):
        graph = build_portal_graph(linked_portals)
        assert set(graph.nodes) == {"P1a", "P1b"}
        assert graph.has_edge("P1a", "P1b")

    def test_group_of_three_is_fully_linked(self):
        graph = build_portal_graph(
            [portal("a", 0, 0, "G"), portal("b", 1, 1, "G"), portal("c", 2, 2, "G")]
        )
        assert graph.number_of_edges() == 3

    def test_ignores_plain_waypoints_and_ungrouped_portals(self):
        graph = build_portal_graph(
            [
                Waypoint("w", 0, 0),
                Waypoint("lonely", 5, 5, kind=WaypointKind.PORTAL),
                portal("a", 0, 0, "G"),
            ]
        )
        assert list(graph.nodes) == ["a"]
        assert graph.number_of_edges() == 0

    def test_separate_groups_not_linked(self):
        graph = build_portal_graph(
            [portal("a", 0, 0, "G1"), portal("b", 1, 1, "G2")]
        )
        assert not graph.has_edge("a", "b")

    def test_partners(self, linked_portals):
        graph = build_portal_graph(linked_portals)
        assert portal_partners(graph, "P1a") == [linked_portals[1]]


class TestPortalRouter:
    """Tests for PortalRouter.find_path."""

    def test_single_teleport(
        self, island_corridors, linked_portals, west_point, east_point
    ):
        pathfinder = OrthogonalPathfinder(island_corridors, [], 5, 5)
        router = PortalRouter(pathfinder, linked_portals)
        path = router.find_path(west_point, east_point)

        assert path is not None
        assert path.teleport_segment_indices == (1,)
        assert path.points == (
            Point(22.5, 22.5),
            Point(182.5, 22.5),
            Point(420, 20),
            Point(422.5, 22.5),
            Point(582.5, 22.5),
        )

    def test_teleport_lands_on_partner(
        self, island_corridors, linked_portals, west_point, east_point
    ):
        pathfinder = OrthogonalPathfinder(island_corridors, [], 5, 5)
        path = find_portal_path(west_point, east_point, pathfinder, linked_portals)
        index = path.teleport_segment_indices[0]
        assert path.points[index + 1] == linked_portals[1].position
        assert path.points[index].distance_to(linked_portals[0]) < 5

    def test_walked_segments_are_drawable(
        self, island_corridors, linked_portals, west_point, east_point
    ):
        pathfinder = OrthogonalPathfinder(island_corridors, [], 5, 5)
        path = find_portal_path(west_point, east_point, pathfinder, linked_portals)
        for a, b in path.walkable_segments():
            assert pathfinder.can_draw_direct_line(a, b)

    def test_directly_connected_has_no_teleports(self, straight_corridor):
        pathfinder = OrthogonalPathfinder(straight_corridor, [], 5, 5)
        path = find_portal_path(Point(20, 20), Point(380, 20), pathfinder, [])
        assert path.teleport_segment_indices == ()

    def test_no_portals(self, island_corridors, west_point, east_point):
        pathfinder = OrthogonalPathfinder(island_corridors, [], 5, 5)
        assert find_portal_path(west_point, east_point, pathfinder, []) is None

    def test_partner_on_wrong_island(self, west_point, east_point):
        """Portals that lead nowhere useful give no path."""
        corridors = [
            Rect("west", 0, 0, 200, 40),
            Rect("middle", 300, 0, 50, 40),
            Rect("east", 400, 0, 200, 40),
        ]
        portals = [portal("a", 180, 20, "G"), portal("b", 325, 20, "G")]
        pathfinder = OrthogonalPathfinder(corridors, [], 5, 5)
        assert find_portal_path(west_point, east_point, pathfinder, portals) is None

    def test_group_of_three(self, west_point, east_point):
        """Any member of a group can be the exit portal."""
        corridors = [
            Rect("west", 0, 0, 200, 40),
            Rect("middle", 300, 0, 50, 40),
            Rect("east", 400, 0, 200, 40),
        ]
        portals = [
            portal("a", 180, 20, "G"),
            portal("b", 325, 20, "G"),
            portal("c", 420, 20, "G"),
        ]
        pathfinder = OrthogonalPathfinder(corridors, [], 5, 5)
        path = find_portal_path(west_point, east_point, pathfinder, portals)
        assert path is not None
        assert path.teleport_segment_indices == (1,)
        assert path.points[2] == Point(420, 20)

    def test_chained_portals(self):
        """Routes may pass through several portal groups."""
        corridors = [
            Rect("one", 0, 0, 100, 40),
            Rect("two", 200, 0, 100, 40),
            Rect("three", 400, 0, 100, 40),
        ]
        portals = [
            portal("a1", 80, 20, "A"),
            portal("a2", 220, 20, "A"),
            portal("b1", 280, 20, "B"),
            portal("b2", 420, 20, "B"),
        ]
        pathfinder = OrthogonalPathfinder(corridors, [], 5, 5)
        path = find_portal_path(Point(20, 20), Point(480, 20), pathfinder, portals)
        assert path is not None
        assert len(path.teleport_segment_indices) == 2
        for index in path.teleport_segment_indices:
            assert path.points[index + 1] in (Point(220, 20), Point(420, 20))

    def test_trace_records_hops(
        self, island_corridors, linked_portals, west_point, east_point
    ):
        trace = SearchTrace()
        pathfinder = OrthogonalPathfinder(island_corridors, [], 5, 5, trace=trace)
        find_portal_path(west_point, east_point, pathfinder, linked_portals)
        hops = trace.get_stages("portal_hop")
        assert [(s.data["from"], s.data["to"]) for s in hops] == [("P1a", "P1b")]
        assert trace.get_stage("portal_path_found").data["teleports"] == 1

    def test_trace_records_exhaustion(self, island_corridors, west_point, east_point):
        trace = SearchTrace()
        pathfinder = OrthogonalPathfinder(island_corridors, [], 5, 5, trace=trace)
        find_portal_path(west_point, east_point, pathfinder, [])
        assert trace.get_stage("portal_search_exhausted") is not None
