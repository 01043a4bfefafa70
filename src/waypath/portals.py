"""
Portal routing.

When two points are not connected by walkable corridors, a route may still
exist through linked portals: stepping onto one portal teleports the agent to
every other portal of the same group. This module searches that teleport graph
breadth-first, using the pathfinder for every walked hop.

The search finds a route, not necessarily the shortest one: portals are only
ordered by straight-line distance from the current position, and states are
deduplicated by arrival position.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

import networkx as nx

from .models import Path, Point, Waypoint
from .pathfinder import OrthogonalPathfinder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PortalState:
    """One entry of the breadth-first queue."""

    position: Point
    points: Tuple[Point, ...]
    visited: FrozenSet[str]
    teleports: Tuple[int, ...]


def build_portal_graph(waypoints: Sequence[Waypoint]) -> nx.Graph:
    """
    Build the teleport graph over portals.

    Nodes are portal ids (with the Waypoint stored under "waypoint"), and
    every pair of portals sharing a group id is linked. Groups with more
    than two members become cliques.
    """
    graph = nx.Graph()
    groups: Dict[str, List[Waypoint]] = {}

    for waypoint in waypoints:
        if not waypoint.is_portal:
            continue
        graph.add_node(waypoint.id, waypoint=waypoint)
        groups.setdefault(waypoint.portal_group_id, []).append(waypoint)

    for members in groups.values():
        for i, first in enumerate(members):
            for second in members[i + 1:]:
                if first.id != second.id:
                    graph.add_edge(first.id, second.id)

    return graph


def portal_partners(graph: nx.Graph, portal_id: str) -> List[Waypoint]:
    """Portals linked to a portal, in map order."""
    return [graph.nodes[other]["waypoint"] for other in graph.neighbors(portal_id)]


class PortalRouter:
    """
    Breadth-first router over linked portals.

    Example:
        >>> router = PortalRouter(pathfinder, snapshot.waypoints)
        >>> path = router.find_path(start, end)
        >>> path.teleport_segment_indices
        (4,)
    """

    def __init__(self, pathfinder: OrthogonalPathfinder, waypoints: Sequence[Waypoint]):
        self.pathfinder = pathfinder
        self.graph = build_portal_graph(waypoints)
        self.portals = [self.graph.nodes[n]["waypoint"] for n in self.graph.nodes]

    def find_path(self, start, end) -> Optional[Path]:
        """
        Find a path from start to end, teleporting through portals as needed.

        Returns:
            Path with teleport segment indices, or None if no route exists
        """
        trace = self.pathfinder.trace
        start = Point(start.x, start.y)
        queue = deque([_PortalState(start, (), frozenset(), ())])
        seen = set()

        while queue:
            state = queue.popleft()

            direct = self.pathfinder.find_path(state.position, end)
            if direct is not None:
                if trace is not None:
                    trace.add_stage(
                        "portal_path_found",
                        {"teleports": len(state.teleports)},
                    )
                return Path(
                    points=state.points + direct.points,
                    teleport_segment_indices=state.teleports,
                )

            reachable = self._reachable_portals(state)

            for portal, path_to_portal in reachable:
                for partner in portal_partners(self.graph, portal.id):
                    if partner.id in state.visited:
                        continue

                    points = state.points + path_to_portal.points + (partner.position,)
                    teleports = state.teleports + (len(points) - 2,)
                    key = (partner.x, partner.y)
                    if key in seen:
                        continue
                    seen.add(key)

                    if trace is not None:
                        trace.add_stage(
                            "portal_hop", {"from": portal.id, "to": partner.id}
                        )
                    queue.append(
                        _PortalState(
                            position=partner.position,
                            points=points,
                            visited=state.visited | {portal.id, partner.id},
                            teleports=teleports,
                        )
                    )

        logger.debug("Portal search exhausted without reaching destination")
        if trace is not None:
            trace.add_stage("portal_search_exhausted", {})
        return None

    def _reachable_portals(self, state: _PortalState) -> List[Tuple[Waypoint, Path]]:
        """Unvisited portals walkable from the current position, nearest first."""
        reachable = []
        for portal in self.portals:
            if portal.id in state.visited:
                continue
            path = self.pathfinder.find_path(state.position, portal)
            if path is not None:
                reachable.append((portal, path))

        reachable.sort(key=lambda item: state.position.distance_to(item[0]))
        return reachable


def find_portal_path(
    start,
    end,
    pathfinder: OrthogonalPathfinder,
    waypoints: Sequence[Waypoint],
) -> Optional[Path]:
    """Find a path from start to end through portals, or None."""
    return PortalRouter(pathfinder, waypoints).find_path(start, end)
