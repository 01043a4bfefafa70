"""
Debug tracing infrastructure for waypath.

This module provides data structures for capturing detailed traces of a path
query. When a trace is passed in, the pathfinder and the portal router record
every stage of processing: grid construction, endpoint mapping, search
outcome, refinement and portal hops.

This is primarily useful for:
1. Understanding why a query returned no path
2. Seeing how refinement reduced a raw grid path
3. Writing targeted tests (verifying specific search decisions)

Usage:
    >>> trace = SearchTrace()
    >>> pathfinder = OrthogonalPathfinder(corridors, walls, 5, 5, trace=trace)
    >>> pathfinder.find_path(Point(10, 10), Point(200, 10))
    >>> print(trace.summary())
    >>> trace.dump_to_file("search_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TraceStage:
    """
    Snapshot of state at one stage of a path query.

    Stages recorded by the package:
    1. grid_built - Grid dimensions and walkable cell count
    2. endpoints_mapped - Start and end grid cells
    3. path_found / no_path - Search outcome
    4. optimized / smoothed - Point counts after each refinement
    5. portal_hop - A teleport between two linked portals
    6. portal_path_found / portal_search_exhausted - Portal routing outcome

    Attributes:
        name: Name of this stage
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            # Truncate long values
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class SearchTrace:
    """
    Complete trace of one or more path queries.

    Attributes:
        stages: Recorded stages, in order
        label: Free-form description of the query
    """

    stages: List[TraceStage] = field(default_factory=list)
    label: str = ""

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        """
        Record a stage.

        Args:
            name: Name of the stage (e.g., "grid_built")
            data: Dictionary of relevant data at this stage
        """
        self.stages.append(TraceStage(name, data.copy()))

    def get_stage(self, name: str) -> Optional[TraceStage]:
        """Get the first stage with a given name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_stages(self, name: str) -> List[TraceStage]:
        """Get every stage with a given name."""
        return [stage for stage in self.stages if stage.name == name]

    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    def no_path_reasons(self) -> List[str]:
        """Reasons recorded by failed searches, in order."""
        return [stage.data.get("reason", "") for stage in self.get_stages("no_path")]

    def clear(self) -> None:
        self.stages.clear()

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the label, the stage overview and stage counts.
        """
        lines = [
            "=" * 60,
            "SEARCH TRACE SUMMARY",
            "=" * 60,
            "",
            f"Query: {self.label}",
            "",
            f"Stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            lines.append(f"  {stage.name}")

        stage_counts: Dict[str, int] = {}
        for stage in self.stages:
            stage_counts[stage.name] = stage_counts.get(stage.name, 0) + 1

        lines.append("")
        lines.append("Stages by name:")
        for name, count in sorted(stage_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {name}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of the trace."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")
        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
