"""
Debug tracing infrastructure for linkroute.

When a RouteTrace is passed to compute_points(), every stage of routing a
Manhattan link is recorded along with each detour the auto-router takes.

This is primarily useful for:
1. Debugging routing issues (seeing why a path bends where it does)
2. Writing targeted tests (asserting on a specific detour)

Usage:
    >>> trace = RouteTrace()
    >>> points = compute_points(link, trace=trace)
    >>> print(trace.summary())
    >>> trace.dump_to_file("route_trace.txt")

The trace captures:
- Routing stages (initial_route, merged, auto_routed, final) with points
- Every detour with the struck box, side, channel and displacement
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .box import Channel, Side
from .geometry import Point


@dataclass
class DetourRecord:
    """
    Record of one obstacle the auto-router routed around.

    Attributes:
        segment: Index of the segment that hit the obstacle
        box_index: Index of the obstacle in the box list
        side: Side of the obstacle the segment struck
        channel: Channel alongside the struck side
        displacement: Distance the segment was moved
        spliced: Whether a new bend point was inserted
    """

    segment: int
    box_index: int
    side: Side
    channel: Channel
    displacement: float
    spliced: bool

    def __str__(self) -> str:
        action = "splice+move" if self.spliced else "move"
        return (
            f"segment {self.segment}: box {self.box_index} {self.side.name} "
            f"-> {action} by {self.displacement:g}"
        )


@dataclass
class RouteStage:
    """
    Snapshot of the point sequence at one routing stage.

    Attributes:
        name: Name of this stage
        data: Dictionary of relevant data at this stage
        points: Copy of the points at this stage
    """

    name: str
    data: Dict[str, Any]
    points: Optional[List[Point]] = None

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        if self.points:
            lines.append("  Points: " + " ".join(str(p) for p in self.points))
        return "\n".join(lines)


@dataclass
class RouteTrace:
    """
    Complete trace of routing one link.

    Attributes:
        stages: Routing stages in order
        detours: Detours taken by the auto-router
        link_type: The link variant being routed
    """

    stages: List[RouteStage] = field(default_factory=list)
    detours: List[DetourRecord] = field(default_factory=list)
    link_type: str = ""

    def add_stage(
        self,
        name: str,
        data: Dict[str, Any],
        points: Optional[Sequence[Point]] = None,
    ) -> None:
        """
        Add a routing stage snapshot.

        Args:
            name: Name of the stage (e.g., "merged")
            data: Dictionary of relevant data at this stage
            points: Optional points to snapshot
        """
        snapshot = list(points) if points is not None else None
        self.stages.append(RouteStage(name, data.copy(), snapshot))

    def add_detour(
        self,
        segment: int,
        box_index: int,
        side: Side,
        channel: Channel,
        displacement: float,
        spliced: bool,
    ) -> None:
        """Record a detour around an obstacle."""
        self.detours.append(
            DetourRecord(segment, box_index, side, channel, displacement, spliced)
        )

    def get_stage(self, name: str) -> Optional[RouteStage]:
        """Get a specific routing stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_points_at_stage(self, name: str) -> Optional[List[Point]]:
        """Get the point snapshot at a specific stage."""
        stage = self.get_stage(name)
        if stage and stage.points:
            return stage.points
        return None

    def get_detours_for_box(self, box_index: int) -> List[DetourRecord]:
        return [d for d in self.detours if d.box_index == box_index]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the link type, the stage list and detour
        statistics.
        """
        lines = [
            "=" * 60,
            "ROUTE TRACE SUMMARY",
            "=" * 60,
            "",
            f"Link type: {self.link_type}",
            "",
            f"Routing stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            count = len(stage.points) if stage.points else 0
            lines.append(f"  [{count:>3} pts] {stage.name}")

        lines.extend(["", f"Total detours: {len(self.detours)}", ""])

        side_counts: Dict[str, int] = {}
        for detour in self.detours:
            side_counts[detour.side.name] = side_counts.get(detour.side.name, 0) + 1

        lines.append("Detours by side:")
        for side, count in sorted(side_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {side}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of the trace."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("ROUTING STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("DETOURS:")
        lines.append("-" * 40)
        for detour in self.detours:
            lines.append(str(detour))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
