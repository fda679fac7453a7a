"""
Scene graph support for auto-routing.

Uses networkx for:
- The containment tree of diagram nodes
- Lowest common ancestor lookup for the two ends of a link
- Ordered traversal of a container's descendants

The auto-router never looks at the tree itself; collect_routing_context()
flattens the part of it a link has to avoid into a RoutingContext.
"""

from dataclasses import dataclass
from typing import Hashable, List, Optional, Tuple

import networkx as nx

from .box import Box


@dataclass(frozen=True)
class RoutingContext:
    """
    Obstacle snapshot for routing one link.

    Attributes:
        container: Bounds of the lowest common ancestor of both ends.
        boxes: Bounds of every node the link must avoid, in traversal order.
        start_box: Index of the source node's box, if it is in boxes.
        end_box: Index of the target node's box, if it is in boxes.
    """

    container: Box
    boxes: Tuple[Box, ...] = ()
    start_box: Optional[int] = None
    end_box: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "boxes", tuple(self.boxes))


class SceneGraph:
    """
    Containment tree of diagram nodes with their bounds.

    Each node has a Box and may be flagged to be excluded from routing
    (e.g. a label or a decoration the link is allowed to cross).
    """

    def __init__(self):
        self.graph: nx.DiGraph = nx.DiGraph()
        self.root: Optional[Hashable] = None

    def add_node(
        self,
        node: Hashable,
        bounds: Box,
        parent: Optional[Hashable] = None,
        exclude_from_routing: bool = False,
    ) -> None:
        """
        Add a node under parent, or as the root when parent is None.

        Raises:
            ValueError: If parent is unknown, or a root already exists
        """
        if parent is None:
            if self.root is not None:
                raise ValueError(f"scene already has a root: {self.root!r}")
            self.root = node
        elif parent not in self.graph:
            raise ValueError(f"unknown parent node: {parent!r}")

        self.graph.add_node(node, bounds=bounds, exclude=exclude_from_routing)
        if parent is not None:
            self.graph.add_edge(parent, node)

    def get_bounds(self, node: Hashable) -> Box:
        """Bounds of a node. Raises KeyError for unknown nodes."""
        return self.graph.nodes[node]["bounds"]

    def excluded_from_routing(self, node: Hashable) -> bool:
        return self.graph.nodes[node]["exclude"]

    def get_common_ancestor(self, a: Hashable, b: Hashable) -> Hashable:
        """Lowest node that contains both a and b (either may be it)."""
        for node in (a, b):
            if node not in self.graph:
                raise KeyError(node)
        return nx.lowest_common_ancestor(self.graph, a, b)

    def get_descendants(self, node: Hashable) -> List[Hashable]:
        """All nodes below node, in depth-first insertion order."""
        return list(nx.dfs_preorder_nodes(self.graph, node))[1:]

    def is_ancestor(self, node: Hashable, other: Hashable) -> bool:
        """True when node strictly contains other."""
        return node != other and nx.has_path(self.graph, node, other)


def collect_routing_context(
    scene: SceneGraph, source: Hashable, target: Hashable
) -> RoutingContext:
    """
    Gather the obstacles a link from source to target has to avoid.

    Walks the descendants of the lowest common ancestor of both ends,
    skipping nodes excluded from routing and nodes that contain either end.

    Args:
        scene: The scene graph
        source: Node the link starts from
        target: Node the link ends at

    Returns:
        RoutingContext with the container bounds and obstacle boxes
    """
    container = scene.get_common_ancestor(source, target)
    boxes: List[Box] = []
    start_box = end_box = None

    for node in scene.get_descendants(container):
        if (
            scene.excluded_from_routing(node)
            or scene.is_ancestor(node, source)
            or scene.is_ancestor(node, target)
        ):
            continue
        if node == source:
            start_box = len(boxes)
        if node == target:
            end_box = len(boxes)
        boxes.append(scene.get_bounds(node))

    return RoutingContext(
        container=scene.get_bounds(container),
        boxes=tuple(boxes),
        start_box=start_box,
        end_box=end_box,
    )
