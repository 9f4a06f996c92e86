"""Data model for module dependency graphs.

Nodes refer to each other only by identifier. Adjacency is kept as sets of
identifiers on each node, while edges keep every input relation in order.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Node:
    """A module in the dependency graph.

    Attributes:
        id: Module identifier as it appeared in the input
        label: Display label, always equal to id
        parent_ids: Identifiers of modules that depend on this one
        child_ids: Identifiers of modules this one depends on
    """

    id: str
    label: str = ""
    parent_ids: set[str] = field(default_factory=set)
    child_ids: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if not self.label:
            self.label = self.id


@dataclass(frozen=True)
class Edge:
    """One directed parent -> child relation read from the input.

    Attributes:
        from_id: Parent module identifier
        to_id: Child module identifier
    """

    from_id: str
    to_id: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_id, "to": self.to_id}


@dataclass
class Graph:
    """Complete set of nodes plus the ordered edges from one input stream.

    A Graph returned by the builder is owned by the caller and is never
    touched again by modgrapher; treat it as read-only. The containers
    themselves are plain dicts, sets and lists, so nothing enforces this.

    Attributes:
        nodes: Mapping of module identifier to Node
        edges: Edges in input order; repeated relations are kept
    """

    nodes: dict[str, Node] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def to_dict(self) -> dict[str, Any]:
        """Convert the graph to a JSON-serializable dictionary.

        Adjacency sets are emitted as sorted lists so the output is stable.
        """
        return {
            "nodes": {
                node_id: {
                    "id": node.id,
                    "label": node.label,
                    "parent_ids": sorted(node.parent_ids),
                    "child_ids": sorted(node.child_ids),
                }
                for node_id, node in self.nodes.items()
            },
            "edges": [edge.to_dict() for edge in self.edges],
        }
