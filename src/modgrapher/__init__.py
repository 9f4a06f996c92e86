"""modgrapher: build module dependency graphs from `go mod graph` output."""

from modgrapher.graph import (
    Edge,
    Graph,
    GraphBuilder,
    InvalidIdentifierError,
    MalformedLineError,
    ModGraphError,
    Node,
    ReadError,
    parse_mod_graph,
)

__version__ = "0.1.0"

__all__ = [
    "Edge",
    "Graph",
    "GraphBuilder",
    "InvalidIdentifierError",
    "MalformedLineError",
    "ModGraphError",
    "Node",
    "ReadError",
    "__version__",
    "parse_mod_graph",
]
