"""Graph module for parsing module dependency listings.

This module turns `go mod graph` style output into a Graph of Nodes and Edges
and provides consistency checks for the result.
"""

from modgrapher.graph.builder import GraphBuilder, parse_mod_graph
from modgrapher.graph.errors import (
    InvalidIdentifierError,
    LineValidationError,
    MalformedLineError,
    ModGraphError,
    ReadError,
)
from modgrapher.graph.line_validator import get_parent_and_child
from modgrapher.graph.models import Edge, Graph, Node
from modgrapher.graph.validator import GraphValidator, ValidationReport

__all__ = [
    "Edge",
    "Graph",
    "GraphBuilder",
    "GraphValidator",
    "InvalidIdentifierError",
    "LineValidationError",
    "MalformedLineError",
    "ModGraphError",
    "Node",
    "ReadError",
    "ValidationReport",
    "get_parent_and_child",
    "parse_mod_graph",
]
