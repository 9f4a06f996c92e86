"""Construction of a module Graph from `go mod graph` style output.

The builder makes a single pass over the input. Every line must validate; the
first bad line aborts the build and no partial graph is returned.
"""

from collections.abc import Iterable

import structlog

from modgrapher.graph.errors import LineValidationError, ReadError
from modgrapher.graph.line_validator import get_parent_and_child
from modgrapher.graph.models import Edge, Graph, Node

logger = structlog.get_logger(__name__)


def _strip_line_terminator(raw_line: str) -> str:
    """Drop one trailing newline and one carriage return, if present."""
    if raw_line.endswith("\n"):
        raw_line = raw_line[:-1]
    if raw_line.endswith("\r"):
        raw_line = raw_line[:-1]
    return raw_line


class GraphBuilder:
    """Builds a Graph from a stream of parent/child lines.

    Each build starts from an empty graph, so one builder may be reused for
    several inputs. The stream is only read, never opened or closed.

    Thread-safety:
        This class is NOT thread-safe. A build mutates per-instance state until
        it returns.
    """

    def __init__(self) -> None:
        """Initialize the builder with an empty node table and edge list."""
        self._nodes: dict[str, Node] = {}
        self._edges: list[Edge] = []

    def build(self, stream: Iterable[str]) -> Graph:
        """Read the whole stream and return the resulting graph.

        Args:
            stream: Readable text stream (or any iterable of lines)

        Returns:
            The completed Graph

        Raises:
            MalformedLineError: If a line has fewer than two fields
            InvalidIdentifierError: If a parent or child does not start with a letter
            ReadError: If reading the stream itself fails
        """
        self._nodes = {}
        self._edges = []
        line_number = 0

        logger.debug("graph_build_started")

        try:
            for line_number, raw_line in enumerate(stream, start=1):
                line = _strip_line_terminator(raw_line)
                try:
                    parent, child = get_parent_and_child(line)
                except LineValidationError as e:
                    e.at_line(line_number)
                    logger.error(
                        "graph_build_failed",
                        line_number=line_number,
                        line=line,
                        error=e.message,
                    )
                    raise
                self._add_relation(parent, child)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("input_read_failed", lines_read=line_number, error=str(e))
            msg = f"failed to scan the content: {e}"
            raise ReadError(msg) from e

        graph = Graph(nodes=self._nodes, edges=self._edges)
        self._nodes = {}
        self._edges = []

        logger.info(
            "graph_build_complete",
            node_count=graph.node_count,
            edge_count=graph.edge_count,
        )
        return graph

    def _get_or_create_node(self, node_id: str) -> Node:
        node = self._nodes.get(node_id)
        if node is None:
            node = Node(id=node_id, label=node_id)
            self._nodes[node_id] = node
        return node

    def _add_relation(self, parent: str, child: str) -> None:
        """Record one parent -> child line in both adjacency sets and the edge list."""
        parent_node = self._get_or_create_node(parent)
        parent_node.child_ids.add(child)

        child_node = self._get_or_create_node(child)
        child_node.parent_ids.add(parent)

        # Repeated relations still get their own edge
        self._edges.append(Edge(from_id=parent, to_id=child))


def parse_mod_graph(stream: Iterable[str]) -> Graph:
    """Build a Graph from module graph output.

    Examples:
        >>> import io
        >>> graph = parse_mod_graph(io.StringIO("A B\\nA C\\n"))
        >>> sorted(graph.nodes["A"].child_ids)
        ['B', 'C']
    """
    return GraphBuilder().build(stream)
