"""Unit tests for GraphBuilder and parse_mod_graph.

Tests cover:
- Building the basic example graph
- Bidirectional adjacency
- Edge order and duplicate edges
- Self-loops
- Fail-fast behaviour on invalid lines
- Read failures
"""

import io

import pytest

from modgrapher.graph.builder import GraphBuilder, parse_mod_graph
from modgrapher.graph.errors import InvalidIdentifierError, MalformedLineError, ReadError
from modgrapher.graph.models import Edge, Graph, Node

BASIC_INPUT = """A B
A C
A D
B E
B F
C F
D G"""

EXPECTED_NODE_COUNT = 7
EXPECTED_EDGE_COUNT = 7


@pytest.fixture
def basic_graph() -> Graph:
    """Fixture providing the graph built from BASIC_INPUT."""
    return parse_mod_graph(io.StringIO(BASIC_INPUT))


def assert_bidirectional(graph: Graph) -> None:
    for node in graph.nodes.values():
        for child_id in node.child_ids:
            assert node.id in graph.nodes[child_id].parent_ids
        for parent_id in node.parent_ids:
            assert node.id in graph.nodes[parent_id].child_ids


class TestBasicGraph:
    """Test building the basic example graph."""

    def test_node_and_edge_counts(self, basic_graph):
        """Test that every identifier becomes exactly one node."""
        assert basic_graph.node_count == EXPECTED_NODE_COUNT
        assert basic_graph.edge_count == EXPECTED_EDGE_COUNT
        assert set(basic_graph.nodes) == {"A", "B", "C", "D", "E", "F", "G"}

    def test_full_structure(self, basic_graph):
        """Test the complete node table."""
        assert basic_graph.nodes == {
            "A": Node(id="A", label="A", parent_ids=set(), child_ids={"B", "C", "D"}),
            "B": Node(id="B", label="B", parent_ids={"A"}, child_ids={"E", "F"}),
            "C": Node(id="C", label="C", parent_ids={"A"}, child_ids={"F"}),
            "D": Node(id="D", label="D", parent_ids={"A"}, child_ids={"G"}),
            "E": Node(id="E", label="E", parent_ids={"B"}, child_ids=set()),
            "F": Node(id="F", label="F", parent_ids={"B", "C"}, child_ids=set()),
            "G": Node(id="G", label="G", parent_ids={"D"}, child_ids=set()),
        }

    def test_edges_in_input_order(self, basic_graph):
        """Test that edges follow the order of the input lines."""
        assert basic_graph.edges == [
            Edge("A", "B"),
            Edge("A", "C"),
            Edge("A", "D"),
            Edge("B", "E"),
            Edge("B", "F"),
            Edge("C", "F"),
            Edge("D", "G"),
        ]

    def test_root_and_shared_child(self, basic_graph):
        """Test the root node and the node with two parents."""
        assert basic_graph.nodes["A"].child_ids == {"B", "C", "D"}
        assert basic_graph.nodes["A"].parent_ids == set()
        assert basic_graph.nodes["F"].parent_ids == {"B", "C"}
        assert basic_graph.nodes["F"].child_ids == set()

    def test_labels_equal_ids(self, basic_graph):
        """Test that labels mirror identifiers."""
        for node_id, node in basic_graph.nodes.items():
            assert node.id == node_id
            assert node.label == node_id

    def test_bidirectional_adjacency(self, basic_graph):
        """Test that child and parent links mirror each other."""
        assert_bidirectional(basic_graph)


class TestInputHandling:
    """Test line handling details."""

    def test_empty_input(self):
        """Test that an empty stream yields an empty graph."""
        graph = parse_mod_graph(io.StringIO(""))

        assert graph.nodes == {}
        assert graph.edges == []

    def test_trailing_newline(self):
        """Test that a final newline does not add a line."""
        graph = parse_mod_graph(io.StringIO("A B\nB C\n"))

        assert graph.edge_count == 2

    def test_crlf_line_endings(self):
        """Test that Windows line endings are stripped."""
        graph = parse_mod_graph(io.StringIO("A B\r\nB C\r\n"))

        assert set(graph.nodes) == {"A", "B", "C"}
        assert graph.edges == [Edge("A", "B"), Edge("B", "C")]

    def test_accepts_list_of_lines(self):
        """Test that any iterable of lines can be used as input."""
        graph = parse_mod_graph(["A B", "B C"])

        assert graph.edges == [Edge("A", "B"), Edge("B", "C")]

    def test_trailing_tokens_ignored(self):
        """Test that extra fields do not create nodes."""
        graph = parse_mod_graph(io.StringIO("A B extra tokens\n"))

        assert set(graph.nodes) == {"A", "B"}

    def test_go_mod_graph_output(self):
        """Test a realistic excerpt of go mod graph output."""
        text = (
            "example.com/app github.com/pkg/errors@v0.9.1\n"
            "example.com/app golang.org/x/text@v0.3.7\n"
            "golang.org/x/text@v0.3.7 golang.org/x/tools@v0.0.0-20180917221912-90fa682c2a6e\n"
        )

        graph = parse_mod_graph(io.StringIO(text))

        assert graph.node_count == 4
        assert graph.nodes["example.com/app"].child_ids == {
            "github.com/pkg/errors@v0.9.1",
            "golang.org/x/text@v0.3.7",
        }
        assert graph.nodes["golang.org/x/text@v0.3.7"].parent_ids == {"example.com/app"}
        assert_bidirectional(graph)


class TestNodeIdentity:
    """Test deduplication of nodes and edges."""

    def test_existing_node_is_extended(self):
        """Test that later lines extend an existing node's adjacency."""
        graph = parse_mod_graph(io.StringIO("A B\nC B\nB D\n"))

        assert graph.node_count == 4
        assert graph.nodes["B"].parent_ids == {"A", "C"}
        assert graph.nodes["B"].child_ids == {"D"}

    def test_duplicate_lines_keep_edges(self):
        """Test that repeated relations add edges but not adjacency entries."""
        graph = parse_mod_graph(io.StringIO("A B\nA B\n"))

        assert graph.node_count == 2
        assert graph.edges == [Edge("A", "B"), Edge("A", "B")]
        assert graph.nodes["A"].child_ids == {"B"}
        assert graph.nodes["B"].parent_ids == {"A"}

    def test_self_loop(self):
        """Test that a node may be its own parent and child."""
        graph = parse_mod_graph(io.StringIO("A A\n"))

        assert graph.node_count == 1
        assert graph.nodes["A"].parent_ids == {"A"}
        assert graph.nodes["A"].child_ids == {"A"}
        assert graph.edges == [Edge("A", "A")]


class TestFailFast:
    """Test that invalid input aborts the whole build."""

    def test_single_token_line(self):
        """Test that a line without a separator is rejected."""
        with pytest.raises(MalformedLineError) as exc_info:
            parse_mod_graph(io.StringIO("AB"))

        assert exc_info.value.line == "AB"
        assert exc_info.value.line_number == 1

    def test_invalid_parent(self):
        """Test that a parent starting with a digit is rejected."""
        with pytest.raises(InvalidIdentifierError):
            parse_mod_graph(io.StringIO("0A B"))

    def test_invalid_child(self):
        """Test that a child starting with a digit is rejected."""
        with pytest.raises(InvalidIdentifierError):
            parse_mod_graph(io.StringIO("A 0B"))

    def test_invalid_line_after_valid_lines(self):
        """Test that no partial graph is returned after valid lines."""
        text = "A B\nB C\nC D\nD E\nE F\n0bad G\n"
        builder = GraphBuilder()
        graph = None

        with pytest.raises(InvalidIdentifierError) as exc_info:
            graph = builder.build(io.StringIO(text))

        assert graph is None
        assert exc_info.value.line == "0bad G"
        assert exc_info.value.line_number == 6
        assert "(line 6)" in str(exc_info.value)

    def test_blank_line_is_malformed(self):
        """Test that an empty line in the middle of input is rejected."""
        with pytest.raises(MalformedLineError) as exc_info:
            parse_mod_graph(io.StringIO("A B\n\nB C\n"))

        assert exc_info.value.line_number == 2

    def test_leading_space_is_rejected(self):
        """Test that positional splitting makes a leading space fatal."""
        with pytest.raises(InvalidIdentifierError):
            parse_mod_graph(io.StringIO(" A B\n"))

    def test_builder_reusable_after_failure(self):
        """Test that a failed build does not leak into the next one."""
        builder = GraphBuilder()
        with pytest.raises(MalformedLineError):
            builder.build(io.StringIO("A B\nAB\n"))

        graph = builder.build(io.StringIO("X Y\n"))

        assert set(graph.nodes) == {"X", "Y"}
        assert graph.edges == [Edge("X", "Y")]

    def test_returned_graph_not_reused(self):
        """Test that a later build leaves an earlier graph untouched."""
        builder = GraphBuilder()
        first = builder.build(io.StringIO("A B\n"))

        builder.build(io.StringIO("C D\nA C\n"))

        assert set(first.nodes) == {"A", "B"}
        assert first.nodes["A"].child_ids == {"B"}
        assert first.edges == [Edge("A", "B")]


class TestReadErrors:
    """Test failures of the underlying stream."""

    def test_os_error_while_reading(self):
        """Test that an OSError from the stream becomes a ReadError."""

        def failing_lines():
            yield "A B\n"
            raise OSError("device not ready")

        with pytest.raises(ReadError, match="failed to scan the content") as exc_info:
            parse_mod_graph(failing_lines())

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_decode_error_while_reading(self):
        """Test that undecodable input becomes a ReadError."""
        stream = io.TextIOWrapper(io.BytesIO(b"A B\n\xff\xfe C\n"), encoding="utf-8")

        with pytest.raises(ReadError) as exc_info:
            parse_mod_graph(stream)

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_stream_not_closed(self):
        """Test that the builder leaves the stream open."""
        stream = io.StringIO("A B\n")

        parse_mod_graph(stream)

        assert not stream.closed
