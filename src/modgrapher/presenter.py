"""Rendering of built graphs for humans and downstream tools."""

import json

from modgrapher.graph.models import Graph

NO_ENTRIES = "(none)"


def _format_ids(ids: set[str]) -> str:
    return ", ".join(sorted(ids)) if ids else NO_ENTRIES


def render_text(graph: Graph) -> str:
    """Render the graph as a plain text listing.

    Nodes are sorted by identifier; edges keep their input order.
    """
    lines = [f"Graph: {graph.node_count} nodes, {graph.edge_count} edges"]

    if graph.nodes:
        lines.append("\nNodes:")
        for node_id in sorted(graph.nodes):
            node = graph.nodes[node_id]
            lines.append(f"  {node.label}")
            lines.append(f"    parents: {_format_ids(node.parent_ids)}")
            lines.append(f"    children: {_format_ids(node.child_ids)}")

    if graph.edges:
        lines.append("\nEdges:")
        lines.extend(f"  {edge.from_id} -> {edge.to_id}" for edge in graph.edges)

    return "\n".join(lines)


def render_json(graph: Graph) -> str:
    """Render the graph as indented JSON."""
    return json.dumps(graph.to_dict(), indent=2)


def render_graph(graph: Graph, output_format: str = "text") -> str:
    """Render a graph in the requested format.

    Args:
        graph: The Graph to render
        output_format: Output format ('text' or 'json')

    Returns:
        String representation of the graph in the requested format

    Raises:
        ValueError: If an unsupported format is requested
    """
    output_format = output_format.lower().strip()

    if output_format == "text":
        return render_text(graph)
    if output_format == "json":
        return render_json(graph)
    error_msg = f"Unsupported format: {output_format}. Use 'text' or 'json'."
    raise ValueError(error_msg)
