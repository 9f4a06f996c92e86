"""Consistency checks for built module graphs.

This module verifies the structural invariants of a Graph: node keys match
their identifiers, parent/child adjacency is symmetric, and the adjacency sets
agree with the edge list.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from modgrapher.graph.models import Edge, Graph

logger = structlog.get_logger(__name__)


@dataclass
class ValidationReport:
    """Report containing consistency results for a module graph.

    Attributes:
        is_valid: Whether the graph passed all checks
        errors: List of error messages (broken invariants)
        warnings: List of warning messages (legal but notable)
        asymmetric_links: (node, neighbour) pairs missing their reverse entry
        dangling_refs: Identifiers referenced by edges or adjacency but not defined
        duplicate_edges: Edges that appear more than once in the input
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    asymmetric_links: set[tuple[str, str]] = field(default_factory=set)
    dangling_refs: set[str] = field(default_factory=set)
    duplicate_edges: list["Edge"] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message and mark validation as failed."""
        self.errors.append(message)
        self.is_valid = False
        logger.error("validation_error", message=message)

    def add_warning(self, message: str) -> None:
        """Add a warning message without failing validation."""
        self.warnings.append(message)
        logger.warning("validation_warning", message=message)

    def summary(self) -> str:
        """Generate a human-readable summary of the validation report."""
        lines = []
        lines.append(f"Validation Status: {'PASS' if self.is_valid else 'FAIL'}")
        lines.append(f"Errors: {len(self.errors)}")
        lines.append(f"Warnings: {len(self.warnings)}")
        lines.append(f"Asymmetric Links: {len(self.asymmetric_links)}")
        lines.append(f"Dangling References: {len(self.dangling_refs)}")
        lines.append(f"Duplicate Edges: {len(self.duplicate_edges)}")

        if self.errors:
            lines.append("\nErrors:")
            lines.extend(f"  - {error}" for error in self.errors)

        if self.warnings:
            lines.append("\nWarnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)

        if self.dangling_refs:
            lines.append(f"\nDangling References: {', '.join(sorted(self.dangling_refs))}")

        return "\n".join(lines)


class GraphValidator:
    """Validator for module graphs with detailed error reporting.

    Checks performed:
    - Node keys and labels match node identifiers
    - Bidirectional parent/child adjacency
    - Edge endpoints exist as nodes
    - Adjacency sets and edge list describe the same relations
    """

    def validate(self, graph: "Graph") -> ValidationReport:
        """Validate a module graph and generate a detailed report.

        Args:
            graph: The Graph to validate

        Returns:
            ValidationReport containing all validation results
        """
        logger.info(
            "starting_graph_validation",
            node_count=graph.node_count,
            edge_count=graph.edge_count,
        )

        report = ValidationReport()

        self._check_identities(graph, report)
        self._check_symmetry(graph, report)
        self._check_edges(graph, report)

        logger.info(
            "graph_validation_complete",
            is_valid=report.is_valid,
            error_count=len(report.errors),
            warning_count=len(report.warnings),
        )

        return report

    def _check_identities(self, graph: "Graph", report: ValidationReport) -> None:
        for node_id, node in graph.nodes.items():
            if node.id != node_id:
                report.add_error(f"Node keyed '{node_id}' has id '{node.id}'")
            if node.label != node.id:
                report.add_error(f"Node '{node.id}' has label '{node.label}'")

    def _check_symmetry(self, graph: "Graph", report: ValidationReport) -> None:
        """Check that every child link has a matching parent link and vice versa."""
        for node_id, node in graph.nodes.items():
            for child_id in node.child_ids:
                child = graph.nodes.get(child_id)
                if child is None:
                    self._record_dangling(report, child_id, f"child of '{node_id}'")
                elif node_id not in child.parent_ids:
                    report.asymmetric_links.add((node_id, child_id))
                    report.add_error(
                        f"'{child_id}' is a child of '{node_id}' but does not list it as parent",
                    )

            for parent_id in node.parent_ids:
                parent = graph.nodes.get(parent_id)
                if parent is None:
                    self._record_dangling(report, parent_id, f"parent of '{node_id}'")
                elif node_id not in parent.child_ids:
                    report.asymmetric_links.add((parent_id, node_id))
                    report.add_error(
                        f"'{parent_id}' is a parent of '{node_id}' but does not list it as child",
                    )

    def _check_edges(self, graph: "Graph", report: ValidationReport) -> None:
        """Check that edges and adjacency sets describe the same relations."""
        edge_counts = Counter((edge.from_id, edge.to_id) for edge in graph.edges)

        for (from_id, to_id), count in edge_counts.items():
            for endpoint in (from_id, to_id):
                if endpoint not in graph.nodes:
                    self._record_dangling(report, endpoint, f"endpoint of edge {from_id} -> {to_id}")

            parent = graph.nodes.get(from_id)
            if parent is not None and to_id not in parent.child_ids:
                report.add_error(f"Edge {from_id} -> {to_id} is missing from adjacency")

            if count > 1:
                duplicates = [
                    edge
                    for edge in graph.edges
                    if edge.from_id == from_id and edge.to_id == to_id
                ]
                report.duplicate_edges.extend(duplicates[1:])
                report.add_warning(f"Edge {from_id} -> {to_id} appears {count} times")

        for node_id, node in graph.nodes.items():
            for child_id in node.child_ids:
                if (node_id, child_id) not in edge_counts:
                    report.add_error(f"Adjacency {node_id} -> {child_id} has no matching edge")

    def _record_dangling(self, report: ValidationReport, ref: str, context: str) -> None:
        if ref in report.dangling_refs:
            return
        report.dangling_refs.add(ref)
        report.add_error(f"Undefined node '{ref}' referenced as {context}")
