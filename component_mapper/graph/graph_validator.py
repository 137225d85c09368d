#!/usr/bin/env python3
"""
Graph Validator for Component Mapper

Validates component graph structure, referential integrity and
architectural quality, collecting every finding into one report.
"""

import logging
from collections.abc import Sequence
from typing import Any, Dict, List, Optional, Set, Tuple

from .metrics_calculator import calculate_metrics, empty_metrics
from .models import LINK_TYPES, NODE_TYPES, ComponentGraph, get_field
from .relationship_analyzer import RelationshipAnalyzer, RelationshipReport
from .validation_result import (
    IssueContext,
    ValidationCode,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)

logger = logging.getLogger(__name__)


def _as_sequence(value: Any) -> Optional[List[Any]]:
    """List view of a collection, or None when it is not a proper sequence."""
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return list(value)
    return None


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


class GraphValidator:
    """Validates component graphs.

    Holds only configuration; every call to :meth:`validate` recomputes the
    full report from scratch.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize graph validator with configuration."""
        self.config = config or {}
        validation = self.config.get('validation', {})

        # Validation thresholds
        self.max_node_name_length = validation.get('max_node_name_length', 100)
        self.max_nodes = validation.get('max_nodes', 1000)
        self.max_links = validation.get('max_links', 5000)
        self.complexity_threshold = validation.get('complexity_threshold', 100)
        self.max_orphans_listed = validation.get('max_orphans_listed', 5)
        self.max_cycles_listed = validation.get('max_cycles_listed', 3)
        self.max_hotspots_listed = validation.get('max_hotspots_listed', 3)

        self.relationship_analyzer = RelationshipAnalyzer(self.config)

    def validate(self, graph: Any) -> ValidationResult:
        """
        Perform comprehensive graph validation.

        Never raises: an unexpected internal fault yields a single
        VALIDATION_FAILED error with zeroed metrics.
        """
        logger.info("Starting comprehensive graph validation")

        try:
            result = self._run_checks(graph)
        except Exception as e:
            logger.error(f"Internal validation error: {e}", exc_info=True)
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    code=ValidationCode.VALIDATION_FAILED,
                    message='Internal validation error occurred'
                )],
                metrics=empty_metrics()
            )

        logger.info(f"Validation complete: {'PASSED' if result.is_valid else 'FAILED'} "
                    f"({len(result.errors)} errors, {len(result.warnings)} warnings)")
        return result

    def _run_checks(self, graph: Any) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        # Run all validation checks
        nodes, links = self._validate_basic_structure(graph, result)
        known_ids = self._validate_nodes(nodes, result)
        self._validate_links(links, known_ids, result)
        report = self._validate_relationships(nodes, links, result)
        self._validate_performance(nodes, links, report, result)

        # Determine overall validity
        result.is_valid = len(result.errors) == 0
        return result

    def _validate_basic_structure(self, graph: Any,
                                  result: ValidationResult) -> Tuple[List[Any], List[Any]]:
        """Validate basic graph structure; malformed collections read as empty."""
        if graph is None:
            result.errors.append(ValidationError(
                code=ValidationCode.MISSING_DATA,
                message='No component data provided'
            ))
            return [], []

        if isinstance(graph, ComponentGraph):
            # Only an ingested graph keys its nodes by id
            nodes = graph.node_list()
        else:
            nodes = _as_sequence(get_field(graph, 'nodes'))
        links = _as_sequence(get_field(graph, 'links'))

        if nodes is None:
            result.errors.append(ValidationError(
                code=ValidationCode.INVALID_NODES,
                message='Nodes must be an array'
            ))

        if links is None:
            result.errors.append(ValidationError(
                code=ValidationCode.INVALID_LINKS,
                message='Links must be an array'
            ))

        if nodes is not None and not nodes:
            result.errors.append(ValidationError(
                code=ValidationCode.NO_NODES,
                message='No components found in the data'
            ))

        return nodes or [], links or []

    def _validate_nodes(self, nodes: List[Any], result: ValidationResult) -> Set[str]:
        """Validate each node in order; returns the set of known node ids."""
        seen_ids: Set[str] = set()
        seen_names: Set[str] = set()

        for index, node in enumerate(nodes):
            self._validate_node(node, index, seen_ids, seen_names, result)

        # Check for performance limits
        if len(nodes) > self.max_nodes:
            result.warnings.append(ValidationWarning(
                code=ValidationCode.TOO_MANY_NODES,
                message=f"Large number of nodes ({len(nodes)}) may impact performance",
                suggestion='Consider filtering or splitting the data'
            ))

        return seen_ids

    def _validate_node(self, node: Any, index: int, seen_ids: Set[str],
                       seen_names: Set[str], result: ValidationResult):
        """Validate individual node structure."""
        node_id = get_field(node, 'id')
        name = get_field(node, 'name')
        node_type = get_field(node, 'type')
        context = IssueContext(node_id=node_id if _non_empty_str(node_id) else f"node_{index}")

        # Required fields
        if not _non_empty_str(node_id) or not node_id.strip():
            result.errors.append(ValidationError(
                code=ValidationCode.MISSING_NODE_ID,
                message=f"Node at index {index} is missing a valid ID",
                context=context
            ))

        if not _non_empty_str(name) or not name.strip():
            result.errors.append(ValidationError(
                code=ValidationCode.MISSING_NODE_NAME,
                message=f"Node '{node_id}' is missing a valid name",
                context=context
            ))

        if not _non_empty_str(node_type):
            result.errors.append(ValidationError(
                code=ValidationCode.MISSING_NODE_TYPE,
                message=f"Node '{node_id}' is missing a valid type",
                context=context
            ))

        # Duplicate checks
        if _non_empty_str(node_id):
            if node_id in seen_ids:
                result.errors.append(ValidationError(
                    code=ValidationCode.DUPLICATE_NODE_ID,
                    message=f"Duplicate node ID: '{node_id}'",
                    context=context
                ))
            else:
                seen_ids.add(node_id)

        if _non_empty_str(name):
            name_key = name.strip().lower()
            if name_key in seen_names:
                result.warnings.append(ValidationWarning(
                    code=ValidationCode.DUPLICATE_NODE_NAME,
                    message=f"Duplicate node name: '{name}' (node: {node_id})",
                    suggestion='Consider using unique names for better clarity',
                    context=context
                ))
            else:
                seen_names.add(name_key)

            # Length validation
            if len(name) > self.max_node_name_length:
                result.warnings.append(ValidationWarning(
                    code=ValidationCode.LONG_NODE_NAME,
                    message=f"Node '{node_id}' has a very long name ({len(name)} characters)",
                    suggestion='Consider shortening for better visualization',
                    context=context
                ))

        # Type validation
        if node_type and node_type not in NODE_TYPES:
            result.warnings.append(ValidationWarning(
                code=ValidationCode.UNKNOWN_NODE_TYPE,
                message=f"Node '{node_id}' has unknown type: '{node_type}'",
                suggestion=f"Consider using one of: {', '.join(NODE_TYPES)}",
                context=context
            ))

    def _validate_links(self, links: List[Any], known_ids: Set[str], result: ValidationResult):
        """Validate each link in order against the known node ids."""
        seen_edges: Set[Tuple[str, str]] = set()

        for index, link in enumerate(links):
            self._validate_link(link, index, known_ids, seen_edges, result)

        # Performance check
        if len(links) > self.max_links:
            result.warnings.append(ValidationWarning(
                code=ValidationCode.TOO_MANY_LINKS,
                message=f"Large number of links ({len(links)}) may impact performance",
                suggestion='Consider simplifying the component relationships'
            ))

    def _validate_link(self, link: Any, index: int, known_ids: Set[str],
                       seen_edges: Set[Tuple[str, str]], result: ValidationResult):
        """Validate individual link structure and references."""
        source = get_field(link, 'source')
        target = get_field(link, 'target')
        link_type = get_field(link, 'type')

        if not _non_empty_str(source):
            result.errors.append(ValidationError(
                code=ValidationCode.MISSING_LINK_SOURCE,
                message=f"Link at index {index} is missing a valid source",
                context=IssueContext(link_index=index, field='source')
            ))

        if not _non_empty_str(target):
            result.errors.append(ValidationError(
                code=ValidationCode.MISSING_LINK_TARGET,
                message=f"Link at index {index} is missing a valid target",
                context=IssueContext(link_index=index, field='target')
            ))

        # Check if nodes exist
        if _non_empty_str(source) and source not in known_ids:
            result.errors.append(ValidationError(
                code=ValidationCode.INVALID_LINK_SOURCE,
                message=f"Link references non-existent source node: '{source}'",
                context=IssueContext(link_index=index, node_id=source, field='source')
            ))

        if _non_empty_str(target) and target not in known_ids:
            result.errors.append(ValidationError(
                code=ValidationCode.INVALID_LINK_TARGET,
                message=f"Link references non-existent target node: '{target}'",
                context=IssueContext(link_index=index, node_id=target, field='target')
            ))

        if _non_empty_str(source) and _non_empty_str(target):
            context = IssueContext(link_index=index)

            # Self-reference check
            if source == target:
                result.warnings.append(ValidationWarning(
                    code=ValidationCode.SELF_REFERENCE,
                    message=f"Node '{source}' has a link to itself",
                    suggestion='Self-references may create visual clutter',
                    context=context
                ))

            # Duplicate and bidirectional link checks
            edge = (source, target)
            if edge in seen_edges:
                result.warnings.append(ValidationWarning(
                    code=ValidationCode.DUPLICATE_LINK,
                    message=f"Duplicate link from '{source}' to '{target}'",
                    suggestion='Remove duplicate connections',
                    context=context
                ))
            else:
                seen_edges.add(edge)
                if (target, source) in seen_edges and source != target:
                    result.warnings.append(ValidationWarning(
                        code=ValidationCode.BIDIRECTIONAL_LINK,
                        message=f"Bidirectional link between '{source}' and '{target}'",
                        suggestion='Consider if both directions are necessary',
                        context=context
                    ))

        # Type validation
        if link_type and link_type not in LINK_TYPES:
            result.warnings.append(ValidationWarning(
                code=ValidationCode.UNKNOWN_LINK_TYPE,
                message=f"Link has unknown type: '{link_type}'",
                suggestion=f"Consider using one of: {', '.join(LINK_TYPES)}",
                context=IssueContext(link_index=index)
            ))

    def _validate_relationships(self, nodes: List[Any], links: List[Any],
                                result: ValidationResult) -> RelationshipReport:
        """Report orphaned nodes and circular dependencies."""
        report = self.relationship_analyzer.analyze(nodes, links)

        if report.orphans:
            result.warnings.append(ValidationWarning(
                code=ValidationCode.ORPHANED_NODES,
                message=f"Found {len(report.orphans)} isolated components with no connections",
                suggestion='Verify these components should be included',
                context=IssueContext(affected_nodes=report.orphans[:self.max_orphans_listed])
            ))

        if report.cycles:
            listed = report.cycles[:self.max_cycles_listed]
            affected: List[str] = []
            for cycle in listed:
                affected.extend(node_id for node_id in cycle if node_id not in affected)
            result.warnings.append(ValidationWarning(
                code=ValidationCode.CIRCULAR_DEPENDENCIES,
                message=f"Found {len(report.cycles)} potential circular dependencies",
                suggestion='Review component relationships for cycles',
                context=IssueContext(affected_nodes=affected, cycles=listed)
            ))

        return report

    def _validate_performance(self, nodes: List[Any], links: List[Any],
                              report: RelationshipReport, result: ValidationResult):
        """Compute metrics and flag complexity and connection hotspots."""
        metrics = calculate_metrics(nodes, links, cycles=report.cycles,
                                    max_cycles=self.relationship_analyzer.max_cycles)
        result.metrics = metrics

        if metrics.complexity_score > self.complexity_threshold:
            result.warnings.append(ValidationWarning(
                code=ValidationCode.HIGH_COMPLEXITY,
                message=f"High system complexity score: {metrics.complexity_score}",
                suggestion='Consider breaking down into smaller subsystems'
            ))

        # Check for highly connected nodes (potential bottlenecks)
        hotspots = report.hotspots
        if hotspots:
            result.warnings.append(ValidationWarning(
                code=ValidationCode.HIGHLY_CONNECTED_NODES,
                message=f"Found {len(hotspots)} highly connected components",
                suggestion='Review if these components have too many responsibilities',
                context=IssueContext(
                    affected_nodes=[node_id for node_id, _ in hotspots[:self.max_hotspots_listed]]
                )
            ))


def validate_graph(graph: Any, config: Optional[Dict[str, Any]] = None) -> ValidationResult:
    """Validate ``graph`` with a validator built from ``config``."""
    return GraphValidator(config).validate(graph)
