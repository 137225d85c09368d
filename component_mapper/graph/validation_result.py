#!/usr/bin/env python3
"""
Validation Result Types for Component Mapper

Report shapes returned by the graph validator. Every finding carries a
stable ``code`` for programmatic branching and a free-text ``message``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Severity(str, Enum):
    """Severity of a validation finding."""
    ERROR = "error"
    WARNING = "warning"


class ValidationCode:
    """Stable codes for validation findings."""
    # Structure
    MISSING_DATA = 'MISSING_DATA'
    INVALID_NODES = 'INVALID_NODES'
    INVALID_LINKS = 'INVALID_LINKS'
    NO_NODES = 'NO_NODES'
    # Nodes
    MISSING_NODE_ID = 'MISSING_NODE_ID'
    MISSING_NODE_NAME = 'MISSING_NODE_NAME'
    MISSING_NODE_TYPE = 'MISSING_NODE_TYPE'
    DUPLICATE_NODE_ID = 'DUPLICATE_NODE_ID'
    DUPLICATE_NODE_NAME = 'DUPLICATE_NODE_NAME'
    LONG_NODE_NAME = 'LONG_NODE_NAME'
    UNKNOWN_NODE_TYPE = 'UNKNOWN_NODE_TYPE'
    TOO_MANY_NODES = 'TOO_MANY_NODES'
    # Links
    MISSING_LINK_SOURCE = 'MISSING_LINK_SOURCE'
    MISSING_LINK_TARGET = 'MISSING_LINK_TARGET'
    INVALID_LINK_SOURCE = 'INVALID_LINK_SOURCE'
    INVALID_LINK_TARGET = 'INVALID_LINK_TARGET'
    SELF_REFERENCE = 'SELF_REFERENCE'
    DUPLICATE_LINK = 'DUPLICATE_LINK'
    BIDIRECTIONAL_LINK = 'BIDIRECTIONAL_LINK'
    UNKNOWN_LINK_TYPE = 'UNKNOWN_LINK_TYPE'
    TOO_MANY_LINKS = 'TOO_MANY_LINKS'
    # Relationships
    ORPHANED_NODES = 'ORPHANED_NODES'
    CIRCULAR_DEPENDENCIES = 'CIRCULAR_DEPENDENCIES'
    # Performance
    HIGH_COMPLEXITY = 'HIGH_COMPLEXITY'
    HIGHLY_CONNECTED_NODES = 'HIGHLY_CONNECTED_NODES'
    # Internal fault
    VALIDATION_FAILED = 'VALIDATION_FAILED'


@dataclass
class IssueContext:
    """Where a finding applies."""
    node_id: Optional[str] = None
    link_index: Optional[int] = None
    affected_nodes: List[str] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)
    # Declared last: the attribute shadows dataclasses.field in the class body
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Only the populated keys."""
        data: Dict[str, Any] = {}
        if self.node_id is not None:
            data['node_id'] = self.node_id
        if self.link_index is not None:
            data['link_index'] = self.link_index
        if self.field is not None:
            data['field'] = self.field
        if self.affected_nodes:
            data['affected_nodes'] = list(self.affected_nodes)
        if self.cycles:
            data['cycles'] = [list(cycle) for cycle in self.cycles]
        return data


@dataclass
class ValidationError:
    """A finding that makes the graph invalid."""
    code: str
    message: str
    severity: Severity = Severity.ERROR
    context: Optional[IssueContext] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'code': self.code,
            'message': self.message,
            'severity': self.severity.value
        }
        if self.context is not None:
            data['context'] = self.context.to_dict()
        return data


@dataclass
class ValidationWarning:
    """A finding worth reviewing that does not affect validity."""
    code: str
    message: str
    suggestion: Optional[str] = None
    context: Optional[IssueContext] = None

    @property
    def affected_nodes(self) -> List[str]:
        return self.context.affected_nodes if self.context else []

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'code': self.code,
            'message': self.message,
            'severity': Severity.WARNING.value
        }
        if self.suggestion:
            data['suggestion'] = self.suggestion
        if self.context is not None:
            data['context'] = self.context.to_dict()
        return data


@dataclass
class ValidationMetrics:
    """Aggregate graph metrics."""
    total_nodes: int = 0
    total_links: int = 0
    orphaned_nodes: int = 0
    circular_dependencies: int = 0
    nodes_by_type: Dict[str, int] = field(default_factory=dict)
    links_by_type: Dict[str, int] = field(default_factory=dict)
    complexity_score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_nodes': self.total_nodes,
            'total_links': self.total_links,
            'orphaned_nodes': self.orphaned_nodes,
            'circular_dependencies': self.circular_dependencies,
            'nodes_by_type': dict(self.nodes_by_type),
            'links_by_type': dict(self.links_by_type),
            'complexity_score': self.complexity_score
        }


@dataclass
class ValidationResult:
    """Result of graph validation."""
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)
    metrics: ValidationMetrics = field(default_factory=ValidationMetrics)

    def codes(self) -> List[str]:
        """Error codes followed by warning codes, in report order."""
        return [e.code for e in self.errors] + [w.code for w in self.warnings]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'errors': [e.to_dict() for e in self.errors],
            'warnings': [w.to_dict() for w in self.warnings],
            'metrics': self.metrics.to_dict()
        }
