#!/usr/bin/env python3
"""
Graph Module for Component Mapper

This module provides the graph construction and validation engine:
- RowIngester: Builds a ComponentGraph from spreadsheet rows
- sanitize_id / CategoryColorAssigner: Id derivation and category colours
- GraphValidator: Structural, referential, relationship and performance checks
- RelationshipAnalyzer / detect_cycles: Orphans, cycles and hotspots
- calculate_metrics: Aggregate counts and complexity score
"""

from .models import ComponentNode, ComponentLink, ComponentGraph, GraphMetadata, NODE_TYPES, LINK_TYPES
from .id_sanitizer import sanitize_id
from .category_colors import CategoryColorAssigner
from .row_ingester import RowIngester, ingest_rows, REQUIRED_COLUMNS, OPTIONAL_COLUMNS
from .cycle_detector import build_adjacency, detect_cycles
from .relationship_analyzer import RelationshipAnalyzer, RelationshipReport
from .metrics_calculator import calculate_metrics, complexity_score, empty_metrics, graph_metrics
from .validation_result import (
    IssueContext,
    Severity,
    ValidationCode,
    ValidationError,
    ValidationMetrics,
    ValidationResult,
    ValidationWarning
)
from .graph_validator import GraphValidator, validate_graph

__all__ = [
    'ComponentNode',
    'ComponentLink',
    'ComponentGraph',
    'GraphMetadata',
    'NODE_TYPES',
    'LINK_TYPES',
    'sanitize_id',
    'CategoryColorAssigner',
    'RowIngester',
    'ingest_rows',
    'REQUIRED_COLUMNS',
    'OPTIONAL_COLUMNS',
    'build_adjacency',
    'detect_cycles',
    'RelationshipAnalyzer',
    'RelationshipReport',
    'calculate_metrics',
    'complexity_score',
    'empty_metrics',
    'graph_metrics',
    'IssueContext',
    'Severity',
    'ValidationCode',
    'ValidationError',
    'ValidationMetrics',
    'ValidationResult',
    'ValidationWarning',
    'GraphValidator',
    'validate_graph'
]
