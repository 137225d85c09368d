#!/usr/bin/env python3
"""
Metrics Calculator for Component Mapper

Aggregate counts and the derived complexity score of a component graph.
"""

import math
from typing import Any, Dict, List, Optional, Sequence

from .cycle_detector import DEFAULT_MAX_CYCLES
from .models import ComponentGraph, get_field
from .relationship_analyzer import find_cycles, find_orphans
from .validation_result import ValidationMetrics

LINK_WEIGHT = 10
CYCLE_WEIGHT = 5


def _type_key(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def count_by_type(items: Sequence[Any]) -> Dict[str, int]:
    """Frequency of each raw ``type`` value."""
    counts: Dict[str, int] = {}
    for item in items:
        key = _type_key(get_field(item, 'type'))
        counts[key] = counts.get(key, 0) + 1
    return counts


def complexity_score(node_count: int, link_count: int, cycle_count: int) -> int:
    """
    Nodes plus ten times the average links per node plus five per cycle.

    Rounded half up. For a fixed cycle count the score never drops when a
    link is added, nor when a node is added while n * (n + 1) >= 10 * links.
    """
    average_links = link_count / max(node_count, 1)
    raw = node_count + average_links * LINK_WEIGHT + cycle_count * CYCLE_WEIGHT
    return int(math.floor(raw + 0.5))


def calculate_metrics(nodes: Sequence[Any], links: Sequence[Any],
                      cycles: Optional[List[List[str]]] = None,
                      max_cycles: int = DEFAULT_MAX_CYCLES) -> ValidationMetrics:
    """Compute metrics for the given nodes and links.

    ``cycles`` may be passed when already detected; otherwise they are
    detected here.
    """
    if cycles is None:
        cycles = find_cycles(nodes, links, max_cycles)
    circular = min(len(cycles), max_cycles)

    return ValidationMetrics(
        total_nodes=len(nodes),
        total_links=len(links),
        orphaned_nodes=len(find_orphans(nodes, links)),
        circular_dependencies=circular,
        nodes_by_type=count_by_type(nodes),
        links_by_type=count_by_type(links),
        complexity_score=complexity_score(len(nodes), len(links), circular)
    )


def graph_metrics(graph: ComponentGraph) -> ValidationMetrics:
    """Metrics for an ingested graph."""
    return calculate_metrics(graph.node_list(), graph.links)


def empty_metrics() -> ValidationMetrics:
    """All-zero metrics used when validation itself fails."""
    return ValidationMetrics()
