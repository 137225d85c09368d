#!/usr/bin/env python3
"""
Relationship Analyzer for Component Mapper

Finds orphaned nodes, circular dependencies and highly connected nodes
(hotspots) in a component graph.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .cycle_detector import DEFAULT_MAX_CYCLES, detect_cycles
from .models import get_field

logger = logging.getLogger(__name__)

DEFAULT_HOTSPOT_THRESHOLD = 10


def _usable_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def node_ids(nodes: Sequence[Any]) -> List[str]:
    """String ids of the given nodes, in order."""
    ids = []
    for node in nodes:
        node_id = get_field(node, 'id')
        if _usable_id(node_id):
            ids.append(node_id)
    return ids


def connected_ids(links: Sequence[Any]) -> Set[str]:
    """Ids appearing as source or target of any link."""
    connected = set()
    for link in links:
        for end in ('source', 'target'):
            value = get_field(link, end)
            if _usable_id(value):
                connected.add(value)
    return connected


def find_orphans(nodes: Sequence[Any], links: Sequence[Any]) -> List[str]:
    """Ids of nodes incident to no link, in node order."""
    connected = connected_ids(links)
    return [node_id for node_id in node_ids(nodes) if node_id not in connected]


def find_cycles(nodes: Sequence[Any], links: Sequence[Any],
                max_cycles: int = DEFAULT_MAX_CYCLES) -> List[List[str]]:
    """Circular dependencies reachable from the graph's nodes."""
    return detect_cycles(node_ids(nodes), links, max_cycles)


def connection_counts(links: Sequence[Any]) -> Dict[str, int]:
    """Combined in/out link count per id, in first-seen order."""
    counts: Dict[str, int] = {}
    for link in links:
        for end in ('source', 'target'):
            value = get_field(link, end)
            if _usable_id(value):
                counts[value] = counts.get(value, 0) + 1
    return counts


def find_hotspots(links: Sequence[Any], threshold: int = DEFAULT_HOTSPOT_THRESHOLD,
                  limit: Optional[int] = None) -> List[Tuple[str, int]]:
    """Ids in more than ``threshold`` links, most connected first.

    Ties keep first-seen order.
    """
    counts = connection_counts(links)
    hot = [(node_id, count) for node_id, count in counts.items() if count > threshold]
    hot = sorted(hot, key=lambda item: item[1], reverse=True)
    return hot if limit is None else hot[:limit]


@dataclass
class RelationshipReport:
    """Findings of one relationship analysis pass."""
    orphans: List[str] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)
    hotspots: List[Tuple[str, int]] = field(default_factory=list)


class RelationshipAnalyzer:
    """Analyzes how nodes of a graph relate to each other."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize relationship analyzer with configuration."""
        self.config = config or {}
        validation = self.config.get('validation', {})
        self.max_cycles = validation.get('max_cycles', DEFAULT_MAX_CYCLES)
        self.hotspot_threshold = validation.get('hotspot_threshold', DEFAULT_HOTSPOT_THRESHOLD)

    def analyze(self, nodes: Sequence[Any], links: Sequence[Any]) -> RelationshipReport:
        """Run orphan, cycle and hotspot detection."""
        report = RelationshipReport(
            orphans=find_orphans(nodes, links),
            cycles=find_cycles(nodes, links, self.max_cycles),
            hotspots=find_hotspots(links, self.hotspot_threshold)
        )
        logger.debug(f"Relationship analysis: {len(report.orphans)} orphans, "
                     f"{len(report.cycles)} cycles, {len(report.hotspots)} hotspots")
        return report
