#!/usr/bin/env python3
"""
Cycle Detector for Component Mapper

Depth-first search over link adjacency reporting circular dependencies.

The search marks a node fully explored the first time it finishes,
whichever path reached it, so cycles only reachable through a second path
into an already explored node are not reported. The result is the first
``max_cycles`` cycles found, in discovery order.
"""

from typing import Any, Dict, Iterable, List

from .models import get_field

DEFAULT_MAX_CYCLES = 10

_EXHAUSTED = object()


def build_adjacency(links: Iterable[Any]) -> Dict[str, List[str]]:
    """Map each link source to its targets in link order.

    Links without a usable string source and target are left out; those are
    reported by the link checks, not here.
    """
    adjacency: Dict[str, List[str]] = {}
    for link in links:
        source = get_field(link, 'source')
        target = get_field(link, 'target')
        if not isinstance(source, str) or not source:
            continue
        if not isinstance(target, str) or not target:
            continue
        adjacency.setdefault(source, []).append(target)
    return adjacency


def detect_cycles(node_ids: Iterable[str], links: Iterable[Any],
                  max_cycles: int = DEFAULT_MAX_CYCLES) -> List[List[str]]:
    """
    Find circular dependencies reachable from the given nodes.

    Each cycle is the ordered id sequence from the revisited node through
    the node that closes the loop, e.g. ``['a', 'b']`` for a -> b -> a and
    ``['a']`` for a self loop.

    Uses an explicit stack so deep chains cannot exhaust the call stack.
    """
    adjacency = build_adjacency(links)
    visited = set()
    cycles: List[List[str]] = []

    if max_cycles <= 0:
        return cycles

    for start in node_ids:
        if start in visited:
            continue

        visited.add(start)
        path = [start]
        on_stack = {start}
        pending = [iter(adjacency.get(start, ()))]

        while pending:
            neighbor = next(pending[-1], _EXHAUSTED)

            if neighbor is _EXHAUSTED:
                pending.pop()
                on_stack.discard(path.pop())
                continue

            if neighbor in on_stack:
                cycles.append(path[path.index(neighbor):])
                if len(cycles) >= max_cycles:
                    return cycles
                continue

            if neighbor in visited:
                continue

            visited.add(neighbor)
            on_stack.add(neighbor)
            path.append(neighbor)
            pending.append(iter(adjacency.get(neighbor, ())))

    return cycles
