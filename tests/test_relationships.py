"""Tests for cycle detection, relationship analysis and metrics."""

import pytest

from conftest import link, node

from component_mapper.graph import (
    RelationshipAnalyzer,
    build_adjacency,
    calculate_metrics,
    complexity_score,
    detect_cycles,
    empty_metrics,
    graph_metrics,
    ingest_rows,
)
from component_mapper.graph.relationship_analyzer import (
    connection_counts,
    find_hotspots,
    find_orphans,
)


class TestCycleDetector:
    """Iterative depth-first cycle search."""

    def test_two_node_cycle(self):
        assert detect_cycles(['a', 'b'], [link('a', 'b'), link('b', 'a')]) == [['a', 'b']]

    def test_self_loop(self):
        assert detect_cycles(['a'], [link('a', 'a')]) == [['a']]

    def test_cycle_starts_at_revisited_node(self):
        links = [link('a', 'b'), link('b', 'c'), link('c', 'd'), link('d', 'b')]
        assert detect_cycles(['a', 'b', 'c', 'd'], links) == [['b', 'c', 'd']]

    def test_acyclic_graph(self):
        links = [link('a', 'b'), link('a', 'c'), link('b', 'd'), link('c', 'd')]
        assert detect_cycles(['a', 'b', 'c', 'd'], links) == []

    def test_capped_at_max_cycles(self):
        ids = [f'n{i}' for i in range(15)]
        links = [link(i, i) for i in ids]
        cycles = detect_cycles(ids, links)
        assert len(cycles) == 10
        assert cycles[0] == ['n0']
        assert len(detect_cycles(ids, links, max_cycles=3)) == 3
        assert detect_cycles(ids, links, max_cycles=0) == []

    def test_long_chain_does_not_recurse(self):
        ids = [f'n{i}' for i in range(5000)]
        links = [link(ids[i], ids[(i + 1) % len(ids)]) for i in range(len(ids))]
        cycles = detect_cycles(ids, links)
        assert cycles == [ids]

    def test_cycle_reported_from_first_reached_node(self):
        # b is only reached through c, so the loop is reported starting at c
        links = [link('a', 'c'), link('c', 'b'), link('b', 'c')]
        assert detect_cycles(['a', 'b', 'c'], links) == [['c', 'b']]

    def test_adjacency_ignores_unusable_endpoints(self):
        links = [link('a', 'b'), link('', 'b'), link('a', None), {'source': 1, 'target': 'b'}, None]
        assert build_adjacency(links) == {'a': ['b']}


class TestRelationshipAnalyzer:
    """Orphans, cycles and hotspots."""

    def test_orphans_in_node_order(self):
        nodes = [node('a'), node('b'), node('c'), node('d')]
        assert find_orphans(nodes, [link('b', 'c')]) == ['a', 'd']

    def test_connection_counts(self):
        counts = connection_counts([link('a', 'b'), link('a', 'c'), link('c', 'a')])
        assert counts == {'a': 3, 'b': 1, 'c': 2}

    def test_hotspots_sorted_with_stable_ties(self):
        links = [link('hub', f'x{i}') for i in range(12)]
        links += [link('other', f'y{i}') for i in range(12)]
        links += [link('big', f'z{i}') for i in range(15)]
        assert find_hotspots(links) == [('big', 15), ('hub', 12), ('other', 12)]
        assert find_hotspots(links, limit=2) == [('big', 15), ('hub', 12)]
        assert find_hotspots(links, threshold=12) == [('big', 15)]

    def test_analyzer_reads_thresholds_from_config(self):
        analyzer = RelationshipAnalyzer({'validation': {'max_cycles': 1, 'hotspot_threshold': 1}})
        nodes = [node('a'), node('b'), node('c')]
        links = [link('a', 'a'), link('b', 'b'), link('a', 'c')]
        report = analyzer.analyze(nodes, links)
        assert report.cycles == [['a']]
        assert report.hotspots == [('a', 3), ('b', 2)]
        assert report.orphans == []


class TestMetrics:
    """Aggregate counts and the complexity score."""

    @pytest.mark.parametrize("nodes, links, cycles, expected", [
        (0, 0, 0, 0),
        (3, 2, 0, 10),
        (4, 1, 0, 7),
        (2, 1, 0, 7),
        (1, 1, 1, 16),
        (10, 0, 2, 20),
    ])
    def test_complexity_score(self, nodes, links, cycles, expected):
        assert complexity_score(nodes, links, cycles) == expected

    def test_complexity_never_drops_when_adding_links(self):
        for n in range(0, 30):
            for l in range(0, 60):
                assert complexity_score(n, l + 1, 2) >= complexity_score(n, l, 2)

    def test_complexity_never_drops_when_adding_nodes_to_sparse_graph(self):
        for l in range(0, 40):
            for n in range(1, 60):
                if n * (n + 1) >= 10 * l:
                    assert complexity_score(n + 1, l, 1) >= complexity_score(n, l, 1)

    def test_calculate_metrics(self):
        nodes = [node('a'), node('b', node_type='interface'), node('c', node_type='widget'), node('d')]
        links = [link('a', 'b'), link('b', 'a'), link('a', 'c', 'uses')]
        metrics = calculate_metrics(nodes, links)

        assert metrics.total_nodes == 4
        assert metrics.total_links == 3
        assert metrics.orphaned_nodes == 1
        assert metrics.circular_dependencies == 1
        assert metrics.nodes_by_type == {'service': 2, 'interface': 1, 'widget': 1}
        assert metrics.links_by_type == {'dependency': 2, 'uses': 1}
        assert metrics.complexity_score == complexity_score(4, 3, 1)

    def test_non_string_types_are_counted_as_text(self):
        metrics = calculate_metrics([{'id': 'a', 'type': None}, {'id': 'b', 'type': 3}], [])
        assert metrics.nodes_by_type == {'None': 1, '3': 1}

    def test_graph_metrics_on_ingested_graph(self, checkout_row):
        metrics = graph_metrics(ingest_rows([checkout_row]))
        assert (metrics.total_nodes, metrics.total_links, metrics.orphaned_nodes) == (3, 2, 0)
        assert metrics.complexity_score == 10

    def test_empty_metrics(self):
        assert empty_metrics().to_dict() == {
            'total_nodes': 0,
            'total_links': 0,
            'orphaned_nodes': 0,
            'circular_dependencies': 0,
            'nodes_by_type': {},
            'links_by_type': {},
            'complexity_score': 0,
        }
