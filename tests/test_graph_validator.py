"""Tests for graph validation."""

import pytest

from conftest import link, make_row, node

from component_mapper.graph import (
    ComponentGraph,
    GraphValidator,
    IssueContext,
    ValidationCode,
    ValidationResult,
    ingest_rows,
    validate_graph,
)


def codes_of(findings):
    return [finding.code for finding in findings]


class TestValidGraphs:
    """Graphs that pass validation."""

    def test_checkout_example_is_valid(self, checkout_row):
        result = validate_graph(ingest_rows([checkout_row]))

        assert result.is_valid is True
        assert result.errors == []
        assert result.metrics.total_nodes == 3
        assert result.metrics.total_links == 2
        assert result.metrics.orphaned_nodes == 0

    def test_decoded_json_graph(self, valid_graph):
        result = validate_graph(valid_graph)
        assert result.is_valid
        assert result.warnings == []
        assert result.metrics.nodes_by_type == {'interface': 2, 'service': 1}

    def test_dataclass_parts(self, dataclass_graph_parts):
        nodes, links = dataclass_graph_parts
        result = validate_graph({'nodes': nodes, 'links': links})
        assert result.is_valid
        assert result.metrics.total_links == 1

    def test_validator_is_reusable(self, valid_graph):
        validator = GraphValidator()
        first = validator.validate(valid_graph)
        second = validator.validate(valid_graph)
        assert first.to_dict() == second.to_dict()


class TestStructure:
    """Top-level shape checks."""

    def test_no_nodes(self):
        result = validate_graph({'nodes': [], 'links': []})
        assert result.is_valid is False
        assert codes_of(result.errors) == [ValidationCode.NO_NODES]

    def test_empty_component_graph(self):
        result = validate_graph(ComponentGraph())
        assert codes_of(result.errors) == [ValidationCode.NO_NODES]

    def test_missing_graph(self):
        result = validate_graph(None)
        assert result.is_valid is False
        assert codes_of(result.errors) == [ValidationCode.MISSING_DATA]
        assert result.metrics.total_nodes == 0

    def test_non_sequence_collections(self):
        result = validate_graph({'nodes': 'abc', 'links': 42})
        assert codes_of(result.errors) == [ValidationCode.INVALID_NODES, ValidationCode.INVALID_LINKS]

    def test_missing_links_key(self):
        result = validate_graph({'nodes': [node('a')]})
        assert codes_of(result.errors) == [ValidationCode.INVALID_LINKS]

    def test_node_object_is_not_an_array(self):
        """Decoded JSON keyed by id is rejected; only ingested graphs key nodes by id."""
        result = validate_graph({'nodes': {'a': node('a')}, 'links': []})
        assert result.is_valid is False
        assert codes_of(result.errors) == [ValidationCode.INVALID_NODES]
        assert result.metrics.total_nodes == 0

    def test_ingested_graph_nodes_are_read_by_value(self, checkout_row):
        graph = ingest_rows([checkout_row])
        assert validate_graph(graph).metrics.total_nodes == len(graph.nodes) == 3


class TestNodeChecks:
    """Per-node errors and warnings."""

    def test_missing_fields(self):
        result = validate_graph({'nodes': [{'id': '', 'name': '  ', 'type': None}], 'links': []})
        assert codes_of(result.errors) == [
            ValidationCode.MISSING_NODE_ID,
            ValidationCode.MISSING_NODE_NAME,
            ValidationCode.MISSING_NODE_TYPE,
        ]
        assert result.errors[0].context.node_id == 'node_0'

    def test_whitespace_id_is_missing(self):
        result = validate_graph({'nodes': [{'id': '   ', 'name': 'A', 'type': 'service'}], 'links': []})
        assert ValidationCode.MISSING_NODE_ID in codes_of(result.errors)

    def test_duplicate_id_is_error(self):
        result = validate_graph({'nodes': [node('a', 'First'), node('a', 'Second')], 'links': [link('a', 'a')]})
        assert codes_of(result.errors) == [ValidationCode.DUPLICATE_NODE_ID]
        assert result.errors[0].context.node_id == 'a'

    def test_duplicate_name_is_case_insensitive_warning(self):
        graph = {'nodes': [node('a', 'Cart'), node('b', ' cart ')], 'links': [link('a', 'b')]}
        result = validate_graph(graph)
        assert result.is_valid
        assert codes_of(result.warnings) == [ValidationCode.DUPLICATE_NODE_NAME]

    def test_long_name(self):
        graph = {'nodes': [node('a', 'x' * 101), node('b', 'y' * 100)], 'links': [link('a', 'b')]}
        result = validate_graph(graph)
        assert codes_of(result.warnings) == [ValidationCode.LONG_NODE_NAME]
        assert result.warnings[0].context.node_id == 'a'

    def test_unknown_node_type(self):
        graph = {'nodes': [node('a', node_type='widget'), node('b')], 'links': [link('a', 'b')]}
        result = validate_graph(graph)
        assert result.is_valid
        assert codes_of(result.warnings) == [ValidationCode.UNKNOWN_NODE_TYPE]

    def test_too_many_nodes_from_solution_rows(self):
        rows = [make_row(f'Service {i}') for i in range(1001)]
        result = validate_graph(ingest_rows(rows))

        assert result.is_valid is True
        assert ValidationCode.TOO_MANY_NODES in codes_of(result.warnings)

    def test_node_limit_from_config(self):
        validator = GraphValidator({'validation': {'max_nodes': 2}})
        graph = {'nodes': [node('a'), node('b'), node('c')], 'links': [link('a', 'b'), link('b', 'c')]}
        assert ValidationCode.TOO_MANY_NODES in validator.validate(graph).codes()


class TestLinkChecks:
    """Per-link errors and warnings."""

    def test_unknown_target(self):
        graph = {'nodes': [node('a'), node('b')], 'links': [link('a', 'b'), link('a', 'ghost')]}
        result = validate_graph(graph)

        assert result.is_valid is False
        assert codes_of(result.errors) == [ValidationCode.INVALID_LINK_TARGET]
        assert result.errors[0].context.link_index == 1
        assert result.errors[0].context.node_id == 'ghost'

    def test_unknown_source(self):
        graph = {'nodes': [node('a')], 'links': [link('ghost', 'a')]}
        assert codes_of(validate_graph(graph).errors) == [ValidationCode.INVALID_LINK_SOURCE]

    def test_missing_endpoints(self):
        graph = {'nodes': [node('a')], 'links': [{'source': '', 'target': 7, 'type': 'dependency'}]}
        result = validate_graph(graph)
        assert codes_of(result.errors) == [ValidationCode.MISSING_LINK_SOURCE, ValidationCode.MISSING_LINK_TARGET]
        assert result.errors[1].context.field == 'target'

    def test_self_loop_is_single_warning(self):
        graph = {'nodes': [node('a')], 'links': [link('a', 'a')]}
        result = validate_graph(graph)

        assert result.is_valid is True
        assert result.errors == []
        assert codes_of(result.warnings).count(ValidationCode.SELF_REFERENCE) == 1
        assert ValidationCode.BIDIRECTIONAL_LINK not in codes_of(result.warnings)

    def test_bidirectional_pair(self):
        graph = {'nodes': [node('a'), node('b')], 'links': [link('a', 'b'), link('b', 'a')]}
        result = validate_graph(graph)

        bidirectional = [w for w in result.warnings if w.code == ValidationCode.BIDIRECTIONAL_LINK]
        assert len(bidirectional) == 1
        assert bidirectional[0].context.link_index == 1

    def test_duplicate_link_is_not_bidirectional(self):
        graph = {
            'nodes': [node('a'), node('b')],
            'links': [link('a', 'b'), link('b', 'a'), link('b', 'a')],
        }
        warnings = codes_of(validate_graph(graph).warnings)
        assert warnings.count(ValidationCode.DUPLICATE_LINK) == 1
        assert warnings.count(ValidationCode.BIDIRECTIONAL_LINK) == 1

    def test_unknown_link_type(self):
        graph = {'nodes': [node('a'), node('b')], 'links': [link('a', 'b', 'calls')]}
        result = validate_graph(graph)
        assert result.is_valid
        assert codes_of(result.warnings) == [ValidationCode.UNKNOWN_LINK_TYPE]

    def test_link_limit_from_config(self):
        validator = GraphValidator({'validation': {'max_links': 1}})
        graph = {'nodes': [node('a'), node('b'), node('c')], 'links': [link('a', 'b'), link('b', 'c')]}
        assert ValidationCode.TOO_MANY_LINKS in validator.validate(graph).codes()


class TestRelationshipFindings:
    """Orphans, cycles, complexity and hotspots."""

    def test_orphans_listed_up_to_five(self):
        nodes = [node('hub')] + [node(f'n{i}', f'Node {i}') for i in range(7)] + [node('leaf')]
        result = validate_graph({'nodes': nodes, 'links': [link('hub', 'leaf')]})

        orphans = [w for w in result.warnings if w.code == ValidationCode.ORPHANED_NODES]
        assert len(orphans) == 1
        assert orphans[0].affected_nodes == ['n0', 'n1', 'n2', 'n3', 'n4']
        assert orphans[0].message == 'Found 7 isolated components with no connections'
        assert result.metrics.orphaned_nodes == 7

    def test_cycles_listed_up_to_three(self):
        ids = ['a', 'b', 'c', 'd', 'e']
        result = validate_graph({'nodes': [node(i) for i in ids], 'links': [link(i, i) for i in ids]})

        cycle_warning = [w for w in result.warnings if w.code == ValidationCode.CIRCULAR_DEPENDENCIES][0]
        assert cycle_warning.message == 'Found 5 potential circular dependencies'
        assert cycle_warning.context.cycles == [['a'], ['b'], ['c']]
        assert cycle_warning.affected_nodes == ['a', 'b', 'c']
        assert result.metrics.circular_dependencies == 5

    def test_high_complexity(self):
        nodes = [node(f'n{i}', f'Node {i}') for i in range(101)]
        links = [link(f'n{i}', f'n{i + 1}') for i in range(100)]
        result = validate_graph({'nodes': nodes, 'links': links})
        assert ValidationCode.HIGH_COMPLEXITY in codes_of(result.warnings)
        assert result.is_valid

    def test_highly_connected_nodes(self):
        nodes = [node('hub')] + [node(f'n{i}', f'Node {i}') for i in range(11)]
        links = [link('hub', f'n{i}') for i in range(11)]
        result = validate_graph({'nodes': nodes, 'links': links})

        hotspots = [w for w in result.warnings if w.code == ValidationCode.HIGHLY_CONNECTED_NODES]
        assert len(hotspots) == 1
        assert hotspots[0].affected_nodes == ['hub']

    def test_ten_links_is_not_a_hotspot(self):
        nodes = [node('hub')] + [node(f'n{i}', f'Node {i}') for i in range(10)]
        links = [link('hub', f'n{i}') for i in range(10)]
        assert ValidationCode.HIGHLY_CONNECTED_NODES not in validate_graph({'nodes': nodes, 'links': links}).codes()


class TestTotality:
    """validate() returns a report for anything it is given."""

    @pytest.mark.parametrize("graph", [
        None,
        42,
        'not a graph',
        [],
        object(),
        {'nodes': None, 'links': None},
        {'nodes': [None, 1, 'x', {'id': ['list'], 'name': 3, 'type': {}}], 'links': [None, 5, 'ab']},
        {'nodes': [node('a')], 'links': [{'source': ['a'], 'target': {'x': 1}, 'type': ['t']}]},
        {'nodes': [{'id': 'a', 'name': 'A', 'type': 'service', 'extra': object()}], 'links': [link('a', 'a')] * 3},
    ])
    def test_never_raises(self, graph):
        result = validate_graph(graph)
        assert isinstance(result, ValidationResult)
        assert result.is_valid == (len(result.errors) == 0)
        assert isinstance(result.to_dict(), dict)

    def test_internal_fault_becomes_validation_failed(self, monkeypatch, valid_graph):
        def explode(*args, **kwargs):
            raise RuntimeError('boom')

        monkeypatch.setattr('component_mapper.graph.graph_validator.calculate_metrics', explode)
        result = validate_graph(valid_graph)

        assert result.is_valid is False
        assert codes_of(result.errors) == [ValidationCode.VALIDATION_FAILED]
        assert result.errors[0].message == 'Internal validation error occurred'
        assert result.warnings == []
        assert result.metrics.total_nodes == 0


class TestReportShape:
    """Serialised report."""

    def test_issue_context_defaults(self):
        first = IssueContext()
        second = IssueContext(field='target', link_index=2)
        first.affected_nodes.append('a')

        assert second.affected_nodes == []
        assert second.cycles == []
        assert first.to_dict() == {'affected_nodes': ['a']}
        assert second.to_dict() == {'link_index': 2, 'field': 'target'}

    def test_to_dict(self):
        graph = {'nodes': [node('a'), node('b')], 'links': [link('a', 'ghost')]}
        data = validate_graph(graph).to_dict()

        assert data['is_valid'] is False
        assert data['errors'] == [{
            'code': 'INVALID_LINK_TARGET',
            'message': "Link references non-existent target node: 'ghost'",
            'severity': 'error',
            'context': {'node_id': 'ghost', 'link_index': 0, 'field': 'target'},
        }]
        orphan = [w for w in data['warnings'] if w['code'] == 'ORPHANED_NODES'][0]
        assert orphan['severity'] == 'warning'
        assert orphan['suggestion'] == 'Verify these components should be included'
        assert orphan['context'] == {'affected_nodes': ['b']}
        assert data['metrics']['total_links'] == 1
