"""Shared fixtures for the component mapper test suite."""

import json
import logging

import pytest

from component_mapper.graph import ComponentLink, ComponentNode

HEADER = ['Solutions', 'Solution Input', 'High Level Input', 'Solution Output', 'High Level Output']


def make_row(solution='', solution_input='', high_level_input='',
             solution_output='', high_level_output=''):
    """Build one spreadsheet row with every known column."""
    return {
        'Solutions': solution,
        'Solution Input': solution_input,
        'High Level Input': high_level_input,
        'Solution Output': solution_output,
        'High Level Output': high_level_output,
    }


def node(node_id, name=None, node_type='service'):
    """Graph-JSON node dict."""
    return {'id': node_id, 'name': name if name is not None else node_id.title(), 'type': node_type}


def link(source, target, link_type='dependency'):
    """Graph-JSON link dict."""
    return {'source': source, 'target': target, 'type': link_type}


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo logging.basicConfig(force=True) calls made by the CLI."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def checkout_row():
    """The canonical Checkout/Cart/Receipt row."""
    return make_row('Checkout', 'Cart', '', 'Receipt', '')


@pytest.fixture
def sample_rows():
    """Three rows sharing interfaces between solutions."""
    return [
        make_row('Checkout', 'Cart', 'Commerce', 'Receipt', 'Documents'),
        make_row('Billing', 'Receipt', 'Documents', 'Invoice', 'Documents'),
        make_row('Shipping', 'Invoice', 'Documents', 'Parcel Label', 'Logistics'),
    ]


@pytest.fixture
def valid_graph():
    """Small valid graph as decoded JSON."""
    return {
        'nodes': [
            node('cart', 'Cart', 'interface'),
            node('checkout', 'Checkout', 'service'),
            node('receipt', 'Receipt', 'interface'),
        ],
        'links': [
            link('cart', 'checkout'),
            link('checkout', 'receipt'),
        ],
    }


@pytest.fixture
def dataclass_graph_parts():
    """Nodes and links as dataclass instances."""
    nodes = [
        ComponentNode(id='a', name='A', type='service'),
        ComponentNode(id='b', name='B', type='interface'),
    ]
    links = [ComponentLink(source='a', target='b', type='dependency')]
    return nodes, links


@pytest.fixture
def write_csv(tmp_path):
    """Write rows to a CSV file with the standard header."""

    def _write(rows, name='components.csv', header=None):
        header = header or HEADER
        lines = [','.join(header)]
        for row in rows:
            lines.append(','.join(row.get(column, '') for column in header))
        path = tmp_path / name
        path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
        return path

    return _write


@pytest.fixture
def write_json(tmp_path):
    """Write any JSON document to a file."""

    def _write(document, name='components.json'):
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding='utf-8')
        return path

    return _write
