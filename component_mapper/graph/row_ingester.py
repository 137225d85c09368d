#!/usr/bin/env python3
"""
Row Ingester for Component Mapper

Transforms ordered spreadsheet rows into a component graph. Each row may
describe a solution (service node), the interface it consumes and the
interface it produces; inputs and outputs are linked to the solution.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .category_colors import CategoryColorAssigner
from .id_sanitizer import sanitize_id
from .models import ComponentGraph, ComponentLink, ComponentNode, GraphMetadata

logger = logging.getLogger(__name__)

# Column names
SOLUTIONS = 'Solutions'
SOLUTION_INPUT = 'Solution Input'
HIGH_LEVEL_INPUT = 'High Level Input'
SOLUTION_OUTPUT = 'Solution Output'
HIGH_LEVEL_OUTPUT = 'High Level Output'

REQUIRED_COLUMNS = (SOLUTIONS, SOLUTION_INPUT, SOLUTION_OUTPUT)
# 'Inputs' and 'Outputs' are accepted but play no part in graph derivation.
OPTIONAL_COLUMNS = (HIGH_LEVEL_INPUT, 'Inputs', HIGH_LEVEL_OUTPUT, 'Outputs')

GRAPH_VERSION = '1.0.0'

ChunkCallback = Callable[[int, int], None]


def _cell(row: Mapping[str, Any], column: str) -> str:
    """Trimmed cell value; absent cells read as blank."""
    value = row.get(column)
    if value is None:
        return ''
    return value.strip()


class RowIngester:
    """Builds a ComponentGraph from rows of named string cells."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize row ingester with configuration."""
        self.config = config or {}
        self.chunk_size = self.config.get('processing', {}).get('chunk_size', 1000)

    def ingest(self, rows: Iterable[Mapping[str, Any]], source_name: str = "rows",
               on_chunk: Optional[ChunkCallback] = None) -> ComponentGraph:
        """
        Ingest rows in order and return the resulting graph.

        Nodes are upserted by derived id, links are appended in row order.
        A row that fails is logged and skipped; it never aborts the run.

        Args:
            rows: Ordered rows mapping column names to cell strings
            source_name: Name used in the graph title and description
            on_chunk: Optional callback ``(rows_done, total_rows)`` invoked
                every ``chunk_size`` rows

        Returns:
            ComponentGraph with the final node state and all appended links
        """
        rows = list(rows)
        total = len(rows)
        graph = ComponentGraph()
        colors = CategoryColorAssigner()
        skipped = 0

        logger.info(f"Ingesting {total} rows from {source_name}")

        for index, row in enumerate(rows, start=1):
            try:
                self._ingest_row(row, index, graph, colors)
            except Exception as e:
                skipped += 1
                logger.warning(f"Error processing row {index}: {e}")

            if on_chunk and self.chunk_size > 0 and index % self.chunk_size == 0 and index < total:
                on_chunk(index, total)

        if skipped:
            logger.warning(f"Skipped {skipped} of {total} rows due to errors")

        graph.metadata = GraphMetadata(
            title=f"Component Map - {source_name}",
            description=(f"Generated from {source_name} with {len(graph.nodes)} components "
                         f"and {len(graph.links)} connections"),
            version=GRAPH_VERSION
        )

        logger.info(f"Ingestion complete: {len(graph.nodes)} nodes, {len(graph.links)} links, "
                    f"{len(colors)} categories")
        return graph

    def _ingest_row(self, row: Mapping[str, Any], index: int,
                    graph: ComponentGraph, colors: CategoryColorAssigner):
        """Apply one row to the graph."""
        if not isinstance(row, Mapping):
            raise TypeError(f"expected a mapping of columns, got {type(row).__name__}")

        solution_name = _cell(row, SOLUTIONS)
        input_name = _cell(row, SOLUTION_INPUT)
        output_name = _cell(row, SOLUTION_OUTPUT)
        high_level_input = _cell(row, HIGH_LEVEL_INPUT)
        high_level_output = _cell(row, HIGH_LEVEL_OUTPUT)

        if not solution_name:
            return

        solution_id = sanitize_id(solution_name)
        if not solution_id:
            logger.warning(f"Row {index}: solution '{solution_name}' has no usable identifier characters")
            return

        graph.nodes[solution_id] = ComponentNode(
            id=solution_id,
            name=solution_name,
            type='service',
            description=f"Component from row {index}",
            metadata={
                'row_index': index,
                'high_level_input': high_level_input,
                'high_level_output': high_level_output
            }
        )

        if input_name:
            category = high_level_input or 'Input'
            input_id = self._add_interface(graph, input_name, category, index, 'Input interface')
            if input_id:
                graph.links.append(ComponentLink(
                    source=input_id,
                    target=solution_id,
                    type='dependency',
                    label='provides input to',
                    metadata={'color': colors.color_for(category), 'category': category}
                ))

        if output_name:
            category = high_level_output or 'Output'
            output_id = self._add_interface(graph, output_name, category, index, 'Output interface')
            if output_id:
                graph.links.append(ComponentLink(
                    source=solution_id,
                    target=output_id,
                    type='dependency',
                    label='produces output',
                    metadata={'color': colors.color_for(category), 'category': category}
                ))

    def _add_interface(self, graph: ComponentGraph, name: str, category: str,
                       index: int, description: str) -> str:
        """Upsert an interface node and return its id (empty if unusable)."""
        node_id = sanitize_id(name)
        if not node_id:
            logger.warning(f"Row {index}: interface '{name}' has no usable identifier characters")
            return ''

        graph.nodes[node_id] = ComponentNode(
            id=node_id,
            name=name,
            type='interface',
            description=description,
            metadata={'category': category, 'row_index': index}
        )
        return node_id


def ingest_rows(rows: Iterable[Mapping[str, Any]], source_name: str = "rows",
                config: Optional[Dict[str, Any]] = None) -> ComponentGraph:
    """Convenience wrapper around RowIngester.ingest."""
    return RowIngester(config).ingest(rows, source_name)
