#!/usr/bin/env python3
"""
Simplified CLI for Component Mapper

Usage: component-mapper process <source> [target]
       component-mapper validate <graph_file>
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click

from component_mapper import __version__, setup_logging
from component_mapper.events import ProgressEvent
from component_mapper.graph import GraphValidator, ValidationResult
from component_mapper.services import ComponentMapProcessor, ProcessingError, describe_error
from .config import load_config

MAX_LISTED_FINDINGS = 10


def _load_config_or_exit(config: Optional[str]) -> Dict[str, Any]:
    try:
        return load_config(config)
    except ValueError as e:
        click.echo(f"❌ Configuration error: {e}")
        sys.exit(1)


def print_validation_report(validation: ValidationResult):
    """Print an aggregate validation summary with the first findings of each kind."""
    metrics = validation.metrics

    click.echo("\n" + "=" * 50)
    if validation.is_valid:
        click.echo("✅ GRAPH VALID")
    else:
        click.echo("❌ GRAPH INVALID")
    click.echo("=" * 50)
    click.echo(f"🎯 Nodes: {metrics.total_nodes}")
    click.echo(f"🔗 Links: {metrics.total_links}")
    click.echo(f"🏝️  Orphaned nodes: {metrics.orphaned_nodes}")
    click.echo(f"🔄 Circular dependencies: {metrics.circular_dependencies}")
    click.echo(f"📊 Complexity score: {metrics.complexity_score}")

    if metrics.nodes_by_type:
        breakdown = ', '.join(f"{t}={n}" for t, n in metrics.nodes_by_type.items())
        click.echo(f"📦 Nodes by type: {breakdown}")

    if validation.errors:
        click.echo(f"\n❌ Errors ({len(validation.errors)}):")
        for error in validation.errors[:MAX_LISTED_FINDINGS]:
            click.echo(f"  • [{error.code}] {error.message}")
        if len(validation.errors) > MAX_LISTED_FINDINGS:
            click.echo(f"  ... and {len(validation.errors) - MAX_LISTED_FINDINGS} more errors")

    if validation.warnings:
        click.echo(f"\n⚠️  Warnings ({len(validation.warnings)}):")
        for warning in validation.warnings[:MAX_LISTED_FINDINGS]:
            click.echo(f"  • [{warning.code}] {warning.message}")
            if warning.affected_nodes:
                click.echo(f"      affected: {', '.join(warning.affected_nodes)}")
        if len(validation.warnings) > MAX_LISTED_FINDINGS:
            click.echo(f"  ... and {len(validation.warnings) - MAX_LISTED_FINDINGS} more warnings")

    click.echo("=" * 50)


@click.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.argument('target', type=click.Path(), required=False)
@click.option('--config', type=click.Path(exists=True),
              help='Custom config file (default: config/mapper_config.yaml)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--strict', is_flag=True, help='Exit with an error when the graph is invalid')
@click.option('--no-structure-check', is_flag=True,
              help='Skip required-column and cell-type checks before ingestion')
def process(source, target, config, verbose, strict, no_structure_check):
    """
    Build and validate a component graph from a spreadsheet export.

    SOURCE: CSV or JSON export of the component sheet
    TARGET: Optional output JSON file for the graph and validation report
    """
    mapper_config = _load_config_or_exit(config)
    log_level = mapper_config.get('logging', {}).get('level', 'INFO')
    setup_logging('DEBUG' if verbose else log_level)
    logger = logging.getLogger(__name__)

    if no_structure_check:
        mapper_config['processing']['validate_structure'] = False

    click.echo(f"🔍 Processing: {source}")
    if target:
        click.echo(f"📁 Output: {target}")

    processor = ComponentMapProcessor(mapper_config)

    def on_progress(event: ProgressEvent):
        click.echo(f"  [{event.progress:3d}%] {event.message}")

    try:
        result = processor.run(source, on_progress=on_progress)
    except ProcessingError as e:
        title, message, show_details = describe_error(e)
        click.echo(f"❌ {title}: {message}")
        if show_details and e.details:
            click.echo(f"   Details: {json.dumps(e.details, default=str)}")
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\n⚠️  Processing interrupted by user")
        sys.exit(1)

    print_validation_report(result.validation)
    click.echo(f"⏱️  Processing time: {result.processing_time_ms}ms")

    if target:
        output_config = mapper_config.get('output', {})
        output_data = result.to_dict()
        if not output_config.get('include_metadata', True):
            output_data['graph'].pop('metadata', None)

        target_path = Path(target)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        with open(target_path, 'w', encoding='utf-8') as f:
            json.dump(output_data, f, indent=output_config.get('indent', 2), ensure_ascii=False)

        logger.info(f"Wrote graph and validation report to {target_path}")
        click.echo(f"💾 Saved to: {target}")

    if strict and not result.validation.is_valid:
        sys.exit(1)


@click.command()
@click.argument('graph_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', type=click.Path(exists=True),
              help='Custom config file (default: config/mapper_config.yaml)')
@click.option('--json-output', is_flag=True, help='Output validation report as JSON')
def validate(graph_file, config, json_output):
    """
    Validate a component graph JSON document.

    GRAPH_FILE: Graph JSON with 'nodes' and 'links' (or the output of 'process')
    """
    mapper_config = _load_config_or_exit(config)
    setup_logging('WARNING' if json_output else mapper_config.get('logging', {}).get('level', 'INFO'))

    try:
        with open(graph_file, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        click.echo(f"❌ Could not read graph file: {e}")
        sys.exit(1)

    # Accept the full output of 'process' as well as a bare graph
    if isinstance(document, dict) and isinstance(document.get('graph'), dict):
        document = document['graph']

    validation = GraphValidator(mapper_config).validate(document)

    if json_output:
        click.echo(json.dumps(validation.to_dict(), indent=mapper_config.get('output', {}).get('indent', 2)))
    else:
        print_validation_report(validation)

    if not validation.is_valid:
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name='Component Mapper')
def cli():
    """Component Mapper - build and validate component graphs from spreadsheet exports."""
    pass


# Register commands
cli.add_command(process)
cli.add_command(validate)


def main():
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        click.echo(f"❌ Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
