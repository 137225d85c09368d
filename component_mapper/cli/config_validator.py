"""
Configuration validation for the component mapper.
Validates configuration before processing starts to prevent common errors.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ('processing', 'validation', 'output', 'logging')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigurationValidator:
    """Validates mapper configuration to prevent runtime errors."""

    def __init__(self):
        self.errors = []
        self.warnings = []

    def validate_config(self, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate configuration before processing starts.

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        self.errors = []
        self.warnings = []

        for section in config:
            if section not in KNOWN_SECTIONS:
                self.warnings.append(f"Unknown configuration section '{section}' is ignored")

        self._validate_processing_config(config.get('processing', {}))
        self._validate_validation_config(config.get('validation', {}))
        self._validate_output_config(config.get('output', {}))
        self._validate_logging_config(config.get('logging', {}))

        all_issues = self.errors + self.warnings
        is_valid = len(self.errors) == 0

        return is_valid, all_issues

    def _validate_processing_config(self, processing_config: Dict[str, Any]):
        """Validate processing settings."""

        max_size = processing_config.get('max_file_size_mb', 5)
        if isinstance(max_size, bool) or not isinstance(max_size, (int, float)) or max_size <= 0:
            self.errors.append(f"max_file_size_mb must be a positive number, got: {max_size}")
        elif max_size > 100:
            self.warnings.append(f"max_file_size_mb ({max_size}) is very large - processing may be slow")

        chunk_size = processing_config.get('chunk_size', 1000)
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
            self.errors.append(f"chunk_size must be a positive integer, got: {chunk_size}")

        validate_structure = processing_config.get('validate_structure')
        if validate_structure is not None and not isinstance(validate_structure, bool):
            self.errors.append(f"validate_structure must be boolean, got: {validate_structure}")
        elif validate_structure is False:
            self.warnings.append("Structure validation disabled - missing columns will not be reported")

    def _validate_validation_config(self, validation_config: Dict[str, Any]):
        """Validate graph validation thresholds."""

        positive_ints = [
            'max_node_name_length', 'max_nodes', 'max_links', 'complexity_threshold',
            'hotspot_threshold', 'max_cycles', 'max_orphans_listed', 'max_cycles_listed',
            'max_hotspots_listed'
        ]
        for key in positive_ints:
            value = validation_config.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                self.errors.append(f"validation.{key} must be a positive integer, got: {value}")

        max_cycles = validation_config.get('max_cycles', 10)
        if isinstance(max_cycles, int) and max_cycles > 100:
            self.warnings.append(f"validation.max_cycles ({max_cycles}) makes cycle search slower on large graphs")

    def _validate_output_config(self, output_config: Dict[str, Any]):
        """Validate output configuration."""

        indent = output_config.get('indent', 2)
        if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
            self.errors.append(f"indent must be non-negative integer, got: {indent}")

        include_metadata = output_config.get('include_metadata')
        if include_metadata is not None and not isinstance(include_metadata, bool):
            self.errors.append(f"output.include_metadata must be boolean, got: {include_metadata}")

    def _validate_logging_config(self, logging_config: Dict[str, Any]):
        """Validate logging configuration."""

        level = logging_config.get('level', 'INFO')
        if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
            self.errors.append(f"Invalid log level '{level}'. Valid: {list(VALID_LOG_LEVELS)}")


def validate_config_file(config_path: str) -> Tuple[bool, List[str]]:
    """
    Validate configuration file syntax and basic structure.

    Returns:
        Tuple of (is_valid, list_of_issues)
    """
    issues = []

    config_file = Path(config_path)

    # Check if config file exists
    if not config_file.exists():
        issues.append(f"Configuration file not found: {config_path}")
        return False, issues

    # Check if config file is readable
    if not os.access(config_file, os.R_OK):
        issues.append(f"Configuration file is not readable: {config_path}")
        return False, issues

    # Try to parse the config file
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        issues.append(f"Invalid YAML syntax in config file: {e}")
        return False, issues
    except OSError as e:
        issues.append(f"Error reading config file: {e}")
        return False, issues

    # An empty file means "all defaults"
    if config is not None and not isinstance(config, dict):
        issues.append("Configuration file must contain a dictionary at root level")
        return False, issues

    for section, value in (config or {}).items():
        if section in KNOWN_SECTIONS and value is not None and not isinstance(value, dict):
            issues.append(f"Configuration section '{section}' must be a dictionary")

    return len(issues) == 0, issues
