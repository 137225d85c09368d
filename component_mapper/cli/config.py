#!/usr/bin/env python3
"""
Configuration loader for Component Mapper

Loads YAML configuration with ${VAR_NAME} environment substitution and
fills anything left unset from the built-in defaults.
"""

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config_validator import ConfigurationValidator, validate_config_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'processing': {
        'max_file_size_mb': 5,
        'chunk_size': 1000,
        'validate_structure': True,
        'default_encoding': 'utf-8'
    },
    'validation': {
        'max_node_name_length': 100,
        'max_nodes': 1000,
        'max_links': 5000,
        'complexity_threshold': 100,
        'hotspot_threshold': 10,
        'max_cycles': 10,
        'max_orphans_listed': 5,
        'max_cycles_listed': 3,
        'max_hotspots_listed': 3
    },
    'output': {
        'indent': 2,
        'include_metadata': True
    },
    'logging': {
        'level': 'INFO'
    }
}


def substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute environment variables in configuration values.

    Supports ${VAR_NAME} syntax.
    """
    if isinstance(value, str):
        # Find all ${VAR_NAME} patterns
        pattern = r'\$\{([^}]+)\}'
        matches = re.findall(pattern, value)
        whole_value = re.fullmatch(pattern, value) is not None

        for var_name in matches:
            env_value = os.getenv(var_name)
            if env_value is None:
                logger.warning(f"Environment variable {var_name} not set")
                env_value = ""  # Use empty string as fallback

            value = value.replace(f"${{{var_name}}}", env_value)

        # A value that is exactly one placeholder may stand for a number or flag
        if whole_value and value:
            return yaml.safe_load(value)
        return value

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(item) for item in value]

    else:
        return value


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` onto a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if value is None and isinstance(merged.get(key), dict):
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration file and merge it over the defaults.

    Args:
        config_path: Path to the configuration YAML file; the default file
            is used when omitted, and the built-in defaults when that is absent

    Returns:
        Configuration dictionary ready for the processor
    """
    if config_path is None:
        default_path = get_default_config_path()
        if default_path is None:
            logger.info("No configuration file found, using built-in defaults")
            return copy.deepcopy(DEFAULT_CONFIG)
        config_path = str(default_path)

    try:
        # Validate config file syntax first
        is_valid, file_issues = validate_config_file(config_path)
        if not is_valid:
            for issue in file_issues:
                logger.error(f"Config file validation: {issue}")
            raise ValueError("Configuration file validation failed")

        # Load YAML configuration
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f) or {}

        # Substitute environment variables
        config = merge_config(DEFAULT_CONFIG, substitute_env_vars(raw_config))

        # Validate configuration structure and values
        validator = ConfigurationValidator()
        is_valid, _ = validator.validate_config(config)

        # Log all issues
        for issue in validator.errors:
            logger.error(f"Config validation error: {issue}")
        for issue in validator.warnings:
            logger.warning(f"Config validation warning: {issue}")

        # Stop if there are critical errors
        if not is_valid:
            raise ValueError("Configuration validation failed - check logs for details")

        logger.info(f"Configuration loaded from {config_path}")
        return config

    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML configuration: {e}")
        raise


def get_default_config_path() -> Optional[Path]:
    """Get the default configuration file path, if it exists."""
    env_path = os.getenv('COMPONENT_MAPPER_CONFIG')
    if env_path:
        return Path(env_path)

    default_config = Path(__file__).resolve().parent.parent.parent / 'config' / 'mapper_config.yaml'
    if not default_config.exists():
        return None
    return default_config
