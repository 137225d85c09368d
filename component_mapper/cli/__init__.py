#!/usr/bin/env python3
"""
CLI Interface for Component Mapper

Provides the command-line interface for building component graphs from
spreadsheet exports and validating graph JSON documents.
"""

from .config import DEFAULT_CONFIG, get_default_config_path, load_config
from .config_validator import ConfigurationValidator, validate_config_file
from .main import cli, main

__all__ = [
    'main',
    'cli',
    'load_config',
    'get_default_config_path',
    'DEFAULT_CONFIG',
    'ConfigurationValidator',
    'validate_config_file'
]
