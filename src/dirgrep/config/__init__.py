"""
Configuration management package for dirgrep.

This package provides configuration parsing, validation, and the merging of
command-line values with configured defaults.
"""

from ..errors import ConfigurationError
from .parser import (
    ConfigParser,
    ConfigParseResult,
    load_config,
    create_config_template,
    build_search_query
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'load_config',
    'create_config_template',
    'build_search_query'
]
