"""
Configuration management for the b4 package.

This module provides loading of the flat ``key = value`` configuration files
and the parameter resolution cascade built on top of them.
"""

from .loader import load_simple_config_file, parse_simple_config
from .manager import SimpleConfig, load_config
from .resolver import ArgumentSource, ConfigSource, ParameterResolver

__all__ = [
    "ArgumentSource",
    "ConfigSource",
    "ParameterResolver",
    "SimpleConfig",
    "load_config",
    "load_simple_config_file",
    "parse_simple_config",
]
