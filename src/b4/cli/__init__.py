"""
Command-line interface for the b4 package.

This module provides the argument source and the main CLI entry point.
"""

from .arguments import GLOBAL_OPTIONS, Arguments, build_parser
from .main import main_cli

__all__ = [
    "GLOBAL_OPTIONS",
    "Arguments",
    "build_parser",
    "main_cli",
]
