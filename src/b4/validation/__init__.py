"""
Validation and error handling for the b4 package.

This module provides input validation and error handling with consistent
error reporting across the bootstrapper.
"""

# Core exception classes and error handling
from .exceptions import (
    ErrorSeverity,
    FatalError,
    ValidationError,
    handle_error,
    handle_config_error,
    handle_file_error,
    handle_subprocess_error,
    handle_cli_error,
)

# Validation functions
from .validators import (
    is_existing_directory,
    is_existing_file,
    is_non_empty,
    validate_option_key,
    validate_path_exists,
    validate_step_id,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "FatalError",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_file_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "is_existing_directory",
    "is_existing_file",
    "is_non_empty",
    "validate_option_key",
    "validate_path_exists",
    "validate_step_id",
]
