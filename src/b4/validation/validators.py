"""
Validation functions.

Validators raise ``ValidationError`` on failure and return the validated
value otherwise. Predicates (``is_*``) return booleans and are the form the
parameter resolver's validate hooks take.
"""

import os
import re
from pathlib import Path
from typing import Any, Union

from .exceptions import ValidationError

# Step identifiers are lowercase keys used in configuration strings.
_STEP_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_\-]*$")


def validate_path_exists(path: Union[str, Path], field_name: str = "path") -> str:
    """
    Validate that a path exists.

    Args:
        path: Path to validate
        field_name: Name of the field being validated

    Returns:
        Validated path string

    Raises:
        ValidationError: If path doesn't exist
    """
    path_str = str(path)
    if not os.path.exists(path_str):
        raise ValidationError(
            f"{field_name} does not exist: {path_str}",
            field_name=field_name,
            value=path_str
        )
    return path_str


def validate_step_id(step_id: Any, field_name: str = "step id") -> str:
    """
    Validate a step identifier.

    Args:
        step_id: Identifier to validate
        field_name: Name of the field being validated

    Returns:
        The identifier, unchanged

    Raises:
        ValidationError: If the identifier is empty, not lowercase, or
            contains characters that cannot appear in a comma-separated list
    """
    if not step_id or not isinstance(step_id, str):
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=step_id
        )
    if not _STEP_ID_PATTERN.match(step_id):
        raise ValidationError(
            f"{field_name} must be a lowercase key of letters, digits, '-' or '_', got '{step_id}'",
            field_name=field_name,
            value=step_id
        )
    return step_id


def validate_option_key(key: Any, field_name: str = "option key") -> str:
    """Validate a command-line option key given without leading dashes."""
    if not key or not isinstance(key, str) or key.startswith("-") or " " in key:
        raise ValidationError(
            f"{field_name} must be a dash-less key without spaces, got '{key}'",
            field_name=field_name,
            value=key
        )
    return key


def is_existing_directory(path: Union[str, Path]) -> bool:
    return os.path.isdir(path)


def is_existing_file(path: Union[str, Path]) -> bool:
    return os.path.isfile(path)


def is_non_empty(value: Any) -> bool:
    return value is not None and str(value).strip() != ""
