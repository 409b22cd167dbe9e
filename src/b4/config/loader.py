"""
Configuration file loading utilities.

This module handles the low-level parsing of the flat, INI-like ``key = value``
files the bootstrapper reads: its own ``B4.ini`` and the K9 config consumed by
the ``k9config`` step.
"""

import logging
from pathlib import Path
from typing import Dict

from ..validation import ErrorSeverity, handle_config_error

logger = logging.getLogger(__name__)

# Lines starting with one of these are comments.
COMMENT_PREFIXES = ("#", ";")


def parse_simple_config(text: str, source: str = "<string>") -> Dict[str, str]:
    """
    Parse flat ``key = value`` lines.

    Blank lines and comments are skipped. Keys and values are trimmed; only
    the first ``=`` splits, so values may themselves contain ``=``. A key seen
    twice keeps its last value. Lines without ``=`` (or with an empty key) are
    logged as errors and skipped.

    Args:
        text: File content
        source: Description of where the text came from, for log messages

    Returns:
        Ordered mapping of keys to values
    """
    values: Dict[str, str] = {}
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        key, separator, value = line.partition("=")
        key = key.strip()
        if not separator or not key:
            logger.error(f"Invalid config line found: {raw_line} in {source}:{line_number}")
            continue

        values[key] = value.strip()
    return values


def load_simple_config_file(file_path: Path, description: str = "configuration file") -> Dict[str, str]:
    """
    Load and parse a flat config file.

    Args:
        file_path: Path to the file to load
        description: Human-readable description for log messages

    Returns:
        Parsed key/value pairs

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file can't be read
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        # Files saved by Windows editors may be in a legacy code page.
        text = file_path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        handle_config_error(
            error=e,
            context=f"reading {description}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise

    return parse_simple_config(text, source=str(file_path))
