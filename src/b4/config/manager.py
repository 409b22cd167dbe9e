"""
Configuration source access.

``SimpleConfig`` is the flat key/value lookup consulted by the parameter
resolver's file tier. Instances are created once per run and carried on the
run context rather than cached in module state.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from ..models.config import CONFIG_FILE_NAME
from .loader import load_simple_config_file

logger = logging.getLogger(__name__)


class SimpleConfig:
    """
    Read-only view over parsed ``key = value`` pairs.
    """

    def __init__(self, values: Optional[Dict[str, str]] = None, path: Optional[Path] = None):
        self._values: Dict[str, str] = dict(values or {})
        self.path = path

    @classmethod
    def from_file(cls, file_path: Path, description: str = "configuration file") -> "SimpleConfig":
        """
        Load a config file.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        return cls(load_simple_config_file(file_path, description), path=file_path)

    def try_get(self, key: str) -> Optional[str]:
        """Return the value for ``key``, or None when the file has no such entry."""
        return self._values.get(key)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._values.items())

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"SimpleConfig(path={self.path!r}, keys={list(self._values)})"


def load_config(root_directory: Path, file_name: str = CONFIG_FILE_NAME) -> SimpleConfig:
    """
    Load the bootstrapper's own configuration from the root directory.

    A missing file is not an error: every parameter then resolves from its
    builtin default or the command line.

    Args:
        root_directory: Workspace root
        file_name: Config file name inside the root

    Returns:
        The loaded (possibly empty) configuration
    """
    config_path = Path(root_directory) / file_name
    if not config_path.exists():
        logger.info(f"No {file_name} found in {root_directory}, using builtin defaults")
        return SimpleConfig(path=config_path)

    config = SimpleConfig.from_file(config_path, description=f"{file_name} configuration")
    logger.info(f"Loaded {len(config)} entries from {config_path}")
    return config
