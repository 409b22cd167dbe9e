"""
Publishing resolved values to the surrounding environment.

Values the bootstrapper resolves (tool locations, editor paths, config
entries) are announced to the CI server as TeamCity service messages and/or
persisted into the invoking user's environment, depending on the flags the
run was started with.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Dict, Optional, TextIO, Union

from ..validation import ErrorSeverity, handle_file_error

logger = logging.getLogger(__name__)

# Characters TeamCity requires to be escaped in service message values, in
# the order they must be replaced ('|' first).
_TEAMCITY_ESCAPES = (
    ("|", "||"),
    ("'", "|'"),
    ("\n", "|n"),
    ("\r", "|r"),
    ("[", "|["),
    ("]", "|]"),
)


def escape_teamcity_value(value: str) -> str:
    for char, replacement in _TEAMCITY_ESCAPES:
        value = value.replace(char, replacement)
    return value


def format_teamcity_parameter(name: str, value: str) -> str:
    """
    Build the single-line service message that sets a build parameter.

    Examples:
        >>> format_teamcity_parameter("K9", "/work/K9")
        "##teamcity[setParameter name='K9' value='/work/K9']"
    """
    return (
        f"##teamcity[setParameter name='{escape_teamcity_value(name)}' "
        f"value='{escape_teamcity_value(value)}']"
    )


class UserEnvironmentStore:
    """
    Durable per-user environment variables.

    On Windows values go to ``HKEY_CURRENT_USER\\Environment``. Elsewhere they
    are kept in a ``NAME=value`` file that login shells can source.
    """

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path).expanduser()

    def set(self, name: str, value: str) -> None:
        if sys.platform == "win32":
            self._set_registry(name, value)
        else:
            self._set_file(name, value)

    def read(self) -> Dict[str, str]:
        """Return the variables persisted in the environment file."""
        values: Dict[str, str] = {}
        if not self.file_path.exists():
            return values
        for line in self.file_path.read_text(encoding="utf-8").splitlines():
            key, separator, value = line.partition("=")
            if separator:
                values[key] = value
        return values

    def _set_file(self, name: str, value: str) -> None:
        try:
            values = self.read()
            values[name] = value
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file_path.write_text(
                "".join(f"{key}={item}\n" for key, item in values.items()),
                encoding="utf-8",
            )
        except OSError as e:
            handle_file_error(
                error=e,
                context=f"persisting {name} to {self.file_path}",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )

    @staticmethod
    def _set_registry(name: str, value: str) -> None:
        import winreg

        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, "Environment", 0, winreg.KEY_SET_VALUE) as key:
            winreg.SetValueEx(key, name, 0, winreg.REG_EXPAND_SZ, value)


class EnvironmentPropagator:
    """
    Announces resolved values outward.

    Args:
        publish_to_ci: Emit TeamCity ``setParameter`` service messages
        persist_for_user: Write values into the user's persistent environment
        user_store: Where user values are persisted
        stream: Where service messages are written (stdout by default)
    """

    def __init__(
        self,
        publish_to_ci: bool = False,
        persist_for_user: bool = False,
        user_store: Optional[UserEnvironmentStore] = None,
        stream: Optional[TextIO] = None,
    ):
        self.publish_to_ci = publish_to_ci
        self.persist_for_user = persist_for_user
        self.user_store = user_store or UserEnvironmentStore(os.path.join("~", ".b4", "environment"))
        self.stream = stream

    def publish(self, name: str, value) -> None:
        value = "" if value is None else str(value)

        if self.publish_to_ci:
            stream = self.stream or sys.stdout
            stream.write(format_teamcity_parameter(name, value) + "\n")
            stream.flush()

        if self.persist_for_user:
            self.user_store.set(name, value)
            logger.info(f"Persisted user environment variable {name}")

        if not self.publish_to_ci and not self.persist_for_user:
            logger.debug(f"Not publishing {name}: no publish target enabled")
