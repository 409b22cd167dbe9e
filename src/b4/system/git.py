"""
Repository synchronization.

Keeps a working copy of an auxiliary repository present and current, and
reports when the tree actually changed so the caller can rebuild exactly
then. Every git invocation goes through the process supervisor.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from ..models.runtime import SyncState
from ..validation import FatalError
from .commands import ProcessSupervisor

logger = logging.getLogger(__name__)

# Token ``git status -sb`` prints on the branch line when the remote is ahead.
BEHIND_MARKER = "behind"


class RepositorySynchronizer:
    """
    Clone-or-update state machine for tracked repositories.

    ``Missing`` clones, ``PresentCurrent`` does nothing, ``PresentBehind``
    hard-resets and pulls. ``on_updated`` runs only after a fresh clone or a
    clean behind-to-current transition; a torn update is fatal instead.
    """

    def __init__(self, supervisor: ProcessSupervisor, git_executable: str = "git"):
        self.supervisor = supervisor
        self.git_executable = git_executable

    def _git(self, working_directory: Path, arguments, on_line=None):
        return self.supervisor.run(self.git_executable, working_directory, arguments, on_line)

    def _failure_code(self, fallback: int = -1) -> int:
        return self.supervisor.last_bad_exit_code or fallback

    def get_or_update(
        self,
        name: str,
        local_path: Union[str, Path],
        remote_url: str,
        on_updated: Optional[Callable[[], None]] = None,
    ) -> SyncState:
        """
        Ensure ``local_path`` holds a current working copy of ``remote_url``.

        Args:
            name: Display name used in log messages
            local_path: Working copy location
            remote_url: Repository to clone from
            on_updated: Invoked when the tree changed (fresh clone or pulled)

        Returns:
            The state the repository was found in

        Raises:
            FatalError: If the clone, fetch or status inspection fails, or if
                resetting or pulling a behind repository fails
        """
        local_path = Path(local_path)

        if not local_path.exists():
            self._clone(name, local_path, remote_url)
            if on_updated is not None:
                on_updated()
            return SyncState.MISSING

        state = self.inspect(name, local_path)
        if state is SyncState.PRESENT_CURRENT:
            logger.info(f"{name} is up-to-date.")
            return state

        self._reset_and_pull(name, local_path)
        if on_updated is not None:
            on_updated()
        return state

    def inspect(self, name: str, local_path: Path) -> SyncState:
        """
        Fetch the remote and classify an existing working copy.

        Raises:
            FatalError: If fetching fails or the status cannot be read
        """
        logger.info("Fetching repository updates ...")
        if not self._git(local_path, ["fetch", "origin"]):
            raise FatalError(f"Unable to fetch updates for {name}.", self._failure_code())

        logger.info("Checking repository status ...")
        is_behind = False

        def scan(line: str) -> None:
            nonlocal is_behind
            if BEHIND_MARKER in line:
                is_behind = True

        if not self._git(local_path, ["status", "-sb"], on_line=scan):
            raise FatalError(
                f"Unable to understand the status of the {name} repository.",
                self._failure_code(),
            )

        return SyncState.PRESENT_BEHIND if is_behind else SyncState.PRESENT_CURRENT

    def _clone(self, name: str, local_path: Path, remote_url: str) -> None:
        logger.info(f"Getting latest {name} source ...")
        local_path.parent.mkdir(parents=True, exist_ok=True)
        if not self._git(local_path.parent, ["clone", remote_url, str(local_path)]):
            raise FatalError(f"Unable to clone {name}.", -1)

    def _reset_and_pull(self, name: str, local_path: Path) -> None:
        failures = False

        logger.info(f"Resetting local {name} source ...")
        if not self._git(local_path, ["reset", "--hard"]):
            logger.warning(f"Unable to reset {name} repository.")
            failures = True

        logger.info(f"Getting latest {name} source ...")
        if not self._git(local_path, ["pull"]):
            logger.warning(f"Unable to pull updates for {name} repository.")
            failures = True

        if failures:
            raise FatalError(f"Failures occurred while trying to update {name}.", -1)

    def get_local_revision(self, local_path: Union[str, Path]) -> str:
        """
        Return the commit currently checked out in ``local_path``.

        Returns:
            The full commit hash, or an empty string if it can't be determined
        """
        result = self._git(Path(local_path), ["rev-parse", "HEAD"])
        revision = next((line.strip() for line in result.lines if line.strip()), "")
        if not result or not revision:
            logger.warning(f"Unable to determine the local revision of {local_path}")
            return ""
        return revision
