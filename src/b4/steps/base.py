"""
The step capability.

A step is one named unit of bootstrap work. Steps are constructed once when
the registry is built, report the command-line options they understand, and
are processed at most once per run when the configured order selects them.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING

from ..models.config import HelpEntry

if TYPE_CHECKING:
    from ..orchestration.shared_state import RunContext

logger = logging.getLogger(__name__)


class Step(ABC):
    """Base class for bootstrap steps."""

    #: Stable lowercase key used for ordering and config lookup.
    id: str = ""
    #: Display title logged before the step runs.
    header: str = ""

    def help_entries(self) -> List[HelpEntry]:
        """Options this step exposes; listed in help whether or not the step runs."""
        return []

    @abstractmethod
    def process(self, context: "RunContext") -> None:
        """
        Perform the step's work.

        Raises:
            FatalError: If the run cannot continue
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


PROJECT_KEY = "project"


def project_directory(context: "RunContext") -> Path:
    """Resolve the project directory once per run and cache it on the context."""
    if context.project_directory is None:
        context.project_directory = context.resolve(
            PROJECT_KEY, context.defaults.project, transform=context.rooted
        ).value
        logger.info(f"projectDirectory={context.project_directory}")
    return context.project_directory


def k9_directory(context: "RunContext") -> Optional[Path]:
    """The K9 location published by the ``k9`` step, or None (with a warning) if it did not run."""
    if context.k9_path is None:
        logger.warning("K9 location is unknown, the 'k9' step has not run.")
    return context.k9_path
