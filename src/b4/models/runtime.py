"""
Runtime data models.

This module contains data structures produced while a bootstrap run executes:
supervised process results, repository synchronization states, per-step
outcomes and the tagged result of a whole pipeline run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass
class ChildProcessResult:
    """
    Outcome of one supervised external command.
    """

    # Human-readable command line, for logging only.
    command: str
    exit_code: int
    # Output lines in arrival order, stdout and stderr interleaved.
    lines: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def __bool__(self) -> bool:
        return self.success


class SyncState(Enum):
    """State of a tracked repository, recomputed from live VCS inspection each run."""

    MISSING = "missing"
    PRESENT_CURRENT = "present_current"
    PRESENT_BEHIND = "present_behind"


@dataclass(frozen=True)
class StepOutcome:
    step_id: str
    header: str
    status: str  # success|failure
    duration_s: float


@dataclass
class PipelineResult:
    """
    Tagged result of running an ordered step list.

    ``ok`` is False when a step ended the run fatally; ``exit_code`` and
    ``message`` then describe the failure.
    """

    ok: bool
    exit_code: int = 0
    message: Optional[str] = None
    outcomes: List[StepOutcome] = field(default_factory=list)
