"""
The step pipeline.

Steps are registered explicitly, keyed by their lowercase identifier. The
configured order (a comma-separated list of identifiers) selects and orders
the steps that actually run; they are then processed strictly one after
another until the list ends or a step fails fatally.
"""

import logging
import time
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

from ..models.config import HelpEntry
from ..models.runtime import PipelineResult, StepOutcome
from ..steps.base import Step
from ..validation import FatalError, ValidationError, validate_step_id

if TYPE_CHECKING:
    from .shared_state import RunContext

logger = logging.getLogger(__name__)


class StepPipeline:
    """
    Registry of known steps plus the sequential run loop.
    """

    def __init__(self, steps: Optional[Iterable[Step]] = None):
        self._steps: Dict[str, Step] = {}
        for step in steps or ():
            self.register_step(step)

    @property
    def steps(self) -> List[Step]:
        """Registered steps, in registration order."""
        return list(self._steps.values())

    def register_step(self, step: Step) -> None:
        """
        Add a step to the registry.

        Raises:
            ValidationError: If the identifier is malformed or already registered
        """
        step_id = validate_step_id(step.id, field_name=f"id of {type(step).__name__}")
        if step_id in self._steps:
            raise ValidationError(
                f"Duplicate step id '{step_id}' "
                f"({type(self._steps[step_id]).__name__} and {type(step).__name__})",
                field_name="step id",
                value=step_id,
            )
        self._steps[step_id] = step
        logger.debug(f"Registered step '{step_id}'")

    def help_entries(self) -> List[HelpEntry]:
        """Help metadata of every registered step, selected or not."""
        entries: List[HelpEntry] = []
        for step in self._steps.values():
            entries.extend(step.help_entries())
        return entries

    def build_order(self, configured: Optional[str]) -> List[Step]:
        """
        Resolve a comma-separated list of step identifiers.

        Tokens are trimmed and lowercased. Unknown identifiers are logged and
        dropped; the result keeps the configured order.

        Raises:
            FatalError: If no known step remains
        """
        ordered: List[Step] = []
        for token in (configured or "").split(","):
            step_id = token.strip().lower()
            if not step_id:
                continue
            step = self._steps.get(step_id)
            if step is None:
                logger.warning(f"Unknown step '{step_id}' in step order, skipping.")
                continue
            ordered.append(step)

        if not ordered:
            raise FatalError("No steps to execute.", -1)
        return ordered

    def run(self, ordered: List[Step], context: "RunContext") -> PipelineResult:
        """
        Process ``ordered`` one step at a time.

        A ``FatalError`` from a step ends the run; later steps never start.

        Returns:
            ``ok=True`` if every step completed, otherwise the failing step's
            exit code and message
        """
        result = PipelineResult(ok=True)

        for step in ordered:
            logger.info(f"[{step.header}]")
            started = time.time()
            try:
                step.process(context)
            except FatalError as e:
                result.outcomes.append(
                    StepOutcome(step.id, step.header, "failure", time.time() - started)
                )
                logger.error(str(e))
                result.ok = False
                result.exit_code = e.exit_code
                result.message = e.message
                break

            result.outcomes.append(
                StepOutcome(step.id, step.header, "success", time.time() - started)
            )

        log_summary(result)
        return result


def log_summary(result: PipelineResult) -> None:
    logger.info("Step summary:")
    for outcome in result.outcomes:
        logger.info(
            f"  {outcome.step_id:<16} {outcome.status:<8} ({outcome.duration_s:.1f}s)"
        )
