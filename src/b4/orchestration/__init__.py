"""
Orchestration of a bootstrap run.

This module provides the step pipeline (registry, ordering and the
sequential run loop), the run context threaded through every step, and the
management of the diagnostic log file.
"""

from .log_manager import LogManager
from .pipeline import StepPipeline, log_summary
from .shared_state import RunContext

__all__ = [
    "LogManager",
    "RunContext",
    "StepPipeline",
    "log_summary",
]
