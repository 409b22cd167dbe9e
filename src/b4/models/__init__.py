"""
Data models and structures for the bootstrapper.

Configuration Models:
- Builtin defaults for every resolvable parameter
- Resolved parameter records and step help metadata

Runtime Models:
- Supervised child process results
- Repository synchronization states
- Step outcomes and pipeline results

All models use dataclasses for clarity and IDE support.
"""

# Configuration models
from .config import (
    CHILD_ENVIRONMENT,
    CONFIG_FILE_NAME,
    DEFAULTS,
    K9_CONFIG_DEFAULT_CONTENT,
    LOG_FILE_NAME,
    BootstrapDefaults,
    HelpEntry,
    ResolvedParameter,
)

# Runtime models
from .runtime import ChildProcessResult, PipelineResult, StepOutcome, SyncState

__all__ = [
    # Configuration
    "CHILD_ENVIRONMENT",
    "CONFIG_FILE_NAME",
    "DEFAULTS",
    "K9_CONFIG_DEFAULT_CONTENT",
    "LOG_FILE_NAME",
    "BootstrapDefaults",
    "HelpEntry",
    "ResolvedParameter",
    # Runtime
    "ChildProcessResult",
    "PipelineResult",
    "StepOutcome",
    "SyncState",
]
