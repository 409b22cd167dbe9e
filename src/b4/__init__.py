"""
B4: project workspace bootstrapper.

This package brings a project workspace to a runnable state: it keeps
auxiliary tool repositories in sync, builds the toolset when it changed,
prepares configuration, resolves the Unity editor and launches it, and
hands the values it resolved to TeamCity or the user's environment.

The package is organized into specialized modules:
- config: B4.ini loading and the parameter resolution cascade
- models: Builtin defaults and data structures
- validation: Input validation and error handling
- system: Child processes, git synchronization, environment publishing
- orchestration: Run context, step pipeline and log file management
- steps: The individual bootstrap steps
- cli: Command-line interface

Usage:
    From command line:
        b4 [options]

    Programmatically:
        from b4 import StepPipeline, default_steps
        pipeline = StepPipeline(default_steps())
        ordered = pipeline.build_order("k9,k9config")
        result = pipeline.run(ordered, context)
"""

# Main interfaces
from .cli import Arguments, main_cli
from .config import ParameterResolver, SimpleConfig, load_config
from .orchestration import LogManager, RunContext, StepPipeline
from .steps import Step, default_steps

# Model classes for external use
from .models import (
    DEFAULTS,
    BootstrapDefaults,
    ChildProcessResult,
    HelpEntry,
    PipelineResult,
    ResolvedParameter,
    SyncState,
)

# Validation utilities
from .validation import ErrorSeverity, FatalError, ValidationError

# System utilities
from .system import (
    EnvironmentPropagator,
    ProcessSupervisor,
    RepositorySynchronizer,
    is_host_reachable,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "Arguments",
    "main_cli",
    "ParameterResolver",
    "SimpleConfig",
    "load_config",
    "LogManager",
    "RunContext",
    "StepPipeline",
    "Step",
    "default_steps",
    # Models
    "DEFAULTS",
    "BootstrapDefaults",
    "ChildProcessResult",
    "HelpEntry",
    "PipelineResult",
    "ResolvedParameter",
    "SyncState",
    # Validation
    "ErrorSeverity",
    "FatalError",
    "ValidationError",
    # System utilities
    "EnvironmentPropagator",
    "ProcessSupervisor",
    "RepositorySynchronizer",
    "is_host_reachable",
]
