"""
System interaction utilities for the bootstrapper.

This module provides everything that touches the outside world:

- Supervised child processes with streamed, merged output
- Detached launches of GUI applications
- Clone-or-update synchronization of auxiliary git repositories
- Publishing resolved values to TeamCity and the user environment
- Connectivity probing for online/offline mode
"""

# Command execution
from .commands import ProcessSupervisor, format_command, split_arguments

# Repository synchronization
from .git import BEHIND_MARKER, RepositorySynchronizer

# Environment publishing
from .environment import (
    EnvironmentPropagator,
    UserEnvironmentStore,
    escape_teamcity_value,
    format_teamcity_parameter,
)

# Connectivity
from .network import is_host_reachable

__all__ = [
    # Commands
    "ProcessSupervisor",
    "format_command",
    "split_arguments",
    # Git
    "BEHIND_MARKER",
    "RepositorySynchronizer",
    # Environment
    "EnvironmentPropagator",
    "UserEnvironmentStore",
    "escape_teamcity_value",
    "format_teamcity_parameter",
    # Network
    "is_host_reachable",
]
