"""
Shared run state for the orchestration module.

The ``RunContext`` is created once per run and handed to every step. It
replaces process-wide mutable state: the root directory, the configuration
and argument sources, the supervisor that remembers the last failing exit
code, and the values earlier steps produce for later ones.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, TYPE_CHECKING

from ..config.resolver import ParameterResolver
from ..models.config import DEFAULTS, BootstrapDefaults, ResolvedParameter
from ..system.commands import ProcessSupervisor
from ..system.environment import EnvironmentPropagator
from ..system.git import RepositorySynchronizer

if TYPE_CHECKING:
    from ..cli.arguments import Arguments
    from ..config.manager import SimpleConfig


@dataclass
class RunContext:
    """
    Everything a step needs to do its work, threaded explicitly through the run.
    """

    root_directory: Path
    arguments: "Arguments"
    config: "SimpleConfig"
    supervisor: ProcessSupervisor
    propagator: EnvironmentPropagator
    synchronizer: RepositorySynchronizer
    is_online: bool = True
    defaults: BootstrapDefaults = DEFAULTS

    # --- Values produced by steps for later steps ---
    project_directory: Optional[Path] = None
    k9_path: Optional[Path] = None
    unity_editor: Optional[Path] = None

    # Exit code recorded by non-fatal errors that should still fail the run.
    error_exit_code: int = 0

    resolver: ParameterResolver = field(init=False)

    def __post_init__(self) -> None:
        self.root_directory = Path(self.root_directory)
        self.resolver = ParameterResolver(self.config, self.arguments)

    def resolve(
        self,
        key: str,
        builtin_default: Any,
        transform: Optional[Callable[[Any], Any]] = None,
        validate: Optional[Callable[[Any], bool]] = None,
    ) -> ResolvedParameter:
        return self.resolver.resolve(key, builtin_default, transform, validate)

    def rooted(self, value: Any) -> Path:
        """Resolve a possibly relative path against the root directory."""
        return Path(os.path.abspath(self.root_directory / os.path.expanduser(str(value))))

    def record_error(self, exit_code: int) -> None:
        self.error_exit_code = exit_code

    @property
    def exit_code(self) -> int:
        """The program's exit status: a recorded error, else the last supervised failure, else 0."""
        return self.error_exit_code or self.supervisor.last_bad_exit_code
