"""
Pytest configuration and shared fixtures for the B4 test suite.

This module provides common fixtures, test doubles, and configuration
for all test modules in the B4 project.
"""

import io
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from b4.cli.arguments import Arguments  # noqa: E402
from b4.config.manager import SimpleConfig  # noqa: E402
from b4.models.runtime import ChildProcessResult  # noqa: E402
from b4.orchestration.shared_state import RunContext  # noqa: E402
from b4.steps import default_steps  # noqa: E402
from b4.system.commands import format_command, split_arguments  # noqa: E402
from b4.system.environment import EnvironmentPropagator  # noqa: E402
from b4.system.git import RepositorySynchronizer  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Test Doubles
# ============================================================================


class FakeSupervisor:
    """
    Stand-in for ``ProcessSupervisor`` that never spawns anything.

    Results are scripted per argument token (``"clone"``, ``"pull"``,
    ``"FindEditor"`` ...); the first scripted token found in a call decides
    its result and anything unscripted succeeds with no output. Every call
    is recorded as ``[executable, *arguments]``.
    """

    def __init__(self):
        self.scripted: Dict[str, Tuple[int, List[str]]] = {}
        self.effects: Dict[str, Callable[[List[str]], None]] = {}
        self.calls: List[List[str]] = []
        self.working_directories: List[Path] = []
        self.launches: List[Tuple[str, Path, List[str]]] = []
        self.launch_result = True
        self.last_bad_exit_code = 0

    def script(
        self,
        first_argument: str,
        exit_code: int = 0,
        lines: Sequence[str] = (),
        effect: Optional[Callable[[List[str]], None]] = None,
    ) -> None:
        self.scripted[first_argument] = (exit_code, list(lines))
        if effect is not None:
            self.effects[first_argument] = effect

    def commands(self) -> List[str]:
        """First argument of every recorded call, in order."""
        return [call[1] if len(call) > 1 else "" for call in self.calls]

    def run(self, executable, working_directory, arguments=None, on_line=None, env_overrides=None):
        args = split_arguments(arguments)
        self.calls.append([executable, *args])
        self.working_directories.append(Path(working_directory))

        key = next((arg for arg in args if arg in self.scripted), args[0] if args else "")
        exit_code, lines = self.scripted.get(key, (0, []))
        if key in self.effects:
            self.effects[key](args)
        if on_line is not None:
            for line in lines:
                on_line(line)
        if exit_code != 0:
            self.last_bad_exit_code = exit_code
        return ChildProcessResult(format_command(executable, args), exit_code, list(lines))

    def launch_detached(self, executable, working_directory, arguments=None) -> bool:
        self.launches.append((executable, Path(working_directory), split_arguments(arguments)))
        return self.launch_result


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def fake_supervisor():
    """A supervisor whose git/dotnet results are scripted by the test."""
    return FakeSupervisor()


@pytest.fixture
def ci_stream():
    """Captures TeamCity service messages written by the propagator."""
    return io.StringIO()


@pytest.fixture
def make_context(temp_dir, fake_supervisor, ci_stream):
    """
    Build a ``RunContext`` rooted in ``temp_dir``.

    Usage:
        context = make_context(["--no-launch"], config={"project": "Game"})
    """

    def _make(
        argv: Optional[Sequence[str]] = None,
        config: Optional[Dict[str, str]] = None,
        is_online: bool = True,
        publish_to_ci: bool = True,
    ) -> RunContext:
        entries = [entry for step in default_steps() for entry in step.help_entries()]
        return RunContext(
            root_directory=temp_dir,
            arguments=Arguments(list(argv or []), entries),
            config=SimpleConfig(config or {}),
            supervisor=fake_supervisor,
            propagator=EnvironmentPropagator(publish_to_ci=publish_to_ci, stream=ci_stream),
            synchronizer=RepositorySynchronizer(fake_supervisor),
            is_online=is_online,
        )

    return _make
