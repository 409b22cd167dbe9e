"""
Unit tests for child process supervision.

These tests spawn the running Python interpreter as a well-behaved child
process, so they exercise the real pipe readers without external tools.
"""

import sys
from unittest.mock import patch

import psutil
import pytest

from b4.system.commands import ProcessSupervisor, format_command, split_arguments


def python_script(code):
    return ["-c", code]


@pytest.mark.unit
class TestArgumentHelpers:
    """Test cases for argument normalization."""

    def test_split_string(self):
        assert split_arguments('build "K9 Tools.sln" --configuration Release') == [
            "build", "K9 Tools.sln", "--configuration", "Release",
        ]

    def test_split_sequence_and_none(self):
        assert split_arguments(["status", "-sb"]) == ["status", "-sb"]
        assert split_arguments(None) == []

    def test_format_command_quotes(self):
        assert format_command("git", ["clone", "a b"]) == "git clone 'a b'"


@pytest.mark.unit
class TestProcessSupervisorRun:
    """Test cases for ProcessSupervisor.run."""

    def test_every_line_reaches_the_sink(self, temp_dir):
        code = (
            "import sys\n"
            "for i in range(3): print(f'out {i}')\n"
            "for i in range(2): print(f'err {i}', file=sys.stderr)\n"
        )
        lines = []
        supervisor = ProcessSupervisor()

        result = supervisor.run(sys.executable, temp_dir, python_script(code), on_line=lines.append)

        assert result.success
        assert len(lines) == 5
        assert [line for line in lines if line.startswith("out")] == ["out 0", "out 1", "out 2"]
        assert [line for line in lines if line.startswith("err")] == ["err 0", "err 1"]
        assert all(not line.endswith(("\n", "\r")) for line in lines)
        assert sorted(result.lines) == sorted(lines)
        assert supervisor.last_bad_exit_code == 0

    def test_nonzero_exit_is_recorded(self, temp_dir):
        supervisor = ProcessSupervisor()

        result = supervisor.run(sys.executable, temp_dir, python_script("import sys; sys.exit(7)"))

        assert not result
        assert result.exit_code == 7
        assert supervisor.last_bad_exit_code == 7

    def test_later_success_keeps_last_failure(self, temp_dir):
        supervisor = ProcessSupervisor()
        supervisor.run(sys.executable, temp_dir, python_script("import sys; sys.exit(3)"))
        supervisor.run(sys.executable, temp_dir, python_script("pass"))

        assert supervisor.last_bad_exit_code == 3

    def test_missing_executable_returns_minus_one(self, temp_dir):
        supervisor = ProcessSupervisor()

        result = supervisor.run(str(temp_dir / "no-such-tool"), temp_dir, ["--version"])

        assert result.exit_code == -1
        assert not result.success
        assert supervisor.last_bad_exit_code == -1

    def test_runs_in_working_directory(self, temp_dir):
        lines = []
        ProcessSupervisor().run(
            sys.executable, temp_dir, python_script("import os; print(os.getcwd())"), on_line=lines.append
        )
        assert lines and lines[0].endswith(temp_dir.name)

    def test_child_environment(self, temp_dir):
        code = "import os; print(os.environ['DOTNET_CLI_TELEMETRY_OPTOUT'], os.environ['B4_TEST'])"
        lines = []
        ProcessSupervisor().run(
            sys.executable, temp_dir, python_script(code), on_line=lines.append, env_overrides={"B4_TEST": "1"}
        )
        assert lines == ["true 1"]


@pytest.mark.unit
class TestLaunchDetached:
    """Test cases for ProcessSupervisor.launch_detached."""

    def test_missing_executable_returns_false(self, temp_dir):
        assert ProcessSupervisor().launch_detached(str(temp_dir / "Unity"), temp_dir) is False

    def test_launch_returns_true(self, temp_dir):
        assert ProcessSupervisor().launch_detached(sys.executable, temp_dir, python_script("pass"))

    @patch("b4.system.commands.psutil.Process")
    def test_vanished_child_still_counts_as_launched(self, mock_process, temp_dir):
        mock_process.side_effect = psutil.NoSuchProcess(pid=1)
        assert ProcessSupervisor().launch_detached(sys.executable, temp_dir, python_script("pass"))


@pytest.mark.unit
class TestFailingSink:
    """Test cases for an on_line handler that raises."""

    def test_output_is_drained_and_error_reraised(self, temp_dir):
        code = "for i in range(20000): print(i)"
        calls = []

        def sink(line):
            calls.append(line)
            raise ValueError("sink")

        supervisor = ProcessSupervisor()
        with pytest.raises(ValueError, match="sink"):
            supervisor.run(sys.executable, temp_dir, python_script(code), on_line=sink)

        assert calls == ["0"]
        assert supervisor.last_bad_exit_code == 0
