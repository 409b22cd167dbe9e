"""
Child process supervision.

This module provides the primitive every step relies on to run external
tools: spawn a process, stream its merged stdout/stderr line by line to the
log and an optional sink, block until it exits, and report success as a
plain return value. It also provides a fire-and-forget launcher for GUI
applications.
"""

import logging
import os
import shlex
import subprocess
import sys
import threading
from pathlib import Path
from typing import IO, Callable, Dict, List, Mapping, Optional, Sequence, Union

import psutil

from ..models.config import CHILD_ENVIRONMENT
from ..models.runtime import ChildProcessResult
from ..validation import ErrorSeverity, handle_subprocess_error

logger = logging.getLogger(__name__)

# Child process output is logged under its own name so it can be told apart.
external_logger = logging.getLogger("b4.external")

Arguments = Union[str, Sequence[str], None]
LineSink = Callable[[str], None]


def split_arguments(arguments: Arguments) -> List[str]:
    """
    Normalize an argument string or sequence into a list.

    Examples:
        >>> split_arguments("status -sb")
        ['status', '-sb']
        >>> split_arguments(None)
        []
    """
    if arguments is None:
        return []
    if isinstance(arguments, str):
        return shlex.split(arguments, posix=os.name != "nt")
    return [str(argument) for argument in arguments]


def format_command(executable: str, arguments: List[str]) -> str:
    return " ".join(shlex.quote(part) for part in [executable, *arguments])


class ProcessSupervisor:
    """
    Runs external commands and tracks the most recent failing exit code.

    ``last_bad_exit_code`` is written by every failed ``run`` and read once
    when the program exits. The pipeline is single-threaded, so writes never
    race.
    """

    def __init__(self, environment: Optional[Mapping[str, str]] = None):
        self.environment: Dict[str, str] = dict(CHILD_ENVIRONMENT)
        if environment:
            self.environment.update(environment)
        self.last_bad_exit_code = 0

    def build_environment(self, overrides: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        env = os.environ.copy()
        env.update(self.environment)
        if overrides:
            env.update(overrides)
        return env

    def run(
        self,
        executable: str,
        working_directory: Union[str, Path],
        arguments: Arguments = None,
        on_line: Optional[LineSink] = None,
        env_overrides: Optional[Mapping[str, str]] = None,
    ) -> ChildProcessResult:
        """
        Run a command to completion, streaming its output.

        stdout and stderr are read concurrently, one thread per stream, and
        merged into a single sink guarded by a lock. Lines keep the order in
        which each stream delivered them; the relative order of stdout and
        stderr lines is best effort.

        Args:
            executable: Program to run, looked up on PATH if not a path
            working_directory: Directory the child runs in
            arguments: Argument string or sequence
            on_line: Called once per output line, trailing newline stripped
            env_overrides: Extra environment variables for this call only

        Returns:
            The result; ``success`` is False for a non-zero exit code or a
            process that could not be started (exit code -1)

        Raises:
            Exception: Whatever ``on_line`` raised, once the child has exited
                and its output has been drained

        Note:
            There is no timeout. A child that never exits blocks the caller.
        """
        args = split_arguments(arguments)
        command = format_command(executable, args)
        logger.debug(f"Executing command: '{command}' in '{working_directory}'")

        result = ChildProcessResult(command=command, exit_code=-1)
        lock = threading.Lock()
        sink_errors: List[Exception] = []

        def deliver(line: str) -> None:
            line = line.rstrip("\r\n")
            with lock:
                external_logger.info(line)
                result.lines.append(line)
                # A failing sink is dropped; the child's output is still drained.
                if on_line is not None and not sink_errors:
                    try:
                        on_line(line)
                    except Exception as e:
                        sink_errors.append(e)

        try:
            process = subprocess.Popen(
                [executable, *args],
                cwd=str(working_directory),
                env=self.build_environment(env_overrides),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            handle_subprocess_error(
                error=e,
                command=command,
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            self._record_failure(result.exit_code)
            return result

        readers = [
            threading.Thread(
                target=_pump_lines,
                args=(stream, deliver),
                name=f"b4-{name}-reader",
                daemon=True,
            )
            for name, stream in (("stdout", process.stdout), ("stderr", process.stderr))
        ]
        for reader in readers:
            reader.start()

        result.exit_code = process.wait()
        # Output may still be buffered after the process has exited.
        for reader in readers:
            reader.join()

        if result.success:
            logger.debug(f"Command '{command}' completed successfully")
        else:
            logger.debug(f"Command '{command}' exited with code {result.exit_code}")
            self._record_failure(result.exit_code)

        if sink_errors:
            logger.error(f"Output handler failed while running '{command}': {sink_errors[0]}")
            raise sink_errors[0]
        return result

    def launch_detached(
        self,
        executable: str,
        working_directory: Union[str, Path],
        arguments: Arguments = None,
    ) -> bool:
        """
        Start a process without waiting for it.

        The child gets its own session (or a detached process group on
        Windows) and its output is discarded.

        Returns:
            True once the process has been started, False if it could not be
        """
        args = split_arguments(arguments)
        command = format_command(executable, args)
        logger.info(f"Launching detached: '{command}' in '{working_directory}'")

        popen_kwargs = {}
        if sys.platform == "win32":
            popen_kwargs["creationflags"] = (
                subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
            )
        else:
            popen_kwargs["start_new_session"] = True

        try:
            process = subprocess.Popen(
                [executable, *args],
                cwd=str(working_directory),
                env=self.build_environment(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **popen_kwargs,
            )
        except OSError as e:
            handle_subprocess_error(
                error=e,
                command=command,
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            return False

        try:
            child = psutil.Process(process.pid)
            logger.info(f"Started {child.name()} with PID {process.pid}")
        except psutil.NoSuchProcess:
            # Started, but already gone; a launcher that hands off and exits.
            logger.info(f"Started PID {process.pid}, which has already exited")
        except psutil.Error as e:
            logger.debug(f"Unable to inspect PID {process.pid}: {e}")
        return True

    def _record_failure(self, exit_code: int) -> None:
        self.last_bad_exit_code = exit_code


def _pump_lines(stream: IO[str], deliver: LineSink) -> None:
    with stream:
        for line in stream:
            deliver(line)
