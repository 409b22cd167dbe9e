"""
Command-line interface for the B4 bootstrapper.

This module provides the ``b4`` entry point. It wires the run together:
logging and the log file, the argument and configuration sources, the
process supervisor, the online probe and the step pipeline. It is also the
single place where the process terminates, with the exit code the run
produced.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..config import load_config
from ..models.config import DEFAULTS
from ..orchestration import LogManager, RunContext, StepPipeline
from ..steps import default_steps
from ..system import (
    EnvironmentPropagator,
    ProcessSupervisor,
    RepositorySynchronizer,
    UserEnvironmentStore,
    is_host_reachable,
)
from ..validation import (
    ErrorSeverity,
    FatalError,
    ValidationError,
    handle_cli_error,
    handle_error,
    is_non_empty,
    validate_path_exists,
)
from .arguments import Arguments

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def _configure_levels(verbose: bool) -> None:
    # The root logger passes everything so the log file gets debug output;
    # console handlers filter according to --verbose.
    root = logging.getLogger()
    console_level = logging.DEBUG if verbose else logging.INFO
    for handler in root.handlers:
        handler.setLevel(console_level)
    root.setLevel(logging.DEBUG)


def _resolve_root_directory(arguments: Arguments) -> Path:
    raw = arguments.try_get("root-directory")
    if raw is None:
        return Path(os.getcwd())

    try:
        validated = validate_path_exists(os.path.expanduser(raw), field_name="--root-directory")
    except ValidationError as e:
        handle_cli_error(
            error=e,
            context="root directory validation",
            exit_code=1,
            logger=logger,
        )
    return Path(os.path.abspath(validated))


def _run(pipeline: StepPipeline, arguments: Arguments, root_directory: Path) -> int:
    """Set up the run context, run the configured steps and return the exit code."""
    config = load_config(root_directory)
    supervisor = ProcessSupervisor()
    propagator = EnvironmentPropagator(
        publish_to_ci=arguments.has("teamcity"),
        persist_for_user=arguments.has("user-env"),
        user_store=UserEnvironmentStore(os.path.expanduser(DEFAULTS.user_environment_file)),
    )

    context = RunContext(
        root_directory=root_directory,
        arguments=arguments,
        config=config,
        supervisor=supervisor,
        propagator=propagator,
        synchronizer=RepositorySynchronizer(supervisor),
    )
    context.synchronizer.git_executable = context.resolve(
        "git-executable", DEFAULTS.git_executable, validate=is_non_empty
    ).value

    if arguments.has("offline"):
        context.is_online = False
        logger.info("Offline mode requested.")
    else:
        ping_host = context.resolve("ping-host", DEFAULTS.ping_host, validate=is_non_empty).value
        context.is_online = is_host_reachable(ping_host, DEFAULTS.ping_port, DEFAULTS.ping_timeout)
        logger.info(f"Online mode: {context.is_online}")

    try:
        ordered = pipeline.build_order(context.resolve("steps", DEFAULTS.steps).value)
    except FatalError as e:
        logger.error(str(e))
        return e.exit_code or 1

    logger.info(f"Steps: {', '.join(step.id for step in ordered)}")
    result = pipeline.run(ordered, context)
    if not result.ok:
        # A fatal run never reports success.
        return result.exit_code or 1
    return context.exit_code


def main_cli(argv: Optional[Sequence[str]] = None) -> None:
    """
    Main command-line interface for the B4 bootstrapper.

    This function handles:
    - Help metadata aggregation from every registered step
    - Command-line parsing and root directory selection
    - The ``B4.log`` file and the ``B4.ini`` configuration source
    - Online/offline detection
    - Running the configured steps in order

    Unexpected errors are logged as critical and end the run with exit
    code 1; the log file is closed on every path.

    Args:
        argv: Command-line tokens, ``sys.argv[1:]`` when None

    Raises:
        SystemExit: Always; with 0 on success, otherwise the failing exit code
    """
    pipeline = StepPipeline(default_steps())
    arguments = Arguments(argv, pipeline.help_entries())
    _configure_levels(arguments.has("verbose"))

    root_directory = _resolve_root_directory(arguments)

    log_manager = LogManager(root_directory)
    log_manager.open_log_file()
    exit_code = 1
    try:
        logger.info(f"B4 bootstrapper for {DEFAULTS.project_name}")
        logger.info(f"rootDirectory={root_directory}")
        exit_code = _run(pipeline, arguments, root_directory)
    except Exception as e:
        handle_error(
            error=e,
            context="bootstrap run",
            severity=ErrorSeverity.CRITICAL,
            reraise=False,
            logger=logger,
        )
    finally:
        logger.info(f"Exit code: {exit_code}")
        log_manager.close_log_file()

    sys.exit(exit_code)


if __name__ == "__main__":
    main_cli()
