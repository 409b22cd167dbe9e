"""
Make sure the workspace's version control runs the bootstrapper after updates.

Only PlasticSCM triggers are managed; git workspaces are detected and
reported.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import List

from ..models.config import HelpEntry
from ..validation import is_non_empty
from .base import Step

logger = logging.getLogger(__name__)

SECTION = "VCS Triggers"
NO_KEY = "no-vcs-triggers"
EXECUTABLE_KEY = "vcs-executable"
TRIGGER_LIST_KEY = "vcs-trigger-list"
TRIGGER_CREATE_KEY = "vcs-trigger-create"


class Provider(Enum):
    NONE = "none"
    PLASTIC = "plastic"
    GIT = "git"


def detect_provider(root_directory: Path) -> Provider:
    if (root_directory / ".plastic").is_dir():
        return Provider.PLASTIC
    if (root_directory / ".git").exists():
        return Provider.GIT
    return Provider.NONE


class VCSTriggersStep(Step):
    id = "vcstriggers"
    header = "VCS Triggers"

    def help_entries(self) -> List[HelpEntry]:
        return [
            HelpEntry(SECTION, NO_KEY, "Do not check for vcs commit and update triggers."),
            HelpEntry(SECTION, EXECUTABLE_KEY, "VCS command line client used to manage triggers.", True),
            HelpEntry(SECTION, TRIGGER_LIST_KEY, "Arguments that list the workspace triggers.", True),
            HelpEntry(SECTION, TRIGGER_CREATE_KEY, "Arguments that create the bootstrap trigger.", True),
        ]

    def process(self, context) -> None:
        if context.arguments.has(NO_KEY):
            logger.info("Skipped.")
            return

        provider = detect_provider(context.root_directory)
        if provider is Provider.PLASTIC:
            logger.info("Checking PlasticSCM triggers ...")
            self.check_plastic(context)
        elif provider is Provider.GIT:
            logger.info("Git workspace detected, no triggers to manage.")
        else:
            logger.info("No supported version control detected.")

    def check_plastic(self, context) -> None:
        defaults = context.defaults
        executable = context.resolve(EXECUTABLE_KEY, defaults.vcs_executable, validate=is_non_empty).value
        list_arguments = context.resolve(TRIGGER_LIST_KEY, defaults.vcs_trigger_list, validate=is_non_empty).value
        create_arguments = context.resolve(
            TRIGGER_CREATE_KEY, defaults.vcs_trigger_create, validate=is_non_empty
        ).value

        found = False

        def scan(line: str) -> None:
            nonlocal found
            if defaults.vcs_trigger_name in line.strip():
                found = True

        result = context.supervisor.run(executable, context.root_directory, list_arguments, on_line=scan)
        if not result:
            logger.warning("Unable to list workspace triggers.")
            return

        if found:
            logger.info("Found existing trigger.")
            return

        logger.info(f"Creating '{defaults.vcs_trigger_name}' trigger ...")
        if not context.supervisor.run(executable, context.root_directory, create_arguments):
            logger.warning(f"Unable to create '{defaults.vcs_trigger_name}' trigger.")
