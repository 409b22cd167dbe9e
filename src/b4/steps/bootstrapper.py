"""
Keep the bootstrapper's own source checkout current.
"""

import logging
from typing import List

from ..models.config import HelpEntry
from ..validation import is_existing_directory
from .base import Step

logger = logging.getLogger(__name__)

SECTION = "B4"
NO_KEY = "no-b4"
REPOSITORY_KEY = "b4-repo"


class BootstrapperStep(Step):
    id = "bootstrapper"
    header = "B4 Source Code"

    def help_entries(self) -> List[HelpEntry]:
        return [
            HelpEntry(SECTION, NO_KEY, "Bypass B4 source download and updating."),
            HelpEntry(SECTION, REPOSITORY_KEY, "Override the B4 repository relative path.", True),
        ]

    def process(self, context) -> None:
        repository = context.resolve(
            REPOSITORY_KEY,
            context.defaults.b4_repository,
            transform=context.rooted,
            validate=is_existing_directory,
        ).value
        logger.info(f"repositoryDirectory={repository}")

        if context.arguments.has(NO_KEY):
            logger.warning("Ignoring B4 download/updating.")
            return
        if not context.is_online:
            logger.warning("Skipping B4 updates, unable to reach endpoint.")
            return

        context.synchronizer.get_or_update("B4", repository, context.defaults.b4_remote)

        revision = context.synchronizer.get_local_revision(repository)
        if revision:
            logger.info(f"B4 revision={revision}")
