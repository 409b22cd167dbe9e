"""
Ensure the K9 toolset is available, building it from source when it changed.

A prebuilt K9 directory wins outright. Otherwise the K9 repository is kept in
sync and rebuilt in Release configuration whenever it was cloned or pulled;
an unchanged checkout is never rebuilt. The resulting location is published
as ``K9``.
"""

import logging
from pathlib import Path
from typing import List

from ..models.config import HelpEntry
from ..validation import FatalError, is_existing_directory
from .base import Step

logger = logging.getLogger(__name__)

SECTION = "K9"
NO_KEY = "no-k9"
PREBUILT_KEY = "k9"
REPOSITORY_KEY = "k9-repo"

# Where a Release build of the K9 solution places its assemblies.
BUILD_OUTPUT = Path("Build", "Release")


class K9Step(Step):
    id = "k9"
    header = "K9 Installation"

    def help_entries(self) -> List[HelpEntry]:
        return [
            HelpEntry(SECTION, NO_KEY, "Bypass K9 source download, updating and building."),
            HelpEntry(SECTION, PREBUILT_KEY, "Override the K9 prebuilt relative path.", True),
            HelpEntry(SECTION, REPOSITORY_KEY, "Override the K9 repository relative path.", True),
        ]

    def process(self, context) -> None:
        defaults = context.defaults
        prebuilt = context.resolve(PREBUILT_KEY, defaults.k9_prebuilt, transform=context.rooted).value
        # A repository that does not exist yet is cloned there.
        repository = context.resolve(REPOSITORY_KEY, defaults.k9_repository, transform=context.rooted).value
        built = repository / BUILD_OUTPUT

        if is_existing_directory(prebuilt):
            context.k9_path = prebuilt
            logger.info(f"Found built K9 @ {prebuilt}")
        elif context.arguments.has(NO_KEY):
            context.k9_path = built
            logger.warning("Ignoring K9 download/updating.")
        elif context.is_online:
            context.synchronizer.get_or_update(
                "K9",
                repository,
                defaults.k9_remote,
                on_updated=lambda: self.build(context, repository),
            )
            context.k9_path = built
        else:
            context.k9_path = built
            logger.warning("Skipping K9 updates, unable to reach endpoint.")

        logger.info(f"K9={context.k9_path}")
        context.propagator.publish("K9", str(context.k9_path))

    @staticmethod
    def build(context, repository: Path) -> None:
        """
        Build the K9 solution in Release configuration.

        Raises:
            FatalError: If the build fails
        """
        logger.info("Building K9 (Release) ...")
        result = context.supervisor.run(
            context.defaults.dotnet_executable,
            repository,
            ["build", context.defaults.k9_solution, "--configuration", "Release"],
        )
        if not result:
            raise FatalError("Unable to build K9", result.exit_code)
