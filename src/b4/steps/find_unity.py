"""
Locate the Unity editor matching the workspace's ``UNITY_VERSION``.

The lookup itself is done by ``K9.Unity.dll FindEditor``, which writes the
editor path to a temporary file that is read back and removed.
"""

import logging
from typing import List

from ..models.config import HelpEntry
from .base import Step, k9_directory

logger = logging.getLogger(__name__)

SECTION = "Find Unity"
NO_KEY = "no-find-unity"
VERSION_FILE_KEY = "unity-version"


class FindUnityStep(Step):
    id = "findunity"
    header = "Find Unity"

    def help_entries(self) -> List[HelpEntry]:
        return [
            HelpEntry(
                SECTION, NO_KEY,
                "Do not find the Unity installation. This will also force skipping the launch of the editor.",
            ),
            HelpEntry(SECTION, VERSION_FILE_KEY, "Override the UNITY_VERSION file relative path.", True),
        ]

    def process(self, context) -> None:
        if context.arguments.has(NO_KEY):
            logger.info("Skipped.")
            return

        k9 = k9_directory(context)
        if k9 is None:
            return

        temporary_file = context.root_directory / context.defaults.unity_editor_temp_file
        version_file = context.resolve(
            VERSION_FILE_KEY, context.defaults.unity_version_file, transform=context.rooted
        ).value
        logger.debug(f"temporaryFile={temporary_file}")
        logger.debug(f"inputPath={version_file}")

        logger.info("Launch K9.Unity::FindEditor ...")
        context.supervisor.run(
            context.defaults.dotnet_executable,
            context.root_directory,
            [
                str(k9 / "K9.Unity.dll"), "FindEditor",
                "--input", str(version_file),
                "--output", str(temporary_file),
            ],
        )

        if not temporary_file.exists():
            logger.warning("Unable to find desired Unity editor version.")
            return

        editor = temporary_file.read_text(encoding="utf-8").strip()
        temporary_file.unlink()
        if not editor:
            logger.warning("Unity editor lookup produced an empty path.")
            return

        context.unity_editor = context.rooted(editor)
        logger.info(f"UNITY_EDITOR={context.unity_editor}")
        context.propagator.publish("UNITY_EDITOR", str(context.unity_editor))
