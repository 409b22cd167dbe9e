"""
Open the project in the Unity editor found by the ``findunity`` step.
"""

import logging
from typing import List

from ..models.config import HelpEntry
from ..validation import is_existing_file
from .base import Step, project_directory
from .find_unity import NO_KEY as FIND_UNITY_NO_KEY

logger = logging.getLogger(__name__)

SECTION = "Launch Unity"
NO_KEY = "no-launch"


class LaunchUnityStep(Step):
    id = "launchunity"
    header = "Launch Unity"

    def help_entries(self) -> List[HelpEntry]:
        return [HelpEntry(SECTION, NO_KEY, "Do not launch project in Unity upon execution.")]

    def process(self, context) -> None:
        if context.arguments.has(NO_KEY) or context.arguments.has(FIND_UNITY_NO_KEY):
            logger.info("Skipped.")
            return

        editor = context.unity_editor
        if editor is None or not is_existing_file(editor):
            logger.warning("No Unity editor available to launch.")
            return

        project = project_directory(context)
        logger.info("Launching Editor ...")
        if not context.supervisor.launch_detached(str(editor), project, ["-projectPath", str(project)]):
            logger.error("ERROR -1: Failed to launch Unity.")
            context.record_error(-1)
