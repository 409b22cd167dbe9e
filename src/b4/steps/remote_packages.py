"""
Check out remote packages and merge them into the project's package manifest
using the K9 tools.
"""

import logging
from typing import List

from ..models.config import HelpEntry
from .base import PROJECT_KEY, Step, k9_directory, project_directory

logger = logging.getLogger(__name__)

SECTION = "Remote Packages"
NO_KEY = "no-remote-packages"
REMOTE_MANIFEST_KEY = "remote-manifest"
UNITY_MANIFEST_KEY = "unity-manifest"


class RemotePackagesStep(Step):
    id = "remotepackages"
    header = "Remote Packages"

    def help_entries(self) -> List[HelpEntry]:
        return [
            HelpEntry(SECTION, NO_KEY, "Do not check out or update remote packages."),
            HelpEntry(SECTION, PROJECT_KEY, "Override the project relative path.", True),
            HelpEntry(SECTION, REMOTE_MANIFEST_KEY, "Remote packages manifest, relative to the project.", True),
            HelpEntry(SECTION, UNITY_MANIFEST_KEY, "Unity packages manifest, relative to the project.", True),
        ]

    def process(self, context) -> None:
        if context.arguments.has(NO_KEY):
            logger.info("Skipped.")
            return

        k9 = k9_directory(context)
        if k9 is None:
            return

        project = project_directory(context)
        remote_manifest = context.resolve(
            REMOTE_MANIFEST_KEY, context.defaults.remote_manifest, transform=lambda value: project / value
        ).value
        unity_manifest = context.resolve(
            UNITY_MANIFEST_KEY, context.defaults.unity_manifest, transform=lambda value: project / value
        ).value

        dotnet = context.defaults.dotnet_executable
        logger.info("Check Manifest ...")
        result = context.supervisor.run(
            dotnet,
            context.root_directory,
            [str(k9 / "K9.Setup.dll"), "Checkout", "--manifest", str(remote_manifest)],
        )
        if not result:
            logger.warning(f"Unable to check out remote packages from {remote_manifest}.")

        logger.info("Update Packages ...")
        result = context.supervisor.run(
            dotnet,
            context.root_directory,
            [
                str(k9 / "K9.Unity.dll"), "RemotePackages",
                "--remote", str(remote_manifest),
                "--unity", str(unity_manifest),
            ],
        )
        if not result:
            logger.warning(f"Unable to update packages in {unity_manifest}.")
