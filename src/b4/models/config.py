"""
Configuration data models.

This module contains the builtin defaults for every tunable the bootstrapper
resolves, together with the records used to describe resolved parameters and
the help metadata each step contributes.
"""

from dataclasses import dataclass
from typing import Any, Dict

# Name of the bootstrapper's own configuration file, looked up in the root directory.
CONFIG_FILE_NAME = "B4.ini"

# Name of the diagnostic log written to the root directory.
LOG_FILE_NAME = "B4.log"

# Environment variables injected into every supervised child process.
CHILD_ENVIRONMENT: Dict[str, str] = {
    "DOTNET_CLI_TELEMETRY_OPTOUT": "true",
}

# Content written when the K9 config file does not exist yet.
K9_CONFIG_DEFAULT_CONTENT = "STEAM_Username=UNDEFINED\nSTEAM_Password=UNDEFINED\n"


@dataclass(frozen=True)
class BootstrapDefaults:
    """
    Builtin defaults, the lowest tier of the parameter cascade.

    Relative paths are resolved against the root directory by the steps that
    consume them.
    """

    project_name: str = "NightOwl"
    steps: str = "bootstrapper,k9,k9config,remotepackages,findunity,launchunity"
    ping_host: str = "github.com"
    ping_port: int = 443
    ping_timeout: float = 3.0

    # Executables invoked through the process supervisor
    git_executable: str = "git"
    dotnet_executable: str = "dotnet"

    # Repositories
    b4_repository: str = "Projects/B4"
    b4_remote: str = "https://github.com/dotBunny/B4"
    k9_prebuilt: str = "K9"
    k9_repository: str = "Projects/K9"
    k9_remote: str = "https://github.com/dotBunny/K9"
    k9_solution: str = "K9.sln"

    # Project layout
    project: str = "Projects/NightOwl"
    remote_manifest: str = "RemotePackages/manifest.json"
    unity_manifest: str = "Packages/manifest.json"
    unity_version_file: str = "UNITY_VERSION"
    unity_editor_temp_file: str = "UNITY_EDITOR.tmp"
    k9_config: str = "K9.ini"

    # PlasticSCM trigger that re-runs the bootstrapper after every update
    vcs_executable: str = "cm"
    vcs_trigger_name: str = "Execute B4"
    vcs_trigger_list: str = "trigger list"
    vcs_trigger_create: str = (
        'trigger create after-update "Execute B4" "dotnet @WKSPACE_PATH/B4.dll --no-launch"'
    )

    # User environment persistence (non-Windows platforms)
    user_environment_file: str = "~/.b4/environment"


DEFAULTS = BootstrapDefaults()


@dataclass(frozen=True)
class HelpEntry:
    """A single option a step exposes on the command line."""

    # Title of the help group the option is listed under.
    section: str
    # Option key without leading dashes, e.g. "no-launch".
    key: str
    description: str
    # True for "--key <value>" options, False for boolean flags.
    takes_value: bool = False


@dataclass
class ResolvedParameter:
    """
    Outcome of resolving one parameter through the default/config/CLI cascade.
    """

    key: str
    value: Any
    # True only when the config or CLI tier replaced the builtin default.
    was_overridden: bool = False
    # Tier that produced the value: "default", "config" or "cli".
    source: str = "default"

    def as_tuple(self):
        """Return ``(value, was_overridden)``."""
        return self.value, self.was_overridden
