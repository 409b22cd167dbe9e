"""
Bootstrap steps.

Every step the bootstrapper knows about is listed in ``default_steps``; the
order there is the registration order and the order options appear in help.
Which steps actually run, and in what order, is decided by the ``steps``
parameter.
"""

from typing import List

from .base import Step
from .bootstrapper import BootstrapperStep
from .find_unity import FindUnityStep
from .k9 import K9Step
from .k9_config import K9ConfigStep
from .launch_unity import LaunchUnityStep
from .remote_packages import RemotePackagesStep
from .vcs_triggers import VCSTriggersStep


def default_steps() -> List[Step]:
    """Fresh instances of every known step, in registration order."""
    return [
        BootstrapperStep(),
        K9Step(),
        K9ConfigStep(),
        RemotePackagesStep(),
        FindUnityStep(),
        VCSTriggersStep(),
        LaunchUnityStep(),
    ]


__all__ = [
    "Step",
    "default_steps",
    "BootstrapperStep",
    "K9Step",
    "K9ConfigStep",
    "RemotePackagesStep",
    "FindUnityStep",
    "VCSTriggersStep",
    "LaunchUnityStep",
]
