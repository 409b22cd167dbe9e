"""
Command-line argument source.

Options are declared as ``HelpEntry`` records: a fixed set of global options
plus whatever every registered step contributes. They are parsed with
argparse, which also renders ``--help`` grouped by section. Lookups use the
option key without leading dashes, matching the keys used in ``B4.ini``.
"""

import argparse
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..models.config import HelpEntry
from ..validation import validate_option_key

logger = logging.getLogger(__name__)

GENERAL_SECTION = "General"

GLOBAL_OPTIONS: List[HelpEntry] = [
    HelpEntry(GENERAL_SECTION, "root-directory", "Override the root workspace directory.", True),
    HelpEntry(GENERAL_SECTION, "steps", "Comma-separated, ordered list of steps to run.", True),
    HelpEntry(GENERAL_SECTION, "ping-host", "Host probed to decide between online and offline mode.", True),
    HelpEntry(GENERAL_SECTION, "git-executable", "Git client used to synchronize repositories.", True),
    HelpEntry(GENERAL_SECTION, "offline", "Skip the connectivity probe and run in offline mode."),
    HelpEntry(GENERAL_SECTION, "teamcity", "Set TeamCity build parameters for resolved values."),
    HelpEntry(GENERAL_SECTION, "user-env", "Persist resolved values as user environment variables."),
    HelpEntry(GENERAL_SECTION, "verbose", "Log debug output to the console."),
]


def _dest(key: str) -> str:
    return key.replace("-", "_")


def build_parser(entries: Iterable[HelpEntry], prog: str = "b4") -> argparse.ArgumentParser:
    """
    Build an argument parser from help metadata.

    Entries are grouped by section in declaration order. A key declared more
    than once keeps its first declaration.
    """
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Bring a project workspace to a runnable state.",
        allow_abbrev=False,
    )
    groups: Dict[str, Any] = {}
    seen = set()

    for entry in entries:
        key = validate_option_key(entry.key, field_name=f"option of section '{entry.section}'")
        if key in seen:
            logger.debug(f"Option '--{key}' already declared, ignoring duplicate from '{entry.section}'")
            continue
        seen.add(key)

        group = groups.get(entry.section)
        if group is None:
            group = groups[entry.section] = parser.add_argument_group(entry.section)

        if entry.takes_value:
            group.add_argument(f"--{key}", dest=_dest(key), metavar="<value>", help=entry.description)
        else:
            group.add_argument(f"--{key}", dest=_dest(key), action="store_true", help=entry.description)

    return parser


class Arguments:
    """
    Parsed command line.

    Args:
        argv: Tokens to parse (``sys.argv[1:]`` when None)
        entries: Option declarations; the global options are always included

    Note:
        ``--help`` prints usage and raises ``SystemExit(0)`` while parsing.
    """

    def __init__(self, argv: Optional[Sequence[str]] = None, entries: Iterable[HelpEntry] = ()):
        self.entries: List[HelpEntry] = [*GLOBAL_OPTIONS, *entries]
        self.parser = build_parser(self.entries)

        namespace, unknown = self.parser.parse_known_args(argv)
        for token in unknown:
            logger.warning(f"Ignoring unknown argument: {token}")

        self._values: Dict[str, Union[str, bool, None]] = {
            entry.key: getattr(namespace, _dest(entry.key), None) for entry in self.entries
        }

    def has(self, key: str) -> bool:
        """True if the flag was given, or a value was supplied for the option."""
        value = self._values.get(key)
        return value is not None and value is not False

    def try_get(self, key: str) -> Optional[str]:
        """The value supplied for ``--key <value>``, or None."""
        value = self._values.get(key)
        return value if isinstance(value, str) else None

