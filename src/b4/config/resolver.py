"""
Parameter resolution cascade.

Every tunable the bootstrapper uses is resolved the same way: the builtin
default, then the configuration file, then the command line, each candidate
optionally transformed and gated by a validate hook. A rejected candidate
never replaces the value from a lower tier.
"""

import logging
from typing import Any, Callable, Optional, Protocol

from ..models.config import ResolvedParameter
from ..validation import ValidationError

logger = logging.getLogger(__name__)

Transform = Callable[[Any], Any]
Validate = Callable[[Any], bool]


class ConfigSource(Protocol):
    def try_get(self, key: str) -> Optional[str]: ...


class ArgumentSource(Protocol):
    def has(self, key: str) -> bool: ...

    def try_get(self, key: str) -> Optional[str]: ...


class ParameterResolver:
    """
    Resolves named parameters from three tiers in ascending priority:
    builtin default < configuration file < command line.
    """

    def __init__(self, config: ConfigSource, arguments: ArgumentSource):
        self.config = config
        self.arguments = arguments

    def resolve(
        self,
        key: str,
        builtin_default: Any,
        transform: Optional[Transform] = None,
        validate: Optional[Validate] = None,
    ) -> ResolvedParameter:
        """
        Resolve ``key``.

        The builtin default is transformed but never validated, so resolution
        always produces a value. Config and CLI candidates are accepted only
        when ``validate`` is absent or passes; the CLI wins over the config
        file when both are accepted.

        Args:
            key: Parameter name, shared by the config file and the command line
            builtin_default: Value used when no override is accepted
            transform: Applied to every raw candidate before validation
            validate: Gate for override candidates

        Returns:
            The resolved parameter, with ``was_overridden`` set only when an
            override tier actually replaced the default
        """
        result = ResolvedParameter(
            key=key,
            value=transform(builtin_default) if transform else builtin_default,
        )

        self._apply_tier(result, "config", self.config.try_get(key), transform, validate)
        self._apply_tier(result, "cli", self.arguments.try_get(key), transform, validate)

        logger.debug(
            f"Resolved parameter '{key}' = {result.value!r} (source: {result.source})"
        )
        return result

    def _apply_tier(
        self,
        result: ResolvedParameter,
        source: str,
        raw_value: Optional[str],
        transform: Optional[Transform],
        validate: Optional[Validate],
    ) -> None:
        if raw_value is None:
            return

        try:
            candidate = transform(raw_value) if transform else raw_value
            accepted = validate(candidate) if validate else True
        except (ValidationError, ValueError, TypeError, OSError) as e:
            logger.warning(f"Rejected {source} value for '{result.key}': {raw_value!r} ({e})")
            return

        if not accepted:
            logger.warning(f"Rejected {source} value for '{result.key}': {raw_value!r}")
            return

        result.value = candidate
        result.was_overridden = True
        result.source = source
