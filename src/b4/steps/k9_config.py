"""
Apply the K9 config: write a default file when none exists, then publish
every entry it contains.
"""

import logging
from typing import List

from ..config.manager import SimpleConfig
from ..models.config import K9_CONFIG_DEFAULT_CONTENT, HelpEntry
from ..validation import ErrorSeverity, FatalError, handle_file_error
from .base import Step

logger = logging.getLogger(__name__)

SECTION = "K9 Config"
CONFIG_KEY = "k9-config"


class K9ConfigStep(Step):
    id = "k9config"
    header = "K9 Config"

    def help_entries(self) -> List[HelpEntry]:
        return [HelpEntry(SECTION, CONFIG_KEY, "Override the K9 config file relative path.", True)]

    def process(self, context) -> None:
        config_path = context.resolve(CONFIG_KEY, context.defaults.k9_config, transform=context.rooted).value
        logger.info(f"configPath={config_path}")

        if not config_path.exists():
            logger.info(f"Creating default {config_path.name} config ...")
            try:
                config_path.parent.mkdir(parents=True, exist_ok=True)
                config_path.write_text(K9_CONFIG_DEFAULT_CONTENT, encoding="utf-8")
            except OSError as e:
                handle_file_error(
                    error=e,
                    context=f"writing default config {config_path}",
                    severity=ErrorSeverity.ERROR,
                    reraise=False,
                    logger=logger,
                )
                raise FatalError(f"Unable to write default {config_path.name}.", -1) from e

        logger.info("Loading K9 config ...")
        loaded = SimpleConfig.from_file(config_path, description="K9 config")
        for name, value in loaded.items():
            context.propagator.publish(name, value)
