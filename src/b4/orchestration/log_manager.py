"""
Log management for the orchestration module.

This module handles the diagnostic log file written to the root directory on
every run: rotating the previous log aside, attaching a file handler to the
root logger, and flushing and detaching it before the process exits.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from ..models.config import LOG_FILE_NAME
from ..validation import ErrorSeverity, handle_file_error

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogManager:
    """
    Owns the ``B4.log`` file handler for one run.

    The previous run's log is kept as ``B4.log.prev``.
    """

    def __init__(self, root_directory: Path, file_name: str = LOG_FILE_NAME):
        self.log_file = Path(root_directory) / file_name
        self.handler: Optional[logging.FileHandler] = None

    @property
    def previous_log_file(self) -> Path:
        return self.log_file.with_name(self.log_file.name + ".prev")

    def open_log_file(self) -> bool:
        """
        Rotate the previous log and start writing a new one.

        Returns:
            True if the log file is attached, False if it could not be opened
            (console logging continues either way)
        """
        try:
            if self.log_file.exists():
                shutil.copyfile(self.log_file, self.previous_log_file)
                self.log_file.unlink()

            self.handler = logging.FileHandler(self.log_file, mode="w", encoding="utf-8")
        except OSError as e:
            handle_file_error(
                error=e,
                context=f"opening log file {self.log_file}",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
            self.handler = None
            return False

        self.handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        self.handler.setLevel(logging.DEBUG)
        logging.getLogger().addHandler(self.handler)
        logger.debug(f"Writing log file: {self.log_file}")
        return True

    def close_log_file(self) -> None:
        """Flush and detach the file handler."""
        if self.handler is None:
            return
        self.handler.flush()
        logging.getLogger().removeHandler(self.handler)
        self.handler.close()
        self.handler = None
