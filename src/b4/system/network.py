"""
Connectivity probe used to decide between online and offline mode.
"""

import logging
import socket

logger = logging.getLogger(__name__)


def is_host_reachable(host: str, port: int = 443, timeout: float = 3.0) -> bool:
    """Return True if a TCP connection to ``host:port`` can be opened within ``timeout``."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as e:
        logger.warning(f"Unable to reach {host}:{port}: {e}")
        return False
