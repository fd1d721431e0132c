"""
Logging setup - one stream handler on the root logger.

Called once from the app startup hook. Modules log through
logging.getLogger(__name__).
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the application."""
    global _configured
    root = logging.getLogger()
    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        _configured = True
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
