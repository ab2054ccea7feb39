import logging
import os
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, level: Optional[str] = None) -> None:
    """Configure root logging for the command-line driver.

    The rules themselves never log; only the per-match objects and the CLI do.
    """

    if level is None:
        level = os.getenv("QTTT_LOG_LEVEL", "WARNING").upper()

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=_FORMAT)
    root_logger.setLevel(level)
