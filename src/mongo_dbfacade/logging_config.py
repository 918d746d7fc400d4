"""
Logging setup for the Mongo DB Facade.

Library modules only create module loggers. Handlers are installed here,
by the CLI and the HTTP service, at the level named in the configuration.
"""

import logging
import sys

from .config import MongoFacadeConfig


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Install a stderr handler on the root logger.

    Args:
        level: Level name overriding the configured one
    """
    level_name = (level or MongoFacadeConfig.get_log_level()).upper()

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.addHandler(handler)

    # The driver logs heartbeats and pool events at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)
