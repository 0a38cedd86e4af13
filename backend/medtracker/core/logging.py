from __future__ import annotations

import logging

from medtracker.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Set the process-wide log level and format.

    Lambda installs its own root handler before our code runs, so the level is
    applied to the root logger directly instead of relying on ``basicConfig``
    alone.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    # botocore is chatty at INFO when credentials are resolved
    logging.getLogger("botocore").setLevel(max(level, logging.WARNING))
