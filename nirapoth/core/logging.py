import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a console handler to the ``nirapoth`` logger hierarchy.

    Calling it again only updates the level.
    """
    from nirapoth.core.config import settings

    logger = logging.getLogger("nirapoth")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(getattr(h, "_nirapoth", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._nirapoth = True
        logger.addHandler(handler)

    return logger
