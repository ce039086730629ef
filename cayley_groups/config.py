import os
import logging
import numpy as np

# ------------ config ------------
INDEX_DTYPE = np.int64
CACHE_ROOT  = os.environ.get("CAYLEY_GROUPS_CACHE", "cache")
LOG_LEVEL   = os.environ.get("CAYLEY_GROUPS_LOG_LEVEL", "WARNING").upper()
CACHE_SCHEMA = 1
# --------------------------------


def configure_logging(level=None):
    """apply `level` (or LOG_LEVEL) to the package logger; handlers are left to the application"""
    logger = logging.getLogger("cayley_groups")
    level = LOG_LEVEL if level is None else level
    try:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    except (ValueError, TypeError):
        logger.setLevel(logging.WARNING)
        logger.warning("unknown log level %r, falling back to WARNING", level)
    return logger
