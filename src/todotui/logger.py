"""Logger configuration.

Usage:
    from .logger import get_logger
    logger = get_logger(__name__)

The terminal belongs to the UI while it runs, so records go to a rotating
log file and never to stdout. Until setup_logging() is called, records are
dropped.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

ROOT = "todotui"
DEFAULT_LEVEL = "ERROR"
DEFAULT_LOG_FILE = os.path.join(os.path.expanduser("~"), ".todotui.log")

logging.getLogger(ROOT).addHandler(logging.NullHandler())


def setup_logging(level: str = DEFAULT_LEVEL, path: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(ROOT)
    # reset handlers so repeated setup (tests, CLI flags) controls output
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    fh = RotatingFileHandler(path or DEFAULT_LOG_FILE, maxBytes=2_000_000, backupCount=2, encoding="utf-8")
    fh.setLevel(getattr(logging, level.upper(), logging.ERROR))
    fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(fh)
    return logger


def get_logger(name: str) -> logging.Logger:
    if not name.startswith(ROOT):
        name = f"{ROOT}.{name}"
    return logging.getLogger(name)
