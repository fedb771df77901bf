"""Centralized logging configuration."""
import logging
import os
import sys

_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_configured = False


def get_logger(name):
    """Return a named logger; configures the root handler on first call."""
    global _configured
    if not _configured:
        configure(os.environ.get("LOG_LEVEL", "INFO"))
    return logging.getLogger(name)


def configure(level_name="INFO"):
    global _configured
    level = getattr(logging, level_name.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    _configured = True

    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    root.addHandler(console)
