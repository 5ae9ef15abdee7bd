"""Logging setup for the terser plugin CLI."""

import os
import sys

from loguru import logger

VERBOSE = "VERBOSE"

# log:<level> event suffix -> loguru level name
LEVELS = {
    "error": "ERROR",
    "warn": "WARNING",
    "info": "INFO",
    "verbose": VERBOSE,
    "debug": "DEBUG",
}


def ensure_verbose_level() -> None:
    """Register the VERBOSE level (between DEBUG and INFO) once."""
    try:
        logger.level(VERBOSE)
    except ValueError:
        logger.level(VERBOSE, no=15, color="<cyan>")


def loguru_level(level: str) -> str:
    """Map a host log level to a loguru level name, defaulting to INFO."""
    return LEVELS.get(level.lower(), "INFO")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Setup logging for a command."""
    ensure_verbose_level()

    # Remove default logger
    logger.remove()

    if verbose or os.environ.get("PLUGIN_TERSER_VERBOSE", "0") == "1":
        logger.add(sys.stderr, level="DEBUG")
    elif quiet or os.environ.get("PLUGIN_TERSER_QUIET", "0") == "1":
        logger.add(sys.stderr, level="ERROR")
    else:
        logger.add(sys.stderr, level="INFO")
