#!/usr/bin/env python3
# Copyright (C) 2023 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
import sys
from typing import IO

# Just for reference, the levels used by the check:
#
# Python         added here     meaning
# ---------------------------------------------------------------
# WARNING  30                   <= default, keeps the plug-in quiet
#                VERBOSE  15    selected rates and classification
# DEBUG    10                   file access and field parsing
#
# Everything goes to stderr. stdout belongs to the monitoring core and
# must only ever contain the one line of check output.
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("mrtgtraf")


def get_formatter(format_str: str = "%(asctime)s [%(levelno)s] [%(name)s] %(message)s") -> logging.Formatter:
    return logging.Formatter(format_str)


def clear_console_logging() -> None:
    logger.handlers[:] = []
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.WARNING)


# Set default logging handler to avoid "No handler found" warnings.
clear_console_logging()


def setup_console_logging(verbosity: int = 0, stream: IO[str] | None = None) -> None:
    """Write log messages of the check to stderr (or the given stream)

    The level is derived from the number of -v options."""
    setup_logging_handler(sys.stderr if stream is None else stream)
    logger.setLevel(verbosity_to_log_level(verbosity))


def setup_logging_handler(stream: IO[str], formatter: logging.Formatter | None = None) -> None:
    if formatter is None:
        formatter = get_formatter()

    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(formatter)

    del logger.handlers[:]  # Remove all previously existing handlers
    logger.addHandler(handler)


def verbosity_to_log_level(verbosity: int) -> int:
    """Values for "verbosity":

      0: enables WARNING and above
      1: enables VERBOSE and above
      2 or more: enables DEBUG and above (ALL messages)

    >>> verbosity_to_log_level(0) == logging.WARNING
    True
    >>> verbosity_to_log_level(3) == logging.DEBUG
    True
    """
    if verbosity < 0:
        raise ValueError(verbosity)
    if verbosity == 0:
        return logging.WARNING
    if verbosity == 1:
        return VERBOSE
    return logging.DEBUG
