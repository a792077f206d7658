#!/usr/bin/env python3
# Copyright (C) 2023 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import io
import logging

import pytest

from mrtgtraf import log


@pytest.mark.parametrize(
    "verbosity, level",
    [
        (0, logging.WARNING),
        (1, log.VERBOSE),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ],
)
def test_verbosity_to_log_level(verbosity: int, level: int) -> None:
    assert log.verbosity_to_log_level(verbosity) == level


def test_negative_verbosity() -> None:
    with pytest.raises(ValueError):
        log.verbosity_to_log_level(-1)


def test_verbose_level_name() -> None:
    assert logging.getLevelName(log.VERBOSE) == "VERBOSE"


def test_setup_console_logging() -> None:
    stream = io.StringIO()
    log.setup_console_logging(1, stream)

    logging.getLogger("mrtgtraf.test").log(log.VERBOSE, "shown")
    logging.getLogger("mrtgtraf.test").debug("hidden")

    assert len(log.logger.handlers) == 1
    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert lines[0].endswith("[15] [mrtgtraf.test] shown")


def test_clear_console_logging() -> None:
    log.setup_console_logging(2, io.StringIO())
    log.clear_console_logging()
    assert [type(h) for h in log.logger.handlers] == [logging.NullHandler]
    assert log.logger.level == logging.WARNING
