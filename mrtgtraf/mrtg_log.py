#!/usr/bin/env python3
# Copyright (C) 2023 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

# Reading the newest sample from an MRTG log file.
#
# MRTG writes its log files newest entry first. The first line holds the
# current counter values and is of no use for us, the second line is the
# most recent consolidated sample:
#
# 1696243800 3172489137 2289317373
# 1696243800 4210 1522 4210 1522
# 1696243500 4378 1711 4876 1839
# 1696243200 3952 1417 4378 1711
#
# Fields of a data line: timestamp, average incoming rate, average outgoing
# rate, maximum incoming rate, maximum outgoing rate (all in bytes/sec).
# Only the second line is read, no matter how long the log is.

import itertools
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from mrtgtraf.exceptions import LogTooShort, LogUnavailable, MalformedField

LOGGER = logging.getLogger("mrtgtraf.mrtg_log")

_FIELDS = ("timestamp", "avg_in", "avg_out", "max_in", "max_out")

# Fields are unsigned 64 bit values
_UNSIGNED = re.compile(r"\+?[0-9]+")
MAX_COUNTER = 2**64 - 1
_LEADING_DIGITS = re.compile(r"\s*\+?([0-9]*)")


@dataclass(frozen=True)
class LogRecord:
    timestamp: int
    avg_in: int
    avg_out: int
    max_in: int
    max_out: int


def read_log_record(path: str | Path, *, strict: bool = True) -> LogRecord:
    """Return the first data line (the second line) of the MRTG log"""
    LOGGER.debug("Reading MRTG log file %s", path)
    try:
        with open(path, encoding="utf-8", errors="replace") as log_file:
            lines = list(itertools.islice(log_file, 2))
    except OSError as e:
        raise LogUnavailable(f"Unable to open MRTG log file {path}: {e.strerror or e}") from e

    # The header and a single data line are a complete log
    if len(lines) < 2:
        raise LogTooShort(f"Unable to process MRTG log file {path}: no data line found")

    return parse_record_line(lines[1], strict=strict)


def parse_record_line(line: str, *, strict: bool = True) -> LogRecord:
    """
    >>> parse_record_line("1000000000 500 2000 900 3000\\n")
    LogRecord(timestamp=1000000000, avg_in=500, avg_out=2000, max_in=900, max_out=3000)
    >>> parse_record_line("1000000000 500 n/a", strict=False)
    LogRecord(timestamp=1000000000, avg_in=500, avg_out=0, max_in=0, max_out=0)
    """
    tokens = line.split()
    LOGGER.debug("Data line tokens: %r", tokens)
    if strict:
        return _parse_strict(tokens)
    return _parse_lenient(tokens)


def _parse_strict(tokens: list[str]) -> LogRecord:
    if len(tokens) != len(_FIELDS):
        raise MalformedField("data line", " ".join(tokens))

    for field, token in zip(_FIELDS, tokens):
        if not _UNSIGNED.fullmatch(token) or int(token) > MAX_COUNTER:
            raise MalformedField(field, token)

    return LogRecord(*(int(token) for token in tokens))


def _parse_lenient(tokens: list[str]) -> LogRecord:
    # Legacy behaviour: like strtoul(), use the leading digits of every
    # field and treat anything else (including missing fields) as 0.
    padded = itertools.chain(tokens, itertools.repeat(""))
    return LogRecord(*(_tolerant_int(token) for token in itertools.islice(padded, len(_FIELDS))))


def _tolerant_int(token: str) -> int:
    """
    >>> _tolerant_int("42")
    42
    >>> _tolerant_int("42kb")
    42
    >>> _tolerant_int("-")
    0
    """
    digits = _LEADING_DIGITS.match(token).group(1)  # type: ignore[union-attr]
    return int(digits) if digits else 0
