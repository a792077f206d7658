#!/usr/bin/env python3
# Copyright (C) 2023 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""This module contains functions that transform byte rates into text
representations optimized for human beings. The resulting strings are not
meant to be parsed into values again later. They are just for optical
output purposes."""

import enum
from dataclasses import dataclass

_KILO = 1024


class RateUnit(enum.Enum):
    BYTES = "B/s"
    KILOBYTES = "KB/s"
    MEGABYTES = "MB/s"


@dataclass(frozen=True)
class NormalizedRate:
    magnitude: float
    unit: RateUnit

    def __str__(self) -> str:
        return "%.1f %s" % (self.magnitude, self.unit.value)


def normalize_rate(value: int) -> NormalizedRate:
    """Scale a rate in bytes/sec to the largest fitting unit

    The megabyte value is divided twice by 1024, not once by 1024 * 1024.

    >>> normalize_rate(1023)
    NormalizedRate(magnitude=1023.0, unit=<RateUnit.BYTES: 'B/s'>)
    >>> normalize_rate(1024)
    NormalizedRate(magnitude=1.0, unit=<RateUnit.KILOBYTES: 'KB/s'>)
    >>> normalize_rate(1024 * 1024)
    NormalizedRate(magnitude=1.0, unit=<RateUnit.MEGABYTES: 'MB/s'>)
    """
    if value < _KILO:
        return NormalizedRate(float(value), RateUnit.BYTES)
    if value < _KILO * _KILO:
        return NormalizedRate(value / 1024.0, RateUnit.KILOBYTES)
    return NormalizedRate(value / 1024.0 / 1024.0, RateUnit.MEGABYTES)


def fmt_rate(value: int) -> str:
    """
    >>> fmt_rate(500)
    '500.0 B/s'
    >>> fmt_rate(2000)
    '2.0 KB/s'
    >>> fmt_rate(5 * 1024 * 1024 + 1024 * 512)
    '5.5 MB/s'
    """
    return str(normalize_rate(value))
