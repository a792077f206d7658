#!/usr/bin/env python3
# Copyright (C) 2023 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from mrtgtraf.render import fmt_rate, normalize_rate, NormalizedRate, RateUnit


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param(0, NormalizedRate(0.0, RateUnit.BYTES), id="zero"),
        pytest.param(1023, NormalizedRate(1023.0, RateUnit.BYTES), id="largest bytes"),
        pytest.param(1024, NormalizedRate(1.0, RateUnit.KILOBYTES), id="smallest kilobytes"),
        pytest.param(
            1024 * 1024 - 1,
            NormalizedRate((1024 * 1024 - 1) / 1024.0, RateUnit.KILOBYTES),
            id="largest kilobytes",
        ),
        pytest.param(1024 * 1024, NormalizedRate(1.0, RateUnit.MEGABYTES), id="smallest megabytes"),
        pytest.param(
            1024**4,
            NormalizedRate(1024.0 * 1024.0, RateUnit.MEGABYTES),
            id="no unit beyond megabytes",
        ),
    ],
)
def test_normalize_rate_buckets(value: int, expected: NormalizedRate) -> None:
    assert normalize_rate(value) == expected


def test_megabytes_are_divided_twice() -> None:
    value = 123456789
    assert normalize_rate(value).magnitude == value / 1024.0 / 1024.0


def test_units_increase_monotonically() -> None:
    order = [RateUnit.BYTES, RateUnit.KILOBYTES, RateUnit.MEGABYTES]
    units = [
        normalize_rate(v).unit
        for v in (0, 1, 1023, 1024, 1025, 500000, 1048575, 1048576, 1048577, 10**12)
    ]
    indices = [order.index(u) for u in units]
    assert indices == sorted(indices)
    assert set(units) == set(order)


@pytest.mark.parametrize("value", [0, 500, 1023, 2000, 3000, 999999, 1536000, 123456789])
def test_displayed_magnitude_is_close_to_the_ratio(value: int) -> None:
    normalized = normalize_rate(value)
    displayed = float(str(normalized).split()[0])
    assert abs(displayed - normalized.magnitude) < 0.05


@pytest.mark.parametrize(
    "value, expected",
    [
        (500, "500.0 B/s"),
        (900, "900.0 B/s"),
        (2000, "2.0 KB/s"),
        (3000, "2.9 KB/s"),
        (1024 * 1024, "1.0 MB/s"),
        (1536000, "1.5 MB/s"),
    ],
)
def test_fmt_rate(value: int, expected: str) -> None:
    assert fmt_rate(value) == expected
