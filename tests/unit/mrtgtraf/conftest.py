#!/usr/bin/env python3
# Copyright (C) 2023 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest

from mrtgtraf import log


@pytest.fixture(name="write_log")
def fixture_write_log(tmp_path: Path) -> Callable[[Sequence[str]], Path]:
    def _write(lines: Sequence[str]) -> Path:
        path = tmp_path / "router.log"
        path.write_text("".join(lines))
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    yield
    log.clear_console_logging()
