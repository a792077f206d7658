#!/usr/bin/env python3
# Copyright (C) 2023 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_mrtgtraf - Monitor router traffic recorded in an MRTG log

The check reads the newest sample of an MRTG log and reports
- WARNING if the sample is older than the expiry time,
- CRITICAL if the incoming or outgoing rate exceeds its critical level,
- WARNING if the incoming or outgoing rate exceeds its warning level,
- UNKNOWN if the log cannot be read or contains no usable sample.

All levels are given in bytes/sec. A rate equal to its level is still OK.
"""

from __future__ import annotations

import argparse
import enum
import logging
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import NoReturn

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, ValidationError

from mrtgtraf import __version__, log
from mrtgtraf.exceptions import InvalidArguments, MRTGLogError
from mrtgtraf.mrtg_log import LogRecord, MAX_COUNTER, read_log_record
from mrtgtraf.render import fmt_rate

LOGGER = logging.getLogger("mrtgtraf.check")

# Old style threshold options, still found in some monitoring configurations
_LEGACY_OPTIONS = {"-wt": "-w", "-ct": "-c"}

_AGGREGATIONS = ("AVG", "MAX")


def main(
    argv: Sequence[str] | None = None,
    now: Callable[[], float] = time.time,
) -> int:
    try:
        config = parse_arguments(sys.argv[1:] if argv is None else argv)
    except InvalidArguments as e:
        _output_check_result(f"Invalid command arguments supplied: {e}")
        return State.UNKNOWN

    log.setup_console_logging(config.verbosity)

    try:
        outcome = check_mrtgtraf(config, int(now()))
    except Exception as e:
        if config.debug:
            raise
        outcome = Outcome(State.UNKNOWN, f"Unhandled exception: {e}")

    _output_check_result(outcome.summary)
    return outcome.state


class State(enum.IntEnum):
    OK = 0
    WARN = 1
    CRIT = 2
    UNKNOWN = 3


@dataclass(frozen=True)
class Outcome:
    state: State
    summary: str


@dataclass(frozen=True)
class RateSample:
    incoming: int
    outgoing: int


class Thresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    incoming: int = Field(default=0, ge=0, le=MAX_COUNTER)
    outgoing: int = Field(default=0, ge=0, le=MAX_COUNTER)


class CheckConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_path: str = Field(min_length=1)
    expire_minutes: None | int = None
    use_average: bool = True
    warning: Thresholds = Thresholds()
    critical: Thresholds = Thresholds()
    strict_parsing: bool = True
    debug: bool = False
    verbosity: NonNegativeInt = 0


def _output_check_result(s: str) -> None:
    sys.stdout.write("%s\n" % s)


#   .--Arguments-----------------------------------------------------------.


class ArgParser(argparse.ArgumentParser):
    # Argument errors are UNKNOWN, not argparse's exit code 2
    def error(self, message: str) -> NoReturn:
        raise InvalidArguments(message)


def _threshold_pair(value: str) -> tuple[str, str]:
    """
    >>> _threshold_pair("1000,2000")
    ('1000', '2000')
    """
    incoming, sep, outgoing = value.partition(",")
    if not sep or not incoming or not outgoing:
        raise argparse.ArgumentTypeError(f"expected <incoming>,<outgoing>, got {value!r}")
    return incoming.strip(), outgoing.strip()


def _create_parser() -> ArgParser:
    parser = ArgParser(
        prog="check_mrtgtraf",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        usage="%(prog)s -F <log_file> -a <AVG|MAX> -w <warning_pair> -c <critical_pair> "
        "[-e expire_minutes] [-v]\n"
        "       %(prog)s <log_file> <expire_minutes> <AVG|MAX> "
        "<iwl> <icl> <owl> <ocl>",
    )
    parser.add_argument(
        "-F",
        "--filename",
        "--logfile",
        dest="filename",
        type=str,
        metavar="FILE",
        help="File to read log from",
    )
    parser.add_argument(
        "-e",
        "--expires",
        type=int,
        metavar="MINUTES",
        help="Minutes after which log expires (0 or less disables the check)",
    )
    parser.add_argument(
        "-a",
        "--aggregation",
        type=str,
        metavar="AVG|MAX",
        help="Test average or maximum (Default: AVG)",
    )
    parser.add_argument(
        "-w",
        "--warning",
        type=_threshold_pair,
        metavar="IN,OUT",
        help='Warning threshold pair "<incoming>,<outgoing>" in bytes/sec',
    )
    parser.add_argument(
        "-c",
        "--critical",
        type=_threshold_pair,
        metavar="IN,OUT",
        help='Critical threshold pair "<incoming>,<outgoing>" in bytes/sec',
    )
    parser.add_argument(
        "--lenient-parsing",
        action="store_true",
        help="Read non-numeric fields of the log as 0 instead of failing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Verbose mode, log to stderr (use -vv for debug output)",
    )
    parser.add_argument("--debug", action="store_true", help="Raise python exceptions.")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "positionals",
        nargs="*",
        metavar="ARG",
        help="log_file expire_minutes AVG|MAX incoming_warning incoming_critical "
        "outgoing_warning outgoing_critical, each only used if not given as option",
    )
    return parser


def parse_arguments(argv: Sequence[str]) -> CheckConfig:
    args = _create_parser().parse_intermixed_args([_LEGACY_OPTIONS.get(a, a) for a in argv])
    rest = list(args.positionals)

    log_path = args.filename
    if log_path is None and rest:
        log_path = rest.pop(0)
    if log_path is None:
        raise InvalidArguments("no MRTG log file given")

    expire_minutes = args.expires
    if expire_minutes is None and rest:
        expire_minutes = rest.pop(0)

    aggregation = args.aggregation
    if rest and rest[0] in _AGGREGATIONS:
        token = rest.pop(0)
        aggregation = token if aggregation is None else aggregation

    levels: dict[str, dict[str, str]] = {"warning": {}, "critical": {}}
    for kind, pair in (("warning", args.warning), ("critical", args.critical)):
        if pair is not None:
            levels[kind] = {"incoming": pair[0], "outgoing": pair[1]}
    for kind, direction in (
        ("warning", "incoming"),
        ("critical", "incoming"),
        ("warning", "outgoing"),
        ("critical", "outgoing"),
    ):
        if direction not in levels[kind] and rest:
            levels[kind][direction] = rest.pop(0)

    if rest:
        raise InvalidArguments(f"unexpected arguments: {' '.join(rest)}")

    try:
        return CheckConfig.model_validate(
            {
                "log_path": log_path,
                "expire_minutes": expire_minutes,
                "use_average": aggregation != "MAX",
                "warning": levels["warning"],
                "critical": levels["critical"],
                "strict_parsing": not args.lenient_parsing,
                "debug": args.debug,
                "verbosity": args.verbose,
            }
        )
    except ValidationError as e:
        raise InvalidArguments(
            "; ".join(
                "%s: %s" % (".".join(map(str, error["loc"])), error["msg"])
                for error in e.errors()
            )
        ) from e


#   .--Check---------------------------------------------------------------.


def check_mrtgtraf(config: CheckConfig, now: int) -> Outcome:
    try:
        record = read_log_record(config.log_path, strict=config.strict_parsing)
    except MRTGLogError as e:
        LOGGER.debug("Cannot get a record from %s: %r", config.log_path, e)
        return Outcome(State.UNKNOWN, str(e))

    if (expired := check_staleness(record, config.expire_minutes, now)) is not None:
        return expired

    return classify(
        select_rates(record, config.use_average),
        warning=config.warning,
        critical=config.critical,
        use_average=config.use_average,
    )


def check_staleness(record: LogRecord, expire_minutes: int | None, now: int) -> Outcome | None:
    """
    >>> record = LogRecord(1000, 0, 0, 0, 0)
    >>> check_staleness(record, 5, 1300) is None
    True
    >>> check_staleness(record, 5, 1301)
    Outcome(state=<State.WARN: 1>, summary='MRTG data has expired (5 minutes old)')
    >>> check_staleness(record, 0, 10**9) is None
    True
    """
    if expire_minutes is None or expire_minutes <= 0:
        return None

    age = now - record.timestamp
    if age <= expire_minutes * 60:
        return None

    LOGGER.log(log.VERBOSE, "Sample from %d is %d seconds old", record.timestamp, age)
    return Outcome(State.WARN, "MRTG data has expired (%d minutes old)" % (age // 60))


def select_rates(record: LogRecord, use_average: bool) -> RateSample:
    if use_average:
        return RateSample(record.avg_in, record.avg_out)
    return RateSample(record.max_in, record.max_out)


def classify(
    rates: RateSample,
    *,
    warning: Thresholds,
    critical: Thresholds,
    use_average: bool,
) -> Outcome:
    LOGGER.log(
        log.VERBOSE,
        "Rates in=%d out=%d, warning at %d/%d, critical at %d/%d",
        rates.incoming,
        rates.outgoing,
        warning.incoming,
        warning.outgoing,
        critical.incoming,
        critical.outgoing,
    )
    summary = _rates_summary(rates, use_average)

    if rates.incoming > critical.incoming or rates.outgoing > critical.outgoing:
        return Outcome(State.CRIT, summary)
    if rates.incoming > warning.incoming or rates.outgoing > warning.outgoing:
        return Outcome(State.WARN, summary)
    return Outcome(State.OK, f"Traffic ok - {summary}")


def _rates_summary(rates: RateSample, use_average: bool) -> str:
    """
    >>> _rates_summary(RateSample(500, 2000), True)
    'Ave. In = 500.0 B/s, Ave. Out = 2.0 KB/s'
    """
    label = "Ave" if use_average else "Max"
    return "%s. In = %s, %s. Out = %s" % (
        label,
        fmt_rate(rates.incoming),
        label,
        fmt_rate(rates.outgoing),
    )
