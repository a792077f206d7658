#!/usr/bin/env python3
# Copyright (C) 2023 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""User-defined exceptions of the MRTG traffic check."""

__all__ = [
    "InvalidArguments",
    "LogTooShort",
    "LogUnavailable",
    "MalformedField",
    "MRTGException",
    "MRTGLogError",
]


# never raised directly. Just a wrapper to make all of our
# exceptions handleable with one call
class MRTGException(Exception):
    pass


# Everything that prevents us from getting a record out of the log.
# The check ends with state UNKNOWN in this case, in order to be
# compatible with the monitoring plug-in API.
class MRTGLogError(MRTGException):
    pass


class LogUnavailable(MRTGLogError):
    """The log file does not exist or cannot be read."""


class LogTooShort(MRTGLogError):
    """The log file ends before its first data line."""


class MalformedField(MRTGLogError):
    """A field of the data line is not a valid number.

    Only raised when parsing strictly.
    """

    def __init__(self, field: str, token: str) -> None:
        super().__init__(f"Invalid value for {field} in MRTG log: {token!r}")
        self.field = field
        self.token = token


class InvalidArguments(MRTGException):
    pass
