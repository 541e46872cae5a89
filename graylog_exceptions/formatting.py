# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""Rendering helpers for diagnostic records."""

import traceback
from types import TracebackType
from typing import Any


def inspect_value(value: Any) -> str:
    """Return the debug representation of a request environment value.

    Errors raised by a value's ``__repr__`` propagate to the caller.
    """
    return repr(value)


def format_backtrace(tb: TracebackType | None) -> list[str]:
    """Format a traceback as backtrace lines, most recent call first.

    Each line reads ``<file>:<line>:in `<function>'``.

    Args:
        tb: Traceback object, typically ``exc.__traceback__``

    Returns:
        List of frame strings; empty when there is no traceback
    """
    if tb is None:
        return []
    frames = traceback.extract_tb(tb)
    return [f"{frame.filename}:{frame.lineno}:in `{frame.name}'" for frame in reversed(frames)]


def error_location(tb: TracebackType | None) -> tuple[str, int] | None:
    """Return (file, line) of the frame that raised, or None without a traceback."""
    if tb is None:
        return None
    frames = traceback.extract_tb(tb)
    if not frames:
        return None
    frame = frames[-1]
    return frame.filename, frame.lineno
