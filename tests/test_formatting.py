# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""Tests for record formatting helpers."""

import pytest

from graylog_exceptions.formatting import error_location, format_backtrace, inspect_value


def _inner():
    raise RuntimeError("inner")


def _outer():
    _inner()


def _raised():
    try:
        _outer()
    except RuntimeError as e:
        return e


class TestInspectValue:
    """Tests for inspect_value."""

    @pytest.mark.parametrize("value, expected", [
        (None, "None"),
        ("bar", "'bar'"),
        (123, "123"),
        (["a", 2], "['a', 2]"),
        ({"a": 1}, "{'a': 1}"),
    ])
    def test_builtin_values(self, value, expected):
        """Test the debug representation of builtin values."""
        assert inspect_value(value) == expected

    def test_opaque_object(self):
        """Test that plain objects render with type and identity."""
        assert inspect_value(object()).startswith("<object object at 0x")

    def test_failing_repr_propagates(self):
        """Test that a failing __repr__ raises to the caller."""
        class Bad:
            def __repr__(self):
                raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            inspect_value(Bad())


class TestBacktrace:
    """Tests for format_backtrace and error_location."""

    def test_most_recent_call_first(self):
        """Test that frames are ordered innermost first."""
        lines = format_backtrace(_raised().__traceback__)

        assert len(lines) == 3
        assert lines[0].endswith(":in `_inner'")
        assert lines[1].endswith(":in `_outer'")
        assert lines[2].endswith(":in `_raised'")

    def test_line_format(self):
        """Test the file:line:in `function' layout."""
        error = _raised()
        location = error_location(error.__traceback__)

        assert format_backtrace(error.__traceback__)[0] == f"{location[0]}:{location[1]}:in `_inner'"

    def test_location_is_raise_site(self):
        """Test that the location points at the raising frame."""
        filename, lineno = error_location(_raised().__traceback__)

        assert filename.endswith("test_formatting.py")
        assert lineno == _inner.__code__.co_firstlineno + 1

    def test_no_traceback(self):
        """Test helpers on an exception that was never raised."""
        error = ValueError("never raised")

        assert format_backtrace(error.__traceback__) == []
        assert error_location(error.__traceback__) is None
