# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""Graylog exception reporting for WSGI applications.

Wraps a WSGI application, reports unhandled exceptions to Graylog as GELF
messages over UDP, and re-raises them unchanged.

Example:
    >>> from graylog_exceptions import ErrorReporter
    >>>
    >>> application = ErrorReporter(
    ...     application,
    ...     hostname="graylog.internal",
    ...     port=12201,
    ...     facility="billing",
    ...     _environment="staging",
    ... )
"""

__version__ = "0.1.0"

from .config import ReporterConfig
from .middleware import EXCEPTION_KEY, ErrorReporter
from .notifier import GelfNotifier, Notifier, SilentNotifier, create_notifier

__all__ = [
    # Version
    "__version__",
    # Middleware
    "ErrorReporter",
    "EXCEPTION_KEY",
    # Configuration
    "ReporterConfig",
    # Notifiers
    "Notifier",
    "GelfNotifier",
    "SilentNotifier",
    "create_notifier",
]
