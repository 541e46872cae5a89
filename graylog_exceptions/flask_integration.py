# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""Flask integration.

Flask converts unhandled view exceptions into 500 responses, so they never
reach a WSGI middleware as raised exceptions. :func:`init_app` records them
in the request environ through the ``got_request_exception`` signal, where
:class:`ErrorReporter` picks them up after the response is produced.
"""

import logging
from collections.abc import Mapping
from typing import Any

from flask import Flask, got_request_exception, request

from .config import ReporterConfig
from .middleware import EXCEPTION_KEY, ErrorReporter

logger = logging.getLogger(__name__)


def _store_exception(sender: Flask, exception: BaseException, **extra: Any) -> None:
    request.environ[EXCEPTION_KEY] = exception


def init_app(
    app: Flask,
    config: ReporterConfig | Mapping[str, Any] | None = None,
    **options: Any,
) -> ErrorReporter:
    """Install Graylog exception reporting on a Flask application.

    Args:
        app: Flask application
        config: A ReporterConfig, or a mapping of options
        **options: Reporter options (see ReporterConfig)

    Returns:
        The ErrorReporter wrapping ``app.wsgi_app``
    """
    reporter = ErrorReporter(app.wsgi_app, config, **options)
    app.wsgi_app = reporter
    got_request_exception.connect(_store_exception, app)
    logger.info(f"Graylog exception reporting enabled for {app.name} -> "
                f"{reporter.config.hostname}:{reporter.config.port}")
    return reporter
