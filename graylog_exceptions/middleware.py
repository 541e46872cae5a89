# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""WSGI middleware reporting unhandled exceptions to Graylog."""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .config import ReporterConfig
from .formatting import error_location, format_backtrace, inspect_value

logger = logging.getLogger(__name__)

# Environ key under which a framework records an exception it handled itself.
EXCEPTION_KEY = "graylog_exceptions.exception"

WSGIApp = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]


class ErrorReporter:
    """Wraps a WSGI application and reports its exceptions to Graylog.

    Exceptions raised by the wrapped application are reported and then
    re-raised unchanged. Exceptions a framework stored in the environ under
    :data:`EXCEPTION_KEY` are reported after the application returns.

    Reporting never raises: delivery failures are logged and dropped.

    Example:
        >>> app.wsgi_app = ErrorReporter(app.wsgi_app, hostname="graylog.internal",
        ...                              _app="billing")
    """

    def __init__(
        self,
        app: WSGIApp,
        config: ReporterConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ):
        """Initialize the middleware.

        Args:
            app: Downstream WSGI application
            config: A ReporterConfig, or a mapping of options
            **options: Option overrides, merged over a mapping config

        Raises:
            TypeError: If options are combined with a ReporterConfig, or
                notify is not callable
        """
        if isinstance(config, ReporterConfig):
            if options:
                raise TypeError("Options cannot be combined with a ReporterConfig instance")
            self._config = config
        else:
            merged = dict(config or {})
            merged.update(options)
            self._config = ReporterConfig.from_options(merged)
        self._app = app

    @property
    def app(self) -> WSGIApp:
        return self._app

    @property
    def config(self) -> ReporterConfig:
        return self._config

    def __call__(self, environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        try:
            response = self._app(environ, start_response)
        except Exception as exc:
            self.report_error(exc, environ)
            raise

        handled = environ.get(EXCEPTION_KEY) if environ else None
        if isinstance(handled, BaseException):
            self.report_error(handled, environ)

        return response

    def build_record(self, error: BaseException, environ: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Build the diagnostic record for one exception.

        Args:
            error: The exception to describe
            environ: WSGI environ of the failing request

        Returns:
            Record fields, extra fields applied last
        """
        config = self._config
        record: dict[str, Any] = {
            "short_message": str(error) or type(error).__name__,
            "facility": config.facility,
            "level": config.level,
            "host": config.local_app_name,
        }

        backtrace = format_backtrace(error.__traceback__)
        if backtrace:
            record["full_message"] = "\n".join(backtrace)
            record["file"], record["line"] = error_location(error.__traceback__)

        if environ:
            for key, value in environ.items():
                try:
                    record[f"_env_{key}"] = inspect_value(value)
                except Exception as exc:
                    logger.debug(f"Skipping environ key {key!r}: {exc}")

        record.update(config.extra_fields)
        return record

    def report_error(self, error: BaseException, environ: Mapping[str, Any] | None = None) -> Any:
        """Send an exception to Graylog.

        Args:
            error: The exception to report
            environ: Optional WSGI environ of the failing request

        Returns:
            The notify function's result, or None if reporting failed
        """
        try:
            record = self.build_record(error, environ)
            return self._config.resolve_notify()(record)
        except Exception as exc:
            logger.error(f"Graylog exception reporter could not send message: {exc}")
            return None
