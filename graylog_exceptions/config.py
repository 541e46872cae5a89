# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""Configuration for the Graylog exception reporter.

Options are merged over documented defaults once, when the middleware is
constructed, and the result is an immutable :class:`ReporterConfig`. Keys
outside the documented option set are kept as *extra fields* and attached
to every record sent to Graylog.
"""

import logging
import os
import socket
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .notifier import create_notifier

logger = logging.getLogger(__name__)

Notify = Callable[[dict[str, Any]], Any]

# Record fields computed per error; accepted as options but never used as extras.
RESERVED_FIELDS = frozenset({"host", "short_message", "full_message", "file", "line"})

# GELF forbids these as additional fields.
FORBIDDEN_FIELDS = frozenset({"id", "_id"})

_OPTION_NAMES = frozenset({
    "hostname", "port", "local_app_name", "facility", "max_chunk_size", "level", "notify",
})

_INT_OPTIONS = ("port", "level")


def _default_options() -> dict[str, Any]:
    return {
        "hostname": "localhost",
        "port": 12201,
        "local_app_name": socket.gethostname(),
        "facility": "graylog2_exceptions",
        "max_chunk_size": "LAN",
        "level": 3,
        "notify": None,
    }


@dataclass(frozen=True)
class ReporterConfig:
    """Immutable reporter options.

    Attributes:
        hostname: Graylog server host
        port: Graylog GELF UDP port
        local_app_name: Value sent as the record's ``host`` field
        facility: GELF facility
        max_chunk_size: "LAN", "WAN" or a datagram size in bytes
        level: Syslog severity sent with each record
        notify: Callable receiving each record; None means send via GELF
        extra_fields: Additional fields merged into every record
    """

    hostname: str = "localhost"
    port: int = 12201
    local_app_name: str = field(default_factory=socket.gethostname)
    facility: str = "graylog2_exceptions"
    max_chunk_size: str | int = "LAN"
    level: int = 3
    notify: Notify | None = None
    extra_fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if self.notify is not None and not callable(self.notify):
            raise TypeError(f"notify must be callable, got {type(self.notify).__name__}")
        if not isinstance(self.extra_fields, MappingProxyType):
            object.__setattr__(self, "extra_fields", MappingProxyType(dict(self.extra_fields)))
        clashing = sorted(
            str(key) for key in self.extra_fields
            if key in RESERVED_FIELDS or key in FORBIDDEN_FIELDS or key in _OPTION_NAMES
        )
        if clashing:
            raise ValueError(f"Extra fields must not use reserved names: {', '.join(clashing)}")

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "ReporterConfig":
        """Build a config from caller-supplied options.

        Options set to None are dropped before merging, so an explicit None
        falls back to the default. Unknown keys become extra fields.

        Args:
            options: Option overrides

        Returns:
            ReporterConfig instance
        """
        defaults = _default_options()
        overrides = {k: v for k, v in (options or {}).items() if v is not None}

        standard: dict[str, Any] = dict(defaults)
        extra: dict[str, Any] = {}
        for key, value in overrides.items():
            if key in defaults:
                standard[key] = value
            elif key in RESERVED_FIELDS:
                logger.debug(f"Ignoring reserved record field in options: {key}")
            else:
                extra[str(key)] = value

        return cls(**standard, extra_fields=MappingProxyType(extra))

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = "GRAYLOG_",
        **overrides: Any,
    ) -> "ReporterConfig":
        """Build a config from environment variables.

        Reads ``<prefix>HOSTNAME``, ``<prefix>PORT``, ``<prefix>LOCAL_APP_NAME``,
        ``<prefix>FACILITY``, ``<prefix>MAX_CHUNK_SIZE`` and ``<prefix>LEVEL``.
        Keyword overrides take precedence over the environment.

        Raises:
            ValueError: If an integer option is not a valid integer
        """
        environ = os.environ if environ is None else environ
        options: dict[str, Any] = {}
        for name in ("hostname", "port", "local_app_name", "facility", "max_chunk_size", "level"):
            raw = environ.get(f"{prefix}{name.upper()}")
            if raw is None or raw == "":
                continue
            if name in _INT_OPTIONS or (name == "max_chunk_size" and raw.isdigit()):
                try:
                    options[name] = int(raw)
                except ValueError:
                    raise ValueError(
                        f"Invalid value for {prefix}{name.upper()}: {raw!r} (expected an integer)"
                    ) from None
            else:
                options[name] = raw

        options.update(overrides)
        return cls.from_options(options)

    def resolve_notify(self) -> Notify:
        """Return the configured notify callable, or the GELF default."""
        return self.notify if self.notify is not None else self.default_notify

    def default_notify(self, record: dict[str, Any]) -> bytes:
        """Send a record to Graylog with a fresh GELF client.

        File and line are already part of the record, so the client's own
        caller detection is switched off.
        """
        notifier = create_notifier(
            "gelf",
            hostname=self.hostname,
            port=self.port,
            max_chunk_size=self.max_chunk_size,
        )
        notifier.collect_file_and_line = False
        return notifier.notify(record)
