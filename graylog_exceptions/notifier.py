# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""GELF notifiers.

:class:`GelfNotifier` is a thin client over ``pygelf``: it completes a
GELF message from a field mapping and hands the packed payload to
``pygelf.GelfUdpHandler``, which chunks it into UDP datagrams.
"""

import inspect
import logging
import socket
import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from pygelf import GelfUdpHandler, gelf

logger = logging.getLogger(__name__)

GELF_VERSION = "1.1"

CHUNK_SIZES = {
    "WAN": 1420,
    "LAN": 8154,
}

STANDARD_FIELDS = frozenset({
    "version",
    "host",
    "short_message",
    "full_message",
    "timestamp",
    "level",
    "facility",
    "file",
    "line",
})


def resolve_chunk_size(max_chunk_size: str | int) -> int:
    """Translate "WAN"/"LAN" or a byte count into a datagram size.

    Raises:
        ValueError: If the value is neither a known name nor a positive integer
    """
    if isinstance(max_chunk_size, str):
        try:
            return CHUNK_SIZES[max_chunk_size.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown max_chunk_size: {max_chunk_size}. "
                f"Must be one of: {', '.join(CHUNK_SIZES)} or a positive integer"
            ) from None
    if isinstance(max_chunk_size, bool) or not isinstance(max_chunk_size, int) or max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be a positive integer, got {max_chunk_size!r}")
    return max_chunk_size


class Notifier(ABC):
    """Abstract base class for record notifiers."""

    @abstractmethod
    def notify(self, fields: Mapping[str, Any]) -> Any:
        """Deliver one diagnostic record.

        Args:
            fields: Record fields
        """
        pass


class GelfNotifier(Notifier):
    """Sends GELF messages to a Graylog server over UDP.

    Attributes:
        hostname: Graylog server host
        port: Graylog GELF UDP port
        chunk_size: Maximum datagram size in bytes
        collect_file_and_line: Fill ``file``/``line`` from the caller when absent
    """

    def __init__(
        self,
        hostname: str = "localhost",
        port: int = 12201,
        max_chunk_size: str | int = "WAN",
    ):
        """Initialize GELF notifier.

        Args:
            hostname: Graylog server host
            port: Graylog GELF UDP port (1-65535)
            max_chunk_size: "WAN", "LAN" or a datagram size in bytes

        Raises:
            ValueError: If port or max_chunk_size is invalid
        """
        if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
            raise ValueError(f"Invalid port: {port!r}. Must be an integer between 1 and 65535")

        self.hostname = hostname
        self.port = port
        self.chunk_size = resolve_chunk_size(max_chunk_size)
        self.collect_file_and_line = True

    def build_message(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Complete a GELF message from record fields.

        Raises:
            ValueError: If short_message is missing or ``_id`` is present
        """
        short_message = fields.get("short_message")
        if not short_message:
            raise ValueError("GELF message requires a non-empty short_message")
        if "_id" in fields or "id" in fields:
            raise ValueError("GELF message must not contain the reserved field '_id'")

        message: dict[str, Any] = {
            "version": GELF_VERSION,
            "host": socket.gethostname(),
            "timestamp": time.time(),
            "level": 1,
        }
        for key, value in fields.items():
            key = str(key)
            if key not in STANDARD_FIELDS and not key.startswith("_"):
                key = f"_{key}"
            message[key] = value
        return message

    def notify(self, fields: Mapping[str, Any]) -> bytes:
        """Send one record and return the packed payload.

        Args:
            fields: Record fields; ``short_message`` is required

        Returns:
            The zlib-compressed JSON payload handed to the UDP handler

        Raises:
            ValueError: If the record is not a valid GELF message
            OSError: If the datagram cannot be sent
        """
        message = self.build_message(fields)
        if self.collect_file_and_line and "file" not in message:
            caller = inspect.currentframe().f_back
            message["file"] = caller.f_code.co_filename
            message["line"] = caller.f_lineno

        payload = gelf.pack(message, compress=True, default=str)
        handler = GelfUdpHandler(
            host=self.hostname,
            port=self.port,
            chunk_size=self.chunk_size,
            compress=True,
        )
        try:
            handler.send(payload)
        finally:
            handler.close()

        logger.debug(f"Sent GELF message to {self.hostname}:{self.port} ({len(payload)} bytes)")
        return payload


class SilentNotifier(Notifier):
    """Notifier that stores records in memory for testing."""

    def __init__(self):
        """Initialize silent notifier."""
        self.records: list[dict[str, Any]] = []

    def notify(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Store a copy of the record and return it."""
        record = dict(fields)
        self.records.append(record)
        return record

    def clear(self) -> None:
        """Clear all stored records."""
        self.records.clear()


def create_notifier(notifier_type: str = "gelf", **kwargs: Any) -> Notifier:
    """Factory function to create a notifier.

    Args:
        notifier_type: "gelf" or "silent"
        **kwargs: Constructor arguments for the notifier

    Returns:
        Notifier instance

    Raises:
        ValueError: If notifier_type is not recognized
    """
    notifier_type = notifier_type.lower()
    if notifier_type == "gelf":
        return GelfNotifier(**kwargs)
    elif notifier_type == "silent":
        return SilentNotifier()
    else:
        raise ValueError(
            f"Unknown notifier_type: {notifier_type}. "
            f"Must be one of: gelf, silent"
        )
