# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""Shared fixtures for graylog_exceptions tests."""

import socket
from unittest.mock import MagicMock

import pytest

from graylog_exceptions import SilentNotifier


@pytest.fixture
def notifier():
    """In-memory notifier collecting every reported record."""
    return SilentNotifier()


@pytest.fixture
def start_response():
    """Mock WSGI start_response callable."""
    return MagicMock()


@pytest.fixture
def udp_server():
    """UDP socket bound to a free localhost port, standing in for Graylog."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()
