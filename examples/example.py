#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""Example usage of the graylog_exceptions middleware.

Runs a small Flask app whose failing route is reported to a Graylog GELF
UDP input. Point GRAYLOG_HOSTNAME / GRAYLOG_PORT at your server.
"""

import logging
import os

from flask import Flask

from graylog_exceptions import ReporterConfig
from graylog_exceptions.flask_integration import init_app

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = Flask(__name__)


@app.route("/", methods=["GET"])
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "graylog-exceptions-example"}, 200


@app.route("/fail", methods=["GET"])
def fail():
    """Raise an error that ends up in Graylog."""
    raise RuntimeError("Example failure")


def main():
    config = ReporterConfig.from_env(facility="example", _service="graylog-exceptions-example")
    init_app(app, config)
    app.run(port=int(os.getenv("PORT", "8080")))


if __name__ == "__main__":
    main()
