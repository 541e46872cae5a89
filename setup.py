# SPDX-License-Identifier: MIT
# Copyright (c) 2025 graylog-exceptions contributors

"""Setup configuration for graylog-exceptions package."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file if it exists
this_directory = Path(__file__).parent
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "WSGI middleware reporting unhandled exceptions to Graylog"

setup(
    name="graylog-exceptions",
    version="0.1.0",
    author="graylog-exceptions contributors",
    description="WSGI middleware that reports unhandled exceptions to Graylog over GELF/UDP",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["graylog_exceptions", "graylog_exceptions.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pygelf>=0.4.2",  # GELF packing and chunked UDP transport
    ],
    extras_require={
        "flask": [
            "flask>=2.3.0",  # Flask integration (got_request_exception signal)
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pylint>=3.0.0",
            "mypy>=1.0.0",
            "flask>=2.3.0",
        ],
    },
)
