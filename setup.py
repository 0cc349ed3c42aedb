#!/usr/bin/env python3
# =============================================================================
#  ptrcmp — setup.py
#
#  pyproject.toml only declares the build system and tool settings; the
#  package metadata lives here.
#
#      pip install -e ".[dev]"
#      python -m build
#      python -m pytest
#
#  Runtime note: ptrcmp reads Cppcheck dump files through the
#  ``cppcheckdata`` module that ships with Cppcheck itself (it is not on
#  PyPI), so Cppcheck must be installed on the machine doing the analysis.
# =============================================================================

from __future__ import annotations

import re
from pathlib import Path

from setuptools import setup, find_packages

# ---------------------------------------------------------------------------
#  Read version from the package so we have a single source of truth.
# ---------------------------------------------------------------------------
_HERE = Path(__file__).resolve().parent


def _read_version() -> str:
    """Extract __version__ from ptrcmp/__init__.py."""
    init = _HERE / "ptrcmp" / "__init__.py"
    text = init.read_text(encoding="utf-8")
    match = re.search(r'^__version__\s*=\s*"([^"]+)"', text, re.MULTILINE)
    if match:
        return match.group(1)
    return "0.0.0"


def _read_long_description() -> str:
    """Read README.md for the long description."""
    readme = _HERE / "README.md"
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="ptrcmp",
    version=_read_version(),
    description=(
        "Cppcheck-based static check for comparisons between pointers "
        "to basic types."
    ),
    long_description=_read_long_description(),
    long_description_content_type="text/markdown",
    license="GPL-3.0-or-later",
    author="ptrcmp contributors",
    python_requires=">=3.10",
    packages=find_packages(
        include=["ptrcmp", "ptrcmp.*"],
        exclude=["tests", "tests.*", "examples", "examples.*"],
    ),
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ],
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "ruff>=0.4",
            "mypy>=1.10",
            "black>=24.0",
            "isort>=5.13",
        ],
    },
    entry_points={
        "console_scripts": [
            "ptrcmp=ptrcmp.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Quality Assurance",
    ],
    keywords=[
        "cppcheck",
        "static-analysis",
        "pointers",
        "linter",
    ],
    zip_safe=False,
)
