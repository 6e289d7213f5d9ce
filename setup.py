"""Setup script for the u6hal package."""

import re
from pathlib import Path

from setuptools import setup, find_packages

# Repo root is the u6hal package (not a u6hal/ subdir), so map it explicitly.
_root = Path(__file__).resolve().parent
_subpackages = find_packages(
    where=str(_root),
    exclude=["tests", "tests.*", "examples", "examples.*"],
)
packages = ["u6hal"] + [f"u6hal.{p}" for p in _subpackages]

# Single source of version: read from package __init__.py
_version_file = _root / "__init__.py"
_version_match = re.search(
    r'__version__\s*=\s*["\']([^"\']+)["\']',
    _version_file.read_text(encoding="utf-8"),
)
if not _version_match:
    raise RuntimeError("__version__ not found in __init__.py")
version = _version_match.group(1)

_long_description = (_root / "README.md").read_text(encoding="utf-8")

setup(
    name="u6hal",
    version=version,
    description="Hardware abstraction layer for a USB-connected LabJack U6",
    long_description=_long_description,
    long_description_content_type="text/markdown",
    author="u6hal Development",
    package_dir={"u6hal": "."},
    packages=packages,
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "labjack": [
            "LabJackPython>=2.0",
        ],
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Hardware",
        "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    ],
)
