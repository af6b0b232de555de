"""Version of the storefront sync bridge.

Reported in the OpenAPI document. An installed distribution answers from
its metadata; a source checkout (``src/api`` on the path, nothing
installed) answers from the root ``pyproject.toml``.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "storefront-sync-bridge"

# src/api/infrastructure/version.py -> repository root
PYPROJECT_PATH = Path(__file__).resolve().parents[3] / "pyproject.toml"


def get_version() -> str:
    """Get the bridge version, e.g. ``"0.1.0"``."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        with PYPROJECT_PATH.open("rb") as f:
            return tomllib.load(f)["project"]["version"]


__version__ = get_version()
