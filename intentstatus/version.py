"""
Version information for the intentstatus SDK.
"""
import importlib.metadata
import pathlib
from typing import Optional

import tomli

DISTRIBUTION_NAME = "intentstatus-sdk"
UNKNOWN_VERSION = "0.0.0"

PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _version_from_pyproject(path: pathlib.Path = PYPROJECT_PATH) -> Optional[str]:
    """Project version declared in a source checkout's pyproject.toml, if any."""
    try:
        with path.open("rb") as f:
            project = tomli.load(f).get("project", {})
    except (OSError, tomli.TOMLDecodeError):
        return None
    return project.get("version")


def get_version() -> str:
    """
    Installed distribution version, or the pyproject.toml version when
    running from a source checkout that was never installed.
    """
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return _version_from_pyproject() or UNKNOWN_VERSION


__version__ = get_version()
