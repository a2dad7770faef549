"""Service version lookup."""

from importlib.metadata import PackageNotFoundError, version
from os import getenv

UNKNOWN_VERSION = "unknown"


def get_version(distribution: str = "speckeep") -> str:
    """Return the running version.

    Checks installed package metadata first, then the ``SPECKEEP_VERSION``
    environment variable, and finally falls back to ``"unknown"``.
    """
    try:
        return version(distribution)
    except PackageNotFoundError:
        pass
    return getenv("SPECKEEP_VERSION") or UNKNOWN_VERSION
