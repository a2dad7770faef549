"""Shared utilities."""

from ._logging import create_logger
from ._version import UNKNOWN_VERSION, get_version

__all__ = ["UNKNOWN_VERSION", "create_logger", "get_version"]
