"""Exceptions and enumerations shared across the library."""

from __future__ import annotations

import enum

__all__ = [
    "AppImageError",
    "FileSystemError",
    "AppImageIOError",
    "PayloadIteratorError",
    "DesktopIntegrationError",
    "AppImageFormat",
    "PayloadEntryType",
]


class AppImageError(RuntimeError):
    """Generic error raised by AppImage procedures."""


class FileSystemError(AppImageError):
    """Missing files, insufficient permissions and other file system problems."""


class AppImageIOError(AppImageError):
    """Failure in a read or write operation."""


class PayloadIteratorError(AppImageError):
    """Failure while iterating over the payload entries."""


class DesktopIntegrationError(AppImageError):
    """Failure while performing a desktop integration operation."""


class AppImageFormat(enum.IntEnum):
    """How an AppImage is laid out on disk."""

    INVALID = -1
    LEGACY = 0
    TYPE_1 = 1
    TYPE_2 = 2


class PayloadEntryType(enum.IntEnum):
    """Kinds of entries found in an AppImage payload."""

    UNKNOWN = -1
    REGULAR = 0
    DIR = 1
    LINK = 2