"""Helpers to build file URIs and path-based identifiers."""

from __future__ import annotations

import os

from .hashing import md5, to_hex

__all__ = ["path_to_uri", "hash_path"]

_FILE_SCHEME = "file://"


def path_to_uri(path: str) -> str:
    """Prepend ``file://`` to ``path`` unless it is already there."""
    if path.startswith(_FILE_SCHEME):
        return path
    return _FILE_SCHEME + path


def hash_path(path) -> str:
    """Return the MD5 hex identifier of a file's absolute location as a file URI.

    This follows the thumbnail naming scheme of the freedesktop thumbnail
    specification. An empty path yields an empty string.
    """
    path_str = os.fspath(path)
    if not path_str:
        return ""
    if not os.path.isabs(path_str):
        path_str = os.path.join(os.getcwd(), path_str)
    return to_hex(md5(path_to_uri(path_str)))