"""Make arbitrary strings safe to embed in file names."""

from __future__ import annotations

import string

__all__ = ["sanitize_for_path"]

_SAFE_BYTES = frozenset((string.digits + string.ascii_letters + ".-_").encode("ascii"))


def sanitize_for_path(value: str) -> str:
    """Replace every byte of ``value`` outside ``[0-9A-Za-z._-]`` with an underscore.

    The string is considered as UTF-8 bytes, so a character that takes several
    bytes turns into as many underscores.
    """
    return "".join(
        chr(byte) if byte in _SAFE_BYTES else "_" for byte in value.encode("utf-8")
    )