"""Percent-encoding of strings for use in URIs."""

from __future__ import annotations

import string

__all__ = ["encode"]

_UNRESERVED = frozenset((string.ascii_letters + string.digits + "-_.~/").encode("ascii"))


def encode(value) -> str:
    """Percent-encode every byte of ``value`` that is not alphanumeric or one of ``-_.~/``.

    Strings are encoded as UTF-8 first; escapes use upper-case hexadecimal digits.
    """
    data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    return "".join(chr(byte) if byte in _UNRESERVED else f"%{byte:02X}" for byte in data)