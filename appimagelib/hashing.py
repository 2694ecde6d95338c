"""Convenience hashing helpers built on the MD5 context."""

from __future__ import annotations

from collections.abc import Iterable

from .md5 import Md5Context

__all__ = ["md5", "to_hex", "hexlify"]

_CHUNK_SIZE = 4096


def md5(data) -> bytes:
    """Return the raw MD5 digest of a string, bytes-like object or readable stream.

    Strings are hashed as their UTF-8 encoding; streams are read in chunks until exhausted.
    """
    context = Md5Context()
    if isinstance(data, str):
        context.update(data.encode("utf-8"))
    elif isinstance(data, (bytes, bytearray, memoryview)):
        context.update(data)
    else:
        for chunk in iter(lambda: data.read(_CHUNK_SIZE), None):
            if not chunk:
                break
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            context.update(chunk)
    return context.finalise()


def to_hex(digest: Iterable[int]) -> str:
    """Return the lowercase two-digits-per-byte hexadecimal form of ``digest``."""
    return bytes(digest).hex()


def hexlify(data) -> str:
    """Return the lowercase hexadecimal representation of bytes-like ``data``."""
    return bytes(data).hex()