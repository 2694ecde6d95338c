"""MD5 digest of type 2 AppImages, ignoring their signature-related sections."""

from __future__ import annotations

import os

from .core import FileSystemError
from .elf import get_section_offset_and_length
from .md5 import Md5Context

__all__ = ["SKIPPED_SECTIONS", "type2_digest_md5"]

SKIPPED_SECTIONS = (".digest_md5", ".sha256_sig", ".sig_key")

_CHUNK_SIZE = 4096


def _skipped_ranges(path: str) -> list[tuple[int, int]]:
    ranges = []
    for name in SKIPPED_SECTIONS:
        offset, length = get_section_offset_and_length(path, name)
        # Sections at offset 0 or of length 0 are not skipped, and neither are
        # sections that start exactly on a chunk boundary.
        if offset and length and offset % _CHUNK_SIZE:
            ranges.append((offset, offset + length))
    return ranges


def type2_digest_md5(path) -> bytes:
    """Return the raw 16-byte MD5 digest of the AppImage at ``path``.

    The bytes of the ``.digest_md5``, ``.sha256_sig`` and ``.sig_key`` sections
    are hashed as zeros, since the digest and the signature are embedded there
    after the digest is computed. The data is fed in 4096-byte chunks and the
    last chunk is zero-padded, so the result is not what ``md5sum`` prints.
    """
    path = os.fspath(path)
    ranges = _skipped_ranges(path)

    context = Md5Context()
    try:
        stream = open(path, "rb")
    except OSError as error:
        raise FileSystemError(f"Cannot open {path}: {error.strerror}") from error

    with stream:
        position = 0
        for chunk in iter(lambda: stream.read(_CHUNK_SIZE), b""):
            buffer = bytearray(chunk)
            buffer.extend(bytes(_CHUNK_SIZE - len(buffer)))
            chunk_end = position + _CHUNK_SIZE
            for start, end in ranges:
                low = max(start, position)
                high = min(end, chunk_end)
                if low < high:
                    buffer[low - position:high - position] = bytes(high - low)
            context.update(buffer)
            position = chunk_end

    return context.finalise()