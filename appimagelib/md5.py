"""Incremental MD5 message digest."""

from __future__ import annotations

import struct

__all__ = ["MD5_HASH_SIZE", "Md5Context", "md5_calculate"]

MD5_HASH_SIZE = 16

_MASK = 0xFFFFFFFF
_BLOCK_SIZE = 64

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

_SHIFTS = (
    (7, 12, 17, 22) * 4
    + (5, 9, 14, 20) * 4
    + (4, 11, 16, 23) * 4
    + (6, 10, 15, 21) * 4
)

_CONSTANTS = (
    0xD76AA478, 0xE8C7B756, 0x242070DB, 0xC1BDCEEE,
    0xF57C0FAF, 0x4787C62A, 0xA8304613, 0xFD469501,
    0x698098D8, 0x8B44F7AF, 0xFFFF5BB1, 0x895CD7BE,
    0x6B901122, 0xFD987193, 0xA679438E, 0x49B40821,
    0xF61E2562, 0xC040B340, 0x265E5A51, 0xE9B6C7AA,
    0xD62F105D, 0x02441453, 0xD8A1E681, 0xE7D3FBC8,
    0x21E1CDE6, 0xC33707D6, 0xF4D50D87, 0x455A14ED,
    0xA9E3E905, 0xFCEFA3F8, 0x676F02D9, 0x8D2A4C8A,
    0xFFFA3942, 0x8771F681, 0x6D9D6122, 0xFDE5380C,
    0xA4BEEA44, 0x4BDECFA9, 0xF6BB4B60, 0xBEBFBC70,
    0x289B7EC6, 0xEAA127FA, 0xD4EF3085, 0x04881D05,
    0xD9D4D039, 0xE6DB99E5, 0x1FA27CF8, 0xC4AC5665,
    0xF4292244, 0x432AFF97, 0xAB9423A7, 0xFC93A039,
    0x655B59C3, 0x8F0CCC92, 0xFFEFF47D, 0x85845DD1,
    0x6FA87E4F, 0xFE2CE6E0, 0xA3014314, 0x4E0811A1,
    0xF7537E82, 0xBD3AF235, 0x2AD7D2BB, 0xEB86D391,
)


def _transform(state: tuple[int, int, int, int], block: bytes | memoryview) -> tuple[int, int, int, int]:
    """Process one 64-byte block and return the new state."""
    words = struct.unpack("<16I", block)
    a, b, c, d = state
    for step, (shift, constant) in enumerate(zip(_SHIFTS, _CONSTANTS)):
        if step < 16:
            f = d ^ (b & (c ^ d))
            index = step
        elif step < 32:
            f = c ^ (d & (b ^ c))
            index = (5 * step + 1) % 16
        elif step < 48:
            f = b ^ c ^ d
            index = (3 * step + 5) % 16
        else:
            f = c ^ (b | (~d & _MASK))
            index = (7 * step) % 16
        value = (a + f + constant + words[index]) & _MASK
        value = ((value << shift) | (value >> (32 - shift))) & _MASK
        a, d, c, b = d, c, b, (b + value) & _MASK
    return (
        (state[0] + a) & _MASK,
        (state[1] + b) & _MASK,
        (state[2] + c) & _MASK,
        (state[3] + d) & _MASK,
    )


class Md5Context:
    """Accumulates data and produces its 16-byte MD5 digest."""

    def __init__(self) -> None:
        self._state = _INITIAL_STATE
        self._buffer = b""
        self._length = 0

    def update(self, data) -> None:
        """Feed bytes-like ``data`` into the digest computation."""
        view = memoryview(data).cast("B")
        self._length += len(view)
        pending = self._buffer + view.tobytes()
        full = len(pending) - len(pending) % _BLOCK_SIZE
        state = self._state
        blocks = memoryview(pending)
        for start in range(0, full, _BLOCK_SIZE):
            state = _transform(state, blocks[start:start + _BLOCK_SIZE])
        self._state = state
        self._buffer = pending[full:]

    def finalise(self) -> bytes:
        """Return the digest of all data fed so far; the context stays usable."""
        used = len(self._buffer)
        padding_length = (55 - used) % _BLOCK_SIZE
        bit_length = (self._length * 8) & 0xFFFFFFFFFFFFFFFF
        tail = self._buffer + b"\x80" + bytes(padding_length) + struct.pack("<Q", bit_length)
        state = self._state
        for start in range(0, len(tail), _BLOCK_SIZE):
            state = _transform(state, tail[start:start + _BLOCK_SIZE])
        return struct.pack("<4I", *state)


def md5_calculate(data) -> bytes:
    """Return the MD5 digest of bytes-like ``data``."""
    context = Md5Context()
    context.update(data)
    return context.finalise()