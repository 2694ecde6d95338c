import hashlib
import struct

import pytest

from appimagelib.core import AppImageError, FileSystemError
from appimagelib.digest import type2_digest_md5

FILLER = bytes(range(1, 201))


def build_elf(sections, trailer=b""):
    """Build a little-endian 64-bit ELF holding the given (name, data) sections."""
    names = [name for name, _ in sections] + [".shstrtab"]
    strtab = b"\0"
    name_offsets = []
    for name in names:
        name_offsets.append(len(strtab))
        strtab += name.encode() + b"\0"

    body = bytearray(64)
    body += FILLER
    placed = []
    for _, data in sections:
        placed.append((len(body), len(data)))
        body += data
    placed.append((len(body), len(strtab)))
    body += strtab
    body += trailer

    shoff = len(body)
    shdrs = struct.pack("<IIQQQQIIQQ", 0, 0, 0, 0, 0, 0, 0, 0, 0, 0)
    for name_offset, (offset, size) in zip(name_offsets, placed):
        shdrs += struct.pack("<IIQQQQIIQQ", name_offset, 1, 0, 0, offset, size, 0, 0, 1, 0)
    shnum = len(placed) + 1

    ident = b"\x7fELF" + bytes([2, 1, 1]) + bytes(9)
    header = struct.pack(
        "<16sHHIQQQIHHHHHH", ident, 2, 62, 1, 0, 0, shoff, 0, 64, 0, 0, 64, shnum, shnum - 1
    )
    body[0:64] = header
    return bytes(body) + shdrs


def sections(digest=bytes(16), signature=bytes(32), key=bytes(24)):
    return [(".digest_md5", digest), (".sha256_sig", signature), (".sig_key", key)]


def write(tmp_path, data, name="app.AppImage"):
    path = tmp_path / name
    path.write_bytes(data)
    return path


def padded(data):
    return data + bytes(-len(data) % 4096)


def test_digest_is_sixteen_bytes(tmp_path):
    path = write(tmp_path, build_elf(sections()))
    assert len(type2_digest_md5(path)) == 16


def test_zero_sections_and_aligned_size_match_plain_md5(tmp_path):
    data = build_elf(sections())
    data = build_elf(sections(), trailer=bytes(8192 - len(data)))
    assert len(data) % 4096 == 0
    path = write(tmp_path, data)
    assert type2_digest_md5(path) == hashlib.md5(data).digest()


def test_unaligned_file_is_zero_padded(tmp_path):
    data = build_elf(sections())
    assert len(data) % 4096 != 0
    path = write(tmp_path, data)
    assert type2_digest_md5(path) == hashlib.md5(padded(data)).digest()


def test_section_contents_are_ignored(tmp_path):
    plain = write(tmp_path, build_elf(sections()), "plain")
    signed = write(
        tmp_path,
        build_elf(sections(digest=b"\x11" * 16, signature=b"\x22" * 32, key=b"\x33" * 24)),
        "signed",
    )
    assert type2_digest_md5(plain) == type2_digest_md5(signed)


def test_content_outside_sections_changes_digest(tmp_path):
    data = build_elf(sections())
    tampered = bytearray(data)
    tampered[100] ^= 0xFF
    original = write(tmp_path, data, "original")
    changed = write(tmp_path, bytes(tampered), "changed")
    assert type2_digest_md5(original) != type2_digest_md5(changed)


def test_section_spanning_chunks_is_ignored(tmp_path):
    big_key = bytes(5000)
    data = build_elf(sections(key=big_key))
    key_offset = 64 + len(FILLER) + 16 + 32
    tampered = bytearray(data)
    tampered[key_offset + 4500] = 0x7A
    tampered[key_offset + 10] = 0x7B
    original = write(tmp_path, data, "original")
    changed = write(tmp_path, bytes(tampered), "changed")
    assert type2_digest_md5(original) == type2_digest_md5(changed)


def test_missing_sections_hash_whole_file(tmp_path):
    data = build_elf([(".text", b"\x90" * 40)])
    path = write(tmp_path, data)
    assert type2_digest_md5(path) == hashlib.md5(padded(data)).digest()


def test_digest_is_stable(tmp_path):
    path = write(tmp_path, build_elf(sections(digest=b"\x01" * 16)))
    assert type2_digest_md5(path) == type2_digest_md5(str(path))


def test_non_elf_raises(tmp_path):
    path = write(tmp_path, b"just some text, not an executable")
    with pytest.raises(AppImageError):
        type2_digest_md5(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileSystemError):
        type2_digest_md5(tmp_path / "absent")