"""Minimal ELF reading: file size from headers and section lookup by name."""

from __future__ import annotations

import os
import struct
from collections import namedtuple
from typing import BinaryIO, NamedTuple

from .core import AppImageError, AppImageIOError, FileSystemError

__all__ = [
    "EI_NIDENT",
    "EI_CLASS",
    "EI_DATA",
    "ELFCLASS32",
    "ELFCLASS64",
    "ELFDATA2LSB",
    "ELFDATA2MSB",
    "ElfFile",
    "elf_size",
    "get_section_offset_and_length",
    "read_file_offset_length",
    "print_hex",
    "print_binary",
]

EI_NIDENT = 16
EI_CLASS = 4
EI_DATA = 5
ELFCLASS32 = 1
ELFCLASS64 = 2
ELFDATA2LSB = 1
ELFDATA2MSB = 2

_Ehdr = namedtuple(
    "_Ehdr",
    "ident type machine version entry phoff shoff flags "
    "ehsize phentsize phnum shentsize shnum shstrndx",
)
_Shdr = namedtuple(
    "_Shdr",
    "name type flags addr offset size link info addralign entsize",
)


class _Formats(NamedTuple):
    ehdr: str
    shdr: str


_FORMATS = {
    ELFCLASS32: _Formats(ehdr="16sHHIIIIIHHHHHH", shdr="10I"),
    ELFCLASS64: _Formats(ehdr="16sHHIQQQIHHHHHH", shdr="IIQQQQIIQQ"),
}


def _open(path: str) -> BinaryIO:
    try:
        return open(path, "rb")
    except OSError as error:
        raise FileSystemError(f"Cannot open {path}: {error.strerror}") from error


def _byte_order(data_order: int) -> str:
    return ">" if data_order == ELFDATA2MSB else "<"


def _read_struct(stream: BinaryIO, layout: struct.Struct, what: str, path: str) -> bytes:
    raw = stream.read(layout.size)
    if len(raw) != layout.size:
        raise AppImageIOError(f"Read of {what} from {path} failed")
    return raw


class ElfFile:
    """Reads just enough of an ELF file to work out its size on disk."""

    def __init__(self, path) -> None:
        self.path = os.fspath(path)

    def size(self) -> int:
        """Return the size of the ELF image according to its headers.

        An ELF file ends either with its section header table or with the
        data of its last section, whichever lies further.
        """
        with _open(self.path) as stream:
            ident = stream.read(EI_NIDENT)
            if len(ident) != EI_NIDENT:
                raise AppImageIOError(f"Read of e_ident from {self.path} failed")

            data_order = ident[EI_DATA]
            if data_order not in (ELFDATA2LSB, ELFDATA2MSB):
                raise AppImageError(f"Unknown ELF data order {data_order}")

            elf_class = ident[EI_CLASS]
            formats = _FORMATS.get(elf_class)
            if formats is None:
                raise AppImageError(f"Unknown ELF class: {elf_class}")

            prefix = _byte_order(data_order)
            ehdr_struct = struct.Struct(prefix + formats.ehdr)
            shdr_struct = struct.Struct(prefix + formats.shdr)

            stream.seek(0)
            ehdr = _Ehdr._make(
                ehdr_struct.unpack(_read_struct(stream, ehdr_struct, "ELF header", self.path))
            )

            last_shdr_offset = ehdr.shoff + ehdr.shentsize * (ehdr.shnum - 1)
            if last_shdr_offset < 0:
                raise AppImageIOError(f"Read of ELF section header from {self.path} failed")
            stream.seek(last_shdr_offset)
            shdr = _Shdr._make(
                shdr_struct.unpack(
                    _read_struct(stream, shdr_struct, "ELF section header", self.path)
                )
            )

        sht_end = ehdr.shoff + ehdr.shentsize * ehdr.shnum
        last_section_end = shdr.offset + shdr.size
        return max(sht_end, last_section_end)


def elf_size(path) -> int:
    """Return the on-disk size of the ELF file at ``path`` computed from its headers."""
    return ElfFile(path).size()


def _c_string(data: bytes, start: int) -> bytes:
    if start < 0 or start > len(data):
        raise IndexError(start)
    end = data.find(b"\0", start)
    return data[start:] if end == -1 else data[start:end]


def get_section_offset_and_length(path, section_name: str) -> tuple[int, int]:
    """Return ``(offset, length)`` of the section named ``section_name``.

    ``(0, 0)`` is returned when no section has that name; when several do,
    the last one wins.
    """
    path = os.fspath(path)
    with _open(path) as stream:
        data = stream.read()

    if len(data) <= EI_DATA or data[EI_CLASS] not in _FORMATS:
        raise AppImageError("Platforms other than 32-bit/64-bit are currently not supported!")

    formats = _FORMATS[data[EI_CLASS]]
    prefix = _byte_order(data[EI_DATA])
    wanted = section_name.encode("utf-8")

    try:
        ehdr = _Ehdr._make(struct.unpack_from(prefix + formats.ehdr, data, 0))
        shdr_struct = struct.Struct(prefix + formats.shdr)
        table_end = ehdr.shoff + shdr_struct.size * ehdr.shnum
        if table_end > len(data):
            raise IndexError(table_end)
        headers = [
            _Shdr._make(fields)
            for fields in shdr_struct.iter_unpack(data[ehdr.shoff:table_end])
        ]
        string_table = headers[ehdr.shstrndx].offset

        result = (0, 0)
        for header in headers:
            if _c_string(data, string_table + header.name) == wanted:
                result = (header.offset, header.size)
    except (struct.error, IndexError) as error:
        raise AppImageError(f"Malformed ELF file: {path}") from error
    return result


def read_file_offset_length(path, offset: int, length: int) -> bytes:
    """Return up to ``length`` bytes of the file at ``path`` starting at ``offset``."""
    with _open(os.fspath(path)) as stream:
        stream.seek(offset)
        return stream.read(length)


def _until_nul(data: bytes) -> bytes:
    return data.split(b"\0", 1)[0]


def print_hex(path, offset: int, length: int) -> None:
    """Print the bytes of a file region in hexadecimal, stopping at the first NUL byte.

    Each byte is printed without padding as a signed char, so bytes from 0x80
    upward appear sign-extended to 32 bits.
    """
    data = _until_nul(read_file_offset_length(path, offset, length))
    print("".join(f"{byte if byte < 0x80 else byte | 0xFFFFFF00:x}" for byte in data))


def print_binary(path, offset: int, length: int) -> None:
    """Print a file region as text, stopping at the first NUL byte."""
    data = _until_nul(read_file_offset_length(path, offset, length))
    print(data.decode("utf-8", errors="replace"))