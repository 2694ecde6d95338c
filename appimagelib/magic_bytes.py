"""Detection of known magic byte signatures in files."""

from __future__ import annotations

from typing import BinaryIO, Optional

__all__ = ["MagicBytesChecker"]

_ISO9660_SIGNATURE = b"CD001"
_ISO9660_OFFSETS = (32769, 34817, 36865)
_ELF_SIGNATURE = b"\x7fELF"
_APPIMAGE_TYPE1_SIGNATURE = b"AI\x01"
_APPIMAGE_TYPE2_SIGNATURE = b"AI\x02"
_APPIMAGE_SIGNATURE_OFFSET = 8


class MagicBytesChecker:
    """Checks a file for ISO 9660, ELF and AppImage signatures.

    A file that cannot be opened matches no signature.
    """

    def __init__(self, path) -> None:
        self._file: Optional[BinaryIO]
        try:
            self._file = open(path, "rb")
        except OSError:
            self._file = None

    def close(self) -> None:
        """Close the underlying file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "MagicBytesChecker":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _has_signature_at(self, signature: bytes, offset: int) -> bool:
        if self._file is None:
            return False
        try:
            self._file.seek(offset)
            return self._file.read(len(signature)) == signature
        except OSError:
            return False

    def has_iso9660_signature(self) -> bool:
        """Return whether ``CD001`` appears at one of the usual ISO 9660 offsets."""
        return any(self._has_signature_at(_ISO9660_SIGNATURE, offset) for offset in _ISO9660_OFFSETS)

    def has_elf_signature(self) -> bool:
        """Return whether the file starts with the ELF magic bytes."""
        return self._has_signature_at(_ELF_SIGNATURE, 0)

    def has_appimage_type1_signature(self) -> bool:
        """Return whether the type 1 AppImage magic is present at offset 8."""
        return self._has_signature_at(_APPIMAGE_TYPE1_SIGNATURE, _APPIMAGE_SIGNATURE_OFFSET)

    def has_appimage_type2_signature(self) -> bool:
        """Return whether the type 2 AppImage magic is present at offset 8."""
        return self._has_signature_at(_APPIMAGE_TYPE2_SIGNATURE, _APPIMAGE_SIGNATURE_OFFSET)