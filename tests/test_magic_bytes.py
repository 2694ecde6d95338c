import pytest

from appimagelib.magic_bytes import MagicBytesChecker


def _elf_header(magic: bytes) -> bytes:
    return b"\x7fELF" + b"\x02\x01\x01\x00" + magic + bytes(64)


@pytest.fixture
def type2_file(tmp_path):
    path = tmp_path / "app.AppImage"
    path.write_bytes(_elf_header(b"AI\x02"))
    return path


@pytest.fixture
def type1_file(tmp_path):
    path = tmp_path / "legacy.AppImage"
    content = bytearray(_elf_header(b"AI\x01").ljust(40000, b"\x00"))
    content[32769:32774] = b"CD001"
    path.write_bytes(bytes(content))
    return path


def test_type2_signatures(type2_file):
    with MagicBytesChecker(type2_file) as checker:
        assert checker.has_elf_signature() is True
        assert checker.has_appimage_type2_signature() is True
        assert checker.has_appimage_type1_signature() is False
        assert checker.has_iso9660_signature() is False


def test_type1_signatures(type1_file):
    with MagicBytesChecker(type1_file) as checker:
        assert checker.has_elf_signature() is True
        assert checker.has_appimage_type1_signature() is True
        assert checker.has_appimage_type2_signature() is False
        assert checker.has_iso9660_signature() is True


@pytest.mark.parametrize("offset", [32769, 34817, 36865])
def test_iso9660_any_known_offset(tmp_path, offset):
    path = tmp_path / "image.iso"
    content = bytearray(40000)
    content[offset:offset + 5] = b"CD001"
    path.write_bytes(bytes(content))
    with MagicBytesChecker(path) as checker:
        assert checker.has_iso9660_signature() is True
        assert checker.has_elf_signature() is False


def test_iso_check_does_not_spoil_later_checks(type2_file):
    with MagicBytesChecker(type2_file) as checker:
        assert checker.has_iso9660_signature() is False
        assert checker.has_elf_signature() is True


def test_missing_file_matches_nothing(tmp_path):
    with MagicBytesChecker(tmp_path / "absent") as checker:
        results = [
            checker.has_elf_signature(),
            checker.has_iso9660_signature(),
            checker.has_appimage_type1_signature(),
            checker.has_appimage_type2_signature(),
        ]
    assert results == [False, False, False, False]


def test_truncated_signature_does_not_match(tmp_path):
    path = tmp_path / "short"
    path.write_bytes(b"\x7fEL")
    with MagicBytesChecker(path) as checker:
        assert checker.has_elf_signature() is False
        assert checker.has_appimage_type2_signature() is False


def test_closed_checker_matches_nothing(type2_file):
    checker = MagicBytesChecker(type2_file)
    assert checker.has_elf_signature() is True
    checker.close()
    assert checker.has_elf_signature() is False
    checker.close()
    assert checker.has_appimage_type2_signature() is False