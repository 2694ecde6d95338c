# appimagelib

A small pure Python library of building blocks for working with AppImage
files. It uses only the standard library.

## Modules

- `appimagelib.md5`: a streaming MD5 implementation. `Md5Context` has
  `update(data)` and `finalise()`, which returns the 16-byte digest.
  `md5_calculate(data)` does both in one call.
- `appimagelib.hashing`: `md5(data)` hashes a string (as UTF-8), a
  bytes-like object or a readable stream. `to_hex(digest)` and
  `hexlify(data)` give lowercase hexadecimal.
- `appimagelib.path_utils`: `path_to_uri(path)` prepends `file://` when it
  is missing. `hash_path(path)` returns the MD5 hex of the absolute path as a
  file URI, the naming scheme of the freedesktop thumbnail specification. An
  empty path gives an empty string.
- `appimagelib.xdg_basedir`: `user_home()` reads `$HOME` and raises
  `RuntimeError` if it is unset. `xdg_config_home()`, `xdg_data_home()` and
  `xdg_cache_home()` read their `$XDG_*` variable and fall back to
  `~/.config`, `~/.local/share` and `~/.cache`.
- `appimagelib.logger`: `LogLevel` (`DEBUG`, `INFO`, `WARNING`, `ERROR`) and
  a shared `Logger` (`Logger.get_instance()`, static `debug`, `info`,
  `warning` and `error`). By default it writes `LEVEL: message` to stderr.
  `set_logger_callback(callback)` routes messages to
  `callback(level, message)`, and `None` restores the default.
- `appimagelib.url_encoder.encode(value)`: percent-encodes every byte that is
  not alphanumeric or one of `-_.~/`, with upper-case hex digits.
- `appimagelib.string_sanitizer.sanitize_for_path(value)`: replaces every
  UTF-8 byte outside `[0-9A-Za-z._-]` with `_`.
- `appimagelib.magic_bytes.MagicBytesChecker`: a context manager with
  `has_elf_signature()`, `has_iso9660_signature()`,
  `has_appimage_type1_signature()` and `has_appimage_type2_signature()`. A
  file that cannot be opened matches nothing.
- `appimagelib.core`: `AppImageError` and its subclasses `FileSystemError`,
  `AppImageIOError`, `PayloadIteratorError` and `DesktopIntegrationError`.
  It also holds the `AppImageFormat` and `PayloadEntryType` enums.
- `appimagelib.elf`:
  - `ElfFile(path).size()` and `elf_size(path)` give the size of the ELF
    image, worked out from its headers. This is the end of the section
    header table or of the last section, whichever lies further.
  - `get_section_offset_and_length(path, name)` returns `(offset, length)`,
    or `(0, 0)` when no section has that name.
  - `read_file_offset_length`, `print_hex` and `print_binary` read and print
    raw byte ranges.
- `appimagelib.digest.type2_digest_md5(path)`: returns the raw MD5 digest of
  a type 2 AppImage. The `.digest_md5`, `.sha256_sig` and `.sig_key` sections
  are hashed as zeros. The file is fed in 4096-byte chunks and the last chunk
  is zero-padded, so the result differs from `md5sum`.
- `appimagelib.payload_cache`: `PayloadEntry` (path, type, link target) and
  `PayloadEntriesCache`. The cache has `entries_paths()`, `entry_type(path)`
  and `entry_link_target(path)`, and follows link chains. Unknown entries,
  non-links and link loops raise `PayloadIteratorError`.
- `appimagelib.resources.ResourcesExtractor(payload)`: `extract`,
  `extract_many`, `extract_text`, `extract_to`, `desktop_entry_path`,
  `icon_file_paths` and `mime_type_packages_paths`. `payload` is any object
  whose `files()` returns fresh entries, each with `path`, `type`,
  `link_target` and `read()`.

## Example

```python
from appimagelib.magic_bytes import MagicBytesChecker
from appimagelib.elf import elf_size
from appimagelib.digest import type2_digest_md5
from appimagelib.hashing import to_hex
from appimagelib.path_utils import hash_path

with MagicBytesChecker("Some.AppImage") as checker:
    if checker.has_appimage_type2_signature():
        print("ELF part size", elf_size("Some.AppImage"))
        print("digest", to_hex(type2_digest_md5("Some.AppImage")))

print("id", hash_path("Some.AppImage"))
```

## What it does not do

The package cannot read the file system embedded in an AppImage. It has no
SquashFS or ISO 9660 reader, so `ResourcesExtractor` needs a payload object
supplied by the caller. The package also does not:

- register or unregister AppImages in the desktop
- generate thumbnails or convert icons
- provide a command-line tool

## Running the tests

```
pip install -e .[test]
pytest
```