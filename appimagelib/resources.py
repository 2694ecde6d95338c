"""Locate and extract the resources needed to integrate an AppImage into the desktop."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from .core import AppImageError, PayloadEntryType, PayloadIteratorError
from .payload_cache import PayloadEntriesCache, PayloadEntry

__all__ = ["ResourcesExtractor"]

_ICONS_DIR = "usr/share/icons"
_MIME_PREFIX = "usr/share/mime/packages/"
_MIME_SUFFIX = ".xml"
_DESKTOP_SUFFIX = ".desktop"


def _is_icon_file(path: str) -> bool:
    return _ICONS_DIR in path


def _is_main_desktop_file(path: str) -> bool:
    return _DESKTOP_SUFFIX in path and "/" not in path


def _is_mime_file(path: str) -> bool:
    return (
        path.startswith(_MIME_PREFIX)
        and path.endswith(_MIME_SUFFIX)
        and len(path) > len(_MIME_PREFIX) + len(_MIME_SUFFIX)
    )


def _read_entry(entry) -> bytes:
    content = entry.read()
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    return content.read()


class ResourcesExtractor:
    """Finds and reads the desktop entry, icons and MIME packages of an AppImage payload.

    ``payload`` is any object whose ``files()`` method returns a fresh iterable
    of entries on every call. Each entry has ``path``, ``type`` (a
    :class:`PayloadEntryType`) and ``link_target`` attributes and a ``read()``
    method that returns the entry's bytes or a binary stream. Links are
    resolved through a cache built from a first pass over the entries.
    """

    def __init__(self, payload) -> None:
        self._payload = payload
        self._cache = PayloadEntriesCache(
            PayloadEntry(entry.path, entry.type, entry.link_target or "")
            for entry in payload.files()
        )

    def _resolve(self, path: str) -> str:
        if self._cache.entry_type(path) == PayloadEntryType.LINK:
            return self._cache.entry_link_target(path)
        return path

    def extract(self, path: str) -> bytes:
        """Return the content of the entry at ``path``, following links."""
        real_path = self._resolve(path)
        for entry in self._payload.files():
            if entry.path == real_path:
                return _read_entry(entry)
        raise PayloadIteratorError(f"Entry doesn't exists: {path}")

    def extract_many(self, paths: Iterable[str]) -> dict[str, bytes]:
        """Return the contents of the entries at ``paths``, keyed by the requested path."""
        reverse_links: dict[str, str] = {}
        for path in paths:
            reverse_links[self._resolve(path)] = path

        result: dict[str, bytes] = {}
        for entry in self._payload.files():
            original = reverse_links.get(entry.path)
            if original is not None:
                result[original] = _read_entry(entry)
        return result

    def extract_to(self, targets: Mapping[str, str]) -> None:
        """Write each entry named by a key of ``targets`` to the file named by its value.

        Links are resolved to the regular entries they point to; missing parent
        directories are created.
        """
        real_targets: dict[str, str] = {}
        for source, destination in targets.items():
            real_targets[self._resolve(source)] = destination

        for entry in self._payload.files():
            destination = real_targets.get(entry.path)
            if destination is None:
                continue
            print(f'Extracting {entry.path} to "{destination}"')
            parent = os.path.dirname(os.fspath(destination))
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(destination, "wb") as output:
                output.write(_read_entry(entry))

    def extract_text(self, path: str) -> str:
        """Return the content of the text entry at ``path``, following links."""
        return self.extract(path).decode("utf-8", errors="replace")

    def desktop_entry_path(self) -> str:
        """Return the path of the main desktop entry, the first one at the payload root."""
        for entry in self._payload.files():
            if _is_main_desktop_file(entry.path):
                return entry.path
        raise AppImageError("Missing Desktop Entry")

    def icon_file_paths(self, icon_name: str) -> list[str]:
        """Return the paths under ``usr/share/icons`` whose path contains ``icon_name``."""
        return [
            path
            for path in self._cache.entries_paths()
            if _is_icon_file(path) and icon_name in path
        ]

    def mime_type_packages_paths(self) -> list[str]:
        """Return the paths of the XML packages in ``usr/share/mime/packages/``."""
        return [path for path in self._cache.entries_paths() if _is_mime_file(path)]