"""Cache of the entries of an AppImage payload with resolved link chains."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .core import PayloadEntryType, PayloadIteratorError

__all__ = ["PayloadEntry", "PayloadEntriesCache"]


@dataclass(frozen=True)
class PayloadEntry:
    """One entry of an AppImage payload."""

    path: str
    type: PayloadEntryType
    link_target: str = ""


class PayloadEntriesCache:
    """Records the path and type of every payload entry and the final target of every link.

    Link chains are followed so that a link maps to the first entry of its
    chain that is not itself a link. Links that loop back map to nothing.
    """

    def __init__(self, entries: Iterable[PayloadEntry]) -> None:
        self._entries: dict[str, PayloadEntryType] = {}
        self._links: dict[str, str] = {}
        for entry in entries:
            self._entries[entry.path] = entry.type
            if entry.type == PayloadEntryType.LINK:
                self._links[entry.path] = entry.link_target
        self._resolve_links()

    def _resolve_links(self) -> None:
        for path in sorted(self._links):
            target = self._links[path]
            seen = {path}
            while target in self._links and target not in seen:
                seen.add(target)
                target = self._links[target]
            if target in seen:
                target = ""
            self._links[path] = target

    def entries_paths(self) -> list[str]:
        """Return the paths of all entries in sorted order."""
        return sorted(self._entries)

    def entry_type(self, path: str) -> PayloadEntryType:
        """Return the type of the entry at ``path``."""
        try:
            return self._entries[path]
        except KeyError:
            raise PayloadIteratorError(f"Entry doesn't exists: {path}") from None

    def entry_link_target(self, path: str) -> str:
        """Return the final target of the link at ``path``."""
        try:
            target = self._links[path]
        except KeyError:
            raise PayloadIteratorError(f"Not a link: {path}") from None
        if not target:
            raise PayloadIteratorError(f"Loop found: {path}")
        return target