"""Locations of the user's XDG base directories."""

from __future__ import annotations

import os

__all__ = ["user_home", "xdg_config_home", "xdg_data_home", "xdg_cache_home"]


def user_home() -> str:
    """Return the user's home directory as given by ``$HOME``.

    Raises ``RuntimeError`` if ``$HOME`` is not set.
    """
    try:
        return os.environ["HOME"]
    except KeyError:
        raise RuntimeError("HOME environment variable is not set") from None


def _base_dir(variable: str, suffix: str) -> str:
    value = os.environ.get(variable)
    if value is None:
        return user_home() + suffix
    return value


def xdg_config_home() -> str:
    """Return ``$XDG_CONFIG_HOME``, falling back to ``~/.config``."""
    return _base_dir("XDG_CONFIG_HOME", "/.config")


def xdg_data_home() -> str:
    """Return ``$XDG_DATA_HOME``, falling back to ``~/.local/share``."""
    return _base_dir("XDG_DATA_HOME", "/.local/share")


def xdg_cache_home() -> str:
    """Return ``$XDG_CACHE_HOME``, falling back to ``~/.cache``."""
    return _base_dir("XDG_CACHE_HOME", "/.cache")