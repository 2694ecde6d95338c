"""Helpers for AppImage files: MD5 and digests, ELF headers, magic bytes, XDG paths and payload resources."""

__version__ = "0.1.0"