"""Vault path helpers."""

from __future__ import annotations

import re
import unicodedata

_SLASHES = re.compile(r"[\\/]+")
_EDGE_SLASHES = re.compile(r"^/+|/+$")
_NBSP = re.compile("[\u00a0\u202f]")
_BLANK = re.compile(r"^\s*$")


def normalize_path(path: str) -> str:
    """Normalize a vault-relative path.

    Separators are collapsed to a single forward slash, leading and
    trailing slashes are dropped and non-breaking spaces become plain
    spaces. The root of the vault is represented as ``"/"``.

    Args:
        path: Raw path as typed by the user

    Returns:
        Canonical relative path
    """
    path = _SLASHES.sub("/", path)
    path = _EDGE_SLASHES.sub("", path)
    if path == "":
        path = "/"
    path = _NBSP.sub(" ", path)
    return unicodedata.normalize("NFC", path)


def sanitise_note(value: str | None) -> str | None:
    """Normalize a note path, or return None when nothing usable was typed."""
    if value is None or _BLANK.match(value):
        return None
    return normalize_path(value)
