"""Small helpers for uploaded files."""

from __future__ import annotations

from pathlib import PurePath


def safe_filename(name: str) -> str:
    """Strip directory parts and dangerous characters from an upload filename."""
    base = PurePath(name.replace("\\", "/")).name
    return "".join(c for c in base if c.isalnum() or c in "._- ").strip()
