# src/incbuild/utils/paths.py
"""
paths – Small, centralized path helpers for incbuild.

Provides:
  • absolute_path(p)             – lexical absolute path (no symlink resolution)
  • is_within_dir(path, parent)  – lexical containment check
  • to_posix_relpath(path, root) – forward-slash path relative to root
"""

from __future__ import annotations

import os
from pathlib import Path


def absolute_path(p: Path | str) -> Path:
    """Return *p* as an absolute, normalized path.

    '.' and '..' segments are folded lexically; symlinks are left untouched.
    """
    return Path(os.path.abspath(os.fspath(p)))


def is_within_dir(path: Path, parent: Path) -> bool:
    """Return True if *path* equals *parent* or is nested inside it (lexically)."""
    try:
        absolute_path(path).relative_to(absolute_path(parent))
        return True
    except ValueError:
        return False


def to_posix_relpath(path: Path, root: Path) -> str:
    """Return *path* relative to *root* with forward slashes.

    Paths outside *root* keep their '..' segments.
    """
    rel = os.path.relpath(absolute_path(path), absolute_path(root))
    return rel.replace('\\', '/')
