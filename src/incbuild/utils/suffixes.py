from __future__ import annotations
"""Extension utilities for the entry-file allow-list.

Semantics:
    * Tokens WITHOUT a leading dot are normalized by prefixing one.
      Example: "txt" -> ".txt".
    * Tokens are lowercased; matching compares against the lowercased
      suffix of the file name, so "A.TXT" matches ".txt".
    * Only the last suffix counts: "bundle.min.ts" has suffix ".ts".

Examples:
    normalize_extensions(["txt"])    -> (".txt",)
    normalize_extensions([".TS"])    -> (".ts",)
    normalize_extensions(["", " "])  -> ()
"""

from pathlib import PurePath
from typing import Iterable, Sequence


def normalize_extensions(extensions: Iterable[str] | None) -> tuple[str, ...]:
    """Normalize and deduplicate extension tokens, keeping first-seen order."""
    if not extensions:
        return ()
    out: list[str] = []
    for raw in extensions:
        s = (raw or '').strip().lower()
        if not s:
            continue
        if not s.startswith('.'):
            s = f'.{s}'
        if s not in out:
            out.append(s)
    return tuple(out)


def is_extension_allowed(filename: str, extensions: Sequence[str]) -> bool:
    """Return True if the last suffix of *filename* is in *extensions*."""
    return PurePath(filename).suffix.lower() in extensions
