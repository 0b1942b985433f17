"""
Cache interfaces for incbuild.

This module defines a DI-friendly protocol for the run-scoped content cache
used by the include expander. The concrete implementation lives in
`incbuild.io.content_cache.ContentCache`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ContentCacheProtocol(Protocol):
    """Contract for read-through text caches keyed by canonical absolute path.

    Implementations must hit storage at most once per path for the lifetime
    of the cache and must never invalidate an entry.
    """

    def read(self, path: Path) -> str:
        """Return the text for *path*, reading it from storage on a miss."""

    def __contains__(self, path: object) -> bool:
        ...

    @property
    def reads(self) -> int:
        """Number of storage reads performed so far."""

    @property
    def hits(self) -> int:
        """Number of lookups served from memory."""
