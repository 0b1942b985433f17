from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from incbuild.core.errors import StorageReadFailure
from incbuild.core.interfaces.cache import ContentCacheProtocol
from incbuild.logging.helpers import get_logger, trace_io


def read_text_file(path: Path) -> str:
    """Read *path* as UTF-8 without newline translation."""
    with open(path, 'r', encoding='utf-8', newline='') as fh:
        return fh.read()


class ContentCache(ContentCacheProtocol):
    """Run-scoped, read-through map from canonical absolute path to raw text.

    Entries are never invalidated: the build assumes the source tree does not
    change while it runs.
    """

    def __init__(self, *, reader: Optional[Callable[[Path], str]] = None,
                 logger: Optional[logging.Logger] = None) -> None:
        self._reader = reader or read_text_file
        self._log = logger or get_logger('io.cache')
        self._texts: Dict[Path, str] = {}
        self._reads = 0
        self._hits = 0

    def read(self, path: Path) -> str:
        cached = self._texts.get(path)
        if cached is not None:
            self._hits += 1
            trace_io(self._log, 'cache hit', path=str(path))
            return cached

        trace_io(self._log, 'cache miss', path=str(path))
        try:
            text = self._reader(path)
        except (OSError, UnicodeDecodeError) as exc:
            reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
            raise StorageReadFailure(path, reason) from exc
        self._reads += 1
        self._texts[path] = text
        return text

    def __contains__(self, path: object) -> bool:
        return path in self._texts

    def __len__(self) -> int:
        return len(self._texts)

    @property
    def reads(self) -> int:
        return self._reads

    @property
    def hits(self) -> int:
        return self._hits
