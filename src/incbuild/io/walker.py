from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from incbuild.core.errors import StorageReadFailure
from incbuild.core.interfaces.fs import EntryDiscoveryProtocol
from incbuild.logging.helpers import get_logger
from incbuild.utils.paths import absolute_path
from incbuild.utils.suffixes import is_extension_allowed, normalize_extensions


class EntryWalker(EntryDiscoveryProtocol):
    """Recursively list entry files under a directory, filtered by extension."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('io.walker')

    def gather_entries(self, root: Path, extensions: Sequence[str]) -> List[Path]:
        allowed = normalize_extensions(extensions)
        root = absolute_path(root)
        collected: List[Path] = []

        def _onerror(exc: OSError) -> None:
            failed = Path(exc.filename) if exc.filename else root
            raise StorageReadFailure(failed, exc.strerror or str(exc)) from exc

        for dirpath, _dirnames, filenames in os.walk(root, onerror=_onerror):
            for fn in filenames:
                if not is_extension_allowed(fn, allowed):
                    continue
                fp = Path(dirpath, fn)
                if fp.is_file():
                    collected.append(fp)

        self._log.debug('discovered %d entry file(s) under %s', len(collected), root)
        return sorted(collected, key=str)
