from __future__ import annotations
import logging
import shutil
from pathlib import Path
from typing import Optional

from incbuild.core.errors import StorageWriteFailure
from incbuild.logging.helpers import get_logger, trace_io
from incbuild.utils.paths import absolute_path, is_within_dir


def is_unsafe_dist(dist_dir: Path, *, project_root: Path, entry_dir: Path) -> bool:
    """Return True when wiping *dist_dir* could destroy sources.

    Unsafe means: outside the project root, equal to it, or nested inside
    (or equal to) the entry directory. The check is lexical, symlinks are
    not followed.
    """
    dist = absolute_path(dist_dir)
    root = absolute_path(project_root)
    if not is_within_dir(dist, root) or dist == root:
        return True
    return is_within_dir(dist, entry_dir)


class OutputDirectory:
    """Prepare the build output directory and write flattened files into it."""

    def __init__(self, dist_dir: Path, *, project_root: Path, entry_dir: Path,
                 logger: Optional[logging.Logger] = None) -> None:
        self.path = absolute_path(dist_dir)
        self._root = absolute_path(project_root)
        self._entry_dir = absolute_path(entry_dir)
        self._log = logger or get_logger('io.output')

    @property
    def is_unsafe(self) -> bool:
        return is_unsafe_dist(self.path, project_root=self._root, entry_dir=self._entry_dir)

    def prepare(self) -> bool:
        """Create the directory, emptying it first when that is safe.

        Returns:
            True if existing contents were wiped.
        """
        if self.is_unsafe:
            self._log.warning('⚠  unsafe dist folder detected (%s), existing files are kept', self.path)
            self._ensure_dir(self.path)
            return False

        self._ensure_dir(self.path)
        for child in self.path.iterdir():
            try:
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
            except OSError as exc:
                raise StorageWriteFailure(child, exc.strerror or str(exc)) from exc
            trace_io(self._log, 'removed', path=str(child))
        return True

    def write(self, relpath: Path | str, text: str) -> Path:
        """Write *text* to *relpath* under the output directory, creating parents."""
        target = self.path / relpath
        self._ensure_dir(target.parent)
        try:
            with open(target, 'w', encoding='utf-8', newline='') as fh:
                fh.write(text)
        except OSError as exc:
            raise StorageWriteFailure(target, exc.strerror or str(exc)) from exc
        return target

    @staticmethod
    def _ensure_dir(path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageWriteFailure(path, exc.strerror or str(exc)) from exc
