from __future__ import annotations
"""
Include path resolution.

Targets are always resolved against the directory of the file that contains
the directive, never against the project root or the entry file, so nested
includes keep working when a subtree is moved around.

Canonical paths are lexical absolute paths: '.' and '..' are folded but
symlinks are not followed, which makes two symlinked spellings of the same
file distinct cache/once/cycle keys.
"""

from pathlib import Path

from incbuild.core.errors import MalformedDirective
from incbuild.core.interfaces.fs import PathResolverProtocol
from incbuild.core.models import ResolvedTarget
from incbuild.utils.paths import absolute_path, to_posix_relpath


class IncludePathResolver(PathResolverProtocol):
    """Resolve raw include targets to canonical paths anchored at a project root."""

    def __init__(self, *, project_root: Path) -> None:
        self._root = absolute_path(project_root)

    @property
    def project_root(self) -> Path:
        return self._root

    def canonicalize(self, path: Path | str) -> Path:
        return absolute_path(path)

    def resolve(self, base_dir: Path, raw_target: str, *, origin: Path | None = None,
                offset: int | None = None) -> ResolvedTarget:
        """Resolve *raw_target* relative to *base_dir*.

        *origin* and *offset* only feed the MalformedDirective message.
        """
        target = (raw_target or '').strip()
        if not target:
            raise MalformedDirective(origin if origin is not None else base_dir, offset)
        resolved = absolute_path(Path(base_dir) / target)
        return ResolvedTarget(path=resolved, display=self.display(resolved))

    def display(self, path: Path) -> str:
        """Root-relative, forward-slash rendering of *path* for diagnostics."""
        return to_posix_relpath(path, self._root)
