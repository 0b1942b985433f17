from __future__ import annotations
"""
Recursive include expansion.

State lives at three different scopes and is kept in three separate objects:

* the content cache is shared by every entry of a run,
* the once-set belongs to a single entry file's output,
* the inclusion stack is the active chain of one recursive call tree.

Diamond inclusion is allowed (the same file reached through two unrelated
chains is expanded twice). Only a file that reappears in its own active chain
is a cycle.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Set, Tuple

from incbuild.constants import DEFAULT_MAX_DEPTH
from incbuild.core.errors import ConfigInvalid, IncludeCycle, IncludeDepthExceeded
from incbuild.core.interfaces.cache import ContentCacheProtocol
from incbuild.core.interfaces.fs import PathResolverProtocol
from incbuild.logging.helpers import get_logger
from incbuild.parsing.scanner import DirectiveScanner

# Frames kept free for the caller and for the calls made at each level.
_RECURSION_HEADROOM = 200


def max_depth_ceiling() -> int:
    """Largest max_depth that expansion can reach without a RecursionError."""
    return max(1, sys.getrecursionlimit() - _RECURSION_HEADROOM)


class IncludeExpander:
    """Flatten files by substituting include directives with their targets."""

    def __init__(
        self,
        *,
        cache: ContentCacheProtocol,
        resolver: PathResolverProtocol,
        scanner: Optional[DirectiveScanner] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if max_depth < 1:
            raise ValueError('max_depth must be at least 1')
        if max_depth > max_depth_ceiling():
            raise ConfigInvalid(
                f'max_depth {max_depth} exceeds the interpreter limit of {max_depth_ceiling()}'
            )
        self._cache = cache
        self._resolver = resolver
        self._scanner = scanner or DirectiveScanner()
        self._max_depth = max_depth
        self._log = logger or get_logger('expander')

    def expand_entry(self, entry: Path) -> str:
        """Expand one entry file with a fresh once-set and an empty chain."""
        once: Set[Path] = set()
        return self.expand(entry, once_set=once)

    def expand(self, path: Path, *, once_set: Set[Path], stack: Tuple[Path, ...] = ()) -> str:
        """Return the fully flattened text of *path*.

        Args:
            path: File to expand; relative paths resolve against the CWD.
            once_set: Paths already emitted by an include-once directive for
                the current entry. Mutated in place.
            stack: Active inclusion chain, ancestors first.
        """
        abs_path = self._resolver.canonicalize(path)

        if abs_path in stack:
            raise IncludeCycle([self._resolver.display(p) for p in (*stack, abs_path)])
        if len(stack) >= self._max_depth:
            raise IncludeDepthExceeded(
                [self._resolver.display(p) for p in (*stack, abs_path)], self._max_depth
            )

        text = self._cache.read(abs_path)
        base_dir = abs_path.parent
        chain = (*stack, abs_path)

        parts: list[str] = []
        for piece in self._scanner.scan(text):
            parts.append(piece.literal)
            directive = piece.directive
            if directive is None:
                continue

            target = self._resolver.resolve(
                base_dir, directive.raw_target, origin=abs_path, offset=directive.start
            )
            if directive.is_once:
                if target.path in once_set:
                    self._log.debug('skip include_once %s (already emitted)', target.display)
                    continue
                once_set.add(target.path)

            parts.append(self.expand(target.path, once_set=once_set, stack=chain))

        return ''.join(parts)
