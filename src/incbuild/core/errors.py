from __future__ import annotations

"""Error kinds raised by incbuild.

Every failure that aborts a build derives from :class:`BuildError`, so the
CLI has a single place to turn it into a diagnostic and a non-zero exit.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from incbuild.core.report import BuildReport


class BuildError(Exception):
    """Base class for every error that aborts a build run."""

    # Set by the runner to the partial report of the aborted run.
    report: Optional["BuildReport"] = None


class ConfigMissing(BuildError):
    """Raised when no configuration file can be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f'missing {path.name} at {path}')
        self.path = path


class ConfigInvalid(BuildError, ValueError):
    """Raised when the configuration file cannot be parsed or has wrong types."""


class MalformedDirective(BuildError, ValueError):
    """Raised when an include directive has an empty target."""

    def __init__(self, file: Path | str, offset: int | None = None) -> None:
        where = f'{file}' if offset is None else f'{file} at index {offset}'
        super().__init__(f'malformed include in {where}')
        self.file = file
        self.offset = offset


class IncludeCycle(BuildError):
    """Raised when a file includes itself through the active inclusion chain."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__('include cycle detected:\n  ' + '\n  -> '.join(self.chain))


class IncludeDepthExceeded(BuildError):
    """Raised when the inclusion chain grows past the configured ceiling."""

    def __init__(self, chain: Sequence[str], max_depth: int) -> None:
        self.chain = tuple(chain)
        self.max_depth = max_depth
        super().__init__(
            f'include depth {len(self.chain)} exceeds limit {max_depth}:\n  '
            + '\n  -> '.join(self.chain)
        )


class StorageReadFailure(BuildError):
    """Raised when a source file is missing or unreadable."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f'cannot read {path}: {reason}')
        self.path = path


class StorageWriteFailure(BuildError):
    """Raised when an output file or directory cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f'cannot write {path}: {reason}')
        self.path = path
