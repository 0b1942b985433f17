from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from incbuild.constants import (
    DEFAULT_DIST_DIR,
    DEFAULT_ENTRY_DIR,
    DEFAULT_EXTENSIONS,
    DEFAULT_INCLUDE_PATTERN,
    DEFAULT_MAX_DEPTH,
)


class DirectiveKind(str, Enum):
    PLAIN = 'plain'
    ONCE = 'once'


@dataclass(frozen=True)
class Directive:
    """One include directive found by the scanner; span is ``[start, end)``."""
    kind: DirectiveKind
    raw_target: str
    start: int
    end: int

    @property
    def is_once(self) -> bool:
        return self.kind is DirectiveKind.ONCE


@dataclass(frozen=True)
class ScanPiece:
    """Literal text followed by the directive that ends it.

    The last piece of a scan carries the tail literal and no directive.
    """
    literal: str
    directive: Optional[Directive] = None


@dataclass(frozen=True)
class ResolvedTarget:
    path: Path
    display: str


@dataclass(frozen=True)
class BuildConfig:
    """Immutable build configuration, loaded once per run."""
    entry_dir: str = DEFAULT_ENTRY_DIR
    dist_dir: str = DEFAULT_DIST_DIR
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    include_pattern: str = DEFAULT_INCLUDE_PATTERN
    tokens: Mapping[str, Any] = field(default_factory=dict)
    minify: bool = False
    banner: str = ''
    max_depth: int = DEFAULT_MAX_DEPTH
