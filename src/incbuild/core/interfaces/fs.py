from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from incbuild.core.models import ResolvedTarget


@runtime_checkable
class PathResolverProtocol(Protocol):
    def canonicalize(self, path: Path | str) -> Path:
        ...

    def resolve(self, base_dir: Path, raw_target: str) -> ResolvedTarget:
        ...

    def display(self, path: Path) -> str:
        ...


@runtime_checkable
class EntryDiscoveryProtocol(Protocol):
    def gather_entries(self, root: Path, extensions: Sequence[str]) -> list[Path]:
        ...
