from __future__ import annotations
"""Text post-processing protocol definitions."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class TextPostProcessorProtocol(Protocol):
    """Protocol for the string transforms applied after expansion.

    Implementations are expected to:
      * Substitute quoted token placeholders.
      * Minify or collapse blank lines.
      * Trim and prepend the rendered banner.
    """

    def process(self, text: str, *, source: Path) -> str:
        ...
