from __future__ import annotations

import re
from typing import Iterator, Optional, Sequence

from incbuild.constants import DEFAULT_INCLUDE_PATTERN, ONCE_MARKERS
from incbuild.core.errors import ConfigInvalid
from incbuild.core.models import Directive, DirectiveKind, ScanPiece


def compile_include_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile a directive pattern in multiline mode and check its groups.

    Group 1 must capture the directive keyword and group 2 the target path.
    """
    if isinstance(pattern, re.Pattern):
        rx = pattern
    else:
        try:
            rx = re.compile(pattern, re.MULTILINE)
        except re.error as exc:
            raise ConfigInvalid(f'invalid include pattern {pattern!r}: {exc}') from exc
    if rx.groups < 2:
        raise ConfigInvalid(
            f'include pattern {rx.pattern!r} needs two capture groups (keyword, target), has {rx.groups}'
        )
    return rx


def classify_keyword(keyword: str, markers: Sequence[str] = ONCE_MARKERS) -> DirectiveKind:
    if any(m in keyword for m in markers):
        return DirectiveKind.ONCE
    return DirectiveKind.PLAIN


class DirectiveScan:
    """Restartable view over the directives of one text buffer.

    Every iteration builds its own ``finditer`` cursor, so nested scans of
    other buffers can never move this one.
    """

    def __init__(self, text: str, pattern: re.Pattern[str]) -> None:
        self.text = text
        self._rx = pattern

    def __iter__(self) -> Iterator[ScanPiece]:
        last = 0
        for m in self._rx.finditer(self.text):
            keyword = (m.group(1) or '').strip()
            target = m.group(2) or ''
            directive = Directive(
                kind=classify_keyword(keyword),
                raw_target=target,
                start=m.start(),
                end=m.end(),
            )
            yield ScanPiece(self.text[last:m.start()], directive)
            last = m.end()
        yield ScanPiece(self.text[last:])

    def directives(self) -> list[Directive]:
        return [p.directive for p in self if p.directive is not None]


class DirectiveScanner:
    """Find include directives in source text."""

    def __init__(self, pattern: Optional[str | re.Pattern[str]] = None) -> None:
        self._rx = compile_include_pattern(pattern or DEFAULT_INCLUDE_PATTERN)

    @property
    def pattern(self) -> re.Pattern[str]:
        return self._rx

    def scan(self, text: str) -> DirectiveScan:
        return DirectiveScan(text, self._rx)
