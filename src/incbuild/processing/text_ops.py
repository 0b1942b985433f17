from __future__ import annotations
"""
Post-expansion text transforms.

Applied in this order to the flattened text of one entry:

1. token substitution: every ``"{{name}}"`` (quotes included) becomes the
   configured value, in a single pass so produced text is never re-scanned;
2. minify (strip ``#`` comments to end of line, collapse all whitespace to one
   space) or, when minify is off, collapse 3+ consecutive line breaks to two;
3. trim;
4. banner, rendered with ``{{TIMESTAMP}}`` and ``{{SOURCE}}``.
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from incbuild.constants import BANNER_SOURCE, BANNER_TIMESTAMP, COMMENT_MARKER
from incbuild.core.interfaces.templating import TemplateEngineProtocol
from incbuild.core.interfaces.text import TextPostProcessorProtocol
from incbuild.logging.helpers import get_logger
from incbuild.rendering.template_engine import DoubleBraceTemplateEngine
from incbuild.utils.paths import to_posix_relpath

_COMMENT_RX = re.compile(re.escape(COMMENT_MARKER) + r'.*')
_WHITESPACE_RX = re.compile(r'\s+')
_BLANK_RUN_RX = re.compile(r'[\r\n]{3,}')


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a 'Z' suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def token_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def substitute_tokens(text: str, tokens: Mapping[str, Any]) -> str:
    """Replace quoted ``"{{name}}"`` placeholders with their literal values."""
    if not tokens:
        return text
    values = {f'"{{{{{name}}}}}"': token_value(value) for name, value in tokens.items()}
    rx = re.compile('|'.join(re.escape(k) for k in values))
    return rx.sub(lambda m: values[m.group(0)], text)


def minify_text(text: str) -> str:
    text = _COMMENT_RX.sub('', text)
    return _WHITESPACE_RX.sub(' ', text)


def collapse_blank_lines(text: str) -> str:
    return _BLANK_RUN_RX.sub('\n\n', text)


class TextPostProcessor(TextPostProcessorProtocol):
    def __init__(
        self,
        *,
        project_root: Path,
        tokens: Optional[Mapping[str, Any]] = None,
        minify: bool = False,
        banner: str = '',
        template_engine: Optional[TemplateEngineProtocol] = None,
        clock: Optional[Callable[[], str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._root = project_root
        self._tokens = dict(tokens or {})
        self._minify = bool(minify)
        self._banner = banner or ''
        self._engine = template_engine or DoubleBraceTemplateEngine(logger=logger)
        self._clock = clock or utc_timestamp
        self._log = logger or get_logger('processing.text')

    def render_banner(self, source: Path) -> str:
        if not self._banner:
            return ''
        return self._engine.render(
            self._banner,
            {
                BANNER_TIMESTAMP: self._clock(),
                BANNER_SOURCE: to_posix_relpath(source, self._root),
            },
        )

    def process(self, text: str, *, source: Path) -> str:
        text = substitute_tokens(text, self._tokens)
        text = minify_text(text) if self._minify else collapse_blank_lines(text)
        return self.render_banner(source) + text.strip()
