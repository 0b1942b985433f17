from __future__ import annotations

"""Project-wide constants used across modules.

Defaults mirror the keys accepted in ``build.config.json``.
"""

CONFIG_FILENAME: str = 'build.config.json'

DEFAULT_ENTRY_DIR: str = 'src'
DEFAULT_DIST_DIR: str = 'dist'
DEFAULT_EXTENSIONS: tuple[str, ...] = ('.ts', '.thinkscript', '.txt')
DEFAULT_MAX_DEPTH: int = 100

# Group 1: directive keyword, group 2: target path.
DEFAULT_INCLUDE_PATTERN: str = (
    r'(?:^|(?<=\s))'
    r'(#include(?:_once)?|include(?:_once)?|//\s*@include(?:_once)?)'
    r'\s+"?([^";\r\n]+)"?;?'
)

# Substrings of the keyword capture that mark an include-once directive.
ONCE_MARKERS: tuple[str, ...] = ('include_once', '@include_once')

# Minify treats everything from this marker to end of line as a comment.
COMMENT_MARKER: str = '#'

BANNER_TIMESTAMP: str = 'TIMESTAMP'
BANNER_SOURCE: str = 'SOURCE'
