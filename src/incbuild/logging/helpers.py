"""Logger naming, handler setup and IO tracing for incbuild.

Every logger in the package hangs off the ``incbuild`` base logger, so one
call to :func:`setup_base_logger` decides where and how the whole build logs.
Cache and filesystem chatter stays silent unless ``INCBUILD_TRACE_IO=1``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

BASE_LOGGER = 'incbuild'

# Marks handlers installed by setup_base_logger so a later call can replace them.
_OWNED_ATTR = '_incbuild_owned'


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record.

    Keys are ``ts`` (UTC, milliseconds, ``Z`` suffix), ``level``, ``module``
    (the logger name), ``msg`` and ``version``. A dict passed as
    ``extra={'context': ...}`` is added under ``ctx``.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = self._resolve_version()

    @staticmethod
    def _resolve_version() -> str:
        try:
            # Lazy import, the package __init__ pulls in this module.
            from incbuild import __version__ as _v
            return str(_v)
        except ImportError:
            return os.getenv('INCBUILD_VERSION', 'unknown')

    def format(self, record: logging.LogRecord) -> str:
        from datetime import datetime, timezone
        import json

        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        ts_str = ts.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

        payload = {
            'ts': ts_str,
            'level': record.levelname,
            'module': record.name,
            'msg': record.getMessage(),
            'version': self._version,
        }

        ctx = getattr(record, 'context', None)
        if isinstance(ctx, dict) and ctx:
            payload['ctx'] = ctx

        return json.dumps(payload, ensure_ascii=False)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Point the ``incbuild`` logger at *stream* (stderr when omitted).

    Calling it again swaps the handler from the previous call for a new one
    with the requested format and stream. Handlers attached by someone else,
    such as a test harness capturing records, are left alone and only the
    level changes.
    """
    base = logging.getLogger(BASE_LOGGER)
    base.setLevel(level)

    for old in [h for h in base.handlers if getattr(h, _OWNED_ATTR, False)]:
        base.removeHandler(old)
    if base.handlers:
        return base

    base.propagate = False
    handler = logging.StreamHandler(stream or sys.stderr)
    setattr(handler, _OWNED_ATTR, True)
    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    base.addHandler(handler)

    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """``get_logger('cache')`` -> ``incbuild.cache``; already-qualified names pass through."""
    if not name or name == BASE_LOGGER:
        return logging.getLogger(BASE_LOGGER)
    if name.startswith(BASE_LOGGER + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{BASE_LOGGER}.{name}')


def is_trace_io_enabled() -> bool:
    return os.getenv('INCBUILD_TRACE_IO') == '1'


def trace_io(logger: logging.Logger, message: str, **ctx) -> None:
    """Log *message* at DEBUG, but only while INCBUILD_TRACE_IO=1."""
    if not is_trace_io_enabled():
        return
    if ctx:
        logger.debug('%s | ctx=%r', message, ctx, extra={'context': ctx})
    else:
        logger.debug('%s', message)
