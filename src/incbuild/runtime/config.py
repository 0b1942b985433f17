from __future__ import annotations
"""
Configuration loading.

The build reads ``build.config.json`` from the project root (or an explicit
path). Keys are camelCase; any key that is absent or falsy falls back to its
default:

    {
      "entryDir": "src",
      "distDir": "dist",
      "extensions": [".ts", ".thinkscript", ".txt"],
      "includeRegex": "<see incbuild.constants.DEFAULT_INCLUDE_PATTERN>",
      "tokens": {"VERSION": "1.2.3"},
      "minify": false,
      "banner": "// built {{TIMESTAMP}} from {{SOURCE}}\\n",
      "maxDepth": 100
    }
"""

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from incbuild.constants import (
    CONFIG_FILENAME,
    DEFAULT_DIST_DIR,
    DEFAULT_ENTRY_DIR,
    DEFAULT_EXTENSIONS,
    DEFAULT_INCLUDE_PATTERN,
    DEFAULT_MAX_DEPTH,
)
from incbuild.core.errors import ConfigInvalid, ConfigMissing
from incbuild.core.models import BuildConfig
from incbuild.logging.helpers import get_logger
from incbuild.parsing.scanner import compile_include_pattern
from incbuild.rendering.expander import max_depth_ceiling
from incbuild.utils.suffixes import normalize_extensions

_log = get_logger('config')


def _expect(raw: Mapping[str, Any], key: str, kind: type | tuple[type, ...], default: Any) -> Any:
    value = raw.get(key)
    if not value:
        return default
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        names = kind.__name__ if isinstance(kind, type) else '/'.join(k.__name__ for k in kind)
        raise ConfigInvalid(f'config key {key!r} must be {names}, got {type(value).__name__}')
    return value


def config_from_mapping(raw: Mapping[str, Any]) -> BuildConfig:
    """Build a :class:`BuildConfig` from a decoded JSON object, applying defaults."""
    if not isinstance(raw, Mapping):
        raise ConfigInvalid(f'config must be a JSON object, got {type(raw).__name__}')

    extensions = _expect(raw, 'extensions', list, list(DEFAULT_EXTENSIONS))
    if not all(isinstance(e, str) for e in extensions):
        raise ConfigInvalid("config key 'extensions' must be a list of strings")

    pattern = _expect(raw, 'includeRegex', str, DEFAULT_INCLUDE_PATTERN)
    compile_include_pattern(pattern)

    max_depth = _expect(raw, 'maxDepth', int, DEFAULT_MAX_DEPTH)
    if max_depth < 1:
        raise ConfigInvalid("config key 'maxDepth' must be a positive integer")
    if max_depth > max_depth_ceiling():
        raise ConfigInvalid(
            f"config key 'maxDepth' must not exceed {max_depth_ceiling()}, got {max_depth}"
        )

    return BuildConfig(
        entry_dir=_expect(raw, 'entryDir', str, DEFAULT_ENTRY_DIR),
        dist_dir=_expect(raw, 'distDir', str, DEFAULT_DIST_DIR),
        extensions=normalize_extensions(extensions),
        include_pattern=pattern,
        tokens=dict(_expect(raw, 'tokens', dict, {})),
        minify=bool(_expect(raw, 'minify', bool, False)),
        banner=_expect(raw, 'banner', str, ''),
        max_depth=max_depth,
    )


def load_config(project_root: Path, config_path: Optional[Path] = None, *,
                logger: Optional[logging.Logger] = None) -> BuildConfig:
    """Read and validate the build configuration.

    Raises:
        ConfigMissing: the file does not exist.
        ConfigInvalid: the file is not valid JSON or has wrong value types.
    """
    log = logger or _log
    path = Path(config_path) if config_path else Path(project_root) / CONFIG_FILENAME
    if not path.is_absolute():
        path = Path(project_root) / path
    if not path.is_file():
        raise ConfigMissing(path)

    try:
        with path.open('r', encoding='utf-8') as fh:
            raw = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ConfigInvalid(f'{path}: invalid JSON ({exc})') from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigInvalid(f'{path}: cannot read ({exc})') from exc

    cfg = config_from_mapping(raw)
    log.debug('loaded config from %s: %r', path, cfg)
    return cfg


def with_overrides(cfg: BuildConfig, **overrides: Any) -> BuildConfig:
    """Return *cfg* with every non-None override applied."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(cfg, **changes) if changes else cfg
