from __future__ import annotations

from incbuild.cli import IncBuild, main
from incbuild.core.errors import (
    BuildError,
    ConfigInvalid,
    ConfigMissing,
    IncludeCycle,
    IncludeDepthExceeded,
    MalformedDirective,
    StorageReadFailure,
    StorageWriteFailure,
)
from incbuild.core.models import BuildConfig, Directive, DirectiveKind
from incbuild.core.report import BuildReport
from incbuild.io.content_cache import ContentCache
from incbuild.parsing.scanner import DirectiveScanner
from incbuild.processing.text_ops import TextPostProcessor
from incbuild.rendering.expander import IncludeExpander
from incbuild.rendering.path_resolver import IncludePathResolver
from incbuild.runtime.config import load_config
from incbuild.runtime.runner import BuildRunner

__version__ = '0.3.0'

__all__ = [
    'IncBuild',
    'main',
    'BuildError',
    'ConfigInvalid',
    'ConfigMissing',
    'IncludeCycle',
    'IncludeDepthExceeded',
    'MalformedDirective',
    'StorageReadFailure',
    'StorageWriteFailure',
    'BuildConfig',
    'BuildReport',
    'Directive',
    'DirectiveKind',
    'ContentCache',
    'DirectiveScanner',
    'IncludeExpander',
    'IncludePathResolver',
    'TextPostProcessor',
    'BuildRunner',
    'load_config',
]
