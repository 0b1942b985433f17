"""Public surface for incbuild.core: models, errors and the run report."""

from incbuild.core.errors import BuildError
from incbuild.core.models import BuildConfig, Directive, DirectiveKind, ResolvedTarget, ScanPiece
from incbuild.core.report import BuildReport, StageTimer

__all__ = [
    'BuildError',
    'BuildConfig',
    'Directive',
    'DirectiveKind',
    'ResolvedTarget',
    'ScanPiece',
    'BuildReport',
    'StageTimer',
]
