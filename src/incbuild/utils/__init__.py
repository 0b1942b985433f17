"""
incbuild.utils – Small shared utilities (path helpers, extension filters).
"""
from .paths import absolute_path, is_within_dir, to_posix_relpath
from .suffixes import is_extension_allowed, normalize_extensions

__all__ = ['absolute_path', 'is_within_dir', 'to_posix_relpath', 'is_extension_allowed', 'normalize_extensions']
