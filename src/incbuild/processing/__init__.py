"""
Text post-processing applied after include expansion.
"""
from .text_ops import TextPostProcessor, collapse_blank_lines, minify_text, substitute_tokens

__all__ = ['TextPostProcessor', 'collapse_blank_lines', 'minify_text', 'substitute_tokens']
