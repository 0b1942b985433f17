from .scanner import DirectiveScan, DirectiveScanner, classify_keyword, compile_include_pattern

__all__ = ['DirectiveScan', 'DirectiveScanner', 'classify_keyword', 'compile_include_pattern']
