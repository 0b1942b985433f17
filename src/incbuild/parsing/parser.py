# incbuild/parsing/parser.py
from __future__ import annotations

import argparse

from incbuild.constants import CONFIG_FILENAME


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'expected an integer, got {value!r}')
    if n < 1:
        raise argparse.ArgumentTypeError(f'expected a positive integer, got {n}')
    return n


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser.

    Notes:
        - Everything the build needs comes from the configuration file; the
          flags below only locate it and override a few of its keys.
    """
    from incbuild import __version__

    p = argparse.ArgumentParser(
        prog='incbuild',
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            'incbuild – flatten entry files by expanding #include directives\n'
            'Every entry file under entryDir is written, fully expanded, to the\n'
            'same relative path under distDir.'
        ),
    )

    g_cfg = p.add_argument_group('Configuration')
    g_out = p.add_argument_group('Output')
    g_misc = p.add_argument_group('Miscellaneous')

    g_cfg.add_argument(
        '-r',
        '--root',
        metavar='DIR',
        dest='root',
        help='Project root. Relative config paths resolve here. Defaults to the current directory.',
    )
    g_cfg.add_argument(
        '-c',
        '--config',
        metavar='FILE',
        dest='config',
        help=f'Configuration file. Defaults to <root>/{CONFIG_FILENAME}.',
    )
    g_cfg.add_argument(
        '--max-depth',
        metavar='N',
        dest='max_depth',
        type=_positive_int,
        help='Override maxDepth: the longest inclusion chain allowed.',
    )

    g_out.add_argument(
        '--minify',
        dest='minify',
        action='store_true',
        default=None,
        help='Strip # comments and collapse whitespace, regardless of the config.',
    )
    g_out.add_argument(
        '--no-minify',
        dest='minify',
        action='store_false',
        help='Disable minification, regardless of the config.',
    )
    g_out.add_argument(
        '--report',
        dest='report',
        action='store_true',
        help='Print a JSON build report on stdout once the run ends.',
    )

    g_misc.add_argument(
        '--json-logs',
        dest='json_logs',
        action='store_true',
        help='Emit logs as JSON lines (also enabled by INCBUILD_JSON_LOGS=1).',
    )
    g_misc.add_argument(
        '-v',
        '--verbose',
        dest='verbose',
        action='store_true',
        help='Enable debug logging.',
    )
    g_misc.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return p
