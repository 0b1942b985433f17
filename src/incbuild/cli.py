from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from incbuild.core.errors import BuildError
from incbuild.core.report import BuildReport
from incbuild.logging.factory import DefaultLoggerFactory
from incbuild.logging.helpers import get_logger
from incbuild.parsing.parser import _build_parser
from incbuild.runtime.config import load_config, with_overrides
from incbuild.runtime.runner import BuildRunner


logger = get_logger('incbuild')


def _configure_logging(enable_json: bool, level: int = logging.INFO) -> None:
    """Configure process-wide logging, either JSON or plain text."""
    factory = DefaultLoggerFactory(json_logs=enable_json, level=level)
    global logger
    logger = factory.get_logger('incbuild')


class IncBuild:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(argv: Sequence[str]) -> BuildReport:
        """Parse *argv*, load the configuration and build every entry file.

        Raises:
            BuildError: the first failure of the run.
        """
        ns = _build_parser().parse_args(list(argv))
        json_logs = ns.json_logs or os.getenv('INCBUILD_JSON_LOGS') == '1'
        _configure_logging(json_logs, logging.DEBUG if ns.verbose else logging.INFO)

        root = Path(ns.root) if ns.root else Path.cwd()
        cfg = load_config(root, Path(ns.config) if ns.config else None, logger=logger)
        cfg = with_overrides(cfg, minify=ns.minify, max_depth=ns.max_depth)

        runner = BuildRunner(cfg, project_root=root, logger=get_logger('build'))
        try:
            report = runner.run()
        except BuildError as exc:
            if ns.report and exc.report is not None:
                print(exc.report.to_json())
            raise
        if ns.report:
            print(report.to_json())
        return report


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Console entry point."""
    try:
        IncBuild.run(sys.argv[1:] if argv is None else argv)
        raise SystemExit(0)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BuildError as exc:
        logger.error('%s', exc)
        raise SystemExit(1)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
