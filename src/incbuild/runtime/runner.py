from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, Optional

from incbuild.core.errors import BuildError
from incbuild.core.interfaces.cache import ContentCacheProtocol
from incbuild.core.interfaces.fs import EntryDiscoveryProtocol
from incbuild.core.models import BuildConfig
from incbuild.core.report import BuildReport, StageTimer
from incbuild.io.content_cache import ContentCache
from incbuild.io.output_dir import OutputDirectory
from incbuild.io.walker import EntryWalker
from incbuild.logging.helpers import get_logger
from incbuild.parsing.scanner import DirectiveScanner
from incbuild.processing.text_ops import TextPostProcessor
from incbuild.rendering.expander import IncludeExpander
from incbuild.rendering.path_resolver import IncludePathResolver
from incbuild.utils.paths import absolute_path, to_posix_relpath


class BuildRunner:
    """Flatten every entry file under the entry directory into the output directory.

    Entries are processed one at a time in sorted path order. The content
    cache lives as long as the runner, a once-set lives for one entry. The
    first error aborts the run; outputs written before it are left in place.
    """

    def __init__(
        self,
        config: BuildConfig,
        *,
        project_root: Path,
        cache: Optional[ContentCacheProtocol] = None,
        discovery: Optional[EntryDiscoveryProtocol] = None,
        clock: Optional[Callable[[], str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.project_root = absolute_path(project_root)
        self.entry_dir = absolute_path(self.project_root / config.entry_dir)
        self.dist_dir = absolute_path(self.project_root / config.dist_dir)
        self._log = logger or get_logger('build')

        self._cache = cache if cache is not None else ContentCache(logger=self._log.getChild('cache'))
        self._discovery = discovery if discovery is not None else EntryWalker(logger=self._log.getChild('walker'))
        self._resolver = IncludePathResolver(project_root=self.project_root)
        self._expander = IncludeExpander(
            cache=self._cache,
            resolver=self._resolver,
            scanner=DirectiveScanner(config.include_pattern),
            max_depth=config.max_depth,
            logger=self._log.getChild('expander'),
        )
        self._post = TextPostProcessor(
            project_root=self.project_root,
            tokens=config.tokens,
            minify=config.minify,
            banner=config.banner,
            clock=clock,
            logger=self._log.getChild('text'),
        )
        self._output = OutputDirectory(
            self.dist_dir,
            project_root=self.project_root,
            entry_dir=self.entry_dir,
            logger=self._log.getChild('output'),
        )

    @property
    def cache(self) -> ContentCacheProtocol:
        return self._cache

    def run(self) -> BuildReport:
        report = BuildReport()
        try:
            self._run(report)
        except BuildError as exc:
            report.add_error(str(exc))
            exc.report = report
            raise
        finally:
            report.cache_reads = self._cache.reads
            report.cache_hits = self._cache.hits
            report.finish()
        return report

    def _run(self, report: BuildReport) -> None:
        report.dist_wiped = self._output.prepare()

        with StageTimer(report, 'discover'):
            entries = self._discovery.gather_entries(self.entry_dir, self.config.extensions)
        report.entries_total = len(entries)

        if not entries:
            self._log.info('No entry files found in %s', self.config.entry_dir)
            return

        for entry in entries:
            rel_entry = entry.relative_to(self.entry_dir)

            with StageTimer(report, 'expand'):
                expanded = self._expander.expand_entry(entry)
            with StageTimer(report, 'postprocess'):
                text = self._post.process(expanded, source=entry)
            with StageTimer(report, 'write'):
                written = self._output.write(rel_entry, text)

            display = to_posix_relpath(written, self.project_root)
            report.add_output(display)
            self._log.info('✔ built %s', display)

        self._log.info('Done. Built %d file(s).', report.entries_built)
