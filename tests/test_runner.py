from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from incbuild.core.errors import ConfigInvalid, IncludeCycle, StorageReadFailure
from incbuild.core.models import BuildConfig
from incbuild.io.content_cache import ContentCache
from incbuild.io.output_dir import is_unsafe_dist
from incbuild.runtime.runner import BuildRunner

from _fixtures import CountingReader, read, write_tree

STAMP = "2026-10-18T00:00:00.000Z"


class RunnerTestBase(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)

    def tearDown(self) -> None:
        self._td.cleanup()

    def runner(self, **cfg) -> BuildRunner:
        return BuildRunner(BuildConfig(**cfg), project_root=self.root, clock=lambda: STAMP)


class BuildTests(RunnerTestBase):
    def test_mirrors_entry_tree_into_dist(self) -> None:
        write_tree(self.root, {
            "src/a.txt": 'X\n#include "../lib/b.txt"\nY',
            "src/pages/c.ts": "// @include ../../lib/b.txt\nconst c = 1;",
            "src/skip.md": "not an entry",
            "lib/b.txt": "B",
        })
        report = self.runner().run()
        self.assertEqual(read(self.root / "dist/a.txt"), "X\nB\nY")
        self.assertEqual(read(self.root / "dist/pages/c.ts"), "B\nconst c = 1;")
        self.assertFalse((self.root / "dist/skip.md").exists())
        self.assertEqual(report.entries_total, 2)
        self.assertEqual(report.entries_built, 2)
        self.assertEqual(report.outputs, ["dist/a.txt", "dist/pages/c.ts"])
        self.assertTrue(report.ok)

    def test_once_is_scoped_per_entry_and_cache_is_shared(self) -> None:
        write_tree(self.root, {
            "src/one.txt": "include_once ../h.txt\ninclude_once ../h.txt",
            "src/two.txt": "include_once ../h.txt",
            "h.txt": "H",
        })
        reader = CountingReader()
        runner = BuildRunner(
            BuildConfig(), project_root=self.root, cache=ContentCache(reader=reader), clock=lambda: STAMP
        )
        report = runner.run()
        self.assertEqual(read(self.root / "dist/one.txt"), "H")
        self.assertEqual(read(self.root / "dist/two.txt"), "H")
        self.assertEqual(reader.count(self.root / "h.txt"), 1)
        self.assertEqual(report.cache_reads, 3)
        self.assertEqual(report.cache_hits, 1)

    def test_injected_empty_cache_is_used(self) -> None:
        write_tree(self.root, {"src/a.txt": "include ../h.txt", "h.txt": "H"})
        cache = ContentCache(reader=CountingReader())
        self.assertEqual(len(cache), 0)
        runner = BuildRunner(BuildConfig(), project_root=self.root, cache=cache, clock=lambda: STAMP)
        self.assertIs(runner.cache, cache)
        runner.run()
        self.assertEqual(len(cache), 2)
        self.assertEqual(cache.reads, 2)

    def test_post_processing_and_banner(self) -> None:
        write_tree(self.root, {
            "src/app.thinkscript": 'def v = "{{VERSION}}"; # note\n\n\n\nplot x = v;\n',
        })
        self.runner(tokens={"VERSION": "42"}, banner="# {{SOURCE}} {{TIMESTAMP}}\n").run()
        self.assertEqual(
            read(self.root / "dist/app.thinkscript"),
            f"# src/app.thinkscript {STAMP}\ndef v = 42; # note\n\nplot x = v;",
        )

    def test_minify(self) -> None:
        write_tree(self.root, {"src/a.txt": "X # comment\nY   Z\n"})
        self.runner(minify=True).run()
        self.assertEqual(read(self.root / "dist/a.txt"), "X Y Z")

    def test_no_entries(self) -> None:
        (self.root / "src").mkdir()
        report = self.runner().run()
        self.assertEqual(report.entries_total, 0)
        self.assertTrue((self.root / "dist").is_dir())

    def test_missing_entry_dir_is_a_read_failure(self) -> None:
        with self.assertRaises(StorageReadFailure):
            self.runner().run()

    def test_report_json(self) -> None:
        write_tree(self.root, {"src/a.txt": "a"})
        data = json.loads(self.runner().run().to_json())
        self.assertEqual(data["entries_built"], 1)
        self.assertEqual(set(data["time_by_stage"]), {"discover", "expand", "postprocess", "write"})


class FailureTests(RunnerTestBase):
    def test_cycle_aborts_without_output(self) -> None:
        write_tree(self.root, {
            "src/a.txt": "include ../b.txt",
            "b.txt": "include src/a.txt",
        })
        runner = self.runner()
        with self.assertRaises(IncludeCycle) as ctx:
            runner.run()
        self.assertEqual(ctx.exception.chain, ("src/a.txt", "b.txt", "src/a.txt"))
        self.assertFalse((self.root / "dist/a.txt").exists())

    def test_failure_carries_the_partial_report(self) -> None:
        write_tree(self.root, {"src/1.txt": "one", "src/2.txt": "include 2.txt"})
        with self.assertRaises(IncludeCycle) as ctx:
            self.runner().run()
        report = ctx.exception.report
        self.assertIsNotNone(report)
        self.assertFalse(report.ok)
        self.assertEqual(report.entries_built, 1)
        self.assertEqual(report.outputs, ["dist/1.txt"])
        self.assertEqual(len(report.errors), 1)
        self.assertIn("include cycle detected", report.errors[0])
        self.assertGreaterEqual(report.cache_reads, 2)

    def test_oversized_max_depth_is_rejected_up_front(self) -> None:
        with self.assertRaises(ConfigInvalid):
            self.runner(max_depth=100_000)

    def test_first_failure_stops_remaining_entries(self) -> None:
        write_tree(self.root, {
            "src/1.txt": "one",
            "src/2.txt": "include missing.txt",
            "src/3.txt": "three",
        })
        with self.assertRaises(StorageReadFailure):
            self.runner().run()
        self.assertEqual(read(self.root / "dist/1.txt"), "one")
        self.assertFalse((self.root / "dist/2.txt").exists())
        self.assertFalse((self.root / "dist/3.txt").exists())


class DistSafetyTests(RunnerTestBase):
    def test_safe_dist_is_wiped(self) -> None:
        write_tree(self.root, {"src/a.txt": "a", "dist/stale.txt": "old", "dist/old/x.txt": "old"})
        report = self.runner().run()
        self.assertTrue(report.dist_wiped)
        self.assertFalse((self.root / "dist/stale.txt").exists())
        self.assertFalse((self.root / "dist/old").exists())
        self.assertTrue((self.root / "dist/a.txt").exists())

    def test_dist_inside_entry_dir_is_kept(self) -> None:
        write_tree(self.root, {"src/a.md": "a", "src/out/keep.md": "keep"})
        report = self.runner(dist_dir="src/out", extensions=(".md",)).run()
        self.assertFalse(report.dist_wiped)
        self.assertEqual(read(self.root / "src/out/keep.md"), "keep")

    def test_dist_equal_to_root_is_kept(self) -> None:
        write_tree(self.root, {"src/a.txt": "a", "keep.cfg": "keep"})
        report = self.runner(dist_dir=".").run()
        self.assertFalse(report.dist_wiped)
        self.assertTrue((self.root / "keep.cfg").exists())
        self.assertEqual(read(self.root / "a.txt"), "a")

    def test_unsafe_relationships(self) -> None:
        root = Path("/p")
        entry = root / "src"
        self.assertTrue(is_unsafe_dist(Path("/elsewhere"), project_root=root, entry_dir=entry))
        self.assertTrue(is_unsafe_dist(Path("/p-dist"), project_root=root, entry_dir=entry))
        self.assertTrue(is_unsafe_dist(root, project_root=root, entry_dir=entry))
        self.assertTrue(is_unsafe_dist(entry, project_root=root, entry_dir=entry))
        self.assertTrue(is_unsafe_dist(entry / "dist", project_root=root, entry_dir=entry))
        self.assertFalse(is_unsafe_dist(root / "dist", project_root=root, entry_dir=entry))
        self.assertFalse(is_unsafe_dist(root / "build/../dist", project_root=root, entry_dir=entry))


if __name__ == "__main__":
    unittest.main()
