from __future__ import annotations

import contextlib
import io
import json
import logging
import tempfile
import unittest
from pathlib import Path

from incbuild.cli import IncBuild, main
from incbuild.core.errors import ConfigMissing, IncludeCycle
from incbuild.logging.helpers import BASE_LOGGER, JsonLogFormatter, get_logger, setup_base_logger

from _fixtures import read, write_config, write_tree


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)

    def tearDown(self) -> None:
        self._td.cleanup()

    def _main(self, *args: str) -> int:
        with self.assertRaises(SystemExit) as ctx:
            main(["--root", str(self.root), *args])
        return ctx.exception.code

    def test_successful_build_exits_zero(self) -> None:
        write_config(self.root, entryDir="pages", distDir="out")
        write_tree(self.root, {"pages/a.txt": 'X\n#include "b.inc"\nY', "pages/b.inc": "B"})
        self.assertEqual(self._main(), 0)
        self.assertEqual(read(self.root / "out/a.txt"), "X\nB\nY")

    def test_missing_config_exits_one(self) -> None:
        self.assertEqual(self._main(), 1)
        with self.assertRaises(ConfigMissing):
            IncBuild.run(["--root", str(self.root)])

    def test_cycle_exits_one_and_logs_chain(self) -> None:
        write_config(self.root)
        write_tree(self.root, {"src/a.txt": "include b.txt", "src/b.txt": "include a.txt"})
        with self.assertLogs("incbuild", level="ERROR") as logs:
            self.assertEqual(self._main(), 1)
        self.assertTrue(any("include cycle detected" in line for line in logs.output))
        self.assertFalse((self.root / "dist/a.txt").exists())

    def test_error_line_has_a_single_level_prefix(self) -> None:
        write_config(self.root)
        write_tree(self.root, {"src/a.txt": "include a.txt"})
        with self.assertLogs("incbuild", level="ERROR") as logs:
            self.assertEqual(self._main(), 1)
        record = logs.records[-1]
        self.assertTrue(record.getMessage().startswith("include cycle detected"))
        line = logging.Formatter("%(levelname)s: %(message)s").format(record)
        self.assertTrue(line.startswith("ERROR: include cycle detected"))
        self.assertNotIn("ERROR: ERROR", line)

    def test_report_is_printed_when_the_build_fails(self) -> None:
        write_config(self.root)
        write_tree(self.root, {"src/a.txt": "include b.txt", "src/b.txt": "include a.txt"})
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf), self.assertRaises(IncludeCycle):
            IncBuild.run(["--root", str(self.root), "--report"])
        data = json.loads(buf.getvalue())
        self.assertEqual(data["entries_built"], 0)
        self.assertEqual(len(data["errors"]), 1)
        self.assertIn("include cycle detected", data["errors"][0])

    def test_oversized_max_depth_exits_one(self) -> None:
        write_config(self.root)
        write_tree(self.root, {"src/a.txt": "a"})
        self.assertEqual(self._main("--max-depth", "100000"), 1)
        write_config(self.root, maxDepth=100_000)
        self.assertEqual(self._main(), 1)
        self.assertFalse((self.root / "dist/a.txt").exists())

    def test_cli_overrides_config(self) -> None:
        write_config(self.root, minify=False)
        write_tree(self.root, {"src/a.txt": "X # c\nY   Z"})
        self.assertEqual(self._main("--minify"), 0)
        self.assertEqual(read(self.root / "dist/a.txt"), "X Y Z")

    def test_max_depth_override(self) -> None:
        write_config(self.root)
        write_tree(self.root, {"src/a.txt": "include ../b.txt", "b.txt": "include c.txt", "c.txt": "C"})
        self.assertEqual(self._main("--max-depth", "2"), 1)
        self.assertEqual(self._main("--max-depth", "3"), 0)

    def test_report_is_printed(self) -> None:
        write_config(self.root)
        write_tree(self.root, {"src/a.txt": "a"})
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            report = IncBuild.run(["--root", str(self.root), "--report"])
        self.assertEqual(json.loads(buf.getvalue())["outputs"], ["dist/a.txt"])
        self.assertEqual(report.entries_built, 1)

    def test_explicit_config_file(self) -> None:
        (self.root / "alt.json").write_text(json.dumps({"distDir": "alt-out"}), encoding="utf-8")
        write_tree(self.root, {"src/a.txt": "a"})
        self.assertEqual(self._main("--config", "alt.json"), 0)
        self.assertTrue((self.root / "alt-out/a.txt").exists())


class LoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        base = logging.getLogger(BASE_LOGGER)
        self._saved = (list(base.handlers), base.level, base.propagate)
        base.handlers = []

    def tearDown(self) -> None:
        base = logging.getLogger(BASE_LOGGER)
        base.handlers, level, base.propagate = self._saved
        base.setLevel(level)

    def test_namespaced_logger(self) -> None:
        self.assertEqual(get_logger("build").name, "incbuild.build")
        self.assertEqual(get_logger("incbuild.io").name, "incbuild.io")
        self.assertEqual(get_logger().name, "incbuild")

    def test_json_formatter(self) -> None:
        rec = logging.LogRecord("incbuild.build", logging.INFO, __file__, 1, "built %s", ("a",), None)
        rec.context = {"n": 1}
        data = json.loads(JsonLogFormatter().format(rec))
        self.assertEqual(data["msg"], "built a")
        self.assertEqual(data["module"], "incbuild.build")
        self.assertEqual(data["ctx"], {"n": 1})
        self.assertTrue(data["ts"].endswith("Z"))

    def test_setup_again_switches_format_and_stream(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        setup_base_logger(stream=first)
        get_logger("build").info("plain %d", 1)
        setup_base_logger(json_logs=True, level=logging.DEBUG, stream=second)
        get_logger("build").debug("json %d", 2)
        self.assertEqual(first.getvalue(), "INFO: plain 1\n")
        data = json.loads(second.getvalue())
        self.assertEqual(data["msg"], "json 2")
        self.assertEqual(data["level"], "DEBUG")
        self.assertEqual(len(logging.getLogger(BASE_LOGGER).handlers), 1)

    def test_foreign_handlers_are_left_in_place(self) -> None:
        base = logging.getLogger(BASE_LOGGER)
        foreign = logging.StreamHandler(io.StringIO())
        base.addHandler(foreign)
        setup_base_logger(level=logging.WARNING)
        self.assertEqual(base.handlers, [foreign])
        self.assertEqual(base.level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
