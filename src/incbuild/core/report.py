from __future__ import annotations

"""
Build run report.

Collected by the orchestrator and printed as JSON with ``--report``:
- entries_total / entries_built: discovered vs written entry files.
- outputs: written files, relative to the project root.
- cache_reads / cache_hits: storage reads vs lookups served from memory.
- dist_wiped: whether the output directory was emptied before the build.
- time_by_stage: seconds spent per pipeline stage.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class BuildReport:
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None
    duration_s: float | None = None

    entries_total: int = 0
    entries_built: int = 0
    outputs: List[str] = field(default_factory=list)

    cache_reads: int = 0
    cache_hits: int = 0
    dist_wiped: bool = False

    time_by_stage: Dict[str, float] = field(
        default_factory=lambda: {
            "discover": 0.0,
            "expand": 0.0,
            "postprocess": 0.0,
            "write": 0.0,
        }
    )

    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_output(self, relpath: str) -> None:
        self.entries_built += 1
        self.outputs.append(relpath)

    def add_time(self, stage: str, seconds: float) -> None:
        self.time_by_stage[stage] = self.time_by_stage.get(stage, 0.0) + seconds

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def finish(self) -> None:
        self.finished_at = time.perf_counter()
        self.duration_s = self.finished_at - self.started_at

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(
            {
                "started_at": self.started_at,
                "finished_at": self.finished_at,
                "duration_s": self.duration_s,
                "entries_total": self.entries_total,
                "entries_built": self.entries_built,
                "outputs": self.outputs,
                "cache_reads": self.cache_reads,
                "cache_hits": self.cache_hits,
                "dist_wiped": self.dist_wiped,
                "time_by_stage": self.time_by_stage,
                "errors": self.errors,
            },
            indent=indent,
        )


class StageTimer:
    def __init__(self, report: BuildReport, stage: str):
        self._report = report
        self._stage = stage
        self._t0: float | None = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._t0 is not None:
            self._report.add_time(self._stage, time.perf_counter() - self._t0)
        return False
