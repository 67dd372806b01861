from __future__ import annotations

import os
from pathlib import Path

import pytest

from relbump.core.result import Err, Ok
from relbump.output.console import MockConsole
from relbump.release.plan import PlannedFile, ReleasePlan
from relbump.release.version import normalize_version
from relbump.release.writer import write_plan


def _plan(*files: PlannedFile) -> ReleasePlan:
    return ReleasePlan(version=normalize_version("v1.0.0"), excerpt="", files=files)


def test_write_plan_writes_every_file(tmp_path: Path, console: MockConsole) -> None:
    a = tmp_path / "a.json"
    b = tmp_path / "CHANGELOG.md"
    a.write_text("old", encoding="utf-8")

    plan = _plan(PlannedFile(a, "{}\n"), PlannedFile(b, "# Changelog"))

    result = write_plan(plan, console=console)

    assert result == Ok([a, b])
    assert a.read_text(encoding="utf-8") == "{}\n"
    assert b.read_text(encoding="utf-8") == "# Changelog"
    assert console.find("Wrote CHANGELOG.md")


def test_write_plan_stops_at_first_failure_without_rollback(
    tmp_path: Path, console: MockConsole, monkeypatch: pytest.MonkeyPatch
) -> None:
    a = tmp_path / "a.json"
    b = tmp_path / "b.json"
    c = tmp_path / "c.md"
    real_replace = os.replace

    def flaky_replace(src: Path, dst: Path) -> None:
        if Path(dst).name == "b.json":
            raise OSError("disk full")
        real_replace(src, dst)

    monkeypatch.setattr(os, "replace", flaky_replace)

    result = write_plan(
        _plan(PlannedFile(a, "A"), PlannedFile(b, "B"), PlannedFile(c, "C")), console=console
    )

    assert isinstance(result, Err)
    assert result.error.kind == "io_error"
    assert "disk full" in result.error.message
    assert a.read_text(encoding="utf-8") == "A"
    assert not b.exists()
    assert not c.exists()
