from __future__ import annotations

from pathlib import Path

import pytest

from relbump.output.console import MockConsole
from relbump.test.fakes import FakeRepository


@pytest.fixture
def fake_repo() -> FakeRepository:
    return FakeRepository(local_tags={"v2.0.1"}, remote_tags={"v2.0.1"})


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A checkout with the three release files at version 2.0.0."""
    (tmp_path / "package.json").write_text(
        '{\n    "name": "leffot",\n    "version": "2.0.0",\n    "private": true\n}',
        encoding="utf-8",
    )
    (tmp_path / "config.json").write_text(
        '{\n    "name": "Leffot (v2.0.0)",\n    "version": "2.0.0",\n    "theme": "dark"\n}',
        encoding="utf-8",
    )
    (tmp_path / "CHANGELOG.md").write_text(
        "# Changelog\n\n## 2.0.0 (2024-01-01)\n-   Initial release\n",
        encoding="utf-8",
    )
    return tmp_path
