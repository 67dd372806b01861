"""In-memory release plan.

Every read, parse and text transformation happens here, before anything is
written or committed. A failure at this stage leaves the checkout untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from relbump.core.config import ReleaseInputs, ReleaseSettings
from relbump.core.result import Err, Ok, Result
from relbump.output.console import ConsoleProtocol
from relbump.release.changelog import build_changelog
from relbump.release.errors import ReleaseError
from relbump.release.manifests import (
    bump_config,
    bump_package,
    load_manifest,
    read_text_file,
    render_manifest,
)
from relbump.release.version import ReleaseVersion, normalize_version


@dataclass(frozen=True, slots=True)
class PlannedFile:
    path: Path
    content: str


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """Everything a release will write, computed up front.

    Attributes:
        version: Normalized release version
        excerpt: Cleaned changelog excerpt (also the step output)
        files: New content for package, config and changelog files, in write order
    """

    version: ReleaseVersion
    excerpt: str
    files: tuple[PlannedFile, ...]

    @property
    def commit_message(self) -> str:
        return f"Releasing {self.version.raw}"


def validate_inputs(inputs: ReleaseInputs) -> Result[ReleaseVersion, ReleaseError]:
    if not inputs.version.strip():
        return Err(ReleaseError(kind="invalid_input", message="missing input: version"))
    if not inputs.changelog.strip():
        return Err(ReleaseError(kind="invalid_input", message="missing input: changelog"))

    version = normalize_version(inputs.version)
    if not version.bare:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid version: {inputs.version!r}",
                hint="Expected a tag such as v1.2.3 or refs/tags/v1.2.3",
            )
        )
    return Ok(version)


def build_plan(
    *,
    root: Path,
    inputs: ReleaseInputs,
    settings: ReleaseSettings,
    today: date,
    console: ConsoleProtocol,
) -> Result[ReleasePlan, ReleaseError]:
    version = validate_inputs(inputs)
    if isinstance(version, Err):
        return version
    v = version.value

    package_path = root / settings.package_file
    config_path = root / settings.config_file
    changelog_path = root / settings.changelog_file

    package = load_manifest(package_path)
    if isinstance(package, Err):
        return package
    config = load_manifest(config_path)
    if isinstance(config, Err):
        return config
    document = read_text_file(changelog_path)
    if isinstance(document, Err):
        return document

    package_text = render_manifest(bump_package(package.value, v))
    console.info(f"Updated {package_path.name}")

    config_text = render_manifest(bump_config(config.value, v, product=settings.product))
    console.info(f"Updated {config_path.name}")

    excerpt, changelog_text = build_changelog(document.value, v, today, inputs.changelog)
    console.info(f"Updated {changelog_path.name}")

    return Ok(
        ReleasePlan(
            version=v,
            excerpt=excerpt,
            files=(
                PlannedFile(package_path, package_text),
                PlannedFile(config_path, config_text),
                PlannedFile(changelog_path, changelog_text),
            ),
        )
    )
