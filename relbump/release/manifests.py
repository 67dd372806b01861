from __future__ import annotations

import json
from pathlib import Path

from relbump.core.result import Err, Ok, Result
from relbump.core.structured import StrDict, as_str_dict
from relbump.release.errors import ReleaseError
from relbump.release.version import ReleaseVersion

Manifest = StrDict

_INDENT = 4


def read_text_file(path: Path) -> Result[str, ReleaseError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ReleaseError(
                kind="io_error",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )


def parse_manifest(text: str, *, name: str) -> Result[Manifest, ReleaseError]:
    """Parse a JSON manifest whose root must be an object."""
    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ReleaseError(kind="parse_error", message=f"invalid JSON in {name}: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="parse_error",
                message=f"invalid JSON root in {name}",
                hint="expected an object",
            )
        )
    return Ok(data)


def load_manifest(path: Path) -> Result[Manifest, ReleaseError]:
    text = read_text_file(path)
    if isinstance(text, Err):
        return text
    parsed = parse_manifest(text.value, name=path.name)
    if isinstance(parsed, Err):
        return Err(
            ReleaseError(kind=parsed.error.kind, message=parsed.error.message, hint=str(path))
        )
    return parsed


def bump_package(manifest: Manifest, version: ReleaseVersion) -> Manifest:
    """Return a copy of package.json data with ``version`` set."""
    updated = dict(manifest)
    updated["version"] = version.bare
    return updated


def bump_config(manifest: Manifest, version: ReleaseVersion, *, product: str) -> Manifest:
    """Return a copy of config.json data with ``version`` and ``name`` set.

    ``name`` carries the raw tag, e.g. ``Leffot (v1.2.3)``.
    """
    updated = dict(manifest)
    updated["version"] = version.bare
    updated["name"] = f"{product} ({version.raw})"
    return updated


def render_manifest(manifest: Manifest) -> str:
    """Serialize a manifest as pretty JSON, key order preserved."""
    return json.dumps(manifest, indent=_INDENT, ensure_ascii=False) + "\n"
