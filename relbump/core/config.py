"""Typed release configuration.

Two structures drive a run:
- ReleaseInputs: the per-invocation values (version, changelog excerpt)
- ReleaseSettings: the repository-level knobs, optionally read from
  ``relbump.toml``

Example ``relbump.toml``:

    [release]
    product = "Leffot"
    changelog_file = "CHANGELOG.md"

    [git]
    remote = "origin"
    branch = "main"
    tag_policy = "tolerant"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "GitSettings",
    "ReleaseInputs",
    "ReleaseSettings",
    "TagPolicy",
    "load_settings",
]

CONFIG_FILE_NAME = "relbump.toml"

DEFAULT_PRODUCT = "Leffot"
DEFAULT_PACKAGE_FILE = "package.json"
DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_CHANGELOG_FILE = "CHANGELOG.md"

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"
DEFAULT_USER_NAME = "GitHub Action"
DEFAULT_USER_EMAIL = "action@github.com"

TagPolicy = Literal["tolerant", "strict"]
_TAG_POLICIES: tuple[TagPolicy, ...] = ("tolerant", "strict")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseInputs:
    """Values supplied by the caller for one release.

    Attributes:
        version: Raw version, e.g. ``refs/tags/v1.2.3`` or ``v1.2.3``
        changelog: Changelog excerpt for this release
    """

    version: str
    changelog: str


@dataclass(frozen=True, slots=True)
class GitSettings:
    """Source-control settings."""

    remote: str = DEFAULT_REMOTE
    branch: str = DEFAULT_BRANCH
    user_name: str = DEFAULT_USER_NAME
    user_email: str = DEFAULT_USER_EMAIL
    tag_policy: TagPolicy = "tolerant"
    pull: bool = True
    push: bool = True


@dataclass(frozen=True, slots=True)
class ReleaseSettings:
    """Repository-level release settings."""

    product: str = DEFAULT_PRODUCT
    package_file: str = DEFAULT_PACKAGE_FILE
    config_file: str = DEFAULT_CONFIG_FILE
    changelog_file: str = DEFAULT_CHANGELOG_FILE
    git: GitSettings = field(default_factory=GitSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Result[ReleaseSettings, ConfigError]:
        """Create settings from a parsed TOML mapping."""
        release: StrDict = get_table(data, "release") or {}
        git: StrDict = get_table(data, "git") or {}

        policy = get_str(git, "tag_policy") or "tolerant"
        if policy not in _TAG_POLICIES:
            return Err(
                ConfigError(f"Invalid git.tag_policy: {policy!r} (expected tolerant or strict)")
            )

        pull = get_bool(git, "pull")
        push = get_bool(git, "push")

        return Ok(
            cls(
                product=get_str(release, "product") or DEFAULT_PRODUCT,
                package_file=get_str(release, "package_file") or DEFAULT_PACKAGE_FILE,
                config_file=get_str(release, "config_file") or DEFAULT_CONFIG_FILE,
                changelog_file=get_str(release, "changelog_file") or DEFAULT_CHANGELOG_FILE,
                git=GitSettings(
                    remote=get_str(git, "remote") or DEFAULT_REMOTE,
                    branch=get_str(git, "branch") or DEFAULT_BRANCH,
                    user_name=get_str(git, "user_name") or DEFAULT_USER_NAME,
                    user_email=get_str(git, "user_email") or DEFAULT_USER_EMAIL,
                    tag_policy="strict" if policy == "strict" else "tolerant",
                    pull=True if pull is None else pull,
                    push=True if push is None else push,
                ),
            )
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_settings(path: Path, *, required: bool = False) -> Result[ReleaseSettings, ConfigError]:
    """Load release settings from a TOML file.

    Args:
        path: Path to ``relbump.toml``
        required: When False, a missing file yields default settings

    Returns:
        Ok(ReleaseSettings) on success, Err(ConfigError) on failure
    """
    if not required and not path.exists():
        return Ok(ReleaseSettings())

    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    settings = ReleaseSettings.from_dict(result.value)
    if isinstance(settings, Err):
        return Err(ConfigError(settings.error.message, path=path))
    return settings

