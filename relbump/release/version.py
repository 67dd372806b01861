from __future__ import annotations

from dataclasses import dataclass

_REF_PREFIX = "refs/tags/"


@dataclass(frozen=True, slots=True)
class ReleaseVersion:
    """A release version in its two spellings.

    Attributes:
        raw: Tag name as released, e.g. ``v1.2.3`` (``refs/tags/`` removed)
        bare: Version number embedded in manifests, e.g. ``1.2.3``
    """

    raw: str
    bare: str

    @property
    def tag(self) -> str:
        return self.raw


def strip_ref_prefix(value: str) -> str:
    return value.removeprefix(_REF_PREFIX)


def normalize_version(value: str) -> ReleaseVersion:
    """Split an incoming version reference into tag name and bare number.

    ``refs/tags/v1.2.3`` -> raw ``v1.2.3``, bare ``1.2.3``. No semver
    validation is done; whatever survives prefix stripping is accepted.
    """
    raw = strip_ref_prefix(value.strip())
    return ReleaseVersion(raw=raw, bare=raw.removeprefix("v"))
