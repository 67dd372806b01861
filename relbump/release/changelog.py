"""Changelog splicing.

The changelog is treated as a list of lines with a fixed two-line header
(``# Changelog`` and a blank line). A release entry is inserted right after
that header:

    # Changelog

    ## 1.2.3 (2024-05-01)
    -   Fixed a bug

    ## 1.2.2 (2024-04-01)
    ...
"""

from __future__ import annotations

import re
from datetime import date

from relbump.release.version import ReleaseVersion

# Index of the first line after the header where a new entry goes.
ENTRY_OFFSET = 2

# Boilerplate bullet left by the release trigger; single digit per segment.
_RELEASING_LINE_RE = re.compile(r"^-   Releasing v\d\.\d\.\d[ \t]*(?:\r?\n|$)", re.MULTILINE)


def release_title(version: ReleaseVersion, day: date) -> str:
    return f"## {version.bare} ({day.isoformat()})"


def clean_excerpt(text: str) -> str:
    """Drop ``-   Releasing vX.Y.Z`` lines from a changelog excerpt.

    Each matching line goes together with its line break. When the last line
    of the excerpt is removed, the break before it is dropped too. An excerpt
    without such a line is returned unchanged.
    """
    matches = list(_RELEASING_LINE_RE.finditer(text))
    if not matches:
        return text

    cleaned = _RELEASING_LINE_RE.sub("", text)
    last = matches[-1]
    if last.end() == len(text) and not last.group().endswith("\n"):
        cleaned = cleaned.removesuffix("\n").removesuffix("\r")
    return cleaned


def splice_changelog(document: str, title: str, excerpt: str) -> str:
    """Insert a release entry at ``ENTRY_OFFSET``.

    The entry is the title line, the excerpt as one block, then a blank line.
    A document shorter than the header gets the entry appended.
    """
    lines = document.split("\n")
    lines.insert(ENTRY_OFFSET, title)
    lines.insert(ENTRY_OFFSET + 1, excerpt)
    lines.insert(ENTRY_OFFSET + 2, "")
    return "\n".join(lines)


def build_changelog(
    document: str, version: ReleaseVersion, day: date, excerpt: str
) -> tuple[str, str]:
    """Clean the excerpt and splice it into the document.

    Returns:
        (cleaned excerpt, new changelog text)
    """
    cleaned = clean_excerpt(excerpt)
    return cleaned, splice_changelog(document, release_title(version, day), cleaned)
