from __future__ import annotations

from pathlib import Path

from relbump.core.result import Err, Ok, Result
from relbump.output.console import ConsoleProtocol
from relbump.platform.files import atomic_write_text
from relbump.release.errors import ReleaseError
from relbump.release.plan import ReleasePlan


def write_plan(plan: ReleasePlan, *, console: ConsoleProtocol) -> Result[list[Path], ReleaseError]:
    """Write every planned file in order.

    Stops at the first failure; files written before it stay written.
    """
    written: list[Path] = []
    for planned in plan.files:
        try:
            atomic_write_text(planned.path, planned.content, encoding="utf-8")
        except OSError as e:
            return Err(
                ReleaseError(
                    kind="io_error",
                    message=f"failed to write {planned.path.name}: {e}",
                    hint=str(planned.path),
                )
            )
        written.append(planned.path)
        console.info(f"Wrote {planned.path.name}")

    return Ok(written)
