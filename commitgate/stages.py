"""The fixed set of checks run before every commit."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from commitgate.types import Stage

# ruff reports every rule hit as a failure; --no-fix keeps the stage read-only.
LINT = Stage("lint", (sys.executable, "-m", "ruff", "check", "--no-fix", "."))
FORMAT = Stage("format", (sys.executable, "-m", "ruff", "format", "--check", "."))
TEST = Stage("test", (sys.executable, "-m", "pytest"))

DEFAULT_STAGES: tuple[Stage, ...] = (LINT, FORMAT, TEST)


def describe_stages(stages: Sequence[Stage]) -> str:
    """Return a human-readable listing of the stages in run order."""
    width = max((len(stage.name) for stage in stages), default=0)
    lines = ["+--- Commit Gate Stages ---"]
    for index, stage in enumerate(stages, start=1):
        lines.append(f"| {index}. {stage.name:<{width}}  {stage.command_line()}")
    if not stages:
        lines.append("| (no stages)")
    lines.append("+--------------------------")
    return "\n".join(lines)


__all__ = ["LINT", "FORMAT", "TEST", "DEFAULT_STAGES", "describe_stages"]
