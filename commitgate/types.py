from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Literal, Union

StageStatus = Literal["success", "failure"]


@dataclass(frozen=True)
class Stage:
    """One named check delegated to an external tool.

    Attributes
    ----------
    name : str
        Human-readable label shown in status lines, e.g. ``"lint"``.
    argv : tuple of str
        Executable plus the fixed arguments enforcing the stage's policy.
    """

    name: str
    argv: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Stage.name must be non-empty.")
        if not self.argv:
            raise ValueError(f"Stage {self.name!r} needs at least an executable in argv.")

    def command_line(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class StageResult:
    """Outcome of running one Stage.

    Attributes
    ----------
    status : {"success", "failure"}
        Success iff the tool exited with status 0.
    output : str
        Combined stdout/stderr of the tool, or the reason it could not start.
    returncode : int or None
        Exit status of the tool; ``None`` when it never started.
    error : str or None
        Description of the invocation error, if any.
    """

    status: StageStatus
    output: str
    returncode: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def invocation_failed(self) -> bool:
        return self.returncode is None


@dataclass(frozen=True)
class AllPassed:
    """Every stage exited with status 0."""


@dataclass(frozen=True)
class FailedAt:
    """The pipeline halted at ``stage_name``."""

    stage_name: str
    result: StageResult


PipelineOutcome = Union[AllPassed, FailedAt]


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Running:
    stage_index: int


@dataclass(frozen=True)
class Halted:
    outcome: PipelineOutcome


RunnerState = Union[Idle, Running, Halted]


__all__ = [
    "StageStatus",
    "Stage",
    "StageResult",
    "AllPassed",
    "FailedAt",
    "PipelineOutcome",
    "Idle",
    "Running",
    "Halted",
    "RunnerState",
]
