"""Fail-fast stage pipeline.

Stages run one at a time, in the order given, against the current working
tree. The first stage whose tool does not exit with status 0 halts the run::

    from commitgate import DEFAULT_STAGES, run, to_exit_code

    outcome = run(DEFAULT_STAGES)
    raise SystemExit(to_exit_code(outcome))
"""

from __future__ import annotations

import codecs
import logging
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from commitgate.types import (
    AllPassed,
    FailedAt,
    Halted,
    Idle,
    PipelineOutcome,
    RunnerState,
    Running,
    Stage,
    StageResult,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE_CODE = 1
_READ_SIZE = 65536


class _Echo:
    """Forward tool output to ``out``.

    Streams backed by a binary buffer (``sys.stdout``) get the bytes
    unmodified; plain text streams get them decoded as UTF-8.
    """

    def __init__(self, out: TextIO) -> None:
        self.out = out
        self.buffer = getattr(out, "buffer", None)
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def write(self, data: bytes) -> None:
        if self.buffer is not None:
            self.out.flush()
            self.buffer.write(data)
            self.buffer.flush()
        else:
            self.out.write(self._decoder.decode(data))
            self.out.flush()

    def close(self) -> None:
        if self.buffer is None:
            self.out.write(self._decoder.decode(b"", final=True))
            self.out.flush()


def run_stage(stage: Stage, *, cwd: str | Path | None = None, stream: TextIO | None = None) -> StageResult:
    """Run one stage's tool to completion.

    stderr is merged into stdout; output is echoed to ``stream`` as soon as the
    tool writes it, partial lines included, and kept as the result's
    ``output``. A tool that cannot be started is a failure with
    ``returncode=None``.
    """
    echo = _Echo(stream if stream is not None else sys.stdout)
    try:
        proc = subprocess.Popen(
            list(stage.argv),
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except OSError as exc:
        message = f"could not start {stage.argv[0]!r}: {exc}\n"
        logger.debug("Stage %s failed to start: %r", stage.name, exc)
        echo.write(message.encode("utf-8"))
        echo.close()
        return StageResult(status="failure", output=message, returncode=None, error=str(exc))

    chunks: list[bytes] = []
    with proc:
        assert proc.stdout is not None
        for data in iter(lambda: proc.stdout.read1(_READ_SIZE), b""):
            echo.write(data)
            chunks.append(data)
        returncode = proc.wait()
    echo.close()

    logger.debug("Stage %s exited with status %d", stage.name, returncode)
    return StageResult(
        status="success" if returncode == 0 else "failure",
        output=b"".join(chunks).decode("utf-8", errors="replace"),
        returncode=returncode,
    )


class PipelineRunner:
    """Single-use runner over an ordered, non-empty sequence of stages.

    ``state`` walks Idle -> Running(i) -> Halted(outcome). Halted is terminal:
    build a new runner for every run.
    """

    def __init__(
        self,
        stages: Sequence[Stage],
        *,
        cwd: str | Path | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.stages = tuple(stages)
        if not self.stages:
            raise ValueError("At least one stage is required.")
        self.cwd = cwd
        self.stream = stream
        self.state: RunnerState = Idle()

    def run(self) -> PipelineOutcome:
        if not isinstance(self.state, Idle):
            raise RuntimeError("PipelineRunner is single-use; create a new runner for each run.")
        out = self.stream if self.stream is not None else sys.stdout

        for index, stage in enumerate(self.stages):
            self.state = Running(index)
            print(f"\n==> {stage.name}", file=out)
            print("$", stage.command_line(), file=out)
            out.flush()

            result = run_stage(stage, cwd=self.cwd, stream=out)
            if not result.ok:
                logger.debug("Halting at stage %d/%d (%s)", index + 1, len(self.stages), stage.name)
                return self._halt(FailedAt(stage_name=stage.name, result=result))

        return self._halt(AllPassed())

    def _halt(self, outcome: PipelineOutcome) -> PipelineOutcome:
        self.state = Halted(outcome)
        return outcome


def run(
    stages: Sequence[Stage],
    *,
    cwd: str | Path | None = None,
    stream: TextIO | None = None,
) -> PipelineOutcome:
    """Run ``stages`` in order and stop at the first failure."""
    return PipelineRunner(stages, cwd=cwd, stream=stream).run()


def to_exit_code(outcome: PipelineOutcome) -> int:
    """Map an outcome to a process exit status.

    A failing tool's own status is reused when it fits in an exit byte; a tool
    killed by signal N maps to 128 + N, as shells report it. Everything else
    that failed maps to ``GENERIC_FAILURE_CODE``.
    """
    if isinstance(outcome, AllPassed):
        return 0
    code = outcome.result.returncode
    if code is None:
        return GENERIC_FAILURE_CODE
    if 0 < code < 256:
        return code
    if -128 < code < 0:
        return 128 - code
    return GENERIC_FAILURE_CODE


__all__ = ["GENERIC_FAILURE_CODE", "PipelineRunner", "run", "run_stage", "to_exit_code"]
