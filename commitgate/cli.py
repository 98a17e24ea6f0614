from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from commitgate import __version__
from commitgate.runner import run, to_exit_code
from commitgate.stages import DEFAULT_STAGES, describe_stages
from commitgate.types import FailedAt, PipelineOutcome, Stage

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run-checks",
        description="Run lint, format check and tests in order; exit non-zero at the first failure.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--list", action="store_true", help="Print the stages in run order and exit.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr.")
    return parser


def _summary(outcome: PipelineOutcome, stage_count: int) -> str:
    if not isinstance(outcome, FailedAt):
        return f"PASS: All {stage_count} checks passed."
    result = outcome.result
    if result.invocation_failed:
        return f"FAIL: {outcome.stage_name} (could not start: {result.error})"
    return f"FAIL: {outcome.stage_name} (exit {result.returncode})"


def main(
    argv: Sequence[str] | None = None,
    *,
    stages: Sequence[Stage] = DEFAULT_STAGES,
    cwd: str | Path | None = None,
) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.list:
        print(describe_stages(stages))
        return 0

    work_dir = Path(cwd) if cwd is not None else Path.cwd()
    logger.debug("Running %d stages in %s", len(stages), work_dir)
    outcome = run(stages, cwd=work_dir)
    print(f"\n{_summary(outcome, len(stages))}")
    return to_exit_code(outcome)


if __name__ == "__main__":
    raise SystemExit(main())
