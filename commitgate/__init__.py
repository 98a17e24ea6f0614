"""commitgate - fail-fast pre-commit gate: lint, format check, tests.

Quick start::

    import commitgate as cg

    outcome = cg.run(cg.DEFAULT_STAGES)
    raise SystemExit(cg.to_exit_code(outcome))

Or from a shell, at the repository root::

    run-checks
"""

__version__ = "0.1.0"

from commitgate.runner import GENERIC_FAILURE_CODE, PipelineRunner, run, run_stage, to_exit_code
from commitgate.stages import DEFAULT_STAGES, describe_stages
from commitgate.types import AllPassed, FailedAt, PipelineOutcome, Stage, StageResult

__all__ = [
    "__version__",
    "GENERIC_FAILURE_CODE",
    "PipelineRunner",
    "run",
    "run_stage",
    "to_exit_code",
    "DEFAULT_STAGES",
    "describe_stages",
    "AllPassed",
    "FailedAt",
    "PipelineOutcome",
    "Stage",
    "StageResult",
]
