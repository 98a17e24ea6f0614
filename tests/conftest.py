"""Shared test fixtures for commitgate test suite."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from commitgate.types import Stage

StageFactory = Callable[..., Stage]


@pytest.fixture
def invocation_log(tmp_path: Path) -> Path:
    """File each fake stage appends its name to when it actually runs."""
    return tmp_path / "invocations.log"


@pytest.fixture
def make_stage(invocation_log: Path) -> StageFactory:
    """Build a Stage backed by a real child Python process.

    The child appends its stage name to ``invocation_log``, prints ``message``
    on stdout and ``stderr_message`` on stderr, then exits with ``exit_code``.
    """

    def _make(name: str, exit_code: int = 0, message: str | None = None, stderr_message: str = "") -> Stage:
        text = message or f"{name} output"
        code = "; ".join(
            [
                "import sys",
                f"open({str(invocation_log)!r}, 'a', encoding='utf-8').write({name!r} + '\\n')",
                f"print({text!r}, flush=True)",
                f"sys.stderr.write({stderr_message!r})",
                f"sys.exit({exit_code})",
            ]
        )
        return Stage(name, (sys.executable, "-c", code))

    return _make


@pytest.fixture
def invoked(invocation_log: Path) -> Callable[[], list[str]]:
    """Names of the stages that ran, in the order they ran."""

    def _read() -> list[str]:
        if not invocation_log.exists():
            return []
        return invocation_log.read_text(encoding="utf-8").splitlines()

    return _read
