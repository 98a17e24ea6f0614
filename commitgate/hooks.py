"""Wire ``run-checks`` into git as a pre-commit hook for a local clone."""

from __future__ import annotations

import argparse
import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

HOOKS_PATH = ".githooks"
PRE_COMMIT_SCRIPT = "#!/bin/sh\n# Block the commit unless lint, format check and tests all pass.\nexec run-checks\n"


def _git(root: Path, args: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args],
        cwd=root,
        check=False,
        text=True,
        capture_output=True,
    )


def write_pre_commit_hook(root: Path) -> Path:
    """Create ``.githooks/pre-commit`` unless one exists, and make it executable."""
    hook = root / HOOKS_PATH / "pre-commit"
    if hook.exists():
        logger.debug("Keeping existing hook at %s", hook)
    else:
        hook.parent.mkdir(parents=True, exist_ok=True)
        hook.write_text(PRE_COMMIT_SCRIPT, encoding="utf-8")
    hook.chmod(hook.stat().st_mode | 0o111)
    return hook


def set_hooks_path(root: Path) -> tuple[int, str]:
    """Point the clone's ``core.hooksPath`` at HOOKS_PATH and read it back.

    Returns ``(0, "")`` on success, else a non-zero status and the reason.
    """
    set_result = _git(root, ["config", "--local", "core.hooksPath", HOOKS_PATH])
    if set_result.returncode != 0:
        if set_result.stderr:
            logger.warning("git config failed: %s", set_result.stderr.strip())
        return int(set_result.returncode), "could not set git core.hooksPath."

    configured = (_git(root, ["config", "--get", "core.hooksPath"]).stdout or "").strip()
    if configured != HOOKS_PATH:
        return 1, f"expected core.hooksPath={HOOKS_PATH}, got {configured!r}"
    return 0, ""


def install_hook(root: str | Path) -> int:
    root = Path(root).resolve()
    hook = write_pre_commit_hook(root)

    code, reason = set_hooks_path(root)
    if code != 0:
        print(f"FAIL: {reason}")
        return code

    print(f"PASS: configured git core.hooksPath={HOOKS_PATH}")
    print(f"Pre-commit hook {hook.relative_to(root)} is now active for this local clone.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="install-commit-gate",
        description="Install the run-checks pre-commit hook into a git clone.",
    )
    parser.add_argument("--root", default=".", help="Repository root (default: current directory).")
    args = parser.parse_args(argv)
    return install_hook(args.root)


if __name__ == "__main__":
    raise SystemExit(main())
