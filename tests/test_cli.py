"""run-checks entry point."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from commitgate import __version__
from commitgate.cli import main
from commitgate.types import Stage


class TestRunChecks:
    def test_all_pass_exits_zero(self, make_stage, capsys, tmp_path) -> None:
        code = main([], stages=[make_stage("lint"), make_stage("test")], cwd=tmp_path)
        out = capsys.readouterr().out
        assert code == 0
        assert "PASS: All 2 checks passed." in out

    def test_failure_exits_with_tool_status(self, make_stage, capsys, tmp_path, invoked) -> None:
        code = main([], stages=[make_stage("lint", exit_code=2), make_stage("test")], cwd=tmp_path)
        out = capsys.readouterr().out
        assert code == 2
        assert "FAIL: lint (exit 2)" in out
        assert "==> test" not in out
        assert invoked() == ["lint"]

    def test_unstartable_tool_is_reported(self, capsys, tmp_path) -> None:
        code = main([], stages=[Stage("test", ("commitgate-no-such-tool-xyz",))], cwd=tmp_path)
        out = capsys.readouterr().out
        assert code == 1
        assert "FAIL: test (could not start:" in out

    def test_stages_run_in_working_directory(self, capsys, tmp_path) -> None:
        stage = Stage("where", (sys.executable, "-c", "import os; print('cwd=' + os.getcwd())"))
        assert main([], stages=[stage], cwd=tmp_path) == 0
        out = capsys.readouterr().out
        reported = next(line for line in out.splitlines() if line.startswith("cwd="))
        assert Path(reported[len("cwd=") :]).resolve() == tmp_path.resolve()


class TestFlags:
    def test_list_prints_stages_without_running_them(self, make_stage, capsys, invoked) -> None:
        code = main(["--list"], stages=[make_stage("lint"), make_stage("format")])
        out = capsys.readouterr().out
        assert code == 0
        assert "1. lint" in out
        assert "2. format" in out
        assert invoked() == []

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_unknown_flag_is_rejected(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--fix"])
        assert excinfo.value.code == 2

    def test_list_with_no_stages(self, capsys) -> None:
        assert main(["--list"], stages=[]) == 0
        assert "(no stages)" in capsys.readouterr().out
