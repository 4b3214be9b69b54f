import io
import sys
from contextlib import redirect_stderr, redirect_stdout
from dataclasses import dataclass
from datetime import date

import pytest

from consistency import config
from consistency.cli import run
from consistency.lib import ansi, clock

TODAY = date(2025, 2, 8)


@dataclass
class Result:
    exit_code: int
    stdout: str
    stderr: str


class FnCLIRunner:
    def invoke(self, args: list[str], input: str = "") -> Result:
        out, err = io.StringIO(), io.StringIO()
        saved_stdin = sys.stdin
        sys.stdin = io.StringIO(input)
        try:
            with redirect_stdout(out), redirect_stderr(err):
                try:
                    code = run(args)
                except SystemExit as e:
                    code = e.code if isinstance(e.code, int) else int(e.code is not None)
        finally:
            sys.stdin = saved_stdin
        return Result(exit_code=code or 0, stdout=out.getvalue(), stderr=err.getvalue())


@pytest.fixture(autouse=True)
def plain_output():
    ansi.use(ansi.PLAIN)
    yield
    ansi.use(ansi.DEFAULT)


@pytest.fixture
def frozen_today(monkeypatch):
    monkeypatch.setattr(clock, "today", lambda: TODAY)
    return TODAY


@pytest.fixture
def tmp_consistency_dir(tmp_path, monkeypatch, frozen_today):
    monkeypatch.setattr(config, "CONSISTENCY_DIR", tmp_path)
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "config.yaml")
    config._config._load()
    yield tmp_path
    config._config._data = {}
