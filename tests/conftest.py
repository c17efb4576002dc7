"""Shared pytest fixtures for day-runner tests."""

import os
import sys

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep DAY_RUNNER_* settings from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("DAY_RUNNER_"):
            monkeypatch.delenv(name)


@pytest.fixture
def make_days(tmp_path):
    """Create named directories (and optionally files) under tmp_path."""
    def _make(*dir_names, files=()):
        for name in dir_names:
            (tmp_path / name).mkdir()
        for name in files:
            (tmp_path / name).write_text("not a directory\n")
        return tmp_path
    return _make


def python_command(code):
    """A test command that runs a Python snippet with this interpreter."""
    return [sys.executable, "-c", code]


# Prints the name of the directory it runs in.
PRINT_CWD = "import os; print(os.path.basename(os.getcwd()))"

# Fails with status 3 inside "Day 2", succeeds elsewhere.
FAIL_IN_DAY_2 = (
    "import os, sys; "
    "sys.exit(3 if os.path.basename(os.getcwd()) == 'Day 2' else 0)"
)


@pytest.fixture
def broken_executable(tmp_path_factory):
    """An executable file whose contents no loader recognises."""
    path = tmp_path_factory.mktemp("bin") / "broken"
    path.write_bytes(b"\x7fELF\x00\x00garbage")
    path.chmod(0o755)
    return path
