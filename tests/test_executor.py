"""Tests for the sequential, fail-fast suite executor."""

import io
import logging
import os
import subprocess
from unittest.mock import patch

import pytest

from conftest import FAIL_IN_DAY_2, PRINT_CWD, python_command
from day_runner.discovery import WorkItem, discover
from day_runner.runner import DEFAULT_COMMAND, RunResult, SuiteExecutor, run, shell_status

SUCCEED = python_command("pass")


class TestSuccessfulRuns:
    """Every item passes."""

    def test_zero_items(self, capfd):
        result = SuiteExecutor(SUCCEED).execute([])

        assert result.exit_status == 0
        assert result.all_passed
        assert result.attempted_count == 0
        assert capfd.readouterr().out == ""

    def test_all_items_attempted_in_order(self, make_days, capfd):
        base = make_days("Day 1", "Day 2", "Day 10", "notes")

        result = SuiteExecutor(python_command(PRINT_CWD)).execute(discover(base))

        assert result.exit_status == 0
        assert result.attempted_count == 3
        assert result.skipped == []
        assert capfd.readouterr().out.splitlines() == [
            "===> Day 1", "Day 1",
            "===> Day 10", "Day 10",
            "===> Day 2", "Day 2",
        ]

    def test_each_item_runs_in_its_own_directory(self, make_days):
        """Relative paths resolve against the item, not a previous one."""
        base = make_days("Day 1", "Day 2", "Day 3")
        touch = python_command("open('ran', 'w').close()")

        result = SuiteExecutor(touch, stream=io.StringIO()).execute(discover(base))

        assert result.exit_status == 0
        for name in ("Day 1", "Day 2", "Day 3"):
            assert (base / name / "ran").is_file()
        assert not (base / "ran").exists()

    def test_own_working_directory_is_untouched(self, make_days):
        base = make_days("Day 1", "Day 2")
        before = os.getcwd()

        SuiteExecutor(SUCCEED, stream=io.StringIO()).execute(discover(base))

        assert os.getcwd() == before

    def test_banner_goes_to_given_stream(self, make_days):
        base = make_days("Day 7")
        stream = io.StringIO()

        SuiteExecutor(SUCCEED, stream=stream).execute(discover(base))

        assert stream.getvalue() == "===> Day 7\n"


class TestFailFast:
    """The first failing item ends the run."""

    def test_first_failure_stops_the_run(self, make_days, capfd):
        base = make_days("Day 1", "Day 2", "Day 3")

        result = SuiteExecutor(python_command(FAIL_IN_DAY_2)).execute(discover(base))

        assert result.exit_status == 3
        assert not result.all_passed
        assert result.attempted_count == 2
        assert [item.label for item in result.skipped] == ["Day 3"]
        assert result.failed.item.label == "Day 2"
        assert capfd.readouterr().out.splitlines() == ["===> Day 1", "===> Day 2"]

    def test_later_items_are_never_invoked(self, make_days):
        base = make_days("Day 1", "Day 2")
        fail = python_command("import sys; sys.exit(1)")

        with patch(
            "day_runner.runner.executor.subprocess.run", wraps=subprocess.run
        ) as spy:
            status = SuiteExecutor(fail, stream=io.StringIO()).execute(discover(base)).exit_status

        assert status == 1
        assert spy.call_count == 1
        assert spy.call_args.kwargs["cwd"] == base / "Day 1"

    def test_failure_in_last_item(self, make_days):
        base = make_days("Day 1", "Day 2")

        result = SuiteExecutor(python_command(FAIL_IN_DAY_2), stream=io.StringIO()).execute(
            discover(base)
        )

        assert result.exit_status == 3
        assert result.attempted_count == 2
        assert result.skipped == []


class TestLaunchFailures:
    """Problems starting a command count as that item failing."""

    def test_missing_command(self, make_days, caplog):
        base = make_days("Day 1", "Day 2")

        with caplog.at_level(logging.ERROR, logger="day_runner"):
            result = SuiteExecutor(
                ["day-runner-no-such-command"], stream=io.StringIO()
            ).execute(discover(base))

        assert result.exit_status == 127
        assert result.attempted_count == 1
        assert "command not found" in result.results[0].error
        assert "Day 1" in caplog.text

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_command_not_executable(self, make_days, tmp_path):
        base = make_days("Day 1")
        script = tmp_path / "not-executable.sh"
        script.write_text("#!/bin/sh\nexit 0\n")
        script.chmod(0o644)

        result = SuiteExecutor([str(script)], stream=io.StringIO()).execute(discover(base))

        assert result.exit_status == 126

    @pytest.mark.skipif(os.name == "nt", reason="POSIX exec formats")
    def test_command_with_bad_exec_format(self, make_days, broken_executable):
        base = make_days("Day 1", "Day 2")

        result = SuiteExecutor([str(broken_executable)], stream=io.StringIO()).execute(
            discover(base)
        )

        assert result.exit_status == 126
        assert result.attempted_count == 1
        assert [item.label for item in result.skipped] == ["Day 2"]
        assert "cannot execute" in result.results[0].error

    @pytest.mark.skipif(os.name == "nt", reason="POSIX paths")
    def test_command_path_through_a_file(self, make_days, tmp_path):
        base = make_days("Day 1")
        plain_file = tmp_path / "plain.txt"
        plain_file.write_text("x")

        result = SuiteExecutor(
            [str(plain_file / "cargo")], stream=io.StringIO()
        ).execute(discover(base))

        assert result.exit_status == 126
        assert result.results[0].error is not None

    def test_directory_gone_before_run(self, tmp_path):
        item = WorkItem.from_path(tmp_path / "Day 9")

        with patch("day_runner.runner.executor.subprocess.run") as mock_run:
            result = SuiteExecutor(SUCCEED, stream=io.StringIO()).execute([item])

        assert result.exit_status == 1
        assert "cannot enter directory" in result.results[0].error
        mock_run.assert_not_called()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX signals")
    def test_killed_by_signal(self, make_days):
        base = make_days("Day 1")
        kill_self = python_command("import os, signal; os.kill(os.getpid(), signal.SIGTERM)")

        result = SuiteExecutor(kill_self, stream=io.StringIO()).execute(discover(base))

        assert result.exit_status == 128 + 15


class TestRunFunction:

    def test_returns_exit_status(self, make_days, capfd):
        base = make_days("Day 1", "Day 2")

        assert run(discover(base), python_command(FAIL_IN_DAY_2)) == 3
        assert capfd.readouterr().out.splitlines() == ["===> Day 1", "===> Day 2"]

    def test_no_items_is_success(self):
        assert run([], SUCCEED) == 0

    def test_default_command(self):
        assert list(DEFAULT_COMMAND) == ["cargo", "test", "--verbose"]
        assert SuiteExecutor().command == ["cargo", "test", "--verbose"]


class TestShellStatus:

    @pytest.mark.parametrize("returncode,expected", [
        (0, 0),
        (1, 1),
        (101, 101),
        (-2, 130),
        (-9, 137),
    ])
    def test_mapping(self, returncode, expected):
        assert shell_status(returncode) == expected


class TestRunResult:

    def test_empty_result_passes(self):
        result = RunResult()
        assert result.all_passed
        assert result.failed is None
        assert result.attempted_count == 0
