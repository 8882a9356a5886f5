"""End-to-end CLI tests for the top-level `emporium` command.

These tests exercise verbosity flags, logger-level overrides, debug
formatting and the flight recorder by invoking `log-demo` under various
flags and environment variables.
"""

import re
from pathlib import Path

import pytest

from emporium import __version__
from emporium.entrypoints.cli.main import emporium

# pylint: disable=unused-argument


def assert_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is found in the output string."""
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def assert_not_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is NOT found in the output string."""
    if re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' found in output:\n{output}")


def test_version(runner):
    """--version prints the package version."""
    result = runner.invoke(emporium, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_groups(runner):
    """--help lists the db and ledger groups."""
    result = runner.invoke(emporium, ["--help"])
    assert result.exit_code == 0
    assert_in_output(r"\bdb\b", result.output)
    assert_in_output(r"\bledger\b", result.output)


def test_default_shows_warning(registered_log_demo, runner, fs):
    """Default invocation shows WARNING and above but not INFO."""
    result = runner.invoke(emporium, ["log-demo"])
    assert result.exit_code == 0
    assert_in_output("warning-level test message", result.output)
    assert_not_in_output("info-level test message", result.output)


def test_verbose_shows_info(registered_log_demo, runner, fs):
    """-v enables INFO but not DEBUG."""
    result = runner.invoke(emporium, ["-v", "log-demo"])
    assert result.exit_code == 0
    assert_in_output("info-level test message", result.output)
    assert_not_in_output("debug-level test message", result.output)


def test_vv_shows_debug(registered_log_demo, runner, fs):
    """-vv enables DEBUG."""
    result = runner.invoke(emporium, ["-vv", "log-demo"])
    assert result.exit_code == 0
    assert_in_output("This is a debug-level test message", result.output)


def test_quiet_suppresses_warning(registered_log_demo, runner, fs):
    """-q hides WARNING and keeps ERROR."""
    result = runner.invoke(emporium, ["-q", "log-demo"])
    assert result.exit_code == 0
    assert_in_output("error-level test message", result.output)
    assert_not_in_output("warning-level test message", result.output)


def test_qq_suppresses_error(registered_log_demo, runner, fs):
    """-qq leaves only CRITICAL."""
    result = runner.invoke(emporium, ["-qq", "log-demo"])
    assert result.exit_code == 0
    assert_in_output("critical-level test message", result.output)
    assert_not_in_output("error-level test message", result.output)


def test_third_party_prefix(registered_log_demo, runner, fs):
    """Records from other libraries are tagged with their top-level name."""
    result = runner.invoke(emporium, ["log-demo"])
    assert_in_output(r"\[some\] This is a warning-level third-party", result.output)


@pytest.mark.parametrize(
    "env, cli_args",
    [
        ({}, ["-vv", "-L", "some.thirdparty=INFO"]),
        ({"EMPORIUM_LOGGER_LEVELS": "some.thirdparty=INFO"}, ["-vv"]),
    ],
    ids=["cli-flag", "env-var"],
)
def test_logger_level_silences_debug(registered_log_demo, runner, fs, env, cli_args):
    """Logger-level overrides silence third-party DEBUG while keeping INFO+."""
    result = runner.invoke(emporium, cli_args + ["log-demo"], env=env)
    assert result.exit_code == 0
    assert_not_in_output("debug-level third-party test message", result.output)
    assert_in_output("info-level third-party test message", result.output)


def test_bad_logger_level(registered_log_demo, runner, fs):
    """A malformed -L value is a usage error."""
    result = runner.invoke(emporium, ["-L", "nonsense", "log-demo"])
    assert result.exit_code == 2
    assert_in_output("Expected NAME=LEVEL", result.output)


def test_debug_mode_shows_paths(registered_log_demo, runner, fs):
    """--debug adds source paths to console records."""
    result = runner.invoke(emporium, ["--debug", "log-demo"])
    assert result.exit_code == 0
    assert_in_output(r"conftest\.py:\d+\b", result.output)


def test_debug_mode_is_off_by_default(registered_log_demo, runner, fs):
    """Source paths are hidden by default."""
    result = runner.invoke(emporium, ["log-demo"])
    assert result.exit_code == 0
    assert_not_in_output(r"conftest\.py:\d+\b", result.output)


def test_flight_recorder_flush_on_warning(registered_log_demo, runner, fs):
    """Buffered DEBUG records are written when a WARNING occurs."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        emporium, ["--log-path", log_path, "-L", "some.thirdparty=INFO", "log-demo"]
    )
    assert result.exit_code == 0
    content = Path(log_path).read_text(encoding="utf-8")
    assert_in_output("This is a debug-level test message.", content)
    assert_not_in_output("debug-level third-party test message", content)
    assert_in_output("info-level third-party test message", content)
    assert_in_output("critical-level test message", content)
    # records after the last flush stay in memory
    assert_not_in_output("final debug-level test message", content)


@pytest.mark.parametrize(
    "env, cli_args",
    [({}, ["--force-flush"]), ({"EMPORIUM_FORCE_FLUSH_FLIGHT_RECORDER": "true"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_force_flush(registered_log_demo, runner, fs, env, cli_args):
    """Force-flush writes the remaining buffer on exit."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        emporium, ["--log-path", log_path] + cli_args + ["log-demo"], env=env
    )
    assert result.exit_code == 0
    content = Path(log_path).read_text(encoding="utf-8")
    assert_in_output("final debug-level test message", content)


@pytest.mark.parametrize(
    "env, cli_args",
    [({}, ["--no-flight-recorder"]), ({"EMPORIUM_FLIGHT_RECORDER": "0"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_can_be_disabled(
    registered_log_demo, runner, fs, env, cli_args
):
    """A disabled flight recorder writes no file."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        emporium, ["--log-path", log_path] + cli_args + ["log-demo"], env=env
    )
    assert result.exit_code == 0
    assert not Path(log_path).exists()


def test_flight_recorder_truncates_log(registered_log_demo, runner, fs):
    """The flight recorder file is rewritten on each run."""
    log_path = "flight_recorder.log"
    runner.invoke(emporium, ["--log-path", log_path, "log-demo"])
    first = Path(log_path).read_text(encoding="utf-8").count("\n")
    runner.invoke(emporium, ["--log-path", log_path, "log-demo"])
    second = Path(log_path).read_text(encoding="utf-8").count("\n")
    assert first == second


def test_startup_logging(registered_log_demo, runner, fs):
    """-v shows the startup summary line."""
    result = runner.invoke(emporium, ["-v", "--no-flight-recorder", "log-demo"])
    assert result.exit_code == 0
    assert_in_output(rf"EMPORIUM {re.escape(__version__)}: console=INFO", result.output)
