"""CLI core stories: traceback handling, main entry, help, info, unknown command."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner, Result
from lib_layered_config import Config

from domval import __init__conf__
from domval.adapters import cli as cli_mod
from domval.application.engine import OverrideEngine
from domval.composition import AppServices, build_production, build_testing


def _exploding_services() -> AppServices:
    def _explode(_config: Config) -> OverrideEngine:
        raise RuntimeError("engine exploded")

    return build_testing(build_engine=_explode)


# ======================== Traceback state ========================


@pytest.mark.os_agnostic
def test_traceback_is_disabled_by_default(managed_traceback_state: None) -> None:
    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_apply_traceback_preferences_enables_both_flags(managed_traceback_state: None) -> None:
    cli_mod.apply_traceback_preferences(True)

    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


@pytest.mark.os_agnostic
def test_restore_traceback_state_resets_flags(managed_traceback_state: None) -> None:
    previous = cli_mod.snapshot_traceback_state()
    cli_mod.apply_traceback_preferences(True)

    cli_mod.restore_traceback_state(previous)

    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_traceback_flag_is_active_while_a_command_runs(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    """--traceback enables both flags during command execution."""
    seen: list[tuple[bool, bool]] = []
    monkeypatch.setattr(__init__conf__, "print_info", lambda: seen.append(cli_mod.snapshot_traceback_state()))

    exit_code = cli_mod.main(["--traceback", "info"], services_factory=build_testing)

    assert exit_code == 0
    assert seen == [(True, True)]
    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_restore_traceback_false_keeps_flags_enabled(managed_traceback_state: None) -> None:
    cli_mod.main(["--traceback", "info"], restore_traceback=False, services_factory=build_testing)

    assert cli_mod.snapshot_traceback_state() == (True, True)


@pytest.mark.os_agnostic
def test_traceback_flag_prints_the_full_traceback(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
    strip_ansi: Callable[[str], str],
) -> None:
    """Unexpected errors escape the commands and are formatted by main."""
    exit_code = cli_mod.main(["--traceback", "get", "greeting"], services_factory=_exploding_services)

    plain_err = strip_ansi(capsys.readouterr().err)

    assert exit_code != 0
    assert "Traceback (most recent call last)" in plain_err
    assert "RuntimeError: engine exploded" in plain_err
    assert "[TRUNCATED" not in plain_err


@pytest.mark.os_agnostic
def test_without_traceback_flag_only_a_summary_is_printed(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
    strip_ansi: Callable[[str], str],
) -> None:
    exit_code = cli_mod.main(["get", "greeting"], services_factory=_exploding_services)

    plain_err = strip_ansi(capsys.readouterr().err)

    assert exit_code != 0
    assert "engine exploded" in plain_err
    assert "Traceback (most recent call last)" not in plain_err


# ======================== Entry and help ========================


@pytest.mark.os_agnostic
def test_main_runs_info_with_production_services(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert cli_mod.main(["info"], services_factory=build_production) == 0
    assert __init__conf__.name in capsys.readouterr().out


@pytest.mark.os_agnostic
def test_no_arguments_print_help(cli_runner: CliRunner, production_factory: Callable[[], Any]) -> None:
    result = cli_runner.invoke(cli_mod.cli, [], obj=production_factory)

    assert result.exit_code == 0
    assert "Usage:" in result.output


@pytest.mark.os_agnostic
def test_main_without_arguments_prints_help(managed_traceback_state: None, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_mod.main([], services_factory=build_testing) == 0
    assert "Usage:" in capsys.readouterr().out


@pytest.mark.os_agnostic
def test_help_lists_the_value_commands(cli_runner: CliRunner, production_factory: Callable[[], Any]) -> None:
    result = cli_runner.invoke(cli_mod.cli, ["--help"], obj=production_factory)

    for command in ("get", "set", "remove", "remove-key", "remove-change-set", "dump", "mappings"):
        assert command in result.output


@pytest.mark.os_agnostic
def test_version_option_prints_the_version(cli_runner: CliRunner, production_factory: Callable[[], Any]) -> None:
    result = cli_runner.invoke(cli_mod.cli, ["--version"], obj=production_factory)

    assert result.exit_code == 0
    assert f"{__init__conf__.shell_command} version {__init__conf__.version}" in result.output


@pytest.mark.os_agnostic
def test_info_command_displays_project_metadata(cli_runner: CliRunner, production_factory: Callable[[], Any]) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["info"], obj=production_factory)

    assert result.exit_code == 0
    assert f"Info for {__init__conf__.name}:" in result.output
    assert __init__conf__.version in result.output


@pytest.mark.os_agnostic
def test_unknown_command_is_rejected(cli_runner: CliRunner, production_factory: Callable[[], Any]) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["does-not-exist"], obj=production_factory)

    assert result.exit_code != 0
    assert "No such command" in result.output
