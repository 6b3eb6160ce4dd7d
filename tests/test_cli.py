"""Tests for the root vaultbridge CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from vaultbridge import __version__
from vaultbridge.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "vaultbridge" in result.output
    for command in ("refs", "keys", "resolve", "snapshot"):
        assert command in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_dir")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.usefixtures("_isolated_dir")
def test_invalid_config_is_a_usage_error(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "vaultbridge.toml").write_text("[assets\n")
    result = cli_runner.invoke(cli, ["keys", "A.md"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output


@pytest.mark.usefixtures("_isolated_dir")
def test_explicit_config_flag(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "custom.toml"
    config.write_text('[vault]\nnote_extension = ".txt"\n')
    result = cli_runner.invoke(cli, ["-q", "-c", str(config), "keys", "A/B.txt"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["B", "A/B"]



@pytest.mark.usefixtures("_isolated_dir")
def test_missing_config_flag(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["-c", str(tmp_path / "nope.toml"), "keys", "A.md"])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


@pytest.mark.usefixtures("_isolated_dir")
def test_vault_option_selects_config(cli_runner: CliRunner, tmp_path: Path) -> None:
    vault = tmp_path / "vault"
    vault.mkdir()
    (vault / "vaultbridge.toml").write_text('[vault]\nnote_extension = ".txt"\n')
    result = cli_runner.invoke(cli, ["-q", "--vault", str(vault), "keys", "A/B.txt"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["B", "A/B"]


# --- --examples ---

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["vaultbridge snapshot", "--direction import"]),
    (["refs", "--examples"], ["vaultbridge refs", "--storage"]),
    (["keys", "--examples"], ["vaultbridge keys"]),
    (["resolve", "--examples"], ["--direction import", "--direction export"]),
    (["snapshot", "--examples"], ["vaultbridge snapshot"]),
]


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[args[0] for args, _ in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


@pytest.mark.parametrize("command", ["refs", "keys", "resolve", "snapshot"])
def test_examples_listed_in_help(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, [command, "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output
