"""Integration tests for the `simulate` command."""

from typer.testing import CliRunner

from signwash.cli import app


def test_simulate_command_reports_outcomes_and_store_calls() -> None:
    """Simulation prints per-line outcomes and allocate/release counts."""

    runner = CliRunner()

    result = runner.invoke(
        app,
        ["simulate", "--player", "Alex", "&aWelcome", "", "plain text", "&&r"],
    )

    assert result.exit_code == 0
    assert "0. rewritten: '§aWelcome'" in result.stdout
    assert "1. empty: ''" in result.stdout
    assert "2. unchanged: 'plain text'" in result.stdout
    assert "3. rewritten: '&r'" in result.stdout
    assert "Allocations: 2" in result.stdout
    assert "Releases: 2" in result.stdout


def test_simulate_command_without_codes_makes_no_store_calls() -> None:
    """A sign without legacy codes is left untouched."""

    runner = CliRunner()

    result = runner.invoke(app, ["simulate", "& chat test", "", "plain text"])

    assert result.exit_code == 0
    assert "Allocations: 0" in result.stdout
    assert "Releases: 0" in result.stdout
