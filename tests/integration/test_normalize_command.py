"""Integration tests for the `normalize` command."""

from pathlib import Path

from typer.testing import CliRunner

from signwash.cli import app


def test_normalize_command_rewrites_argument_lines() -> None:
    """Each argument line is printed in normalized form."""

    runner = CliRunner()

    result = runner.invoke(app, ["normalize", "&aHello", "cats & dogs", "&&r"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["§aHello", "cats & dogs", "&r"]


def test_normalize_command_reads_input_file(tmp_path: Path) -> None:
    """Lines from `--input` are normalized in file order."""

    input_path = tmp_path / "sign.txt"
    input_path.write_text("&6Gold\n§bKept\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["normalize", "--input", str(input_path)])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["§6Gold", "§bKept"]


def test_normalize_command_reads_stdin_and_applies_marker_override() -> None:
    """Without arguments, stdin lines are normalized with the override marker."""

    runner = CliRunner()

    result = runner.invoke(app, ["normalize", "--marker", "¤"], input="&cRed\nplain\n")

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["¤cRed", "plain"]


def test_normalize_command_uses_yaml_config(tmp_path: Path) -> None:
    """The configured canonical marker is used for output."""

    config_path = tmp_path / "signwash.yml"
    config_path.write_text('canonical_marker: "¤"\n', encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["normalize", "--config", str(config_path), "&lBold"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["¤lBold"]
