"""CLI smoke tests."""

from click.testing import CliRunner
from testcase_importer.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "detect" in result.output
    assert "import" in result.output
    assert "generate-config" in result.output
