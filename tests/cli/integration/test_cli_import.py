"""CLI import and detection flow tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from openpyxl import Workbook
from testcase_importer.cli import cli, main


def test_detect_reports_format_as_json(tmp_path: Path) -> None:
    input_path = tmp_path / "cases.tsv"
    input_path.write_text("Title\tPriority\nLogin\tHigh\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["detect", str(input_path)])

    assert result.exit_code == 0
    report = json.loads(result.output)
    assert report["format"] == "tsv"
    assert report["headers"] == ["Title", "Priority"]


def test_import_prints_drafts_and_diagnostics(tmp_path: Path) -> None:
    input_path = tmp_path / "cases.csv"
    input_path.write_text(
        "Scenario,Priority,Bug Count\nLogin,P0,2\nLogout,Low,0\n", encoding="utf-8"
    )

    result = CliRunner().invoke(
        cli,
        [
            "import",
            str(input_path),
            "--project-id",
            "proj-1",
            "--suite-id",
            "suite-1",
            "--map",
            "Scenario=title",
        ],
    )

    assert result.exit_code == 0
    report = json.loads(result.output)
    assert report["format"] == "csv"
    assert [draft["title"] for draft in report["drafts"]] == ["Login", "Logout"]
    assert report["drafts"][0]["priority"] == "High"
    assert report["drafts"][0]["suite_id"] == "suite-1"
    assert report["proposed_columns"][0]["inferred_type"] == "number"
    assert report["column_mappings"][0]["is_override"] is True


def test_import_reads_text_from_stdin() -> None:
    result = CliRunner().invoke(
        cli,
        ["import", "-", "--project-id", "proj-1"],
        input="Title: Login works\nExpected Result: Dashboard shown\n",
    )

    assert result.exit_code == 0
    report = json.loads(result.output)
    assert report["format"] == "structured"
    assert report["drafts"][0]["title"] == "Login works"


def test_import_reads_workbook_rows(tmp_path: Path) -> None:
    input_path = tmp_path / "cases.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Title", "Status"])
    sheet.append(["Checkout", "passed"])
    workbook.save(input_path)

    result = CliRunner().invoke(cli, ["import", str(input_path), "--project-id", "proj-1"])

    assert result.exit_code == 0
    report = json.loads(result.output)
    assert report["confidence"] == 1.0
    assert report["drafts"][0]["status"] == "Pass"


def test_import_applies_settings_file(tmp_path: Path) -> None:
    input_path = tmp_path / "cases.csv"
    input_path.write_text("Title,Priority\nA,High\nB,Low\n", encoding="utf-8")
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text("import:\n  max_rows: 1\n", encoding="utf-8")

    result = CliRunner().invoke(
        cli,
        ["import", str(input_path), "--project-id", "proj-1", "--config", str(settings_path)],
    )

    assert result.exit_code == 0
    report = json.loads(result.output)
    assert len(report["drafts"]) == 1
    assert "Input has 2 rows; only the first 1 were imported." in report["warnings"]


def test_generate_config_writes_scaffold(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "import-settings.yaml"

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert captured.out.strip() == str(output_path.resolve())
    assert "import:" in output_path.read_text(encoding="utf-8")
