"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

import click

from testcase_importer.column_mapping import UnknownFieldError, resolve_field_name
from testcase_importer.configuration import (
    DEFAULT_SETTINGS_FILENAME,
    ImportSettings,
    SettingsError,
    load_settings,
    write_placeholder_settings,
)
from testcase_importer.format_detection import ImportFormat, detect
from testcase_importer.import_orchestration import ImportContext, RawInput, run
from testcase_importer.workbook_rows import WorkbookReadError, read_workbook_rows

WORKBOOK_SUFFIXES = frozenset({".xlsx", ".xlsm"})
STDIN_PATH = "-"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="testcase-importer")
@click.option(
    "--verbose", "-v", is_flag=True, default=False, help="Log detection decisions to stderr."
)
def cli(verbose: bool) -> None:
    """Test case import utility."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_SETTINGS_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML import settings template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML settings file with guidance comments."""
    try:
        resolved_output = write_placeholder_settings(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="detect")
@click.argument("input_path", type=click.Path(path_type=str))
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON import settings file",
)
@click.option("--sheet", "sheet_name", required=False, help="Worksheet to read from a workbook")
def detect_format(input_path: str, config_path: str | None, sheet_name: str | None) -> None:
    """Report the detected format of a text file or workbook as JSON."""
    settings = _load_settings(config_path)
    raw_input = _read_input(input_path, sheet_name)
    if isinstance(raw_input, str):
        detected = detect(
            raw_input,
            sample_lines=settings.detection_sample_lines,
            freeform_confidence=settings.freeform_confidence,
        )
        report = asdict(detected)
    else:
        headers = list(dict.fromkeys(key for row in raw_input for key in row))
        report = {"format": ImportFormat.CSV, "confidence": 1.0, "headers": headers}
    _echo_json(report)


@cli.command(name="import")
@click.argument("input_path", type=click.Path(path_type=str))
@click.option("--project-id", required=True, help="Project the drafts are imported into")
@click.option("--suite-id", required=False, help="Optional test suite for the drafts")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON import settings file",
)
@click.option(
    "--map",
    "column_overrides",
    multiple=True,
    callback=lambda _ctx, _param, values: _parse_overrides(values),
    metavar="HEADER=FIELD",
    help="Map a source column to a field (or 'skip'); may be repeated",
)
@click.option("--sheet", "sheet_name", required=False, help="Worksheet to read from a workbook")
def import_test_cases(  # pylint: disable=too-many-arguments
    input_path: str,
    project_id: str,
    suite_id: str | None,
    config_path: str | None,
    column_overrides: dict[str, str],
    sheet_name: str | None,
) -> None:
    """Import test cases from a file and print the drafts and diagnostics as JSON."""
    settings = _load_settings(config_path)
    raw_input = _read_input(input_path, sheet_name)
    result = run(
        raw_input,
        ImportContext(project_id=project_id, suite_id=suite_id, column_overrides=column_overrides),
        settings,
    )
    _echo_json(asdict(result))


def _parse_overrides(values: tuple[str, ...]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for value in values:
        header, separator, target = value.rpartition("=")
        if not separator or not header.strip():
            raise click.BadParameter(f"expected HEADER=FIELD, got '{value}'")
        try:
            resolve_field_name(target)
        except UnknownFieldError as exc:
            raise click.BadParameter(str(exc)) from exc
        overrides[header.strip()] = target.strip()
    return overrides


def _load_settings(config_path: str | None) -> ImportSettings:
    if config_path is None:
        return ImportSettings()
    try:
        return load_settings(config_path)
    except SettingsError as exc:
        raise CliError(str(exc)) from exc


def _read_input(input_path: str, sheet_name: str | None) -> RawInput:
    if input_path == STDIN_PATH:
        return click.get_text_stream("stdin").read()
    path = Path(input_path)
    try:
        if path.suffix.lower() in WORKBOOK_SUFFIXES:
            return read_workbook_rows(path, sheet_name).rows
        return path.read_text(encoding="utf-8")
    except (WorkbookReadError, OSError, UnicodeDecodeError) as exc:
        raise CliError(str(exc)) from exc


def _echo_json(payload: object) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
