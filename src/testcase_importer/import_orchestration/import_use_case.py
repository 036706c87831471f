"""Import orchestration use-case service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from testcase_importer.column_mapping import (
    ColumnMapping,
    CustomColumnProposal,
    FieldName,
    UnknownFieldError,
    map_headers,
    propose_custom_columns,
    resolve_field_name,
)
from testcase_importer.configuration import ImportSettings
from testcase_importer.draft_normalization import (
    TestCaseDraft,
    find_duplicate_titles,
    normalize,
    validate,
)
from testcase_importer.format_detection import (
    COMMA,
    TAB,
    DetectedFormat,
    ImportFormat,
    detect,
    split_delimited,
)
from testcase_importer.hierarchical_parsing import (
    HierarchicalDocument,
    HierarchicalTestCase,
    OutlineParseError,
    parse_outline,
)

from .import_contracts import ImportContext, ImportResult, RawInput
from .text_extraction import extract_freeform, extract_structured_blocks

ROW_INPUT_CONFIDENCE = 1.0

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Record:
    """One candidate test case before normalization."""

    values: Mapping[object, object]
    custom_fields: Mapping[str, object] = field(default_factory=dict)


@dataclass
class _ImportRun:
    """Mutable collector for one import."""

    context: ImportContext
    settings: ImportSettings
    overrides: dict[str, FieldName | None] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    format: ImportFormat = ImportFormat.FREEFORM
    confidence: float = 0.0
    records: list[_Record] = field(default_factory=list)
    mappings: tuple[ColumnMapping, ...] = ()
    proposals: tuple[CustomColumnProposal, ...] = ()


def run(
    raw_input: RawInput,
    context: ImportContext,
    settings: ImportSettings | None = None,
) -> ImportResult:
    """Turn raw text or decoded rows into validated test case drafts.

    Never raises for malformed input: problems are reported in ``errors`` and
    ``warnings`` and the worst case is a single low-confidence freeform draft.
    """
    import_run = _ImportRun(context=context, settings=settings or ImportSettings())
    import_run.overrides = _resolve_overrides(context.column_overrides, import_run)

    if isinstance(raw_input, str):
        _import_text(raw_input, import_run)
    else:
        _import_rows(raw_input, import_run)

    drafts = _build_drafts(import_run)
    _LOGGER.debug(
        "Imported %d drafts as %s (confidence %.2f)",
        len(drafts),
        import_run.format.value,
        import_run.confidence,
    )
    return ImportResult(
        format=import_run.format,
        confidence=import_run.confidence,
        drafts=tuple(drafts),
        errors=tuple(import_run.errors),
        warnings=tuple(import_run.warnings),
        proposed_columns=import_run.proposals,
        column_mappings=import_run.mappings,
    )


def _resolve_overrides(
    column_overrides: Mapping[str, str], import_run: _ImportRun
) -> dict[str, FieldName | None]:
    resolved: dict[str, FieldName | None] = {}
    for header, target in column_overrides.items():
        try:
            resolved[header] = resolve_field_name(target)
        except UnknownFieldError as exc:
            import_run.errors.append(f"Column override for '{header}' ignored: {exc}")
    return resolved


def _import_text(text: str, import_run: _ImportRun) -> None:
    settings = import_run.settings
    if len(text) > settings.max_input_chars:
        _LOGGER.warning("Input truncated to %d characters", settings.max_input_chars)
        import_run.warnings.append(
            f"Input exceeds {settings.max_input_chars} characters and was truncated."
        )
        text = text[: settings.max_input_chars]

    detected = detect(
        text,
        sample_lines=settings.detection_sample_lines,
        freeform_confidence=settings.freeform_confidence,
    )
    if not text.strip():
        _set_format(import_run, detected)
        return

    if detected.format.is_delimited:
        delimiter = TAB if detected.format is ImportFormat.TSV else COMMA
        table = split_delimited(text, delimiter)
        import_run.warnings.extend(table.warnings)
        if table.headers:
            if not table.rows:
                import_run.warnings.append("Delimited input has a header row but no data rows.")
            _set_format(import_run, detected)
            _import_table(table.headers, table.rows, import_run)
            return
        import_run.errors.append("No header row could be read from the delimited input.")
        _import_freeform(text, import_run)
        return

    if detected.format is ImportFormat.HIERARCHICAL:
        try:
            document = parse_outline(text)
        except OutlineParseError as exc:
            import_run.errors.append(f"Outline could not be parsed: {exc}")
            _import_freeform(text, import_run)
            return
        import_run.warnings.extend(document.warnings)
        if document.test_cases:
            _set_format(import_run, detected)
            _import_outline(document, import_run)
            return
        import_run.warnings.append("No test cases found in the outline; importing as free text.")
        _import_freeform(text, import_run)
        return

    if detected.format is ImportFormat.STRUCTURED:
        _set_format(import_run, detected)
        blocks = _limit_rows(extract_structured_blocks(text), import_run)
        import_run.records = [_Record(values=block) for block in blocks]
        return

    _import_freeform(text, import_run, detected.confidence)


def _import_rows(rows: Sequence[Mapping[str, object]], import_run: _ImportRun) -> None:
    import_run.format = ImportFormat.CSV
    import_run.confidence = ROW_INPUT_CONFIDENCE
    headers: dict[str, None] = {}
    for row in rows:
        headers.update(dict.fromkeys(str(key) for key in row))
    if not headers:
        return
    keyed_rows = [{str(key): value for key, value in row.items()} for row in rows]
    _import_table(tuple(headers), keyed_rows, import_run)


def _import_table(
    headers: Sequence[str],
    rows: Sequence[Mapping[str, object]],
    import_run: _ImportRun,
) -> None:
    rows = _limit_rows(rows, import_run)
    mappings = map_headers(headers, import_run.overrides)
    proposals = propose_custom_columns(mappings, rows)
    skipped = [mapping for mapping in mappings if mapping.is_skip]
    custom_names = {
        mapping.source_column: proposal.name
        for mapping, proposal in zip(skipped, proposals, strict=True)
    }
    for row in rows:
        values = {
            mapping.target_field: row.get(mapping.source_column)
            for mapping in mappings
            if mapping.target_field is not None
        }
        custom_fields = {
            name: row.get(source_column) for source_column, name in custom_names.items()
        }
        import_run.records.append(_Record(values=values, custom_fields=custom_fields))
    import_run.mappings = mappings
    import_run.proposals = proposals


def _import_outline(document: HierarchicalDocument, import_run: _ImportRun) -> None:
    test_cases = _limit_rows(document.test_cases, import_run)
    for test_case in test_cases:
        import_run.records.append(
            _flatten_test_case(test_case, document.priority_assignments.get(test_case.id.upper()))
        )


def _flatten_test_case(test_case: HierarchicalTestCase, priority_label: str | None) -> _Record:
    values = {
        FieldName.TITLE: test_case.title,
        FieldName.DESCRIPTION: test_case.description,
        FieldName.EXPECTED_RESULT: test_case.expected_result,
        FieldName.PRIORITY: test_case.priority,
        FieldName.STEPS_TO_REPRODUCE: test_case.steps_to_reproduce,
    }
    custom_fields = {
        "test_case_id": test_case.id,
        "section": test_case.section or None,
        "subsection": test_case.subsection or None,
        "automation_status": test_case.automation_status,
        "priority_label": priority_label,
    }
    return _Record(values=values, custom_fields=custom_fields)


def _import_freeform(text: str, import_run: _ImportRun, confidence: float | None = None) -> None:
    import_run.format = ImportFormat.FREEFORM
    import_run.confidence = (
        import_run.settings.freeform_confidence if confidence is None else confidence
    )
    record = extract_freeform(text)
    if record:
        import_run.records = [_Record(values=record)]


def _set_format(import_run: _ImportRun, detected: DetectedFormat) -> None:
    import_run.format = detected.format
    import_run.confidence = detected.confidence


def _limit_rows(rows: Sequence, import_run: _ImportRun) -> Sequence:
    max_rows = import_run.settings.max_rows
    if len(rows) <= max_rows:
        return rows
    _LOGGER.warning("Import truncated to %d of %d rows", max_rows, len(rows))
    import_run.warnings.append(
        f"Input has {len(rows)} rows; only the first {max_rows} were imported."
    )
    return rows[:max_rows]


def _build_drafts(import_run: _ImportRun) -> list[TestCaseDraft]:
    drafts: list[TestCaseDraft] = []
    for row_index, record in enumerate(import_run.records, start=1):
        draft = normalize(
            record.values,
            row_index,
            import_run.context.project_id,
            import_run.context.suite_id,
            custom_fields=record.custom_fields,
        )
        result = validate(draft, import_run.settings)
        import_run.errors.extend(f"Row {row_index}: {error}" for error in result.errors)
        import_run.warnings.extend(f"Row {row_index}: {warning}" for warning in result.warnings)
        drafts.append(result.cleaned_draft)
    import_run.warnings.extend(find_duplicate_titles(drafts))
    return drafts
