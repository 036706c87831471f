"""Numbered outline parser.

Walks the document line by line through an explicit state machine::

    ROOT -> IN_SECTION -> IN_SUBSECTION -> IN_TEST_CASE_BODY
                                   \\-> IN_PRIORITY_BLOCK / IN_AUTOMATION_BLOCK

A priority list that starts with a bare ``P0 - ...`` label (no block heading)
is ``IN_PRIORITY_LABELS``; outline markers leave it again. After the heading
the trailing blocks run to the end of the document.

Line classification depends on the current state (see ``classify_line``) and
``transition`` maps ``(state, line kind)`` to the next state. Priority blocks
trail the test cases they refer to, so assignments are applied in a second
pass once the walk is complete.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from testcase_importer.format_detection.keyed_lines import (
    AUTOMATION_STATUS,
    DESCRIPTION,
    EXPECTED_RESULT,
    PRIORITY,
    STEPS,
    parse_keyed_line,
)

from .outline_models import (
    HierarchicalDocument,
    HierarchicalTestCase,
    LineKind,
    OutlineState,
    Section,
    Subsection,
)

SECTION_HEADER_PATTERN = re.compile(r"^(\d+)\.\s+(?P<title>.+)$")
SUBSECTION_HEADER_PATTERN = re.compile(r"^(\d+)\.(\d+)\.?\s+(?P<title>.+)$")
TEST_CASE_MARKER_PATTERN = re.compile(r"^(?P<id>[A-Za-z]{1,4}-?\d+)[:.]\s*(?P<title>.*)$")
PRIORITY_BLOCK_PATTERN = re.compile(r"^test\s+execution\s+priorit(?:y|ies):?$", re.IGNORECASE)
AUTOMATION_BLOCK_PATTERN = re.compile(r"^automation\s+recommendations?:?$", re.IGNORECASE)
PRIORITY_LABEL_PATTERN = re.compile(r"^P\d\s*-.*$")
AUTOMATION_LIST_HEADER_PATTERN = re.compile(r"^high\s+priority\s+for\s+automation", re.IGNORECASE)
TEST_CASE_ID_PATTERN = re.compile(r"^[A-Za-z]{1,4}-?\d+$")

_BULLET_PATTERN = re.compile(r"^[-*•]\s*")
_ID_SEPARATOR_PATTERN = re.compile(r"[,;\s]+")

_BODY_LABELS = frozenset({EXPECTED_RESULT, PRIORITY, AUTOMATION_STATUS, STEPS, DESCRIPTION})
_LABEL_ATTRIBUTES = {
    EXPECTED_RESULT: "expected_result",
    PRIORITY: "priority",
    AUTOMATION_STATUS: "automation_status",
    STEPS: "steps_to_reproduce",
    DESCRIPTION: "description",
}
_RECOMMENDED_AUTOMATION_STATUS = "High"
_TRAILING_BLOCK_NAMES = {
    OutlineState.IN_PRIORITY_BLOCK: "test execution priority block",
    OutlineState.IN_AUTOMATION_BLOCK: "automation recommendations block",
}

_LOGGER = logging.getLogger(__name__)


class OutlineParseError(Exception):
    """Raised when outline text has no content to parse."""


@dataclass
class _TestCaseBuilder:
    """Mutable accumulator for the test case being read."""

    id: str
    title: str
    section: str
    subsection: str
    values: dict[str, str] = field(default_factory=dict)
    open_field: str | None = None

    def append(self, attribute: str, text: str) -> None:
        current = self.values.get(attribute)
        self.values[attribute] = f"{current}\n{text}" if current else text

    def build(self) -> HierarchicalTestCase:
        return HierarchicalTestCase(
            id=self.id,
            title=self.title,
            section=self.section,
            subsection=self.subsection,
            description=self.values.get("description"),
            expected_result=self.values.get("expected_result"),
            priority=self.values.get("priority"),
            automation_status=self.values.get("automation_status"),
            steps_to_reproduce=self.values.get("steps_to_reproduce"),
        )


@dataclass
class _SubsectionBuilder:
    key: str
    title: str
    test_case_indices: list[int] = field(default_factory=list)


@dataclass
class _SectionBuilder:
    key: str
    title: str
    subsections: dict[str, _SubsectionBuilder] = field(default_factory=dict)


@dataclass
class _OutlineWalk:  # pylint: disable=too-many-instance-attributes
    """Mutable collector for one parse."""

    state: OutlineState = OutlineState.ROOT
    sections: dict[str, _SectionBuilder] = field(default_factory=dict)
    test_cases: list[_TestCaseBuilder] = field(default_factory=list)
    section: _SectionBuilder | None = None
    subsection: _SubsectionBuilder | None = None
    test_case: _TestCaseBuilder | None = None
    priority_label: str | None = None
    priority_assignments: dict[str, str] = field(default_factory=dict)
    collecting_recommendations: bool = False
    recommendations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def parse_outline(text: str) -> HierarchicalDocument:
    """Parse a numbered outline into sections, subsections and test cases.

    Raises:
      OutlineParseError: If the text has no non-empty lines.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise OutlineParseError("Outline text is empty.")

    walk = _OutlineWalk()
    for line in lines:
        awaiting_priority = walk.test_case is not None and walk.test_case.open_field == "priority"
        kind, match = classify_line(line, walk.state, awaiting_priority=awaiting_priority)
        _apply_line(walk, kind, match, line)
        next_state = transition(walk.state, kind)
        if next_state != walk.state:
            _LOGGER.debug("%s -> %s on %s", walk.state.value, next_state.value, kind.value)
        walk.state = next_state

    return _build_document(walk)


def classify_line(
    line: str, state: OutlineState, *, awaiting_priority: bool = False
) -> tuple[LineKind, re.Match[str] | None]:
    """Classify one stripped line given the parser state.

    Inside a subsection or test case body a test-case marker is tried before
    section headers; elsewhere section and subsection headers come first.
    Inside a test case body only upper-case titles open a new section, so
    numbered steps such as ``1. Open the app`` stay in the body. ``awaiting_priority``
    means a bare ``Priority:`` label is waiting for its value, which may itself
    look like a ``P1 - High`` label.
    """
    if PRIORITY_BLOCK_PATTERN.match(line):
        return LineKind.PRIORITY_BLOCK_MARKER, None
    if AUTOMATION_BLOCK_PATTERN.match(line):
        return LineKind.AUTOMATION_BLOCK_MARKER, None
    if state == OutlineState.IN_AUTOMATION_BLOCK:
        return LineKind.TEXT, None
    if PRIORITY_LABEL_PATTERN.match(line):
        if awaiting_priority and state == OutlineState.IN_TEST_CASE_BODY:
            return LineKind.TEXT, None
        return LineKind.PRIORITY_LABEL, None
    if state == OutlineState.IN_PRIORITY_BLOCK:
        return LineKind.TEXT, None

    if state in (OutlineState.IN_SUBSECTION, OutlineState.IN_TEST_CASE_BODY):
        candidates = (
            (LineKind.TEST_CASE_MARKER, TEST_CASE_MARKER_PATTERN),
            (LineKind.SUBSECTION_HEADER, SUBSECTION_HEADER_PATTERN),
            (LineKind.SECTION_HEADER, SECTION_HEADER_PATTERN),
        )
    else:
        candidates = (
            (LineKind.SUBSECTION_HEADER, SUBSECTION_HEADER_PATTERN),
            (LineKind.SECTION_HEADER, SECTION_HEADER_PATTERN),
            (LineKind.TEST_CASE_MARKER, TEST_CASE_MARKER_PATTERN),
        )
    for kind, pattern in candidates:
        match = pattern.match(line)
        if match is None:
            continue
        if (
            kind == LineKind.SECTION_HEADER
            and state in (OutlineState.IN_TEST_CASE_BODY, OutlineState.IN_PRIORITY_LABELS)
            and not match.group("title").isupper()
        ):
            continue
        return kind, match

    if state == OutlineState.IN_TEST_CASE_BODY:
        keyed = parse_keyed_line(line)
        if keyed is not None and keyed[0] in _BODY_LABELS:
            return LineKind.LABELLED_FIELD, None
    return LineKind.TEXT, None


def transition(state: OutlineState, kind: LineKind) -> OutlineState:
    """Return the state that follows ``state`` after a line of ``kind``."""
    if kind == LineKind.PRIORITY_BLOCK_MARKER:
        return OutlineState.IN_PRIORITY_BLOCK
    if kind == LineKind.AUTOMATION_BLOCK_MARKER:
        return OutlineState.IN_AUTOMATION_BLOCK
    if kind == LineKind.PRIORITY_LABEL:
        if state == OutlineState.IN_PRIORITY_BLOCK:
            return state
        return OutlineState.IN_PRIORITY_LABELS
    if state.is_trailing_block:
        return state
    if kind == LineKind.SECTION_HEADER:
        return OutlineState.IN_SECTION
    if kind == LineKind.SUBSECTION_HEADER:
        return OutlineState.IN_SUBSECTION
    if kind == LineKind.TEST_CASE_MARKER:
        return OutlineState.IN_TEST_CASE_BODY
    return state


def parse_id_list(line: str) -> tuple[str, ...]:
    """Read a dash-prefixed or comma-separated list of test case IDs.

    Returns an empty tuple when any token is not ID-shaped, so prose lines
    never produce partial assignments.
    """
    body = _BULLET_PATTERN.sub("", line.strip())
    tokens = [token for token in _ID_SEPARATOR_PATTERN.split(body) if token]
    if not tokens or not all(TEST_CASE_ID_PATTERN.match(token) for token in tokens):
        return ()
    return tuple(token.upper() for token in tokens)


def _apply_line(walk: _OutlineWalk, kind: LineKind, match: re.Match[str] | None, line: str) -> None:
    if kind == LineKind.SECTION_HEADER:
        assert match is not None
        _close_test_case(walk)
        walk.section = walk.sections.setdefault(
            line, _SectionBuilder(key=line, title=match.group("title").strip())
        )
        walk.subsection = None
    elif kind == LineKind.SUBSECTION_HEADER:
        assert match is not None
        _close_test_case(walk)
        section = _current_section(walk)
        walk.subsection = section.subsections.setdefault(
            line, _SubsectionBuilder(key=line, title=match.group("title").strip())
        )
    elif kind == LineKind.TEST_CASE_MARKER:
        assert match is not None
        _open_test_case(walk, match.group("id"), match.group("title").strip())
    elif kind in (LineKind.PRIORITY_BLOCK_MARKER, LineKind.AUTOMATION_BLOCK_MARKER):
        _close_test_case(walk)
        walk.priority_label = None
        walk.collecting_recommendations = False
    elif kind == LineKind.PRIORITY_LABEL:
        _close_test_case(walk)
        walk.priority_label = " ".join(line.split())
    elif kind == LineKind.LABELLED_FIELD:
        _apply_labelled_field(walk, line)
    elif walk.state in (OutlineState.IN_PRIORITY_BLOCK, OutlineState.IN_PRIORITY_LABELS):
        if not _apply_priority_ids(walk, line) and walk.state.is_trailing_block:
            _warn_if_marker(walk, line)
    elif walk.state == OutlineState.IN_AUTOMATION_BLOCK:
        if not _apply_recommendation(walk, line):
            _warn_if_marker(walk, line)
    elif walk.test_case is not None:
        walk.test_case.append(walk.test_case.open_field or "description", line)
    else:
        _LOGGER.debug("Dropping line outside any test case: %r", line)


def _open_test_case(walk: _OutlineWalk, case_id: str, title: str) -> None:
    _close_test_case(walk)
    section = _current_section(walk)
    if walk.subsection is None:
        walk.subsection = section.subsections.setdefault("", _SubsectionBuilder(key="", title=""))
    builder = _TestCaseBuilder(
        id=case_id,
        title=title,
        section=section.title,
        subsection=walk.subsection.title,
    )
    walk.subsection.test_case_indices.append(len(walk.test_cases))
    walk.test_cases.append(builder)
    walk.test_case = builder


def _close_test_case(walk: _OutlineWalk) -> None:
    walk.test_case = None


def _current_section(walk: _OutlineWalk) -> _SectionBuilder:
    if walk.section is None:
        walk.section = walk.sections.setdefault("", _SectionBuilder(key="", title=""))
    return walk.section


def _apply_labelled_field(walk: _OutlineWalk, line: str) -> None:
    keyed = parse_keyed_line(line)
    if walk.test_case is None or keyed is None:
        return
    attribute = _LABEL_ATTRIBUTES[keyed[0]]
    value = keyed[1].strip()
    if value and attribute == "description":
        walk.test_case.append(attribute, value)
        walk.test_case.open_field = None
    elif value:
        walk.test_case.values[attribute] = value
        walk.test_case.open_field = None
    else:
        # a bare "Steps:" introduces the lines that follow it
        walk.test_case.open_field = attribute


def _apply_priority_ids(walk: _OutlineWalk, line: str) -> bool:
    ids = parse_id_list(line)
    if not ids:
        _LOGGER.debug("Skipping ambiguous priority line: %r", line)
        return False
    if walk.priority_label is None:
        _LOGGER.debug("Skipping ID list before any priority label: %r", line)
        return True
    for case_id in ids:
        walk.priority_assignments[case_id] = walk.priority_label
    return True


def _apply_recommendation(walk: _OutlineWalk, line: str) -> bool:
    if AUTOMATION_LIST_HEADER_PATTERN.match(line):
        walk.collecting_recommendations = True
        return True
    if walk.collecting_recommendations and _BULLET_PATTERN.match(line):
        recommendation = _BULLET_PATTERN.sub("", line).strip()
        if recommendation:
            walk.recommendations.append(recommendation)
        return True
    walk.collecting_recommendations = False
    return False


def _warn_if_marker(walk: _OutlineWalk, line: str) -> None:
    if any(
        pattern.match(line)
        for pattern in (
            TEST_CASE_MARKER_PATTERN,
            SUBSECTION_HEADER_PATTERN,
            SECTION_HEADER_PATTERN,
        )
    ):
        block = _TRAILING_BLOCK_NAMES[walk.state]
        _LOGGER.warning("Ignoring outline line inside the %s: %r", block, line)
        walk.warnings.append(f"Outline line '{line}' inside the {block} was ignored.")


def _build_document(walk: _OutlineWalk) -> HierarchicalDocument:
    test_cases = [
        _apply_trailing_metadata(builder.build(), walk.priority_assignments, walk.recommendations)
        for builder in walk.test_cases
    ]
    sections = {
        key: Section(
            key=key,
            title=section.title,
            subsections={
                sub_key: Subsection(
                    key=sub_key,
                    title=subsection.title,
                    test_cases=tuple(test_cases[index] for index in subsection.test_case_indices),
                )
                for sub_key, subsection in section.subsections.items()
            },
        )
        for key, section in walk.sections.items()
    }
    return HierarchicalDocument(
        sections=sections,
        test_cases=tuple(test_cases),
        priority_assignments=dict(walk.priority_assignments),
        automation_recommendations=tuple(walk.recommendations),
        warnings=tuple(walk.warnings),
    )


def _apply_trailing_metadata(
    test_case: HierarchicalTestCase,
    priority_assignments: dict[str, str],
    recommendations: Sequence[str],
) -> HierarchicalTestCase:
    priority = priority_assignments.get(test_case.id.upper(), test_case.priority)
    automation_status = test_case.automation_status
    haystack = f"{test_case.title} {test_case.description or ''}".lower()
    if any(recommendation.lower() in haystack for recommendation in recommendations):
        automation_status = _RECOMMENDED_AUTOMATION_STATUS
    return replace(test_case, priority=priority, automation_status=automation_status)
