"""Hierarchical outline entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class OutlineState(str, Enum):
    """Parser position within an outline document."""

    ROOT = "root"
    IN_SECTION = "in_section"
    IN_SUBSECTION = "in_subsection"
    IN_TEST_CASE_BODY = "in_test_case_body"
    IN_PRIORITY_BLOCK = "in_priority_block"
    # opened by a "P0 - ..." label without the block heading
    IN_PRIORITY_LABELS = "in_priority_labels"
    IN_AUTOMATION_BLOCK = "in_automation_block"

    @property
    def is_trailing_block(self) -> bool:
        """Return True for the priority and automation blocks that close a document."""
        return self in (OutlineState.IN_PRIORITY_BLOCK, OutlineState.IN_AUTOMATION_BLOCK)


class LineKind(str, Enum):
    """Classification of one outline line in the current state."""

    SECTION_HEADER = "section_header"
    SUBSECTION_HEADER = "subsection_header"
    TEST_CASE_MARKER = "test_case_marker"
    LABELLED_FIELD = "labelled_field"
    PRIORITY_BLOCK_MARKER = "priority_block_marker"
    AUTOMATION_BLOCK_MARKER = "automation_block_marker"
    PRIORITY_LABEL = "priority_label"
    TEXT = "text"


@dataclass(frozen=True)
class HierarchicalTestCase:  # pylint: disable=too-many-instance-attributes
    """One test case block read from an outline."""

    id: str
    title: str
    section: str
    subsection: str
    description: str | None = None
    expected_result: str | None = None
    priority: str | None = None
    automation_status: str | None = None
    steps_to_reproduce: str | None = None


@dataclass(frozen=True)
class Subsection:
    """Numbered subsection and its test cases in document order."""

    key: str
    title: str
    test_cases: tuple[HierarchicalTestCase, ...]


@dataclass(frozen=True)
class Section:
    """Top-level numbered section."""

    key: str
    title: str
    subsections: Mapping[str, Subsection]


@dataclass(frozen=True)
class HierarchicalDocument:
    """Parsed outline: section tree plus the trailing priority and automation data."""

    sections: Mapping[str, Section]
    test_cases: tuple[HierarchicalTestCase, ...]
    priority_assignments: Mapping[str, str] = field(default_factory=dict)
    automation_recommendations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
