"""Report generation for classified changes.

Renders a ``CategorizedChanges`` result as JSON (the machine-readable shape
consumed by rendering and export layers), Markdown (for files and job
summaries) or a plain text summary for the terminal.
"""

from __future__ import annotations

import json
from enum import Enum

from diffsage.domain.categories import ChangeCategory
from diffsage.domain.changes import (
    AdditionBlock,
    CategorizedChanges,
    Change,
    CommentChange,
    ConditionChange,
    DeletionBlock,
    FunctionParamChange,
    ImportChange,
    LineBlock,
    LineChange,
    LiteralChange,
    MoveBlock,
    RenameChange,
    ReplaceBlock,
    TryCatchAdded,
    TryCatchDeleted,
    TryCatchReplaced,
)

MAX_SNIPPET_LENGTH = 80


class ReportFormat(Enum):
    """Output format of a report."""

    JSON = "json"
    MARKDOWN = "markdown"
    TEXT = "text"

    @classmethod
    def from_string(cls, value: str) -> ReportFormat:
        """Parse ReportFormat from string value.

        Raises:
            ValueError: If value is not a valid ReportFormat
        """
        value_lower = value.lower()
        for member in cls:
            if member.value == value_lower:
                return member
        valid_values = [m.value for m in cls]
        raise ValueError(
            f"Invalid report format: {value}. Must be one of: {', '.join(valid_values)}"
        )


def _snippet(text: str) -> str:
    text = " ".join(text.split())
    if len(text) > MAX_SNIPPET_LENGTH:
        text = text[: MAX_SNIPPET_LENGTH - 3] + "..."
    return text.replace("`", "'")


def _span(start: int, end: int) -> str:
    return f"line {start}" if start == end else f"lines {start}-{end}"


def _block_span(block: LineBlock) -> str:
    return _span(block.start, block.end)


def describe_change(change: Change) -> str:
    """One-line human-readable description of a change."""
    if isinstance(change, MoveBlock):
        return (
            f"Source {_span(change.source_start, change.source_end)} moved to "
            f"{_span(change.changed_start, change.changed_end)} ({change.size} lines)"
        )
    if isinstance(change, ReplaceBlock):
        return (
            f"Source {_block_span(change.deleted_block)} replaced by changed "
            f"{_block_span(change.added_block)} (context score {change.match_score:.2f})"
        )
    if isinstance(change, TryCatchReplaced):
        return (
            f"Try/catch at source {_block_span(change.deleted_wrapper)} rewritten as "
            f"changed {_block_span(change.added_wrapper)} "
            f"(body similarity {change.body_similarity:.2f})"
        )
    if isinstance(change, TryCatchAdded):
        text = f"Try/catch added at changed {_block_span(change.wrapper)}"
        if change.original_body:
            text += f", wrapping source {_block_span(change.original_body)}"
        return text
    if isinstance(change, TryCatchDeleted):
        text = f"Try/catch removed at source {_block_span(change.wrapper)}"
        if change.remaining_body:
            text += f", body kept at changed {_block_span(change.remaining_body)}"
        return text
    if isinstance(change, DeletionBlock):
        return f"Source {_block_span(change)} deleted ({change.substantive_count} substantive)"
    if isinstance(change, AdditionBlock):
        return f"Changed {_block_span(change)} added ({change.substantive_count} substantive)"
    if isinstance(change, CommentChange) and change.is_block:
        return (
            f"Comment at source {_span(change.source_line, change.source_end)} -> "
            f"changed {_span(change.changed_line, change.changed_end)}"
        )
    if isinstance(change, LineChange):
        return f"{_line_pair(change)}: {_line_detail(change)}"
    return repr(change)


def _line_pair(change: LineChange) -> str:
    if change.source_line == change.changed_line:
        return f"Line {change.source_line}"
    return f"Line {change.source_line} -> {change.changed_line}"


def _line_detail(change: LineChange) -> str:
    if isinstance(change, ImportChange):
        return f"import of `{change.import_path}` changed"
    if isinstance(change, ConditionChange):
        return (
            f"`{change.keyword}` condition `{_snippet(change.source_condition)}` -> "
            f"`{_snippet(change.changed_condition)}`"
        )
    if isinstance(change, FunctionParamChange):
        return (
            f"`{change.function_name}` parameters `({_snippet(change.source_params)})` -> "
            f"`({_snippet(change.changed_params)})`"
        )
    if isinstance(change, LiteralChange):
        return (
            f"`{_snippet(change.target)}` value `{_snippet(change.source_value)}` -> "
            f"`{_snippet(change.changed_value)}`"
        )
    if isinstance(change, RenameChange):
        return f"{change.kind} `{change.source_name}` renamed to `{change.changed_name}`"
    return f"`{_snippet(change.source_text)}` -> `{_snippet(change.changed_text)}`"


class ReportGenerator:
    """Renders analysis results in the supported formats."""

    def __init__(self, source_label: str = "source", changed_label: str = "changed"):
        """Initialize with display labels.

        Args:
            source_label: How to name the source text in reports
            changed_label: How to name the changed text in reports
        """
        self.source_label = source_label
        self.changed_label = changed_label

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def render(self, changes: CategorizedChanges, report_format: ReportFormat) -> str:
        if report_format == ReportFormat.JSON:
            return self.to_json(changes)
        elif report_format == ReportFormat.MARKDOWN:
            return self.to_markdown(changes)
        return self.to_text(changes)

    def to_json(self, changes: CategorizedChanges) -> str:
        return json.dumps(changes.to_dict(), indent=2)

    def to_markdown(self, changes: CategorizedChanges) -> str:
        """Counts table plus one section per non-empty category."""
        lines = [
            "## Change Summary",
            "",
            f"**Source:** `{self.source_label}`",
            f"**Changed:** `{self.changed_label}`",
            f"**Total Changes:** {changes.total}",
            "",
        ]

        if changes.is_empty:
            lines.append("No differences found.")
            return "\n".join(lines) + "\n"

        lines.extend(
            [
                "| Category | Count |",
                "|----------|-------|",
            ]
        )
        for category, count in changes.counts().items():
            if count:
                lines.append(f"| {category.title} | {count} |")
        lines.append("")

        for category in ChangeCategory:
            items = changes.get(category)
            if not items:
                continue
            lines.extend([f"### {category.title}", ""])
            for change in items:
                lines.append(f"- {describe_change(change)}")
            lines.append("")

        return "\n".join(lines)

    def to_text(self, changes: CategorizedChanges) -> str:
        lines = [f"Comparing {self.source_label} -> {self.changed_label}"]
        if changes.is_empty:
            lines.append("  No differences found.")
            return "\n".join(lines)

        for category in ChangeCategory:
            items = changes.get(category)
            if not items:
                continue
            lines.append(f"  {category.title} ({len(items)})")
            for change in items:
                lines.append(f"    - {describe_change(change)}")
        lines.append(f"  Total: {changes.total}")
        return "\n".join(lines)
