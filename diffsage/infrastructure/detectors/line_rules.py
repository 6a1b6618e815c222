"""Single-line semantic detectors.

Each rule looks at one source line and one changed line and either builds
the matching change or returns None. ``LINE_DETECTORS`` fixes the priority
order; the first rule that yields a change wins.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from diffsage.domain.changes import (
    CommentChange,
    ConditionChange,
    FunctionParamChange,
    ImportChange,
    LineChange,
    LiteralChange,
    OtherChange,
    RenameChange,
)
from diffsage.infrastructure.line_features import LineFeatures, find_identifiers, find_literals

# (source features, changed features, source line, changed line), 1-based lines
LineDetector = Callable[[LineFeatures, LineFeatures, int, int], "LineChange | None"]


@dataclass(frozen=True)
class LineRule:
    """A named single-line detector."""

    name: str
    detect: LineDetector


def detect_import_change(
    source: LineFeatures, changed: LineFeatures, source_line: int, changed_line: int
) -> ImportChange | None:
    """Same module path, different import clause.

    A changed module path is not an import edit and falls through.
    """
    if not (source.is_import and changed.is_import):
        return None
    if source.import_path is None or source.import_path != changed.import_path:
        return None
    if source.signature == changed.signature:
        return None
    return ImportChange(
        source_line=source_line,
        changed_line=changed_line,
        source_text=source.text,
        changed_text=changed.text,
        import_path=source.import_path,
    )


def detect_comment_change(
    source: LineFeatures, changed: LineFeatures, source_line: int, changed_line: int
) -> CommentChange | None:
    if not (source.is_comment and changed.is_comment):
        return None
    return CommentChange.single(source_line, changed_line, source.text, changed.text)


def detect_condition_change(
    source: LineFeatures, changed: LineFeatures, source_line: int, changed_line: int
) -> ConditionChange | None:
    """Same control keyword with a tightened, loosened or flipped predicate."""
    keyword = source.control_keyword
    if keyword is None or keyword != changed.control_keyword:
        return None
    if source.condition is None or changed.condition is None:
        return None
    if source.operators == changed.operators:
        return None

    source_ids = set(find_identifiers(source.condition))
    changed_ids = set(find_identifiers(changed.condition))
    if not (source_ids <= changed_ids or changed_ids <= source_ids):
        return None

    return ConditionChange(
        source_line=source_line,
        changed_line=changed_line,
        source_text=source.text,
        changed_text=changed.text,
        keyword=keyword,
        source_condition=source.condition,
        changed_condition=changed.condition,
    )


def detect_function_param_change(
    source: LineFeatures, changed: LineFeatures, source_line: int, changed_line: int
) -> FunctionParamChange | None:
    source_fn = source.function_signature
    changed_fn = changed.function_signature
    if source_fn is None or changed_fn is None:
        return None
    if source_fn.name != changed_fn.name or source_fn.params == changed_fn.params:
        return None
    return FunctionParamChange(
        source_line=source_line,
        changed_line=changed_line,
        source_text=source.text,
        changed_text=changed.text,
        function_name=source_fn.name,
        source_params=source_fn.params,
        changed_params=changed_fn.params,
    )


def detect_literal_change(
    source: LineFeatures, changed: LineFeatures, source_line: int, changed_line: int
) -> LiteralChange | None:
    """Same assignment target with a different value, one side a literal.

    Identifier-to-identifier reassignment is excluded.
    """
    source_assign = source.assignment
    changed_assign = changed.assignment
    if source_assign is None or changed_assign is None:
        return None
    if source_assign.lhs != changed_assign.lhs or source_assign.rhs == changed_assign.rhs:
        return None
    if not (find_literals(source_assign.rhs) or find_literals(changed_assign.rhs)):
        return None
    return LiteralChange(
        source_line=source_line,
        changed_line=changed_line,
        source_text=source.text,
        changed_text=changed.text,
        target=source_assign.lhs,
        source_value=source_assign.rhs,
        changed_value=changed_assign.rhs,
    )


def detect_rename(
    source: LineFeatures, changed: LineFeatures, source_line: int, changed_line: int
) -> RenameChange | None:
    source_fn = source.function_signature
    changed_fn = changed.function_signature
    if source_fn is not None and changed_fn is not None:
        if source_fn.name != changed_fn.name and source_fn.params == changed_fn.params:
            return RenameChange(
                source_line=source_line,
                changed_line=changed_line,
                source_text=source.text,
                changed_text=changed.text,
                kind="function",
                source_name=source_fn.name,
                changed_name=changed_fn.name,
            )
        return None

    source_assign = source.assignment
    changed_assign = changed.assignment
    if source_assign is None or changed_assign is None:
        return None
    if source_assign.lhs == changed_assign.lhs or source_assign.rhs != changed_assign.rhs:
        return None
    if source.skeleton != changed.skeleton:
        return None
    return RenameChange(
        source_line=source_line,
        changed_line=changed_line,
        source_text=source.text,
        changed_text=changed.text,
        kind="variable",
        source_name=_target_name(source_assign.lhs),
        changed_name=_target_name(changed_assign.lhs),
    )


def _target_name(lhs: str) -> str:
    """Last identifier of an assignment target (``let x`` -> ``x``)."""
    identifiers = find_identifiers(lhs)
    return identifiers[-1] if identifiers else lhs


LINE_DETECTORS: tuple[LineRule, ...] = (
    LineRule("import", detect_import_change),
    LineRule("comment", detect_comment_change),
    LineRule("condition", detect_condition_change),
    LineRule("function_params", detect_function_param_change),
    LineRule("literal", detect_literal_change),
    LineRule("rename", detect_rename),
)


def classify_line_pair(
    source: LineFeatures,
    changed: LineFeatures,
    source_line: int,
    changed_line: int,
    rules: tuple[LineRule, ...] = LINE_DETECTORS,
) -> LineChange | None:
    """Run the rules in order and return the first change found."""
    for rule in rules:
        change = rule.detect(source, changed, source_line, changed_line)
        if change is not None:
            return change
    return None


def build_other_change(
    source: LineFeatures, changed: LineFeatures, source_line: int, changed_line: int
) -> OtherChange | None:
    """Catch-all for a differing pair of non-blank lines."""
    if source.is_blank or changed.is_blank or source.signature == changed.signature:
        return None
    return OtherChange(
        source_line=source_line,
        changed_line=changed_line,
        source_text=source.text,
        changed_text=changed.text,
    )
