"""Domain models for classified changes.

Each change category has its own record type carrying only the fields that
category needs. All line numbers are 1-based; the ``*_positions()`` helpers
return the 0-based positions a change covers, which is what the analyzer
claims while it runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from diffsage.domain.categories import ChangeCategory


def _span(start: int, end: int) -> frozenset[int]:
    """0-based positions for an inclusive 1-based line range."""
    return frozenset(range(start - 1, end))


# ============================================================
# Navigation
# ============================================================


@dataclass(frozen=True)
class LineLocation:
    """Lines backing a change, used by the UI to jump to them."""

    source_line: int | None
    changed_line: int | None


# ============================================================
# Line Blocks
# ============================================================


@dataclass(frozen=True)
class LineBlock:
    """A contiguous range of lines on one side of the comparison.

    Attributes:
        start: First line (1-based, inclusive)
        end: Last line (1-based, inclusive)
        lines: Raw text of every line in the range, gap lines included
        substantive_count: Number of lines that carry code
    """

    start: int
    end: int
    lines: tuple[str, ...]
    substantive_count: int

    category: ClassVar[ChangeCategory | None] = None

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    @property
    def content(self) -> str:
        return "\n".join(self.lines)

    def positions(self) -> frozenset[int]:
        return _span(self.start, self.end)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "start": self.start,
            "end": self.end,
            "lines": list(self.lines),
            "substantive_count": self.substantive_count,
        }


@dataclass(frozen=True)
class DeletionBlock(LineBlock):
    """Lines present only in the source text."""

    category: ClassVar[ChangeCategory] = ChangeCategory.DELETE_CODE

    def source_positions(self) -> frozenset[int]:
        return self.positions()

    def changed_positions(self) -> frozenset[int]:
        return frozenset()

    def locate(self) -> LineLocation:
        return LineLocation(source_line=self.start, changed_line=None)


@dataclass(frozen=True)
class AdditionBlock(LineBlock):
    """Lines present only in the changed text."""

    category: ClassVar[ChangeCategory] = ChangeCategory.ADD_CODE

    def source_positions(self) -> frozenset[int]:
        return frozenset()

    def changed_positions(self) -> frozenset[int]:
        return self.positions()

    def locate(self) -> LineLocation:
        return LineLocation(source_line=None, changed_line=self.start)


# ============================================================
# Block Changes
# ============================================================


@dataclass(frozen=True)
class MoveBlock:
    """Identical lines relocated to a different place in the file."""

    source_start: int
    changed_start: int
    size: int
    substantive_count: int
    content: str

    category: ClassVar[ChangeCategory] = ChangeCategory.MOVE_CODE_BLOCK

    @property
    def source_end(self) -> int:
        return self.source_start + self.size - 1

    @property
    def changed_end(self) -> int:
        return self.changed_start + self.size - 1

    def source_positions(self) -> frozenset[int]:
        return _span(self.source_start, self.source_end)

    def changed_positions(self) -> frozenset[int]:
        return _span(self.changed_start, self.changed_end)

    def locate(self) -> LineLocation:
        return LineLocation(source_line=self.source_start, changed_line=self.changed_start)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "source_start": self.source_start,
            "source_end": self.source_end,
            "changed_start": self.changed_start,
            "changed_end": self.changed_end,
            "size": self.size,
            "substantive_count": self.substantive_count,
            "content": self.content,
        }


@dataclass(frozen=True)
class ReplaceBlock:
    """A deleted block paired with an added block judged to replace it."""

    deleted_block: DeletionBlock
    added_block: AdditionBlock
    match_score: float

    category: ClassVar[ChangeCategory] = ChangeCategory.REPLACE_CODE

    def source_positions(self) -> frozenset[int]:
        return self.deleted_block.positions()

    def changed_positions(self) -> frozenset[int]:
        return self.added_block.positions()

    def locate(self) -> LineLocation:
        return LineLocation(
            source_line=self.deleted_block.start,
            changed_line=self.added_block.start,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "deleted_block": self.deleted_block.to_dict(),
            "added_block": self.added_block.to_dict(),
            "match_score": round(self.match_score, 4),
        }


# ============================================================
# Try/Catch Changes
# ============================================================


@dataclass(frozen=True)
class TryCatchAdded:
    """A new exception-handling wrapper around code that already existed.

    Attributes:
        wrapper: The whole try/catch construct in the changed text
        original_body: Source lines the wrapped body came from, if found
    """

    wrapper: AdditionBlock
    original_body: DeletionBlock | None = None

    category: ClassVar[ChangeCategory] = ChangeCategory.UPDATE_TRY_CATCH
    kind: ClassVar[str] = "added"

    def source_positions(self) -> frozenset[int]:
        return self.original_body.positions() if self.original_body else frozenset()

    def changed_positions(self) -> frozenset[int]:
        return self.wrapper.positions()

    def locate(self) -> LineLocation:
        source_line = self.original_body.start if self.original_body else None
        return LineLocation(source_line=source_line, changed_line=self.wrapper.start)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind,
            "deleted_block": self.original_body.to_dict() if self.original_body else None,
            "added_block": self.wrapper.to_dict(),
        }


@dataclass(frozen=True)
class TryCatchDeleted:
    """An exception-handling wrapper removed while its body was kept.

    Attributes:
        wrapper: The whole try/catch construct in the source text
        remaining_body: Changed lines where the body survives, if found
    """

    wrapper: DeletionBlock
    remaining_body: AdditionBlock | None = None

    category: ClassVar[ChangeCategory] = ChangeCategory.UPDATE_TRY_CATCH
    kind: ClassVar[str] = "deleted"

    def source_positions(self) -> frozenset[int]:
        return self.wrapper.positions()

    def changed_positions(self) -> frozenset[int]:
        return self.remaining_body.positions() if self.remaining_body else frozenset()

    def locate(self) -> LineLocation:
        changed_line = self.remaining_body.start if self.remaining_body else None
        return LineLocation(source_line=self.wrapper.start, changed_line=changed_line)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind,
            "deleted_block": self.wrapper.to_dict(),
            "added_block": self.remaining_body.to_dict() if self.remaining_body else None,
        }


@dataclass(frozen=True)
class TryCatchReplaced:
    """A wrapper rewritten around a body that stayed substantially the same."""

    deleted_wrapper: DeletionBlock
    added_wrapper: AdditionBlock
    body_similarity: float

    category: ClassVar[ChangeCategory] = ChangeCategory.UPDATE_TRY_CATCH
    kind: ClassVar[str] = "replaced"

    def source_positions(self) -> frozenset[int]:
        return self.deleted_wrapper.positions()

    def changed_positions(self) -> frozenset[int]:
        return self.added_wrapper.positions()

    def locate(self) -> LineLocation:
        return LineLocation(
            source_line=self.deleted_wrapper.start,
            changed_line=self.added_wrapper.start,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind,
            "deleted_block": self.deleted_wrapper.to_dict(),
            "added_block": self.added_wrapper.to_dict(),
            "body_similarity": round(self.body_similarity, 4),
        }


# ============================================================
# Single-Line Changes
# ============================================================


@dataclass(frozen=True)
class LineChange:
    """A pair of lines, one per side, that differ in a narrow way."""

    source_line: int
    changed_line: int
    source_text: str
    changed_text: str

    category: ClassVar[ChangeCategory] = ChangeCategory.OTHER

    def source_positions(self) -> frozenset[int]:
        return frozenset({self.source_line - 1})

    def changed_positions(self) -> frozenset[int]:
        return frozenset({self.changed_line - 1})

    def locate(self) -> LineLocation:
        return LineLocation(source_line=self.source_line, changed_line=self.changed_line)

    def _details(self) -> dict:
        return {}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "source_line": self.source_line,
            "changed_line": self.changed_line,
            "source_text": self.source_text,
            "changed_text": self.changed_text,
        }
        result.update(self._details())
        return result


@dataclass(frozen=True)
class ImportChange(LineChange):
    """Same module imported, different import clause."""

    import_path: str = ""

    category: ClassVar[ChangeCategory] = ChangeCategory.UPDATE_IMPORT

    def _details(self) -> dict:
        return {"import_path": self.import_path}


@dataclass(frozen=True)
class CommentChange(LineChange):
    """Comment text edited.

    Single-line changes have ``source_end == source_line``; merged blocks
    span several lines on each side, gap lines included.
    """

    source_end: int = 0
    changed_end: int = 0
    source_lines: tuple[str, ...] = ()
    changed_lines: tuple[str, ...] = ()

    category: ClassVar[ChangeCategory] = ChangeCategory.UPDATE_COMMENT

    @classmethod
    def single(
        cls,
        source_line: int,
        changed_line: int,
        source_text: str,
        changed_text: str,
    ) -> CommentChange:
        """Create a one-line comment change."""
        return cls(
            source_line=source_line,
            changed_line=changed_line,
            source_text=source_text,
            changed_text=changed_text,
            source_end=source_line,
            changed_end=changed_line,
            source_lines=(source_text,),
            changed_lines=(changed_text,),
        )

    @property
    def is_block(self) -> bool:
        return self.source_end > self.source_line or self.changed_end > self.changed_line

    def source_positions(self) -> frozenset[int]:
        return _span(self.source_line, self.source_end)

    def changed_positions(self) -> frozenset[int]:
        return _span(self.changed_line, self.changed_end)

    def _details(self) -> dict:
        return {
            "source_end": self.source_end,
            "changed_end": self.changed_end,
            "source_lines": list(self.source_lines),
            "changed_lines": list(self.changed_lines),
        }


@dataclass(frozen=True)
class ConditionChange(LineChange):
    """Predicate of a control-flow statement tightened, loosened or flipped."""

    keyword: str = ""
    source_condition: str = ""
    changed_condition: str = ""

    category: ClassVar[ChangeCategory] = ChangeCategory.UPDATE_CONDITION

    def _details(self) -> dict:
        return {
            "keyword": self.keyword,
            "source_condition": self.source_condition,
            "changed_condition": self.changed_condition,
        }


@dataclass(frozen=True)
class FunctionParamChange(LineChange):
    """Same function declared with a different parameter list."""

    function_name: str = ""
    source_params: str = ""
    changed_params: str = ""

    category: ClassVar[ChangeCategory] = ChangeCategory.UPDATE_FUNCTION_PARAMS

    def _details(self) -> dict:
        return {
            "function_name": self.function_name,
            "source_params": self.source_params,
            "changed_params": self.changed_params,
        }


@dataclass(frozen=True)
class LiteralChange(LineChange):
    """Same assignment target given a different literal value."""

    target: str = ""
    source_value: str = ""
    changed_value: str = ""

    category: ClassVar[ChangeCategory] = ChangeCategory.UPDATE_LITERAL

    def _details(self) -> dict:
        return {
            "target": self.target,
            "source_value": self.source_value,
            "changed_value": self.changed_value,
        }


@dataclass(frozen=True)
class RenameChange(LineChange):
    """Variable or function renamed with everything else kept."""

    kind: str = "variable"
    source_name: str = ""
    changed_name: str = ""

    category: ClassVar[ChangeCategory] = ChangeCategory.RENAME_VARIABLE

    def _details(self) -> dict:
        return {
            "kind": self.kind,
            "source_name": self.source_name,
            "changed_name": self.changed_name,
        }


@dataclass(frozen=True)
class OtherChange(LineChange):
    """Position-aligned lines that differ in no recognized way."""

    category: ClassVar[ChangeCategory] = ChangeCategory.OTHER


Change = Union[
    MoveBlock,
    DeletionBlock,
    AdditionBlock,
    ReplaceBlock,
    TryCatchAdded,
    TryCatchDeleted,
    TryCatchReplaced,
    LineChange,
]


# ============================================================
# Result
# ============================================================


@dataclass
class CategorizedChanges:
    """Result of one analysis: every category mapped to its changes.

    Every category is always present; categories with no findings map to
    an empty list.
    """

    changes: dict[ChangeCategory, list[Change]] = field(
        default_factory=lambda: {category: [] for category in ChangeCategory}
    )

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def add(self, change: Change) -> None:
        self.changes[change.category].append(change)

    def extend(self, changes: list[Change]) -> None:
        for change in changes:
            self.add(change)

    def get(self, category: ChangeCategory) -> list[Change]:
        return self.changes[category]

    def replace(self, category: ChangeCategory, changes: list[Change]) -> None:
        """Swap the changes of one category, e.g. after a merge step."""
        self.changes[category] = list(changes)

    def counts(self) -> dict[ChangeCategory, int]:
        return {category: len(items) for category, items in self.changes.items()}

    @property
    def total(self) -> int:
        return sum(len(items) for items in self.changes.values())

    @property
    def is_empty(self) -> bool:
        """True when nothing was classified (e.g. identical inputs)."""
        return self.total == 0

    def all_changes(self) -> list[Change]:
        """All changes in category order."""
        return [change for category in ChangeCategory for change in self.changes[category]]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            category.value: [change.to_dict() for change in self.changes[category]]
            for category in ChangeCategory
        }
