"""Domain enum for change categories.

The category keys are the wire names used in the JSON result consumed by
rendering and export layers.
"""

from __future__ import annotations

from enum import Enum


class ChangeCategory(Enum):
    """Semantic category of a classified change.

    The enum order is the display order used by reports.
    """

    MOVE_CODE_BLOCK = "moveCodeBlock"
    UPDATE_TRY_CATCH = "updateTryCatch"
    UPDATE_IMPORT = "updateImport"
    UPDATE_COMMENT = "updateComment"
    UPDATE_FUNCTION_PARAMS = "updateFunctionParams"
    UPDATE_LITERAL = "updateLiteral"
    UPDATE_CONDITION = "updateCondition"
    RENAME_VARIABLE = "renameVariable"
    DELETE_CODE = "deleteCode"
    ADD_CODE = "addCode"
    REPLACE_CODE = "replaceCode"
    OTHER = "other"

    @property
    def title(self) -> str:
        """Human-readable title for reports."""
        return _TITLES[self]

    @classmethod
    def from_string(cls, value: str) -> ChangeCategory:
        """Parse a ChangeCategory from its key.

        Args:
            value: Category key (e.g. "moveCodeBlock"), case-insensitive

        Returns:
            Corresponding ChangeCategory enum value

        Raises:
            ValueError: If value is not a valid category key
        """
        value_lower = value.lower()
        for member in cls:
            if member.value.lower() == value_lower:
                return member
        valid_values = [m.value for m in cls]
        raise ValueError(
            f"Invalid change category: {value}. Must be one of: {', '.join(valid_values)}"
        )


_TITLES: dict[ChangeCategory, str] = {
    ChangeCategory.MOVE_CODE_BLOCK: "Move Code Block",
    ChangeCategory.UPDATE_TRY_CATCH: "Update Try-Catch",
    ChangeCategory.UPDATE_IMPORT: "Update Import",
    ChangeCategory.UPDATE_COMMENT: "Update Comment",
    ChangeCategory.UPDATE_FUNCTION_PARAMS: "Update Function Parameters",
    ChangeCategory.UPDATE_LITERAL: "Update Literal/Constant",
    ChangeCategory.UPDATE_CONDITION: "Update Condition",
    ChangeCategory.RENAME_VARIABLE: "Rename Variable/Function",
    ChangeCategory.DELETE_CODE: "Delete Code",
    ChangeCategory.ADD_CODE: "Add Code",
    ChangeCategory.REPLACE_CODE: "Replace Code",
    ChangeCategory.OTHER: "Other",
}
