"""Domain models for diffsage."""

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
    LineLocation,
    LiteralChange,
    MoveBlock,
    OtherChange,
    RenameChange,
    ReplaceBlock,
    TryCatchAdded,
    TryCatchDeleted,
    TryCatchReplaced,
)
from diffsage.domain.settings import AnalyzerSettings, SettingsError
from diffsage.domain.text_source import TextNotFoundError, TextSource, TextSourceError

__all__ = [
    "AdditionBlock",
    "AnalyzerSettings",
    "CategorizedChanges",
    "Change",
    "ChangeCategory",
    "CommentChange",
    "ConditionChange",
    "DeletionBlock",
    "FunctionParamChange",
    "ImportChange",
    "LineBlock",
    "LineChange",
    "LineLocation",
    "LiteralChange",
    "MoveBlock",
    "OtherChange",
    "RenameChange",
    "ReplaceBlock",
    "SettingsError",
    "TextNotFoundError",
    "TextSource",
    "TextSourceError",
    "TryCatchAdded",
    "TryCatchDeleted",
    "TryCatchReplaced",
]
