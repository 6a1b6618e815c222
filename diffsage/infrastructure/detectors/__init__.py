"""Change detectors.

Each module implements one family of detection over a shared
``Comparison``:

- moves: relocated blocks of identical lines
- try_catch: added, deleted and replaced exception-handling wrappers
- exact: pure deletion and addition candidates
- line_rules: ordered single-line semantic rules
- blocks: adjacent-block and comment merging
- replace: context-scored pairing of deletion and addition blocks
"""

from .blocks import addition_block, deletion_block, merge_comment_changes, merge_into_blocks
from .exact import find_pure_additions, find_pure_deletions
from .line_rules import LINE_DETECTORS, LineRule, build_other_change, classify_line_pair
from .moves import detect_moved_blocks
from .replace import ReplacementResult, context_score, pair_replacement_blocks
from .try_catch import detect_try_catch_changes, find_try_blocks

__all__ = [
    "LINE_DETECTORS",
    "LineRule",
    "ReplacementResult",
    "addition_block",
    "build_other_change",
    "classify_line_pair",
    "context_score",
    "deletion_block",
    "detect_moved_blocks",
    "detect_try_catch_changes",
    "find_pure_additions",
    "find_pure_deletions",
    "find_try_blocks",
    "merge_comment_changes",
    "merge_into_blocks",
    "pair_replacement_blocks",
]
