"""diffsage - semantic change classification for source files.

Classifies the differences between two versions of a text into categories
such as moved blocks, try/catch wrappers, import, comment, condition,
parameter and literal updates, renames, deletions, additions and
replacements, instead of an undifferentiated line diff.

Usage:
    python -m diffsage <command> [options]
    diffsage <command> [options]

Structure:
    diffsage/
    ├── __main__.py          # Entry point dispatcher
    ├── domain/              # Categories, change records, settings
    ├── services/            # Analyzer, reports, git operations
    ├── infrastructure/      # Line features, detectors, text providers
    └── commands/            # Thin command orchestrators
        ├── analyze.py
        └── categories.py
"""

from diffsage.domain.changes import CategorizedChanges
from diffsage.services.diff_analyzer import DiffAnalyzer, analyze

__all__ = ["CategorizedChanges", "DiffAnalyzer", "analyze"]
