"""Categories command - list the change categories the analyzer reports."""

from __future__ import annotations

from diffsage.domain.categories import ChangeCategory


def cmd_categories() -> int:
    """Print each category key with its display title.

    Returns:
        Exit code (always 0)
    """
    width = max(len(category.value) for category in ChangeCategory)
    for category in ChangeCategory:
        print(f"  {category.value.ljust(width)}  {category.title}")
    return 0
