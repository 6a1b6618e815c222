"""Abstract base for text providers.

A text provider reads one version of a text given a source-specific
locator (a path, or ``REV:path`` for revision-based sources).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from diffsage.domain.text_source import TextSourceError


class TextProvider(ABC):
    """Reads the texts under comparison from one kind of source."""

    @abstractmethod
    def read(self, locator: str) -> str:
        """Read the text named by ``locator``.

        Raises:
            TextSourceError: If the text cannot be read
        """


def split_revision_locator(locator: str) -> tuple[str, str]:
    """Split ``REV:path`` into its revision and path.

    Raises:
        TextSourceError: If the locator is not of the form ``REV:path``
    """
    revision, sep, path = locator.partition(":")
    if not sep or not revision or not path:
        raise TextSourceError(f"Expected REV:path, got: {locator}")
    return revision, path
