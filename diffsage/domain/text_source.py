"""Domain enum for text source selection.

This module defines the TextSource enum used to select where the two texts
under comparison are read from in the provider factory.
"""

from __future__ import annotations

from enum import Enum


class TextSource(Enum):
    """Source the compared texts are read from.

    Attributes:
        FILE: Local files, locator is a path
        GIT: A revision in a local git repository, locator is ``REV:path``
        GITHUB: A revision on GitHub via the contents API, locator is ``REV:path``
    """

    FILE = "file"
    GIT = "git"
    GITHUB = "github"

    @classmethod
    def from_string(cls, value: str) -> TextSource:
        """Parse TextSource from string value.

        Args:
            value: String value ("file", "git" or "github")

        Returns:
            Corresponding TextSource enum value

        Raises:
            ValueError: If value is not a valid TextSource

        Examples:
            >>> TextSource.from_string("git")
            <TextSource.GIT: 'git'>
        """
        value_lower = value.lower()
        for member in cls:
            if member.value == value_lower:
                return member
        valid_values = [m.value for m in cls]
        raise ValueError(
            f"Invalid text source: {value}. Must be one of: {', '.join(valid_values)}"
        )


class TextSourceError(Exception):
    """Raised when a text cannot be read from its source."""

    pass


class TextNotFoundError(TextSourceError):
    """Raised when the requested text does not exist at its source."""

    pass
