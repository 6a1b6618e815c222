"""Text providers for reading the two versions under comparison."""

from .base import TextProvider, split_revision_locator
from .factory import create_text_provider
from .git_source import GitRevisionTextProvider
from .github_source import GitHubFetchError, GitHubTextProvider
from .local_source import LocalFileTextProvider

__all__ = [
    "GitHubFetchError",
    "GitHubTextProvider",
    "GitRevisionTextProvider",
    "LocalFileTextProvider",
    "TextProvider",
    "create_text_provider",
    "split_revision_locator",
]
