"""Local git revision text provider."""

from __future__ import annotations

from diffsage.services.git_operations import GitOperationsService

from .base import TextProvider, split_revision_locator


class GitRevisionTextProvider(TextProvider):
    """Reads file versions from a local git repository via ``git show``."""

    def __init__(self, git_service: GitOperationsService):
        """Initialize with dependencies.

        Args:
            git_service: Service for git operations (injected)
        """
        self.git_service = git_service

    def read(self, locator: str) -> str:
        """Read ``REV:path`` from the repository.

        Raises:
            TextSourceError: If the locator is malformed
            GitRepositoryError: If the path is not inside a git repository
            GitFileNotFoundError: If the file does not exist at the revision
        """
        revision, path = split_revision_locator(locator)
        return self.git_service.get_file_content(path, revision)
