"""Factory for creating text providers.

This module provides the factory function for creating the appropriate text
provider based on the source type (local files, local git or GitHub API).
"""

from __future__ import annotations

import os

from diffsage.domain.text_source import TextSource
from diffsage.services.git_operations import GitOperationsService

from .base import TextProvider
from .git_source import GitRevisionTextProvider
from .github_source import GitHubTextProvider
from .local_source import LocalFileTextProvider


def create_text_provider(
    source: TextSource,
    repo: str | None = None,
    repo_path: str = ".",
    token: str | None = None,
) -> TextProvider:
    """Create a text provider based on source type.

    Args:
        source: FILE, GIT or GITHUB
        repo: GitHub repository in owner/name format (required for GITHUB)
        repo_path: Path to local git repo (used by GIT)
        token: GitHub API token; falls back to the GITHUB_TOKEN environment variable

    Returns:
        TextProvider implementation appropriate for the source type

    Raises:
        ValueError: If source is GITHUB but repo is missing or malformed

    Examples:
        >>> provider = create_text_provider(TextSource.GIT, repo_path="/path/to/repo")
        >>> provider.read("HEAD~1:src/app.js")
    """
    if source == TextSource.FILE:
        return LocalFileTextProvider()
    elif source == TextSource.GIT:
        return GitRevisionTextProvider(GitOperationsService(repo_path))
    elif source == TextSource.GITHUB:
        if not repo or "/" not in repo:
            raise ValueError("repo in owner/name format is required for GITHUB source")
        owner, name = repo.split("/", 1)
        return GitHubTextProvider(owner, name, token=token or os.environ.get("GITHUB_TOKEN"))
    else:
        raise ValueError(f"Unknown text source: {source}")
