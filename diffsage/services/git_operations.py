"""Git operations service.

Encapsulates the subprocess calls to git used to read file versions from a
local repository.
"""

import subprocess
from pathlib import Path

from diffsage.domain.text_source import TextNotFoundError, TextSourceError


class GitRepositoryError(TextSourceError):
    """Raised when directory is not a git repository."""

    pass


class GitFileNotFoundError(TextNotFoundError):
    """Raised when file doesn't exist at specified revision."""

    pass


class GitOperationsService:
    """Core service for git command operations.

    Encapsulates all subprocess calls to git commands.
    """

    def __init__(self, repo_path: str = "."):
        """Initialize with repository path.

        Args:
            repo_path: Path to git repository (default: current directory)
        """
        self.repo_path = Path(repo_path)

    def is_git_repository(self) -> bool:
        """Check if the repository path is inside a git work tree.

        Returns:
            True if valid git repo, False otherwise
        """
        try:
            subprocess.run(
                ["git", "rev-parse", "--git-dir"],
                cwd=self.repo_path,
                capture_output=True,
                check=True,
            )
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False

    def get_file_content(self, file_path: str, revision: str) -> str:
        """Get file content at a specific revision.

        Args:
            file_path: Path to file in repository
            revision: Commit SHA, tag or branch name

        Returns:
            File content as string

        Raises:
            GitFileNotFoundError: If file doesn't exist at revision
            GitRepositoryError: If not in a git repository
        """
        if not self.is_git_repository():
            raise GitRepositoryError(
                f"Not a git repository: {self.repo_path}\n"
                "Make sure you're running from within a git repository."
            )

        try:
            result = subprocess.run(
                ["git", "show", f"{revision}:{file_path}"],
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=True,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitFileNotFoundError(
                f"File {file_path} not found at {revision}: {e.stderr.strip()}"
            )
