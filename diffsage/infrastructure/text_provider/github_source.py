"""GitHub text provider.

Reads file versions through the GitHub contents API using ``requests``.
"""

from __future__ import annotations

import requests

from diffsage.domain.text_source import TextNotFoundError, TextSourceError

from .base import TextProvider, split_revision_locator

GITHUB_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30


class GitHubFetchError(TextSourceError):
    """Raised when the GitHub API request fails."""

    pass


class GitHubTextProvider(TextProvider):
    """Implementation for reading file versions from a GitHub repository."""

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize with repository coordinates.

        Args:
            owner: GitHub repository owner
            repo: GitHub repository name
            token: Optional API token for private repositories and rate limits
            session: HTTP session to use (a new one when None)
        """
        self.owner = owner
        self.repo = repo
        self.session = session or requests.Session()
        self.headers = {"Accept": "application/vnd.github.v3.raw"}
        if token:
            self.headers["Authorization"] = f"token {token}"

    def read(self, locator: str) -> str:
        """Read ``REV:path`` from the repository.

        Raises:
            TextNotFoundError: If the file does not exist at the revision
            GitHubFetchError: If the request fails
        """
        revision, path = split_revision_locator(locator)
        encoded_path = requests.utils.quote(path)
        url = f"{GITHUB_API_URL}/repos/{self.owner}/{self.repo}/contents/{encoded_path}"

        try:
            response = self.session.get(
                url,
                headers=self.headers,
                params={"ref": revision},
                timeout=DEFAULT_TIMEOUT,
            )
        except requests.RequestException as e:
            raise GitHubFetchError(f"Error fetching {path}@{revision} from GitHub: {e}")

        if response.status_code == 404:
            raise TextNotFoundError(f"File {path} not found at {revision} in {self.owner}/{self.repo}")
        try:
            response.raise_for_status()
        except requests.RequestException as e:
            raise GitHubFetchError(f"Error fetching {path}@{revision} from GitHub: {e}")
        return response.text
