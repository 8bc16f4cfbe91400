"""
GitHub API client for fetching commit ranges and pull requests
"""

import os

from github import Auth, Github, GithubException
from github.Repository import Repository

from ..shared_utilities import get_logger
from .data_models import CommitRecord, PullRequest

logger = get_logger(__name__)


class GitHubClientError(Exception):
    """Raised when a GitHub API call fails."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(self, token: str | None = None, per_page: int = 100):
        """Initialize GitHub client with optional token.

        Args:
            token: GitHub token, falls back to GITHUB_TOKEN
            per_page: Page size used for paginated endpoints
        """
        self.token = token or os.environ.get("GITHUB_TOKEN")
        self.per_page = per_page
        if self.token:
            self.github = Github(auth=Auth.Token(self.token), per_page=per_page)
        else:
            # Use unauthenticated client (rate limited)
            self.github = Github(per_page=per_page)
        self._repositories: dict[str, Repository] = {}

    def _get_repository(self, full_name: str) -> Repository:
        """Get (and memoize) a repository handle."""
        if full_name not in self._repositories:
            self._repositories[full_name] = self.github.get_repo(full_name)
        return self._repositories[full_name]

    def compare_commits(
        self, owner: str, repo: str, base: str, head: str
    ) -> list[CommitRecord]:
        """
        Fetch all commits between two refs, oldest first.

        Pages are requested one after another and concatenated until a page
        shorter than the page size is returned.

        Args:
            owner: Repository owner
            repo: Repository name
            base: Base ref (previous tag)
            head: Head ref (new tag)

        Returns:
            Ordered list of commits in the range

        Raises:
            GitHubClientError: If any page cannot be fetched
        """
        full_name = f"{owner}/{repo}"
        records: list[CommitRecord] = []

        try:
            comparison = self._get_repository(full_name).compare(base, head)
            commits = comparison.commits

            page = 0
            while True:
                batch = commits.get_page(page)
                records.extend(
                    CommitRecord(sha=commit.sha, message=commit.commit.message)
                    for commit in batch
                )
                logger.debug(
                    "Fetched compare page",
                    page=page,
                    repo=full_name,
                    commits=len(batch),
                )
                if len(batch) < self.per_page:
                    break
                page += 1

        except GithubException as e:
            raise GitHubClientError(
                f"GitHub API error comparing {full_name} {base}...{head}: "
                f"{_error_message(e)}",
                status=e.status,
            ) from e

        logger.info(
            "Fetched commit range",
            repo=full_name,
            range=f"{base}...{head}",
            commits=len(records),
        )
        return records

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        """
        Fetch a pull request and normalize it.

        Raises:
            GitHubClientError: If the pull request cannot be fetched
        """
        full_name = f"{owner}/{repo}"
        try:
            pr = self._get_repository(full_name).get_pull(number)
            return PullRequest(
                number=pr.number,
                title=pr.title,
                labels=tuple(label.name for label in pr.labels),
                repository=full_name,
            )
        except GithubException as e:
            raise GitHubClientError(
                f"Could not fetch pull request #{number} from {full_name}: "
                f"{_error_message(e)}",
                status=e.status,
            ) from e
        except Exception as e:
            raise GitHubClientError(
                f"Error fetching pull request #{number} from {full_name}: {e}"
            ) from e


def _error_message(e: GithubException) -> str:
    """Extract a readable message from a GithubException."""
    if isinstance(e.data, dict):
        return e.data.get("message", str(e))
    return str(e)
