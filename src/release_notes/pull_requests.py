"""
Pull request resolution and label classification.
"""

from ..shared_utilities import get_logger
from .data_models import ChangelogSections, CommitRecord, LabelBucket, PullRequest
from .github_client import GitHubClient, GitHubClientError

logger = get_logger(__name__)


class PullRequestResolver:
    """Resolves the pull requests referenced by commits into a LabelBucket."""

    def __init__(self, github_client: GitHubClient, upstream_repo: str | None = None):
        """Initialize resolver.

        Args:
            github_client: Client used for pull request lookups
            upstream_repo: Fallback repository ("owner/name") tried when a
                pull request is not found in the primary repository
        """
        self.github_client = github_client
        self.upstream_repo = upstream_repo

    def _candidate_repositories(self, owner: str, repo: str) -> list[tuple[str, str]]:
        candidates = [(owner, repo)]
        if self.upstream_repo:
            upstream_owner, upstream_name = self.upstream_repo.split("/", 1)
            if (upstream_owner, upstream_name) != (owner, repo):
                candidates.append((upstream_owner, upstream_name))
        return candidates

    def fetch_pull_request(
        self, owner: str, repo: str, number: int
    ) -> PullRequest | None:
        """
        Fetch a pull request from the primary repository, then the upstream one.

        Returns:
            The first pull request found, or None if no repository has it
        """
        for candidate_owner, candidate_repo in self._candidate_repositories(
            owner, repo
        ):
            try:
                return self.github_client.get_pull_request(
                    candidate_owner, candidate_repo, number
                )
            except GitHubClientError as e:
                logger.debug(
                    f"Pull request #{number} not available in "
                    f"{candidate_owner}/{candidate_repo}: {e}"
                )

        logger.warning(f"Skipping pull request #{number}: not found in any repository")
        return None

    def resolve(self, owner: str, repo: str, commits: list[CommitRecord]) -> LabelBucket:
        """
        Resolve pull requests for commits and group them by label.

        Commits without a ``(#NNNN)`` suffix are ignored. Each pull request
        number is looked up once per run.

        Args:
            owner: Primary repository owner
            repo: Primary repository name
            commits: Commits remaining after revert filtering

        Returns:
            LabelBucket with the resolved pull requests
        """
        bucket = LabelBucket()
        seen: set[int] = set()

        for commit in commits:
            number = commit.pr_number
            if number is None or number in seen:
                continue
            seen.add(number)

            pull_request = self.fetch_pull_request(owner, repo, number)
            if pull_request is not None:
                bucket.add(pull_request)

        logger.info(
            f"Resolved {len(bucket)} pull requests from {len(commits)} commits",
            labels=bucket.labels,
        )
        return bucket


def classify_sections(
    bucket: LabelBucket,
    client_label: str = "client",
    runtime_label: str = "runtime",
) -> ChangelogSections:
    """
    Place every pull request of a bucket in exactly one section.

    The first of the client/runtime labels in a pull request's label order
    decides its section. Pull requests with neither label, including
    unlabeled ones, go to "others".
    """
    sections = ChangelogSections()

    for pull_request in bucket.pull_requests:
        section = None
        for label in pull_request.labels:
            if label == client_label:
                section = sections.client
                break
            if label == runtime_label:
                section = sections.runtime
                break

        if section is None:
            section = sections.others
        section.append(pull_request)

    return sections
