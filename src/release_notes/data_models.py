"""Data models for release notes generation."""

import re
from dataclasses import dataclass, field
from typing import Any

# Trailing "(#1234)" as appended by GitHub squash merges
PR_NUMBER_PATTERN = re.compile(r"\(#([0-9]+)\)$")


@dataclass(frozen=True)
class CommitRecord:
    """A commit in the compared range."""

    sha: str
    message: str

    @property
    def first_line(self) -> str:
        """First line of the commit message, stripped."""
        return self.message.split("\n")[0].strip()

    @property
    def pr_number(self) -> int | None:
        """Pull request number referenced at the end of the first line."""
        match = PR_NUMBER_PATTERN.search(self.first_line)
        if match:
            return int(match.group(1))
        return None


@dataclass(frozen=True)
class PullRequest:
    """Pull request normalized from the GitHub API."""

    number: int
    title: str
    labels: tuple[str, ...] = ()
    repository: str = ""  # owner/name the PR was found in

    def has_label(self, label: str) -> bool:
        return label in self.labels

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "labels": list(self.labels),
            "repository": self.repository,
        }


class LabelBucket:
    """Ordered mapping from label name to the pull requests carrying it.

    Unlabeled pull requests are stored under the empty label "". A pull
    request with several labels is listed under each of them, while
    ``pull_requests`` keeps every added pull request once, in insertion order.
    """

    UNLABELED = ""

    def __init__(self):
        """Initialize an empty bucket."""
        self._by_label: dict[str, list[PullRequest]] = {}
        self._ordered: list[PullRequest] = []

    def add(self, pull_request: PullRequest) -> None:
        """Add a pull request under each of its labels (or under "")."""
        labels = pull_request.labels or (self.UNLABELED,)
        for label in labels:
            self._by_label.setdefault(label, []).append(pull_request)
        self._ordered.append(pull_request)

    def get(self, label: str) -> list[PullRequest]:
        """Pull requests for a label, empty list if none."""
        return list(self._by_label.get(label, []))

    @property
    def labels(self) -> list[str]:
        return list(self._by_label.keys())

    @property
    def pull_requests(self) -> list[PullRequest]:
        return list(self._ordered)

    def __contains__(self, label: object) -> bool:
        return label in self._by_label

    def __len__(self) -> int:
        return len(self._ordered)

    def to_dict(self) -> dict[str, list[int]]:
        return {
            label: [pr.number for pr in prs] for label, prs in self._by_label.items()
        }


@dataclass
class ChangelogSections:
    """Pull requests grouped into the rendered release note sections."""

    client: list[PullRequest] = field(default_factory=list)
    runtime: list[PullRequest] = field(default_factory=list)
    others: list[PullRequest] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.client) + len(self.runtime) + len(self.others)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "client": [pr.to_dict() for pr in self.client],
            "runtime": [pr.to_dict() for pr in self.runtime],
            "others": [pr.to_dict() for pr in self.others],
        }


@dataclass(frozen=True)
class RuntimeDigest:
    """SRTool build digest of a compiled runtime together with its spec version."""

    name: str
    spec_version: str
    size: int | str
    compressed: bool
    metadata_version: int | str
    sha256: str
    blake2_256: str
    authorize_upgrade_hash: str
    ipfs_hash: str
    rustc: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "spec_version": self.spec_version,
            "size": self.size,
            "compressed": self.compressed,
            "metadata_version": self.metadata_version,
            "sha256": self.sha256,
            "blake2_256": self.blake2_256,
            "authorize_upgrade_hash": self.authorize_upgrade_hash,
            "ipfs_hash": self.ipfs_hash,
            "rustc": self.rustc,
        }


@dataclass(frozen=True)
class ModuleLink:
    """Compare link for a pinned git dependency ("" when unavailable)."""

    name: str
    link: str = ""


@dataclass
class ReleaseNotes:
    """Everything needed to render the release body."""

    owner: str
    repo: str
    from_tag: str
    to_tag: str
    sections: ChangelogSections = field(default_factory=ChangelogSections)
    runtimes: list[RuntimeDigest] = field(default_factory=list)
    module_links: list[ModuleLink] = field(default_factory=list)
    excluded_commits: list[CommitRecord] = field(default_factory=list)
    commit_count: int = 0

    @property
    def compare_link(self) -> str:
        """Compare link of the released repository itself."""
        return (
            f"https://github.com/{self.owner}/{self.repo}/compare/"
            f"{self.from_tag}...{self.to_tag}"
        )
