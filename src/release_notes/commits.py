"""
Revert-pair detection for commit ranges.

A commit whose first line is ``Revert "X"`` cancels an earlier commit whose
first line is exactly ``X``; both are left out of the changelog. Matching is
done on message text only, so two unrelated commits that share a first line
are treated as a revert pair as well.
"""

import re

from ..shared_utilities import get_logger
from .data_models import CommitRecord

logger = get_logger(__name__)

REVERT_PATTERN = re.compile(r'Revert "(.*)"')


def reverted_subject(first_line: str) -> str | None:
    """Return the subject reverted by a commit, or None."""
    match = REVERT_PATTERN.search(first_line)
    if match:
        return match.group(1)
    return None


def find_excluded_commits(commits: list[CommitRecord]) -> set[int]:
    """
    Find indices of commits cancelled by a revert in the same range.

    Commits are scanned newest first. Each ``Revert "X"`` records ``X``
    against its own index; when an older commit's first line equals a
    recorded subject, both indices are excluded.

    Args:
        commits: Commits ordered oldest first

    Returns:
        Set of excluded commit indices
    """
    excluded: set[int] = set()
    reverted: dict[str, int] = {}

    for index in range(len(commits) - 1, -1, -1):
        first_line = commits[index].first_line

        if first_line in reverted:
            excluded.add(index)
            excluded.add(reverted[first_line])
            continue

        subject = reverted_subject(first_line)
        if subject is not None:
            reverted[subject] = index

    return excluded


def filter_reverted_commits(
    commits: list[CommitRecord],
) -> tuple[list[CommitRecord], list[CommitRecord]]:
    """
    Split commits into kept and revert-cancelled ones, keeping order.

    Returns:
        Tuple of (kept commits, excluded commits)
    """
    excluded_indices = find_excluded_commits(commits)

    kept = [c for i, c in enumerate(commits) if i not in excluded_indices]
    excluded = [c for i, c in enumerate(commits) if i in excluded_indices]

    if excluded:
        logger.info(
            f"Excluded {len(excluded)} commits cancelled by reverts",
            commits=[c.first_line for c in excluded],
        )
    return kept, excluded
