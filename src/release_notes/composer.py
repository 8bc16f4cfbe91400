"""
Release notes composition pipeline.

fetch commits -> drop revert pairs -> resolve pull requests -> classify
-> load runtime digests -> build dependency compare links.
"""

import time
from collections.abc import Callable
from pathlib import Path

from ..shared_utilities import get_logger, get_logging_manager, trace_operation
from .commits import filter_reverted_commits
from .config import ReleaseConfig
from .data_models import ReleaseNotes
from .github_client import GitHubClient
from .lockfile import CompareLinkBuilder
from .pull_requests import PullRequestResolver, classify_sections
from .runtime_digest import load_runtimes

logger = get_logger(__name__)


class ChangelogComposer:
    """Collects everything the release body needs, one stage after another."""

    def __init__(
        self,
        github_client: GitHubClient,
        config: ReleaseConfig,
        project_root: str | Path = ".",
    ):
        """Initialize composer.

        Args:
            github_client: Client for commit and pull request lookups
            config: Release configuration
            project_root: Checkout holding runtime sources and the git history
        """
        self.github_client = github_client
        self.config = config
        self.project_root = Path(project_root)
        self.resolver = PullRequestResolver(github_client, config.upstream_repo)
        self.link_builder = CompareLinkBuilder(self.project_root, config.lockfile)

    def compose(
        self,
        owner: str,
        repo: str,
        from_tag: str,
        to_tag: str,
        srtool_report_folder: str | Path | None = None,
        progress_callback: Callable[[str], None] | None = None,
    ) -> ReleaseNotes:
        """
        Run the pipeline for a tag range.

        Runtime digests are loaded only when a report folder is given; a
        missing or malformed digest aborts the run.

        Returns:
            ReleaseNotes ready for rendering
        """
        manager = get_logging_manager()
        start = time.time()
        manager.log_operation_start(
            "compose_release_notes", repo=f"{owner}/{repo}", range=f"{from_tag}...{to_tag}"
        )

        try:
            notes = self._collect(
                owner, repo, from_tag, to_tag, srtool_report_folder, progress_callback
            )
        except Exception as e:
            manager.log_operation_error(
                "compose_release_notes", e, repo=f"{owner}/{repo}"
            )
            raise

        manager.log_operation_complete(
            "compose_release_notes",
            time.time() - start,
            commits=notes.commit_count,
            excluded=len(notes.excluded_commits),
            pull_requests=notes.sections.total,
        )
        return notes

    def _collect(
        self,
        owner: str,
        repo: str,
        from_tag: str,
        to_tag: str,
        srtool_report_folder: str | Path | None,
        progress_callback: Callable[[str], None] | None,
    ) -> ReleaseNotes:
        def progress(message: str) -> None:
            if progress_callback:
                progress_callback(message)

        runtimes = []
        if srtool_report_folder is not None:
            progress("Loading runtime digests...")
            with trace_operation("load_runtimes", {"runtimes": self.config.runtimes}):
                runtimes = load_runtimes(
                    self.project_root, srtool_report_folder, self.config.runtimes
                )

        progress("Building dependency compare links...")
        with trace_operation("build_compare_links", {"modules": self.config.modules}):
            module_links = self.link_builder.build(self.config.modules, from_tag, to_tag)

        progress(f"Fetching commits {from_tag}...{to_tag}...")
        with trace_operation("compare_commits", {"repo": f"{owner}/{repo}"}):
            commits = self.github_client.compare_commits(owner, repo, from_tag, to_tag)

        kept, excluded = filter_reverted_commits(commits)

        progress(f"Resolving pull requests for {len(kept)} commits...")
        with trace_operation("resolve_pull_requests", {"commits": len(kept)}):
            bucket = self.resolver.resolve(owner, repo, kept)

        sections = classify_sections(
            bucket, self.config.client_label, self.config.runtime_label
        )

        return ReleaseNotes(
            owner=owner,
            repo=repo,
            from_tag=from_tag,
            to_tag=to_tag,
            sections=sections,
            runtimes=runtimes,
            module_links=module_links,
            excluded_commits=excluded,
            commit_count=len(commits),
        )
