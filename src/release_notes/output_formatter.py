"""Output formatting for release notes."""

from typing import Any

from src.shared_utilities.base_output_formatter import (
    BaseOutputFormatter,
    OutputFormat,
    TableFormatter,
)

from .config import ReleaseConfig
from .data_models import PullRequest, ReleaseNotes

BREAKING_MARKER = "⚠️ "


def capitalize(value: str) -> str:
    """Upper-case the first character only ("astar-frame" -> "Astar-frame")."""
    return value[:1].upper() + value[1:]


class ReleaseNotesFormatter(BaseOutputFormatter):
    """Formatter for the GitHub release body.

    Rendering is pure: no network or file access, the same input always
    gives the same output.
    """

    def __init__(self, config: ReleaseConfig | None = None):
        """Initialize the formatter."""
        super().__init__()
        self.config = config or ReleaseConfig()

    def format_output(
        self, notes: ReleaseNotes, format_type: str = OutputFormat.MARKDOWN
    ) -> str:
        """Format release notes for output.

        Args:
            notes: Collected release data
            format_type: The output format type

        Returns:
            Formatted string output
        """
        return self.format(self.prepare_data(notes), format_type)

    def format_pull_request(self, pull_request: PullRequest) -> str:
        """Display line for a pull request, without the list bullet."""
        text = f"{pull_request.title} (#{pull_request.number})"
        if pull_request.has_label(self.config.breaking_label):
            return BREAKING_MARKER + text
        return text

    def prepare_data(self, notes: ReleaseNotes) -> dict[str, Any]:
        """Prepare release notes data for formatting.

        Args:
            notes: Collected release data

        Returns:
            Dictionary with prepared data for formatting
        """
        sections = {}
        for name, pull_requests in (
            ("client", notes.sections.client),
            ("runtime", notes.sections.runtime),
            ("others", notes.sections.others),
        ):
            sections[name] = [
                {**pr.to_dict(), "display": self.format_pull_request(pr)}
                for pr in pull_requests
            ]

        return {
            "project_name": self.config.project_name,
            "repository": f"{notes.owner}/{notes.repo}",
            "from_tag": notes.from_tag,
            "to_tag": notes.to_tag,
            "compare_link": notes.compare_link,
            "runtimes": [runtime.to_dict() for runtime in notes.runtimes],
            "rustc": notes.runtimes[0].rustc if notes.runtimes else None,
            "sections": sections,
            "module_links": [
                {"name": link.name, "link": link.link} for link in notes.module_links
            ],
            "download_links": self.config.download_links_for(notes.to_tag),
            "docker_image_url": self.config.docker_image_url,
            "docker_logo_url": self.config.docker_logo_url,
            "commit_count": notes.commit_count,
            "excluded_commits": [c.first_line for c in notes.excluded_commits],
        }

    def _format_markdown(self, data: dict[str, Any], **kwargs) -> str:
        """Render the release body template."""
        lines = [
            "",
            "## Description",
            "(Placeholder for release descriptions, please freely write "
            "explanations for this release here.)",
            "",
            "**Upgrade priority: LOW/MID/HIGH**",
            "",
        ]

        if data["runtimes"]:
            lines.append("## Runtimes")
            for runtime in data["runtimes"]:
                lines.extend(self._runtime_block(runtime))
                lines.append("")

        if data["rustc"]:
            lines.append("## Build Info")
            lines.append(f"WASM runtime built using `{data['rustc']}`")
            lines.append("")

        lines.append("## Changes")
        for title, key in (
            ("Client", "client"),
            ("Runtime", "runtime"),
            ("Others", "others"),
        ):
            lines.append(f"### {title}")
            entries = data["sections"][key]
            if entries:
                lines.append("")
                lines.extend(f"* {entry['display']}" for entry in entries)
                lines.append("")
            else:
                lines.append("None")

        lines.append("")
        lines.append("## Dependency Changes")
        lines.append(f"{data['project_name']}: {data['compare_link']}")
        for module in data["module_links"]:
            lines.append(f"{capitalize(module['name'])}: {module['link']}")

        if data["download_links"]:
            lines.append("")
            lines.append("## Download Links")
            lines.append("| Arch |  Link  |")
            lines.append("| ----------- | ------- |")
            for arch, url in data["download_links"].items():
                lines.append(f"| `{arch}` | [Download]({url}) |")

        if data["docker_image_url"]:
            lines.append("")
            lines.append(
                f'[<img src="{data["docker_logo_url"]}" height="200px">]'
                f"({data['docker_image_url']})"
            )

        return "\n".join(lines) + "\n"

    def _runtime_block(self, runtime: dict[str, Any]) -> list[str]:
        return [
            f"### {capitalize(runtime['name'])}",
            "```",
            f"✨ spec_version:                {runtime['spec_version']}",
            f"🏋 Runtime Size:                {runtime['size']}",
            f"🗜 Compressed:                  {'Yes' if runtime['compressed'] else 'No'}",
            f"🎁 Metadata version:            {runtime['metadata_version']}",
            f"🗳️ sha256:                      {runtime['sha256']}",
            f"🗳️ blake2-256:                  {runtime['blake2_256']}",
            f"🗳️ proposal (authorizeUpgrade): {runtime['authorize_upgrade_hash']}",
            f"📦 IPFS:                        {runtime['ipfs_hash']}",
            "```",
        ]

    def _format_table(self, data: dict[str, Any], **kwargs) -> str:
        """Console summary of the release."""
        lines = [
            f"Release Notes: {data['repository']} "
            f"({data['from_tag']} → {data['to_tag']})",
            "=" * 60,
            f"Commits in range: {data['commit_count']}",
            f"Excluded by reverts: {len(data['excluded_commits'])}",
            "",
        ]

        rows = []
        for key in ("client", "runtime", "others"):
            for entry in data["sections"][key]:
                rows.append([capitalize(key), f"#{entry['number']}", entry["display"]])
        if rows:
            lines.append(TableFormatter.create_table(["Section", "PR", "Title"], rows))
        else:
            lines.append("No pull requests found")

        if data["runtimes"]:
            lines.append("")
            lines.append(
                TableFormatter.create_table(
                    ["Runtime", "spec_version", "Size", "Compressed"],
                    [
                        [
                            capitalize(r["name"]),
                            str(r["spec_version"]),
                            str(r["size"]),
                            "Yes" if r["compressed"] else "No",
                        ]
                        for r in data["runtimes"]
                    ],
                )
            )

        return "\n".join(lines)


def render_release_notes(notes: ReleaseNotes, config: ReleaseConfig | None = None) -> str:
    """Render release notes as the Markdown release body."""
    return ReleaseNotesFormatter(config).format_output(notes, OutputFormat.MARKDOWN)

