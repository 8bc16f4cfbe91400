"""CLI entry point for the release notes generator."""

import sys

import click
from dotenv import load_dotenv

from src.shared_utilities import OutputFormat, configure_logging, get_logger

from .composer import ChangelogComposer
from .config import ReleaseConfigManager
from .github_client import GitHubClient
from .output_formatter import ReleaseNotesFormatter

# Initialize environment and logging
load_dotenv()
logger = get_logger(__name__)


@click.command()
@click.option(
    "--from",
    "from_tag",
    required=True,
    help="Previous tag to retrieve commits from",
)
@click.option(
    "--to",
    "to_tag",
    required=True,
    help="Current tag being drafted",
)
@click.option(
    "--owner",
    required=True,
    help="Repository owner (e.g., AstarNetwork)",
)
@click.option(
    "--repo",
    required=True,
    help="Repository name (e.g., Astar)",
)
@click.option(
    "--srtool-report-folder",
    type=click.Path(file_okay=False),
    help="Folder containing <runtime>-srtool-digest.json files",
)
@click.option(
    "--project-root",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Repository checkout holding runtime sources and git history",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Release configuration JSON (default: bundled release_config.json)",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(OutputFormat.choices()),
    default=OutputFormat.MARKDOWN,
    show_default=True,
    help="Output format",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    help="Write output to a file instead of stdout",
)
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    help="GitHub personal access token (or set GITHUB_TOKEN env var)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose logging",
)
def main(
    from_tag: str,
    to_tag: str,
    owner: str,
    repo: str,
    srtool_report_folder: str | None,
    project_root: str,
    config_file: str | None,
    output_format: str,
    output: str | None,
    token: str | None,
    verbose: bool,
) -> None:
    """Draft GitHub release notes for the commits between two tags.

    Pull requests referenced by the commits are grouped into Client,
    Runtime and Others by label, next to runtime build digests and
    dependency compare links.

    Example:
    release-notes --from v5.1.0 --to v5.2.0 --owner AstarNetwork --repo Astar
    --srtool-report-folder srtool-reports
    """
    configure_logging(level="DEBUG" if verbose else None)

    try:
        config = ReleaseConfigManager(config_file).load()
        github_client = GitHubClient(token, per_page=config.compare_page_size)
        composer = ChangelogComposer(github_client, config, project_root)

        notes = composer.compose(
            owner,
            repo,
            from_tag,
            to_tag,
            srtool_report_folder=srtool_report_folder,
            progress_callback=logger.info,
        )

        formatter = ReleaseNotesFormatter(config)
        if output:
            formatter.save(formatter.prepare_data(notes), output, output_format)
            logger.info(f"Release notes written to {output}")
        else:
            click.echo(formatter.format_output(notes, output_format))

    except Exception as e:
        logger.error(f"Error generating release notes: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
