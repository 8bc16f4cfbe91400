"""
Tests for the release notes CLI.
"""

import json
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from src.release_notes.github_client import GitHubClientError
from src.release_notes.main import main

BASE_ARGS = [
    "--from",
    "v5.1.0",
    "--to",
    "v5.2.0",
    "--owner",
    "AstarNetwork",
    "--repo",
    "Astar",
]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch("src.release_notes.main.configure_logging"):
        yield


@pytest.fixture
def git_unavailable():
    with patch("src.release_notes.lockfile.subprocess.run") as mock_run:
        mock_run.return_value = Mock(returncode=128, stdout="", stderr="fatal")
        yield mock_run


class TestMain:
    """Test the release-notes command."""

    @patch("src.release_notes.main.GitHubClient")
    def test_markdown_to_stdout(
        self, mock_client_class, runner, mock_github_client, git_unavailable, tmp_path
    ):
        mock_client_class.return_value = mock_github_client

        result = runner.invoke(
            main, BASE_ARGS + ["--project-root", str(tmp_path), "--token", "t0ken"]
        )

        assert result.exit_code == 0
        assert "### Client\n\n* Fix node panic (#10)" in result.output
        assert "### Runtime\nNone" in result.output
        assert "### Others\n\n* Typo (#11)" in result.output
        assert (
            "Astar: https://github.com/AstarNetwork/Astar/compare/v5.1.0...v5.2.0"
            in result.output
        )
        mock_client_class.assert_called_once_with("t0ken", per_page=100)

    @patch("src.release_notes.main.GitHubClient")
    def test_json_to_file(
        self, mock_client_class, runner, mock_github_client, git_unavailable, tmp_path
    ):
        mock_client_class.return_value = mock_github_client
        output_file = tmp_path / "notes.json"

        result = runner.invoke(
            main,
            BASE_ARGS
            + [
                "--project-root",
                str(tmp_path),
                "--format",
                "json",
                "--output",
                str(output_file),
            ],
        )

        assert result.exit_code == 0
        data = json.loads(output_file.read_text())
        assert data["to_tag"] == "v5.2.0"
        assert [pr["number"] for pr in data["sections"]["client"]] == [10]

    @patch("src.release_notes.main.GitHubClient")
    def test_custom_config(
        self, mock_client_class, runner, mock_github_client, git_unavailable, tmp_path
    ):
        mock_client_class.return_value = mock_github_client
        config_file = tmp_path / "release.json"
        config_file.write_text(
            json.dumps({"project_name": "Shiden", "modules": [], "compare_page_size": 30})
        )

        result = runner.invoke(
            main,
            BASE_ARGS + ["--project-root", str(tmp_path), "--config", str(config_file)],
        )

        assert result.exit_code == 0
        assert "Shiden: https://github.com/AstarNetwork/Astar/compare" in result.output
        assert mock_client_class.call_args.kwargs["per_page"] == 30

    def test_missing_required_option(self, runner):
        result = runner.invoke(main, ["--from", "v1", "--to", "v2"])

        assert result.exit_code == 2
        assert "--owner" in result.output

    @patch("src.release_notes.main.GitHubClient")
    def test_github_error_exits_with_error(
        self, mock_client_class, runner, mock_github_client, git_unavailable, tmp_path
    ):
        mock_github_client.compare_commits.side_effect = GitHubClientError(
            "Failed to compare v5.1.0...v5.2.0: Not Found", status=404
        )
        mock_client_class.return_value = mock_github_client

        result = runner.invoke(main, BASE_ARGS + ["--project-root", str(tmp_path)])

        assert result.exit_code == 1
        assert "Error: Failed to compare" in result.output

    @patch("src.release_notes.main.GitHubClient")
    def test_missing_srtool_digest_exits_with_error(
        self, mock_client_class, runner, mock_github_client, tmp_path
    ):
        mock_client_class.return_value = mock_github_client

        result = runner.invoke(
            main,
            BASE_ARGS
            + [
                "--project-root",
                str(tmp_path),
                "--srtool-report-folder",
                str(tmp_path / "reports"),
            ],
        )

        assert result.exit_code == 1
        assert "Error:" in result.output
        mock_github_client.compare_commits.assert_not_called()
