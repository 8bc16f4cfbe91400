"""
Pytest configuration and shared fixtures.
"""

import json
from unittest.mock import Mock

import pytest

from src.release_notes.config import ReleaseConfig
from src.release_notes.data_models import CommitRecord, PullRequest


def _make_digest(
    size: int = 4_210_318,
    compressed: bool = True,
    metadata_version: int = 14,
    sha256: str = "0xabc123",
    blake2_256: str = "0xdef456",
    authorize_hash: str = "0x1234beef",
    ipfs_hash: str = "QmTestHash",
    rustc: str = "rustc 1.69.0 (84c898d65 2023-04-16)",
) -> dict:
    """SRTool digest JSON in the layout produced by srtool."""
    return {
        "info": {"rustc": rustc},
        "runtimes": {
            "compressed": {
                "size": size,
                "sha256": sha256,
                "blake2_256": blake2_256,
                "subwasm": {
                    "compression": {"compressed": compressed},
                    "metadata_version": metadata_version,
                    "parachain_authorize_upgrade_hash": authorize_hash,
                    "ipfs_hash": ipfs_hash,
                },
            }
        },
    }


def _write_runtime(project_root, name: str, spec_version: int) -> None:
    """Create runtime/<name>/src/lib.rs declaring a spec_version."""
    source = project_root / "runtime" / name / "src"
    source.mkdir(parents=True, exist_ok=True)
    (source / "lib.rs").write_text(
        "pub const VERSION: RuntimeVersion = RuntimeVersion {\n"
        f'    spec_name: create_runtime_str!("{name}"),\n'
        f"    spec_version: {spec_version},\n"
        "    impl_version: 0,\n"
        "};\n"
    )


def _write_digest(report_folder, name: str, **kwargs) -> None:
    """Write <name>-srtool-digest.json into the report folder."""
    report_folder.mkdir(parents=True, exist_ok=True)
    (report_folder / f"{name}-srtool-digest.json").write_text(
        json.dumps(_make_digest(**kwargs))
    )


@pytest.fixture
def make_digest():
    """Factory for SRTool digest dictionaries."""
    return _make_digest


@pytest.fixture
def write_runtime():
    """Factory writing runtime/<name>/src/lib.rs under a project root."""
    return _write_runtime


@pytest.fixture
def write_digest():
    """Factory writing <name>-srtool-digest.json into a folder."""
    return _write_digest


@pytest.fixture
def release_config():
    """Release configuration with a single runtime and module."""
    return ReleaseConfig(
        runtimes=["shibuya"],
        modules=["substrate"],
        download_links={
            "MacOS": "https://example.com/{tag}/collator-{tag}-macOS.tar.gz",
        },
        docker_image_url="https://hub.docker.com/r/example/collator/tags",
        docker_logo_url="https://example.com/docker.png",
    )


@pytest.fixture
def sample_commits():
    """Commits referencing a client PR, an unlabeled PR and a plain commit."""
    return [
        CommitRecord(sha="a1", message="Fix node panic (#10)\n\nDetails here"),
        CommitRecord(sha="a2", message="Bump version"),
        CommitRecord(sha="a3", message="Typo (#11)"),
    ]


@pytest.fixture
def sample_pull_requests():
    """Pull requests matching sample_commits."""
    return {
        10: PullRequest(
            number=10,
            title="Fix node panic",
            labels=("client",),
            repository="AstarNetwork/Astar",
        ),
        11: PullRequest(number=11, title="Typo", repository="AstarNetwork/Astar"),
    }


@pytest.fixture
def mock_github_client(sample_commits, sample_pull_requests):
    """Mock GitHubClient serving sample commits and pull requests."""
    client = Mock()
    client.compare_commits.return_value = sample_commits
    client.get_pull_request.side_effect = (
        lambda owner, repo, number: sample_pull_requests[number]
    )
    return client
