"""Tests for release notes output formatting."""

import json

import pytest

from src.release_notes.config import ReleaseConfig
from src.release_notes.data_models import (
    ChangelogSections,
    ModuleLink,
    PullRequest,
    ReleaseNotes,
    RuntimeDigest,
)
from src.release_notes.output_formatter import (
    ReleaseNotesFormatter,
    capitalize,
    render_release_notes,
)


def runtime(name: str = "shibuya", compressed: bool = True) -> RuntimeDigest:
    return RuntimeDigest(
        name=name,
        spec_version="104",
        size=4210318,
        compressed=compressed,
        metadata_version=14,
        sha256="0xsha",
        blake2_256="0xblake",
        authorize_upgrade_hash="0xproposal",
        ipfs_hash="QmIpfs",
        rustc="rustc 1.69.0",
    )


class TestReleaseNotesFormatter:
    """Test ReleaseNotesFormatter."""

    @pytest.fixture
    def notes(self):
        return ReleaseNotes(
            owner="AstarNetwork",
            repo="Astar",
            from_tag="v5.1.0",
            to_tag="v5.2.0",
            sections=ChangelogSections(
                client=[
                    PullRequest(number=10, title="Fix node panic", labels=("client",))
                ],
                others=[PullRequest(number=11, title="Typo")],
            ),
            runtimes=[runtime("shibuya")],
            module_links=[
                ModuleLink(
                    "substrate",
                    "https://github.com/paritytech/substrate/compare/aaaa...bbbb",
                ),
                ModuleLink("astar-frame", ""),
            ],
            commit_count=3,
        )

    @pytest.fixture
    def formatter(self, release_config):
        return ReleaseNotesFormatter(release_config)

    def test_changes_sections(self, formatter, notes):
        output = formatter.format_output(notes)

        assert "### Client\n\n* Fix node panic (#10)\n" in output
        assert "### Runtime\nNone\n" in output
        assert "### Others\n\n* Typo (#11)\n" in output

    def test_runtime_block(self, formatter, notes):
        output = formatter.format_output(notes)

        assert "## Runtimes\n### Shibuya\n```" in output
        assert "✨ spec_version:                104" in output
        assert "🏋 Runtime Size:                4210318" in output
        assert "🗜 Compressed:                  Yes" in output
        assert "🗳️ proposal (authorizeUpgrade): 0xproposal" in output
        assert "📦 IPFS:                        QmIpfs" in output

    def test_uncompressed_runtime_renders_no(self, formatter, notes):
        notes.runtimes = [runtime("shiden", compressed=False)]
        output = formatter.format_output(notes)

        assert "🗜 Compressed:                  No" in output
        assert "Compressed:                  Yes" not in output

    def test_build_info_uses_first_runtime(self, formatter, notes):
        notes.runtimes = [runtime("shibuya"), runtime("astar")]
        output = formatter.format_output(notes)

        assert "## Build Info\nWASM runtime built using `rustc 1.69.0`" in output
        assert output.index("### Shibuya") < output.index("### Astar")

    def test_no_runtimes_omits_runtime_sections(self, formatter, notes):
        notes.runtimes = []
        output = formatter.format_output(notes)

        assert "## Runtimes" not in output
        assert "## Build Info" not in output
        assert "## Changes" in output

    def test_dependency_changes(self, formatter, notes):
        output = formatter.format_output(notes)

        assert (
            "## Dependency Changes\n"
            "Astar: https://github.com/AstarNetwork/Astar/compare/v5.1.0...v5.2.0\n"
            "Substrate: https://github.com/paritytech/substrate/compare/aaaa...bbbb\n"
            "Astar-frame: "
        ) in output

    def test_download_links(self, formatter, notes):
        output = formatter.format_output(notes)

        assert "## Download Links" in output
        assert (
            "| `MacOS` | [Download](https://example.com/v5.2.0/"
            "collator-v5.2.0-macOS.tar.gz) |"
        ) in output
        assert (
            '[<img src="https://example.com/docker.png" height="200px">]'
            "(https://hub.docker.com/r/example/collator/tags)"
        ) in output

    def test_breaking_change_marker(self, formatter, notes):
        notes.sections.runtime = [
            PullRequest(number=12, title="New API", labels=("runtime", "breaksapi"))
        ]
        output = formatter.format_output(notes)

        assert "* ⚠️ New API (#12)" in output

    def test_rendering_is_deterministic(self, formatter, notes):
        assert formatter.format_output(notes) == formatter.format_output(notes)

    def test_json_output(self, formatter, notes):
        data = json.loads(formatter.format_output(notes, "json"))

        assert data["sections"]["client"][0]["number"] == 10
        assert data["sections"]["others"][0]["display"] == "Typo (#11)"
        assert data["runtimes"][0]["compressed"] is True
        assert data["compare_link"].endswith("v5.1.0...v5.2.0")

    def test_table_output(self, formatter, notes):
        output = formatter.format_output(notes, "table")

        assert "Release Notes: AstarNetwork/Astar (v5.1.0 → v5.2.0)" in output
        assert "Fix node panic (#10)" in output
        assert "Shibuya" in output

    def test_unsupported_format(self, formatter, notes):
        with pytest.raises(ValueError, match="Unsupported format type"):
            formatter.format_output(notes, "yaml")

    def test_save(self, formatter, notes, tmp_path):
        output_path = tmp_path / "out" / "release.md"
        formatter.save(formatter.prepare_data(notes), output_path)

        assert "* Typo (#11)" in output_path.read_text(encoding="utf-8")


class TestRenderReleaseNotes:
    """Test the render_release_notes helper."""

    def test_end_to_end_grouping(self):
        notes = ReleaseNotes(
            owner="AstarNetwork",
            repo="Astar",
            from_tag="v1",
            to_tag="v2",
            sections=ChangelogSections(
                client=[
                    PullRequest(number=10, title="Fix node panic", labels=("client",))
                ],
                others=[PullRequest(number=11, title="Typo")],
            ),
        )

        output = render_release_notes(notes, ReleaseConfig())

        client = output.index("### Client")
        runtime_header = output.index("### Runtime")
        others = output.index("### Others")
        assert client < output.index("* Fix node panic (#10)") < runtime_header
        assert others < output.index("* Typo (#11)")


def test_capitalize():
    assert capitalize("astar-frame") == "Astar-frame"
    assert capitalize("") == ""
