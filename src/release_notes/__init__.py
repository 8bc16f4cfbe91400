"""Release notes generator for tagged node releases."""

from .composer import ChangelogComposer
from .config import ReleaseConfig, ReleaseConfigManager
from .data_models import (
    ChangelogSections,
    CommitRecord,
    LabelBucket,
    ModuleLink,
    PullRequest,
    ReleaseNotes,
    RuntimeDigest,
)
from .output_formatter import ReleaseNotesFormatter, render_release_notes

__all__ = [
    "ChangelogComposer",
    "ReleaseConfig",
    "ReleaseConfigManager",
    "ChangelogSections",
    "CommitRecord",
    "LabelBucket",
    "ModuleLink",
    "PullRequest",
    "ReleaseNotes",
    "RuntimeDigest",
    "ReleaseNotesFormatter",
    "render_release_notes",
]
