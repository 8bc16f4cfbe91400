"""
Dependency compare links from Cargo.lock snapshots.

Git dependencies are pinned in Cargo.lock as source strings like
``"git+https://github.com/paritytech/substrate?branch=polkadot-v0.9.43#5e49f6e4..."``.
Comparing the pins at two tags yields a GitHub compare URL.
"""

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..shared_utilities import get_logger
from .data_models import ModuleLink

logger = get_logger(__name__)

QUOTED_PATTERN = re.compile(r'".*"')
REVISION_PATTERN = re.compile(r"#([0-9a-f]+)")
REPOSITORY_PATTERN = re.compile(r"(https://.*)\?")
ORGANIZATION_PATTERN = re.compile(r"github\.com/([^/]*)")


@dataclass(frozen=True)
class DependencySource:
    """Pinned git source of a dependency."""

    repository: str
    revision: str  # short (8 character) commit hash

    @property
    def organization(self) -> str | None:
        match = ORGANIZATION_PATTERN.search(self.repository)
        return match.group(1) if match else None


def parse_dependency_source(lockfile_text: str, name: str) -> DependencySource | None:
    """
    Extract the pinned source of a dependency from Cargo.lock text.

    The first line containing ``<name>?`` is used.

    Returns:
        DependencySource, or None if the dependency or format is not found
    """
    needle = f"{name}?"
    line = next(
        (candidate for candidate in lockfile_text.splitlines() if needle in candidate),
        None,
    )
    if line is None:
        return None

    quoted = QUOTED_PATTERN.search(line)
    if quoted is None:
        return None
    source = quoted.group(0)

    revision = REVISION_PATTERN.search(source)
    repository = REPOSITORY_PATTERN.search(source)
    if revision is None or repository is None:
        return None

    return DependencySource(
        repository=repository.group(1), revision=revision.group(1)[:8]
    )


def build_compare_link(previous: DependencySource, new: DependencySource) -> str:
    """
    Build a GitHub compare URL between two pins.

    A pin that moved to another repository (a fork) is compared with the
    ``<org>:<revision>`` cross-repository syntax.
    """
    if previous.repository != new.repository:
        organization = new.organization
        if organization is None:
            return ""
        return (
            f"{previous.repository}/compare/"
            f"{previous.revision}...{organization}:{new.revision}"
        )
    return f"{previous.repository}/compare/{previous.revision}...{new.revision}"


def get_compare_link(name: str, previous_lockfile: str, new_lockfile: str) -> str:
    """Compare link for one dependency, "" if either pin cannot be parsed."""
    previous = parse_dependency_source(previous_lockfile, name)
    new = parse_dependency_source(new_lockfile, name)
    if previous is None or new is None:
        logger.warning(f"Could not find a git pin for '{name}' in Cargo.lock")
        return ""
    return build_compare_link(previous, new)


class CompareLinkBuilder:
    """Builds dependency compare links between two git tags."""

    def __init__(self, project_root: str | Path = ".", lockfile: str = "Cargo.lock"):
        """
        Initialize builder.

        Args:
            project_root: Git checkout containing the lockfile
            lockfile: Lockfile path relative to the repository root
        """
        self.project_root = Path(project_root)
        self.lockfile = lockfile

    def read_lockfile(self, tag: str) -> str | None:
        """Read the lockfile as of a tag via ``git show``, None on failure."""
        ref = f"{tag}:{self.lockfile}"
        if tag.startswith("-"):
            logger.warning(
                "Refusing to read lockfile at a tag starting with '-'", ref=ref
            )
            return None

        try:
            result = subprocess.run(
                ["git", "show", ref],
                capture_output=True,
                text=True,
                cwd=self.project_root,
                check=False,
            )
        except OSError as e:
            logger.warning(
                "Could not run git to read the lockfile", ref=ref, error=str(e)
            )
            return None

        if result.returncode != 0:
            logger.warning("git show failed", ref=ref, stderr=result.stderr.strip())
            return None
        return result.stdout

    def build(self, names: list[str], from_tag: str, to_tag: str) -> list[ModuleLink]:
        """
        Build compare links for each dependency.

        Failures never raise: the affected link is the empty string.
        """
        previous_lockfile = self.read_lockfile(from_tag)
        new_lockfile = self.read_lockfile(to_tag)

        links = []
        for name in names:
            if previous_lockfile is None or new_lockfile is None:
                links.append(ModuleLink(name=name))
                continue
            link = get_compare_link(name, previous_lockfile, new_lockfile)
            links.append(ModuleLink(name=name, link=link))
        return links
