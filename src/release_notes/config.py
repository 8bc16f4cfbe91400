"""
Configuration system for release notes generation.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path

from ..shared_utilities import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = Path(__file__).parent / "release_config.json"


@dataclass
class ReleaseConfig:
    """Configuration for a release notes run."""

    project_name: str = "Astar"
    runtimes: list[str] = field(
        default_factory=lambda: ["shibuya", "shiden", "astar"]
    )
    modules: list[str] = field(
        default_factory=lambda: [
            "substrate",
            "polkadot",
            "cumulus",
            "frontier",
            "astar-frame",
        ]
    )
    upstream_repo: str = "AstarNetwork/Astar"
    client_label: str = "client"
    runtime_label: str = "runtime"
    breaking_label: str = "breaksapi"
    compare_page_size: int = 100
    lockfile: str = "Cargo.lock"
    download_links: dict[str, str] = field(default_factory=dict)
    docker_image_url: str = ""
    docker_logo_url: str = ""

    def __post_init__(self):
        """Validate values that would break the pipeline later on."""
        if self.compare_page_size <= 0:
            raise ValueError(
                f"compare_page_size must be positive, got {self.compare_page_size}"
            )
        if self.upstream_repo and "/" not in self.upstream_repo:
            raise ValueError(
                f"upstream_repo must be in owner/name format, got '{self.upstream_repo}'"
            )

    def download_links_for(self, tag: str) -> dict[str, str]:
        """Resolve download URL templates for a release tag."""
        return {
            arch: template.format(tag=tag)
            for arch, template in self.download_links.items()
        }


class ReleaseConfigManager:
    """Loads the release configuration from a JSON file."""

    def __init__(self, config_file: str | Path | None = None):
        """Initialize config manager.

        Args:
            config_file: Path to configuration file, defaults to the bundled
                release_config.json
        """
        self.config_file = Path(config_file) if config_file else DEFAULT_CONFIG_FILE
        self._config: ReleaseConfig | None = None

    def load(self) -> ReleaseConfig:
        """Load (once) and return the release configuration.

        Raises:
            FileNotFoundError: If the configuration file does not exist
            ValueError: If the file is not valid JSON or has invalid values
        """
        if self._config is not None:
            return self._config

        if not self.config_file.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_file}")

        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid config file {self.config_file}: {e}") from e

        self._config = self._from_dict(data)
        logger.debug(
            "Loaded release configuration",
            config_file=str(self.config_file),
            runtimes=self._config.runtimes,
            modules=self._config.modules,
        )
        return self._config

    @staticmethod
    def _from_dict(data: dict) -> ReleaseConfig:
        """Convert the JSON layout into a ReleaseConfig."""
        defaults = ReleaseConfig()
        labels = data.get("labels", {})

        return ReleaseConfig(
            project_name=data.get("project_name", defaults.project_name),
            runtimes=list(data.get("runtimes", defaults.runtimes)),
            modules=list(data.get("modules", defaults.modules)),
            upstream_repo=data.get("upstream_repo", defaults.upstream_repo),
            client_label=labels.get("client", defaults.client_label),
            runtime_label=labels.get("runtime", defaults.runtime_label),
            breaking_label=labels.get("breaking", defaults.breaking_label),
            compare_page_size=int(
                data.get("compare_page_size", defaults.compare_page_size)
            ),
            lockfile=data.get("lockfile", defaults.lockfile),
            download_links=dict(data.get("download_links", {})),
            docker_image_url=data.get("docker_image_url", ""),
            docker_logo_url=data.get("docker_logo_url", ""),
        )
