"""
Runtime build metadata loading.

Reads the declared ``spec_version`` from a runtime's source and the SRTool
digest JSON produced by the runtime build.
"""

import json
import re
from pathlib import Path
from typing import Any

from ..shared_utilities import get_logger
from .data_models import RuntimeDigest

logger = get_logger(__name__)

SPEC_VERSION_LINE = re.compile(r"spec_version: [0-9]*")
SPEC_VERSION_VALUE = re.compile(r":\s?([0-9A-Za-z\-]*)")


class RuntimeDigestError(Exception):
    """Raised when runtime metadata cannot be read."""

    pass


def runtime_source_path(project_root: Path, runtime_name: str) -> Path:
    return project_root / "runtime" / runtime_name / "src" / "lib.rs"


def digest_path(report_folder: Path, runtime_name: str) -> Path:
    return report_folder / f"{runtime_name}-srtool-digest.json"


def read_spec_version(project_root: str | Path, runtime_name: str) -> str:
    """
    Read the spec_version declared in a runtime's lib.rs.

    The last ``spec_version: N`` line wins.

    Raises:
        RuntimeDigestError: If the source file is missing or declares no version
    """
    source = runtime_source_path(Path(project_root), runtime_name)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as e:
        raise RuntimeDigestError(f"Cannot read runtime source {source}: {e}") from e

    matches = [line for line in text.splitlines() if SPEC_VERSION_LINE.search(line)]
    if not matches:
        raise RuntimeDigestError(f"No spec_version found in {source}")

    value = SPEC_VERSION_VALUE.search(matches[-1])
    if value is None:
        raise RuntimeDigestError(f"Malformed spec_version line in {source}")
    return value.group(1)


def _field(data: dict[str, Any], *keys: str) -> Any:
    """Walk nested keys of the digest, raising KeyError with the full path."""
    node: Any = data
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            raise KeyError(".".join(keys))
        node = node[key]
    return node


def parse_runtime_digest(
    data: dict[str, Any], runtime_name: str, spec_version: str
) -> RuntimeDigest:
    """Build a RuntimeDigest from parsed SRTool digest JSON."""
    compressed = ("runtimes", "compressed")
    subwasm = (*compressed, "subwasm")

    return RuntimeDigest(
        name=runtime_name,
        spec_version=spec_version,
        size=_field(data, *compressed, "size"),
        compressed=bool(_field(data, *subwasm, "compression", "compressed")),
        metadata_version=_field(data, *subwasm, "metadata_version"),
        sha256=_field(data, *compressed, "sha256"),
        blake2_256=_field(data, *compressed, "blake2_256"),
        authorize_upgrade_hash=_field(
            data, *subwasm, "parachain_authorize_upgrade_hash"
        ),
        ipfs_hash=_field(data, *subwasm, "ipfs_hash"),
        rustc=_field(data, "info", "rustc"),
    )


def load_runtime_digest(
    report_folder: str | Path, runtime_name: str, spec_version: str
) -> RuntimeDigest:
    """
    Load ``<runtime>-srtool-digest.json`` from the report folder.

    Raises:
        RuntimeDigestError: If the file is missing, not JSON, or lacks a field
    """
    path = digest_path(Path(report_folder), runtime_name)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise RuntimeDigestError(f"Cannot read SRTool digest {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RuntimeDigestError(f"Invalid JSON in SRTool digest {path}: {e}") from e

    try:
        return parse_runtime_digest(data, runtime_name, spec_version)
    except KeyError as e:
        raise RuntimeDigestError(
            f"SRTool digest {path} is missing field {e.args[0]}"
        ) from e


def load_runtimes(
    project_root: str | Path, report_folder: str | Path, runtime_names: list[str]
) -> list[RuntimeDigest]:
    """Load spec version and digest for each runtime, in the given order."""
    runtimes = []
    for name in runtime_names:
        spec_version = read_spec_version(project_root, name)
        runtimes.append(load_runtime_digest(report_folder, name, spec_version))
        logger.debug("Loaded runtime", runtime=name, spec_version=spec_version)
    return runtimes
