"""Copies a bundle into a consuming project's configuration root."""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

import structlog
from structlog.stdlib import BoundLogger

from github_bundle_validator.bundle.discovery import discover_bundle

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


@dataclass
class InstallResult:
    """Files written and files left untouched by an install."""

    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def install_bundle(source_root: Path, destination_root: Path, overwrite: bool = False) -> InstallResult:
    """Copy every artifact of a bundle, preserving the relative layout.

    Args:
        source_root: The configuration root holding the bundle.
        destination_root: The consuming project's configuration root; created if missing.
        overwrite: Replace files that already exist at the destination.

    Returns:
        InstallResult listing destination paths written and skipped.
    """
    bundle = discover_bundle(source_root)
    result = InstallResult()
    for _, source_path in bundle.artifacts():
        destination_path = destination_root / bundle.relative(source_path)
        if destination_path.exists() and not overwrite:
            logger.info("File already exists, skipping", path=str(destination_path))
            result.skipped.append(destination_path)
            continue
        destination_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source_path, destination_path)
        result.written.append(destination_path)
    logger.info("Installed bundle", source=str(source_root), destination=str(destination_root), written=len(result.written), skipped=len(result.skipped))
    return result
