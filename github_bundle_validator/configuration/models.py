"""Resolved configuration for each CLI command."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class BaseConfig:
    """Configuration shared by every command of the CLI."""

    debug: bool


@dataclass
class ValidateConfig(BaseConfig):
    """Configuration class for the validate command."""

    bundle_root: Path
    strict: bool


@dataclass
class InstallConfig(BaseConfig):
    """Configuration class for the install command."""

    source_root: Path
    destination_root: Path
    overwrite: bool
