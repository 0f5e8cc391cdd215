"""Reconciles configuration between CLI arguments and environment variables."""

from pathlib import Path

from github_bundle_validator.configuration.env import Settings
from github_bundle_validator.configuration.exceptions import (
    BundleRootConfigurationError,
    InstallConfigurationError,
)
from github_bundle_validator.configuration.models import InstallConfig, ValidateConfig


def validate_bundle_root(bundle_root: Path) -> Path:
    """Ensure a bundle root exists and is a directory.

    Raises:
        BundleRootConfigurationError: If the root is missing or is not a directory.
    """
    if not bundle_root.exists():
        raise BundleRootConfigurationError(bundle_root, "does not exist")
    if not bundle_root.is_dir():
        raise BundleRootConfigurationError(bundle_root, "is not a directory")
    return bundle_root


def reconcile_validate_configuration(
    cli_bundle_root: Path | None,
    cli_strict: bool | None,
    cli_debug: bool | None,
    settings: Settings | None = None,
) -> ValidateConfig:
    """Reconciles the validate command configuration.

    Values given on the command line take precedence over environment variables
    and the .env file.

    Args:
        cli_bundle_root (Path | None): Bundle root given on the command line.
        cli_strict (bool | None): Strict flag given on the command line.
        cli_debug (bool | None): Debug flag given on the command line.
        settings (Settings | None): Environment settings; loaded when not given.

    Raises:
        BundleRootConfigurationError: If the resolved bundle root cannot be used.

    Returns:
        ValidateConfig: The resolved configuration.
    """
    settings = settings or Settings()
    bundle_root = cli_bundle_root if cli_bundle_root is not None else settings.BUNDLE_ROOT
    return ValidateConfig(
        debug=cli_debug if cli_debug is not None else settings.DEBUG,
        bundle_root=validate_bundle_root(bundle_root),
        strict=cli_strict if cli_strict is not None else settings.STRICT,
    )


def reconcile_install_configuration(
    cli_source_root: Path,
    cli_destination_root: Path,
    cli_overwrite: bool,
    cli_debug: bool | None,
    settings: Settings | None = None,
) -> InstallConfig:
    """Reconciles the install command configuration.

    Raises:
        BundleRootConfigurationError: If the source root cannot be used.
        InstallConfigurationError: If the destination is the source itself.
    """
    settings = settings or Settings()
    source_root = validate_bundle_root(cli_source_root)
    if cli_destination_root.resolve() == source_root.resolve():
        raise InstallConfigurationError(f"Destination {cli_destination_root} is the same directory as the source bundle")
    return InstallConfig(
        debug=cli_debug if cli_debug is not None else settings.DEBUG,
        source_root=source_root,
        destination_root=cli_destination_root,
        overwrite=cli_overwrite,
    )
