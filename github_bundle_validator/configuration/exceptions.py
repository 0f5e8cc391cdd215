"""Contains exceptions raised when reconciling application configuration."""

from pathlib import Path


class BundleRootConfigurationError(Exception):
    """Raised when the configured bundle root cannot be used."""

    def __init__(self, bundle_root: Path, reason: str) -> None:
        """Initializes the exception with the offending root and the reason it was rejected."""
        super().__init__(f"Bundle root {bundle_root} {reason} (command line argument ROOT, environment variable BUNDLE_ROOT)")
        self.bundle_root = bundle_root
        self.reason = reason


class InstallConfigurationError(Exception):
    """Raised when the source and destination of an install are contradictory."""

    pass
