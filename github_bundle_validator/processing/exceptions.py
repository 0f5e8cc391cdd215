"""Custom exceptions for the processing module."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from github_bundle_validator.processing.results import BundleValidationResult


class BundleValidationError(Exception):
    """Raised when errors are encountered while validating a bundle."""

    def __init__(self, result: "BundleValidationResult"):
        super().__init__(f"Errors encountered during bundle validation: {result.error_count} error(s) in {len(result.failed_reports)} file(s).")
        self.result = result
