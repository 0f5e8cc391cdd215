"""Custom exceptions for the validation module."""

from github_bundle_validator.validation.models import ValidationIssue, ValidationReport


class ArtifactValidationError(Exception):
    """Raised when an artifact fails validation; carries every problem found."""

    def __init__(self, report: ValidationReport) -> None:
        """Initialize the exception with the report of the failed artifact."""
        super().__init__(f"{report.path}: {len(report.errors)} validation error(s) found")
        self.report = report


class IssueTemplateValidationError(ArtifactValidationError):
    """Raised when an issue template fails validation."""

    pass


class InstructionFileValidationError(ArtifactValidationError):
    """Raised when an instruction file fails validation."""

    pass


class SubmissionError(Exception):
    """Raised when an issue form submission does not satisfy the form."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        super().__init__("Issue form submission is invalid: " + "; ".join(issue.format() for issue in issues))
        self.issues = issues
