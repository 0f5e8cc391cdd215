"""Contains results of bundle validation."""

from pathlib import Path

from github_bundle_validator.validation.models import ValidationReport


class BundleValidationResult:
    """Contains the validation report of every artifact in a bundle."""

    def __init__(self, root: Path, reports: list[ValidationReport] | None = None) -> None:
        """Initialize the result with the bundle root and its per-file reports."""
        self.root = root
        self.reports = reports or []

    @property
    def error_count(self) -> int:
        return sum(len(report.errors) for report in self.reports)

    @property
    def warning_count(self) -> int:
        return sum(len(report.warnings) for report in self.reports)

    @property
    def failed_reports(self) -> list[ValidationReport]:
        return [report for report in self.reports if not report.ok]

    @property
    def ok(self) -> bool:
        """True when no artifact has an error-level problem."""
        return not self.failed_reports

    def format_lines(self) -> list[str]:
        """One 'path:location: severity [code] message' line per problem, paths relative to the root."""
        lines: list[str] = []
        for report in self.reports:
            try:
                display_path: Path = report.path.relative_to(self.root)
            except ValueError:
                display_path = report.path
            lines.extend(issue.format(display_path) for issue in report.issues)
        return lines
