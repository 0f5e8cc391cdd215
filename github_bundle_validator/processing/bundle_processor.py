"""Validates every artifact of a bundle.

This module provides the BundleProcessor class, which discovers the artifacts
under a configuration root, validates each one with the rule set of its kind,
and collects every problem rather than stopping at the first. All logging is
performed using structlog.
"""

from pathlib import Path

import structlog
from structlog.stdlib import BoundLogger

from github_bundle_validator.bundle.discovery import MARKDOWN_KIND_LAYOUT, Bundle, discover_bundle
from github_bundle_validator.processing.exceptions import BundleValidationError
from github_bundle_validator.processing.results import BundleValidationResult
from github_bundle_validator.validation.issue_templates import (
    validate_issue_template_file,
    validate_template_config_file,
)
from github_bundle_validator.validation.markdown_artifacts import validate_markdown_artifact
from github_bundle_validator.validation.models import (
    ArtifactKind,
    ProblemCode,
    Severity,
    ValidationReport,
)

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


class BundleProcessor:
    """Validates the instruction, chat-mode, prompt and issue-template files of a bundle.

    Warnings are reported but do not fail validation unless `strict` is set.
    """

    def __init__(self, strict: bool = False, raise_on_error: bool = True) -> None:
        """Initialize BundleProcessor.

        Args:
            strict (bool): Whether to treat warnings as errors.
            raise_on_error (bool): Whether to raise a BundleValidationError when any artifact has errors.
        """
        self.strict = strict
        self.raise_on_error = raise_on_error

    def validate(self, root: Path) -> BundleValidationResult:
        """Discover and validate every artifact under a configuration root."""
        bundle = discover_bundle(root)
        result = BundleValidationResult(root=root, reports=self.validate_bundle(bundle))

        if result.ok:
            logger.info("Bundle is valid", root=str(root), files=len(result.reports), warnings=result.warning_count)
            return result

        logger.error(
            "One or more errors occurred during bundle validation",
            root=str(root),
            errors=result.error_count,
            files=[str(report.path) for report in result.failed_reports],
        )
        if self.raise_on_error:
            raise BundleValidationError(result)
        return result

    def validate_bundle(self, bundle: Bundle) -> list[ValidationReport]:
        """Validate every artifact of an already-discovered bundle, in kind then path order."""
        reports = [self.validate_artifact(kind, path) for kind, path in bundle.artifacts()]
        for path in bundle.unexpected:
            report = ValidationReport(path=path, kind=self._kind_for_directory(bundle, path))
            report.add(
                ProblemCode.UNEXPECTED_FILENAME,
                "File does not follow the naming convention of its directory and will not be picked up",
                severity=Severity.WARNING,
            )
            reports.append(self._finalize(report))
        return reports

    def validate_artifact(self, kind: ArtifactKind, path: Path) -> ValidationReport:
        """Validate one artifact with the rule set of its kind."""
        logger.debug("Validating artifact", path=str(path), kind=kind.value)
        if kind is ArtifactKind.ISSUE_TEMPLATE:
            report = validate_issue_template_file(path)
        elif kind is ArtifactKind.TEMPLATE_CONFIG:
            report = validate_template_config_file(path)
        else:
            report = validate_markdown_artifact(path, kind)
        return self._finalize(report)

    def _finalize(self, report: ValidationReport) -> ValidationReport:
        if self.strict:
            report.promote_warnings()
        for issue in report.issues:
            log = logger.error if issue.severity is Severity.ERROR else logger.warning
            log("Validation problem", path=str(report.path), code=issue.code.value, location=issue.location, message=issue.message)
        return report

    @staticmethod
    def _kind_for_directory(bundle: Bundle, path: Path) -> ArtifactKind:
        directory = bundle.relative(path).parts[0]
        for kind, (directory_name, _) in MARKDOWN_KIND_LAYOUT.items():
            if directory == directory_name:
                return kind
        return ArtifactKind.INSTRUCTION
