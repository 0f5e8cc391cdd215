"""Models describing the problems found while validating bundle artifacts."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from github_bundle_validator.utils.constants import FIELD_TYPES


class Severity(str, Enum):
    """Enum for the severity of a validation problem."""

    ERROR = "error"
    WARNING = "warning"


class ArtifactKind(str, Enum):
    """Enum for the kinds of files found in a bundle."""

    INSTRUCTION = "instruction"
    CHAT_MODE = "chatmode"
    PROMPT = "prompt"
    ISSUE_TEMPLATE = "issue-template"
    TEMPLATE_CONFIG = "issue-template-config"


class ProblemCode(str, Enum):
    """Stable identifiers for every validation rule."""

    # Shared
    MALFORMED_YAML = "malformed-yaml"
    SCHEMA_ERROR = "schema-error"
    EMPTY_DESCRIPTION = "empty-description"
    UNEXPECTED_FILENAME = "unexpected-filename"

    # Issue templates
    UNKNOWN_FIELD_TYPE = "unknown-field-type"
    DUPLICATE_ID = "duplicate-id"
    INVALID_ID = "invalid-id"
    MISSING_OPTIONS = "missing-options"
    MARKDOWN_VALIDATIONS = "markdown-validations"
    EMPTY_NAME = "empty-name"
    EMPTY_TITLE = "empty-title"
    EMPTY_LABEL = "empty-label"
    NO_INPUT_FIELDS = "no-input-fields"
    DUPLICATE_LABEL = "duplicate-label"
    DUPLICATE_OPTION = "duplicate-option"
    INVALID_DEFAULT = "invalid-default"
    INVALID_PROJECT = "invalid-project"
    DUPLICATE_METADATA = "duplicate-metadata"

    # Issue template chooser configuration
    INVALID_CONTACT_LINK = "invalid-contact-link"

    # Issue form submissions
    MISSING_REQUIRED = "missing-required"
    REQUIRED_OPTION_UNCHECKED = "required-option-unchecked"
    UNKNOWN_ANSWER = "unknown-answer"
    INVALID_CHOICE = "invalid-choice"
    INVALID_ANSWER = "invalid-answer"

    # Instruction, chat-mode and prompt files
    MISSING_FRONT_MATTER = "missing-front-matter"
    MALFORMED_FRONT_MATTER = "malformed-front-matter"
    UNKNOWN_KEY = "unknown-key"
    INVALID_APPLY_TO = "invalid-apply-to"
    EMPTY_BODY = "empty-body"


class ValidationIssue(BaseModel):
    """A single problem found in an artifact."""

    code: ProblemCode
    message: str
    severity: Severity = Severity.ERROR
    location: str | None = None

    def format(self, path: Path | str | None = None) -> str:
        """Format the problem as 'path:location: severity [code] message'."""
        prefix = ":".join(str(part) for part in (path, self.location) if part)
        line = f"{self.severity.value} [{self.code.value}] {self.message}"
        return f"{prefix}: {line}" if prefix else line


class ValidationReport(BaseModel):
    """All problems found in one artifact."""

    path: Path
    kind: ArtifactKind
    issues: list[ValidationIssue] = Field(default_factory=list)

    def add(
        self,
        code: ProblemCode,
        message: str,
        severity: Severity = Severity.ERROR,
        location: str | None = None,
    ) -> ValidationIssue:
        """Record a problem and return it."""
        issue = ValidationIssue(code=code, message=message, severity=severity, location=location)
        self.issues.append(issue)
        return issue

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.WARNING]

    @property
    def ok(self) -> bool:
        """True when no error-level problem was found."""
        return not self.errors

    def codes(self) -> list[ProblemCode]:
        return [issue.code for issue in self.issues]

    def promote_warnings(self) -> None:
        """Treat every warning as an error (strict mode)."""
        for issue in self.issues:
            issue.severity = Severity.ERROR


def format_location(loc: tuple[int | str, ...]) -> str:
    """Format a pydantic error location as a dotted path, e.g. body[3].attributes.label.

    Discriminated unions insert the tag into the location (body.3.textarea.attributes);
    the tag is dropped since the index already identifies the field.
    """
    location = ""
    previous: int | str | None = None
    for part in loc:
        if isinstance(part, int):
            location += f"[{part}]"
        elif isinstance(previous, int) and part in FIELD_TYPES:
            pass
        else:
            location += f".{part}" if location else str(part)
        previous = part
    return location


def add_pydantic_errors(report: ValidationReport, errors: list[dict[str, Any]]) -> None:
    """Translate pydantic validation errors into schema problems on a report."""
    for error in errors:
        loc = tuple(error["loc"])
        location = format_location(loc)
        if error["type"] == "union_tag_invalid":
            tag = error.get("ctx", {}).get("tag", "")
            report.add(
                ProblemCode.UNKNOWN_FIELD_TYPE,
                f"Unknown field type '{tag}'; expected one of: {', '.join(FIELD_TYPES)}",
                location=location,
            )
            continue
        # A field without an options key gets the same code as one with an empty list.
        if error["type"] == "missing" and len(loc) >= 3 and loc[-2:] == ("attributes", "options") and loc[-3] in FIELD_TYPES:
            report.add(
                ProblemCode.MISSING_OPTIONS,
                f"{str(loc[-3]).capitalize()} field must declare at least one option",
                location=location,
            )
            continue
        report.add(ProblemCode.SCHEMA_ERROR, error["msg"], location=location)
