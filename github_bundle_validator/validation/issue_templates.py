"""Validation rules for issue form templates and the template chooser configuration.

Every rule runs once, at load time, and every problem is collected into a
ValidationReport rather than raised one at a time. `load_issue_template` raises
only after all rules have run.
"""

from collections import Counter
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import structlog
from pydantic import ValidationError
from ruamel.yaml.error import YAMLError
from structlog.stdlib import BoundLogger

from github_bundle_validator.schemas.issue_template import (
    CheckboxesField,
    DropdownField,
    IssueTemplate,
    MarkdownField,
)
from github_bundle_validator.schemas.template_config import TemplateChooserConfigModel
from github_bundle_validator.utils.constants import FIELD_ID_PATTERN, PROJECT_REFERENCE_PATTERN
from github_bundle_validator.utils.yaml import load_yaml_file
from github_bundle_validator.validation.exceptions import IssueTemplateValidationError
from github_bundle_validator.validation.models import (
    ArtifactKind,
    ProblemCode,
    Severity,
    ValidationReport,
    add_pydantic_errors,
)

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


def find_duplicates(values: list[str]) -> list[str]:
    """Return the values that occur more than once, in first-seen order."""
    counts = Counter(values)
    return [value for value in counts if counts[value] > 1]


def read_yaml_mapping(path: Path, report: ValidationReport) -> dict[str, Any] | None:
    """Load a YAML document that must hold a mapping, recording a problem if it does not."""
    try:
        data = load_yaml_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read YAML file", path=str(path), error=str(exc))
        report.add(ProblemCode.MALFORMED_YAML, f"Document could not be read as UTF-8 text: {exc}")
        return None
    except YAMLError as exc:
        logger.error("Failed to parse YAML file", path=str(path), error=str(exc))
        report.add(ProblemCode.MALFORMED_YAML, f"Document is not valid YAML: {exc}")
        return None
    if not isinstance(data, dict):
        logger.error("YAML file is not a dictionary", path=str(path))
        report.add(ProblemCode.MALFORMED_YAML, f"Document must be a mapping, got {type(data).__name__}")
        return None
    return data


def _check_metadata(template: IssueTemplate, report: ValidationReport) -> None:
    for attribute, code in (
        ("name", ProblemCode.EMPTY_NAME),
        ("title", ProblemCode.EMPTY_TITLE),
        ("description", ProblemCode.EMPTY_DESCRIPTION),
    ):
        if not getattr(template, attribute).strip():
            report.add(code, f"Template {attribute} must not be empty", location=attribute)

    for attribute in ("labels", "assignees"):
        duplicates = find_duplicates(getattr(template, attribute))
        if duplicates:
            report.add(
                ProblemCode.DUPLICATE_METADATA,
                f"Repeated {attribute} will be ignored: {', '.join(duplicates)}",
                severity=Severity.WARNING,
                location=attribute,
            )

    for index, project in enumerate(template.projects):
        if not PROJECT_REFERENCE_PATTERN.fullmatch(project):
            report.add(
                ProblemCode.INVALID_PROJECT,
                f"Project reference '{project}' must look like 'owner/number'",
                location=f"projects[{index}]",
            )


def _check_fields(template: IssueTemplate, report: ValidationReport) -> None:
    seen_ids: dict[str, int] = {}
    seen_labels: dict[str, int] = {}

    for index, field in enumerate(template.body):
        location = f"body[{index}]"

        if field.id is not None:
            if not FIELD_ID_PATTERN.fullmatch(field.id):
                report.add(
                    ProblemCode.INVALID_ID,
                    f"Field id '{field.id}' may only contain alphanumeric characters, '-' and '_'",
                    location=f"{location}.id",
                )
            if field.id in seen_ids:
                report.add(
                    ProblemCode.DUPLICATE_ID,
                    f"Field id '{field.id}' is already declared by body[{seen_ids[field.id]}]",
                    location=f"{location}.id",
                )
            else:
                seen_ids[field.id] = index

        if isinstance(field, MarkdownField):
            if field.validations is not None:
                report.add(
                    ProblemCode.MARKDOWN_VALIDATIONS,
                    "Markdown fields are not user input and cannot declare validations",
                    location=f"{location}.validations",
                )
            continue

        label = field.attributes.label.strip()
        if not label:
            report.add(ProblemCode.EMPTY_LABEL, "Field label must not be empty", location=f"{location}.attributes.label")
        elif label in seen_labels:
            report.add(
                ProblemCode.DUPLICATE_LABEL,
                f"Field label '{label}' is already used by body[{seen_labels[label]}]",
                location=f"{location}.attributes.label",
            )
        else:
            seen_labels[label] = index

        if isinstance(field, (DropdownField, CheckboxesField)):
            options = field.option_labels()
            if not options:
                report.add(
                    ProblemCode.MISSING_OPTIONS,
                    f"{field.type.capitalize()} field must declare at least one option",
                    location=f"{location}.attributes.options",
                )
            duplicates = find_duplicates(options)
            if duplicates:
                report.add(
                    ProblemCode.DUPLICATE_OPTION,
                    f"Repeated options: {', '.join(duplicates)}",
                    location=f"{location}.attributes.options",
                )

        if isinstance(field, DropdownField) and field.attributes.default is not None:
            if not 0 <= field.attributes.default < len(field.attributes.options):
                report.add(
                    ProblemCode.INVALID_DEFAULT,
                    f"Default option index {field.attributes.default} is outside the {len(field.attributes.options)} declared option(s)",
                    location=f"{location}.attributes.default",
                )

    if not template.input_fields():
        report.add(ProblemCode.NO_INPUT_FIELDS, "Template body must contain at least one non-markdown field", location="body")


def check_issue_template(data: dict[str, Any], report: ValidationReport) -> IssueTemplate | None:
    """Parse an issue template and run every rule against it.

    Returns:
        The parsed template, or None if the document is structurally invalid.
        Semantic problems are recorded on the report; the template is still returned.
    """
    try:
        template = IssueTemplate.model_validate(data)
    except ValidationError as ve:
        logger.error("Validation error for issue template", path=str(report.path), error=ve.errors())
        add_pydantic_errors(report, ve.errors())  # type: ignore[arg-type]
        return None

    _check_metadata(template, report)
    _check_fields(template, report)
    return template


def validate_issue_template(data: Any, path: Path) -> ValidationReport:
    """Validate an already-loaded issue template document. Never raises for content problems."""
    report = ValidationReport(path=path, kind=ArtifactKind.ISSUE_TEMPLATE)
    if not isinstance(data, dict):
        report.add(ProblemCode.MALFORMED_YAML, f"Document must be a mapping, got {type(data).__name__}")
        return report
    check_issue_template(data, report)
    return report


def validate_issue_template_file(path: Path) -> ValidationReport:
    """Read and validate an issue template file."""
    report = ValidationReport(path=path, kind=ArtifactKind.ISSUE_TEMPLATE)
    data = read_yaml_mapping(path, report)
    if data is not None:
        check_issue_template(data, report)
    return report


def load_issue_template(path: Path) -> IssueTemplate:
    """Load an issue template, failing if any rule reports an error.

    Warnings are logged. Repeated labels and assignees are dropped from the
    returned model.

    Raises:
        IssueTemplateValidationError: Carrying every problem found in the file.
    """
    report = ValidationReport(path=path, kind=ArtifactKind.ISSUE_TEMPLATE)
    data = read_yaml_mapping(path, report)
    template = check_issue_template(data, report) if data is not None else None
    for warning in report.warnings:
        logger.warning("Issue template warning", path=str(path), code=warning.code.value, message=warning.message)
    if template is None or not report.ok:
        raise IssueTemplateValidationError(report)
    logger.debug("Loaded issue template", path=str(path), fields=len(template.body))
    return template.deduplicated()


def validate_template_config(data: Any, path: Path) -> ValidationReport:
    """Validate an already-loaded ISSUE_TEMPLATE/config.yml document."""
    report = ValidationReport(path=path, kind=ArtifactKind.TEMPLATE_CONFIG)
    if data is None:
        # An empty config file keeps GitHub's defaults.
        return report
    if not isinstance(data, dict):
        report.add(ProblemCode.MALFORMED_YAML, f"Document must be a mapping, got {type(data).__name__}")
        return report
    try:
        config = TemplateChooserConfigModel.model_validate(data)
    except ValidationError as ve:
        add_pydantic_errors(report, ve.errors())  # type: ignore[arg-type]
        return report

    for index, link in enumerate(config.contact_links):
        location = f"contact_links[{index}]"
        for attribute in ("name", "about"):
            if not getattr(link, attribute).strip():
                report.add(ProblemCode.INVALID_CONTACT_LINK, f"Contact link {attribute} must not be empty", location=f"{location}.{attribute}")
        parsed = urlparse(link.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            report.add(ProblemCode.INVALID_CONTACT_LINK, f"Contact link URL '{link.url}' must be an http(s) URL", location=f"{location}.url")
    return report


def validate_template_config_file(path: Path) -> ValidationReport:
    """Read and validate an ISSUE_TEMPLATE/config.yml file."""
    report = ValidationReport(path=path, kind=ArtifactKind.TEMPLATE_CONFIG)
    try:
        data = load_yaml_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read YAML file", path=str(path), error=str(exc))
        report.add(ProblemCode.MALFORMED_YAML, f"Document could not be read as UTF-8 text: {exc}")
        return report
    except YAMLError as exc:
        report.add(ProblemCode.MALFORMED_YAML, f"Document is not valid YAML: {exc}")
        return report
    return validate_template_config(data, path)
