"""Renders a submitted issue form into the issue that GitHub would create."""

from typing import Any

import structlog
from pydantic import BaseModel

from github_bundle_validator.forms.submission import Answer, resolve_answers, validate_submission
from github_bundle_validator.schemas.issue import IssueModel
from github_bundle_validator.schemas.issue_template import (
    CheckboxesField,
    InputFormField,
    IssueTemplate,
    TextareaField,
)
from github_bundle_validator.utils.constants import NO_RESPONSE_PLACEHOLDER
from github_bundle_validator.utils.templates import ISSUE_BODY_TEMPLATE, render_package_template
from github_bundle_validator.validation.exceptions import SubmissionError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class IssueBodySection(BaseModel):
    """One '### <label>' section of a rendered issue body."""

    label: str
    content: str


class IssueBodyModel(BaseModel):
    """Context for the issue body template."""

    sections: list[IssueBodySection]


def render_field_content(field: InputFormField, answer: Answer) -> str:
    """Render the text under a field's heading."""
    if isinstance(field, CheckboxesField):
        checked = set(answer)
        return "\n".join(f"- [{'X' if option.label in checked else ' '}] {option.label}" for option in field.attributes.options)
    if isinstance(answer, list):
        return ", ".join(answer) if answer else NO_RESPONSE_PLACEHOLDER
    text = answer.rstrip()
    if not text.strip():
        return NO_RESPONSE_PLACEHOLDER
    if isinstance(field, TextareaField) and field.attributes.render:
        return f"```{field.attributes.render}\n{text}\n```"
    return text


def render_issue_body(template: IssueTemplate, answers: dict[str, Any]) -> str:
    """Render the issue body for a submission.

    Fields serialize in declared order under headings taken from their labels.
    Markdown fields are not serialized.
    """
    resolved = resolve_answers(template, answers)
    body_model = IssueBodyModel(
        sections=[
            IssueBodySection(label=field.attributes.label, content=render_field_content(field, resolved[field.key]))
            for field in template.input_fields()
        ]
    )
    return render_package_template(ISSUE_BODY_TEMPLATE, body_model)


def build_issue(template: IssueTemplate, answers: dict[str, Any], title: str | None = None) -> IssueModel:
    """Build the issue that submitting the form would create.

    Args:
        template: The loaded issue template.
        answers: The raw answers, keyed by field id (or label).
        title: Text appended to the template's default title.

    Raises:
        SubmissionError: If the submission does not satisfy the form.
    """
    problems = validate_submission(template, answers)
    if problems:
        logger.error("Issue form submission is invalid", template=template.name, problems=[problem.format() for problem in problems])
        raise SubmissionError(problems)

    issue = IssueModel(
        title=f"{template.title}{title}" if title else template.title,
        body=render_issue_body(template, answers),
        labels=template.labels or None,
        assignees=template.assignees or None,
        projects=template.projects or None,
        type=template.type,
    )
    logger.info("Built issue from form submission", template=template.name, title=issue.title)
    return issue
