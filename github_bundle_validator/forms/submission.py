"""Checks the answers a user fills into an issue form against the form's fields.

Answers are keyed by field id, or by field label for fields without an id.
Input and textarea answers are strings. Dropdown answers are a string or a list
of strings (lists only for `multiple` dropdowns). Checkbox answers are the list
of checked option labels, or a mapping of option label to checked state.
"""

from typing import Any

from github_bundle_validator.schemas.issue_template import (
    CheckboxesField,
    DropdownField,
    InputFormField,
    IssueTemplate,
)
from github_bundle_validator.validation.models import ProblemCode, ValidationIssue

Answer = str | list[str]
TEXT_ANSWER_TYPES = (str, int, float, bool)


def _as_selection(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, dict):
        return [str(label) for label, checked in value.items() if checked]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and str(item).strip()]
    return [str(value)]


def is_text_answer(value: Any) -> bool:
    """Return True for values an input or textarea field accepts: strings and plain scalars."""
    return isinstance(value, TEXT_ANSWER_TYPES)


def resolve_answer(field: InputFormField, value: Any) -> Answer:
    """Normalize one raw answer, applying the field's pre-filled value or default option."""
    if isinstance(field, CheckboxesField):
        return _as_selection(value)
    if isinstance(field, DropdownField):
        selected = _as_selection(value)
        default = field.attributes.default
        if not selected and default is not None and 0 <= default < len(field.attributes.options):
            selected = [field.attributes.options[default]]
        return selected
    if value is None:
        return field.attributes.value or ""
    if not is_text_answer(value):
        # Reported by validate_submission; never rendered.
        return ""
    return str(value)


def resolve_answers(template: IssueTemplate, answers: dict[str, Any]) -> dict[str, Answer]:
    """Normalize raw answers for every input field of the template, in declared order."""
    return {field.key: resolve_answer(field, answers.get(field.key)) for field in template.input_fields()}


def is_blank(answer: Answer) -> bool:
    if isinstance(answer, list):
        return not answer
    return not answer.strip()


def validate_submission(template: IssueTemplate, answers: dict[str, Any]) -> list[ValidationIssue]:
    """Check a submission against the form; returns every problem found.

    Required fields block submission until populated, and every checkbox option
    marked required must be checked.
    """
    problems: list[ValidationIssue] = []
    keys = {field.key for field in template.input_fields()}

    for key in answers:
        if key not in keys:
            problems.append(
                ValidationIssue(code=ProblemCode.UNKNOWN_ANSWER, message=f"Answer '{key}' does not match any form field", location=str(key))
            )

    resolved = resolve_answers(template, answers)
    for field in template.input_fields():
        answer = resolved[field.key]
        location = field.key

        raw_answer = answers.get(field.key)
        if not isinstance(field, (DropdownField, CheckboxesField)) and raw_answer is not None and not is_text_answer(raw_answer):
            problems.append(
                ValidationIssue(
                    code=ProblemCode.INVALID_ANSWER,
                    message=f"'{field.attributes.label}' expects text, got {type(raw_answer).__name__}",
                    location=location,
                )
            )
            continue

        if field.validations.required and is_blank(answer):
            problems.append(
                ValidationIssue(
                    code=ProblemCode.MISSING_REQUIRED,
                    message=f"'{field.attributes.label}' is required",
                    location=location,
                )
            )

        if isinstance(field, (DropdownField, CheckboxesField)):
            options = field.option_labels()
            for choice in answer:
                if choice not in options:
                    problems.append(
                        ValidationIssue(
                            code=ProblemCode.INVALID_CHOICE,
                            message=f"'{choice}' is not an option of '{field.attributes.label}'",
                            location=location,
                        )
                    )

        if isinstance(field, DropdownField) and len(answer) > 1 and not field.attributes.multiple:
            problems.append(
                ValidationIssue(
                    code=ProblemCode.INVALID_CHOICE,
                    message=f"'{field.attributes.label}' accepts a single option, got {len(answer)}",
                    location=location,
                )
            )

        if isinstance(field, CheckboxesField):
            for option in field.attributes.options:
                if option.required and option.label not in answer:
                    problems.append(
                        ValidationIssue(
                            code=ProblemCode.REQUIRED_OPTION_UNCHECKED,
                            message=f"'{option.label}' must be checked",
                            location=location,
                        )
                    )

    return problems
