"""Unit tests for the issue template rules."""

from pathlib import Path
from typing import Any, Callable

import pytest

from github_bundle_validator.schemas.issue_template import CheckboxesField, DropdownField, MarkdownField
from github_bundle_validator.validation.exceptions import IssueTemplateValidationError
from github_bundle_validator.validation.issue_templates import (
    find_duplicates,
    load_issue_template,
    validate_issue_template,
    validate_issue_template_file,
    validate_template_config,
    validate_template_config_file,
)
from github_bundle_validator.validation.models import ProblemCode, Severity

TEMPLATE_PATH = Path("ISSUE_TEMPLATE/bug_report.yml")


def make_template(body: list[dict[str, Any]], **overrides: Any) -> dict[str, Any]:
    """Build a minimal valid template document around a body."""
    data: dict[str, Any] = {
        "name": "Bug Report",
        "description": "File a bug report",
        "title": "[Bug]: ",
        "labels": ["bug"],
        "body": body,
    }
    data.update(overrides)
    return data


def textarea(field_id: str | None, label: str, required: bool = False) -> dict[str, Any]:
    field: dict[str, Any] = {"type": "textarea", "attributes": {"label": label}, "validations": {"required": required}}
    if field_id is not None:
        field["id"] = field_id
    return field


class TestFeatureRequestTemplate:
    """The sample feature request form must satisfy every rule."""

    def test_has_no_problems(self, feature_request_path: Path) -> None:
        report = validate_issue_template_file(feature_request_path)
        assert report.issues == []
        assert report.ok is True

    def test_field_ids_are_unique(self, feature_request_path: Path) -> None:
        template = load_issue_template(feature_request_path)
        assert template.field_ids() == [
            "feature-description",
            "problem-statement",
            "proposed-solution",
            "alternatives",
            "priority",
            "component",
            "additional-context",
            "terms",
        ]
        assert find_duplicates(template.field_ids()) == []

    def test_dropdowns_have_options(self, feature_request_path: Path) -> None:
        template = load_issue_template(feature_request_path)
        for key in ("priority", "component"):
            field = template.get_field(key)
            assert isinstance(field, DropdownField)
            assert len(field.attributes.options) > 0
        priority = template.get_field("priority")
        assert isinstance(priority, DropdownField)
        assert priority.validations.required is True

    def test_terms_has_single_required_option(self, feature_request_path: Path) -> None:
        template = load_issue_template(feature_request_path)
        checkboxes = [field for field in template.body if isinstance(field, CheckboxesField)]
        assert len(checkboxes) == 1
        terms = checkboxes[0]
        assert terms.id == "terms"
        assert len(terms.attributes.options) == 1
        assert terms.attributes.options[0].required is True

    def test_metadata_is_loaded(self, feature_request_path: Path) -> None:
        template = load_issue_template(feature_request_path)
        assert template.title == "[Feature]: "
        assert template.labels == ["feature", "enhancement", "triage"]
        assert template.projects == ["octo-org/1"]
        assert template.assignees == ["octocat"]
        assert isinstance(template.body[0], MarkdownField)
        assert template.body[0].validations is None

    def test_fields_keep_declared_order(self, feature_request_path: Path) -> None:
        template = load_issue_template(feature_request_path)
        assert [field.type for field in template.body] == [
            "markdown",
            "textarea",
            "textarea",
            "textarea",
            "textarea",
            "dropdown",
            "dropdown",
            "textarea",
            "checkboxes",
        ]


def test_duplicate_ids_are_rejected() -> None:
    """Two fields both declaring id 'description' are a duplicate-identifier error."""
    data = make_template([textarea("description", "Description"), textarea("description", "More details")])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.DUPLICATE_ID]
    assert report.issues[0].location == "body[1].id"
    assert "body[0]" in report.issues[0].message
    assert report.ok is False


def test_dropdown_with_empty_options_is_rejected() -> None:
    data = make_template([{"type": "dropdown", "id": "os", "attributes": {"label": "OS", "options": []}}])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.MISSING_OPTIONS]
    assert report.issues[0].location == "body[0].attributes.options"


def test_checkboxes_with_empty_options_is_rejected() -> None:
    data = make_template([{"type": "checkboxes", "id": "terms", "attributes": {"label": "Terms", "options": []}}])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.MISSING_OPTIONS]


@pytest.mark.parametrize("field_type,message", [("dropdown", "Dropdown field"), ("checkboxes", "Checkboxes field")])
def test_options_key_is_required(field_type: str, message: str) -> None:
    data = make_template([{"type": field_type, "id": "choice", "attributes": {"label": "Choice"}}])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.MISSING_OPTIONS]
    assert report.issues[0].location == "body[0].attributes.options"
    assert report.issues[0].message == f"{message} must declare at least one option"


def test_markdown_field_with_validations_is_rejected() -> None:
    data = make_template(
        [
            {"type": "markdown", "attributes": {"value": "Thanks!"}, "validations": {"required": True}},
            textarea("details", "Details"),
        ]
    )
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.MARKDOWN_VALIDATIONS]
    assert report.issues[0].location == "body[0].validations"


def test_unknown_field_type_is_rejected() -> None:
    data = make_template([{"type": "slider", "id": "level", "attributes": {"label": "Level"}}])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.UNKNOWN_FIELD_TYPE]
    assert report.issues[0].location == "body[0]"
    assert "slider" in report.issues[0].message


def test_missing_label_is_a_schema_error() -> None:
    data = make_template([{"type": "input", "id": "version", "attributes": {"placeholder": "1.0"}}])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.SCHEMA_ERROR]
    assert report.issues[0].location == "body[0].attributes.label"


def test_unrecognized_top_level_key_is_a_schema_error() -> None:
    data = make_template([textarea("details", "Details")], milestone="v1")
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.SCHEMA_ERROR]
    assert report.issues[0].location == "milestone"


@pytest.mark.parametrize("field_id", ["has space", "dots.are.bad", "émoji"])
def test_invalid_ids_are_rejected(field_id: str) -> None:
    data = make_template([textarea(field_id, "Details")])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.INVALID_ID]


@pytest.mark.parametrize(
    "attribute,code",
    [
        ("name", ProblemCode.EMPTY_NAME),
        ("title", ProblemCode.EMPTY_TITLE),
        ("description", ProblemCode.EMPTY_DESCRIPTION),
    ],
)
def test_blank_metadata_is_rejected(attribute: str, code: ProblemCode) -> None:
    data = make_template([textarea("details", "Details")], **{attribute: "   "})
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [code]


def test_missing_title_is_rejected() -> None:
    data = make_template([textarea("details", "Details")])
    del data["title"]
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.EMPTY_TITLE]


def test_body_with_only_markdown_is_rejected() -> None:
    data = make_template([{"type": "markdown", "attributes": {"value": "Nothing to fill in"}}])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.NO_INPUT_FIELDS]


def test_duplicate_field_labels_are_rejected() -> None:
    data = make_template([textarea("first", "Details"), textarea("second", "Details")])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.DUPLICATE_LABEL]


def test_duplicate_options_are_rejected() -> None:
    data = make_template([{"type": "dropdown", "id": "os", "attributes": {"label": "OS", "options": ["Linux", "macOS", "Linux"]}}])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.DUPLICATE_OPTION]
    assert "Linux" in report.issues[0].message


@pytest.mark.parametrize("default", [-1, 2, 10])
def test_dropdown_default_outside_options_is_rejected(default: int) -> None:
    data = make_template([{"type": "dropdown", "id": "os", "attributes": {"label": "OS", "options": ["Linux", "macOS"], "default": default}}])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.INVALID_DEFAULT]


def test_invalid_project_reference_is_rejected() -> None:
    data = make_template([textarea("details", "Details")], projects=["octo-org"])
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.INVALID_PROJECT]
    assert report.issues[0].location == "projects[0]"


def test_repeated_labels_are_a_warning() -> None:
    data = make_template([textarea("details", "Details")], labels="bug, triage, bug")
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.DUPLICATE_METADATA]
    assert report.issues[0].severity is Severity.WARNING
    assert report.ok is True


def test_every_problem_is_collected() -> None:
    """Rules run exhaustively instead of stopping at the first problem."""
    data = make_template(
        [
            textarea("description", "Description"),
            textarea("description", "Other"),
            {"type": "dropdown", "id": "os", "attributes": {"label": "OS", "options": []}},
        ],
        name="",
    )
    report = validate_issue_template(data, TEMPLATE_PATH)
    assert set(report.codes()) == {ProblemCode.EMPTY_NAME, ProblemCode.DUPLICATE_ID, ProblemCode.MISSING_OPTIONS}


def test_non_mapping_document_is_malformed() -> None:
    report = validate_issue_template(["not", "a", "mapping"], TEMPLATE_PATH)
    assert report.codes() == [ProblemCode.MALFORMED_YAML]


def test_load_issue_template_deduplicates_labels(write_file: Callable[[str, str], Path]) -> None:
    path = write_file(
        "bug.yml",
        """
name: Bug
description: File a bug
title: "[Bug]: "
labels: bug, triage, bug
assignees: [octocat, octocat]
body:
  - type: input
    id: version
    attributes:
      label: Version
""",
    )
    template = load_issue_template(path)
    assert template.labels == ["bug", "triage"]
    assert template.assignees == ["octocat"]


def test_load_issue_template_raises_with_every_problem(write_file: Callable[[str, str], Path]) -> None:
    path = write_file(
        "bad.yml",
        """
name: Bad
description: Two problems
title: "[Bad]: "
body:
  - type: textarea
    id: description
    attributes:
      label: Description
  - type: dropdown
    id: description
    attributes:
      label: Choice
      options: []
""",
    )
    with pytest.raises(IssueTemplateValidationError) as exc_info:
        load_issue_template(path)
    assert exc_info.value.report.codes() == [ProblemCode.DUPLICATE_ID, ProblemCode.MISSING_OPTIONS]


def test_load_issue_template_rejects_malformed_yaml(write_file: Callable[[str, str], Path]) -> None:
    path = write_file("broken.yml", "name: [unterminated\n")
    with pytest.raises(IssueTemplateValidationError) as exc_info:
        load_issue_template(path)
    assert exc_info.value.report.codes() == [ProblemCode.MALFORMED_YAML]


def test_load_issue_template_rejects_duplicate_mapping_keys(write_file: Callable[[str, str], Path]) -> None:
    path = write_file("dupe.yml", "name: One\nname: Two\n")
    with pytest.raises(IssueTemplateValidationError) as exc_info:
        load_issue_template(path)
    assert exc_info.value.report.codes() == [ProblemCode.MALFORMED_YAML]


class TestTemplateConfig:
    """Tests for ISSUE_TEMPLATE/config.yml validation."""

    def test_fixture_config_is_valid(self, fixture_bundle_root: Path) -> None:
        report = validate_template_config_file(fixture_bundle_root / "ISSUE_TEMPLATE" / "config.yml")
        assert report.issues == []

    def test_empty_config_is_valid(self) -> None:
        assert validate_template_config(None, Path("config.yml")).ok is True

    def test_contact_link_url_must_be_http(self) -> None:
        data = {"contact_links": [{"name": "Chat", "url": "ftp://example.com", "about": "Talk to us"}]}
        report = validate_template_config(data, Path("config.yml"))
        assert report.codes() == [ProblemCode.INVALID_CONTACT_LINK]
        assert report.issues[0].location == "contact_links[0].url"

    def test_contact_link_requires_about(self) -> None:
        data = {"contact_links": [{"name": "Chat", "url": "https://example.com"}]}
        report = validate_template_config(data, Path("config.yml"))
        assert report.codes() == [ProblemCode.SCHEMA_ERROR]
        assert report.issues[0].location == "contact_links[0].about"


def test_issue_type_is_accepted(write_file: Callable[[str, str], Path]) -> None:
    path = write_file(
        "ISSUE_TEMPLATE/bug.yml",
        'name: Bug\ndescription: File a bug\ntitle: "[Bug]: "\ntype: Bug\nbody:\n  - type: input\n    id: version\n    attributes:\n      label: Version\n',
    )
    assert load_issue_template(path).type == "Bug"
