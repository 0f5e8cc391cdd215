"""Pydantic schema for GitHub issue form templates (ISSUE_TEMPLATE/*.yml).

The schema is structural: it checks types and recognized keys for each of the
five field kinds. Rules that span fields (unique ids, non-empty options, and so
on) live in `github_bundle_validator.validation.issue_templates`.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def split_comma_separated(value: Any) -> Any:
    """Accept "a, b" as shorthand for ["a", "b"], as GitHub does for labels and assignees."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def deduplicate(values: list[str]) -> list[str]:
    """Drop repeated values while preserving first-seen order."""
    return list(dict.fromkeys(values))


class Validations(BaseModel):
    """Pydantic model for the validations block of a form field."""

    model_config = ConfigDict(extra="forbid")

    required: bool = False


class MarkdownAttributes(BaseModel):
    """Pydantic model for the attributes of a markdown field."""

    model_config = ConfigDict(extra="forbid")

    value: str


class InputAttributes(BaseModel):
    """Pydantic model for the attributes of an input field."""

    model_config = ConfigDict(extra="forbid")

    label: str
    description: str | None = None
    placeholder: str | None = None
    value: str | None = None


class TextareaAttributes(InputAttributes):
    """Pydantic model for the attributes of a textarea field."""

    render: str | None = None


class DropdownAttributes(BaseModel):
    """Pydantic model for the attributes of a dropdown field."""

    model_config = ConfigDict(extra="forbid")

    label: str
    description: str | None = None
    options: list[str]
    multiple: bool = False
    default: int | None = None


class CheckboxOption(BaseModel):
    """Pydantic model for one option of a checkboxes field."""

    model_config = ConfigDict(extra="forbid")

    label: str
    required: bool = False


class CheckboxesAttributes(BaseModel):
    """Pydantic model for the attributes of a checkboxes field."""

    model_config = ConfigDict(extra="forbid")

    label: str
    description: str | None = None
    options: list[CheckboxOption]


class MarkdownField(BaseModel):
    """Static text shown on the form. Not user input, never serialized into the issue body."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["markdown"]
    id: str | None = None
    attributes: MarkdownAttributes
    # Accepted here so that the rule set can report it with a dedicated code.
    validations: Validations | None = None

    @property
    def key(self) -> str | None:
        return self.id


class InputField(BaseModel):
    """Single-line text input."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["input"]
    id: str | None = None
    attributes: InputAttributes
    validations: Validations = Field(default_factory=Validations)

    @property
    def key(self) -> str:
        """Answer key for this field: its id, or its label when no id is declared."""
        return self.id or self.attributes.label


class TextareaField(BaseModel):
    """Multi-line text input, optionally rendered as a code block."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["textarea"]
    id: str | None = None
    attributes: TextareaAttributes
    validations: Validations = Field(default_factory=Validations)

    @property
    def key(self) -> str:
        return self.id or self.attributes.label


class DropdownField(BaseModel):
    """Selection from a fixed list of options."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["dropdown"]
    id: str | None = None
    attributes: DropdownAttributes
    validations: Validations = Field(default_factory=Validations)

    @property
    def key(self) -> str:
        return self.id or self.attributes.label

    def option_labels(self) -> list[str]:
        return list(self.attributes.options)


class CheckboxesField(BaseModel):
    """A list of checkboxes, each of which may be individually required."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["checkboxes"]
    id: str | None = None
    attributes: CheckboxesAttributes
    validations: Validations = Field(default_factory=Validations)

    @property
    def key(self) -> str:
        return self.id or self.attributes.label

    def option_labels(self) -> list[str]:
        return [option.label for option in self.attributes.options]


FormField = Annotated[
    Union[MarkdownField, InputField, TextareaField, DropdownField, CheckboxesField],
    Field(discriminator="type"),
]
"""A field of an issue form, discriminated by its `type` key."""

InputFormField = Union[InputField, TextareaField, DropdownField, CheckboxesField]
"""The field kinds that collect user input."""


class IssueTemplate(BaseModel):
    """Pydantic model for a GitHub issue form template."""

    model_config = ConfigDict(extra="forbid")

    name: str
    description: str
    title: str = ""
    labels: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
    assignees: list[str] = Field(default_factory=list)
    type: str | None = None
    body: list[FormField]

    @field_validator("labels", "assignees", "projects", mode="before")
    @classmethod
    def _split_comma_separated(cls, value: Any) -> Any:
        return split_comma_separated(value)

    def input_fields(self) -> list[InputFormField]:
        """Return the fields that collect user input, in declared order."""
        return [field for field in self.body if not isinstance(field, MarkdownField)]

    def field_ids(self) -> list[str]:
        """Return every declared field id, in declared order."""
        return [field.id for field in self.body if field.id is not None]

    def get_field(self, key: str) -> InputFormField | None:
        """Find an input field by its answer key."""
        for field in self.input_fields():
            if field.key == key:
                return field
        return None

    def deduplicated(self) -> "IssueTemplate":
        """Return a copy with repeated labels and assignees dropped."""
        return self.model_copy(update={"labels": deduplicate(self.labels), "assignees": deduplicate(self.assignees)})
