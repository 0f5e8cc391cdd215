"""Pydantic schema for the issue template chooser configuration (ISSUE_TEMPLATE/config.yml)."""

from pydantic import BaseModel, ConfigDict, Field


class ContactLinkModel(BaseModel):
    """Pydantic model for an external link shown in the issue template chooser."""

    model_config = ConfigDict(extra="forbid")

    name: str
    url: str
    about: str


class TemplateChooserConfigModel(BaseModel):
    """Pydantic model for the issue template chooser configuration."""

    model_config = ConfigDict(extra="forbid")

    blank_issues_enabled: bool = True
    contact_links: list[ContactLinkModel] = Field(default_factory=list)
