"""Pydantic schema for an issue produced by submitting an issue form."""

from pydantic import BaseModel


class IssueModel(BaseModel):
    """Pydantic model for a GitHub issue created from an issue form."""

    title: str
    body: str
    labels: list[str] | None = None
    assignees: list[str] | None = None
    projects: list[str] | None = None
    type: str | None = None
