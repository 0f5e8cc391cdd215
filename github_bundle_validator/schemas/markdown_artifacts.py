"""Pydantic schemas for the front matter of instruction, chat-mode and prompt files."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from github_bundle_validator.utils.globs import parse_apply_to


class PromptMode(str, Enum):
    """Enum for the assistant modes a prompt file can run in."""

    ASK = "ask"
    EDIT = "edit"
    AGENT = "agent"


class InstructionFrontMatter(BaseModel):
    """Front matter of an instruction file."""

    model_config = ConfigDict(extra="ignore")

    description: str | None = None
    apply_to: str | None = Field(default=None, alias="applyTo")


class ChatModeFrontMatter(BaseModel):
    """Front matter of a chat-mode file."""

    model_config = ConfigDict(extra="ignore")

    description: str
    tools: list[str] | None = None
    model: str | None = None


class PromptFrontMatter(BaseModel):
    """Front matter of a prompt file."""

    model_config = ConfigDict(extra="ignore")

    description: str
    mode: PromptMode | None = None
    tools: list[str] | None = None
    model: str | None = None


class InstructionFile(BaseModel):
    """A loaded instruction file. The body is opaque text handed to the assistant as-is."""

    path: Path
    front_matter: InstructionFrontMatter
    body: str

    @property
    def patterns(self) -> list[str]:
        """The applyTo glob patterns; empty when the file is only attached manually."""
        if self.front_matter.apply_to is None:
            return []
        return parse_apply_to(self.front_matter.apply_to)


def known_front_matter_keys(model: type[BaseModel]) -> set[str]:
    """Return the front matter keys a model recognizes, using aliases where declared."""
    return {field.alias or name for name, field in model.model_fields.items()}
