"""Validation rules for instruction, chat-mode and prompt files.

These files are Markdown documents with an optional YAML front matter block.
Only the front matter is checked; the body is opaque text.
"""

from pathlib import Path

import structlog
from pydantic import BaseModel, ValidationError
from structlog.stdlib import BoundLogger

from github_bundle_validator.schemas.markdown_artifacts import (
    ChatModeFrontMatter,
    InstructionFile,
    InstructionFrontMatter,
    PromptFrontMatter,
    known_front_matter_keys,
)
from github_bundle_validator.utils.exceptions import ApplyToSyntaxError, FrontMatterError
from github_bundle_validator.utils.frontmatter import has_front_matter, parse_front_matter
from github_bundle_validator.utils.globs import parse_apply_to
from github_bundle_validator.validation.exceptions import InstructionFileValidationError
from github_bundle_validator.validation.models import (
    ArtifactKind,
    ProblemCode,
    Severity,
    ValidationReport,
    add_pydantic_errors,
)

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore

FRONT_MATTER_MODELS: dict[ArtifactKind, type[BaseModel]] = {
    ArtifactKind.INSTRUCTION: InstructionFrontMatter,
    ArtifactKind.CHAT_MODE: ChatModeFrontMatter,
    ArtifactKind.PROMPT: PromptFrontMatter,
}


def check_markdown_artifact(text: str, kind: ArtifactKind, report: ValidationReport) -> tuple[BaseModel | None, str]:
    """Check the front matter of a Markdown artifact and return its parsed model and body.

    Args:
        text: The full document text.
        kind: Which of the three Markdown artifact kinds the document is.
        report: Report that collects every problem found.

    Returns:
        Tuple of (front matter model or None if it could not be parsed, body text).
    """
    model = FRONT_MATTER_MODELS[kind]

    if not has_front_matter(text):
        # Instruction files can still be attached by hand, so only warn for them.
        severity = Severity.WARNING if kind is ArtifactKind.INSTRUCTION else Severity.ERROR
        report.add(ProblemCode.MISSING_FRONT_MATTER, "Document has no front matter block", severity=severity)

    try:
        metadata, body = parse_front_matter(text)
    except FrontMatterError as exc:
        report.add(ProblemCode.MALFORMED_FRONT_MATTER, str(exc))
        return None, text

    if not body.strip():
        report.add(ProblemCode.EMPTY_BODY, "Document body is empty", severity=Severity.WARNING)

    unknown_keys = sorted(str(key) for key in set(metadata) - known_front_matter_keys(model))
    for key in unknown_keys:
        logger.warning("Unrecognized front matter key will be ignored", path=str(report.path), key=key)
        report.add(ProblemCode.UNKNOWN_KEY, f"Unrecognized front matter key '{key}' will be ignored", severity=Severity.WARNING, location=key)

    if not metadata and kind is not ArtifactKind.INSTRUCTION:
        if has_front_matter(text):
            report.add(ProblemCode.EMPTY_DESCRIPTION, "Front matter must declare a description", location="description")
        return None, body

    try:
        front_matter = model.model_validate(metadata)
    except ValidationError as ve:
        add_pydantic_errors(report, ve.errors())  # type: ignore[arg-type]
        return None, body

    description = getattr(front_matter, "description", None)
    if description is not None and not description.strip():
        report.add(ProblemCode.EMPTY_DESCRIPTION, "Description must not be empty", location="description")

    if isinstance(front_matter, InstructionFrontMatter) and front_matter.apply_to is not None:
        try:
            parse_apply_to(front_matter.apply_to)
        except ApplyToSyntaxError as exc:
            report.add(ProblemCode.INVALID_APPLY_TO, str(exc), location="applyTo")

    return front_matter, body


def read_markdown_text(path: Path, report: ValidationReport) -> str | None:
    """Read a Markdown artifact as UTF-8, recording a problem if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read Markdown file", path=str(path), error=str(exc))
        report.add(ProblemCode.MALFORMED_FRONT_MATTER, f"Document could not be read as UTF-8 text: {exc}")
        return None


def validate_markdown_artifact(path: Path, kind: ArtifactKind) -> ValidationReport:
    """Read and validate an instruction, chat-mode or prompt file."""
    report = ValidationReport(path=path, kind=kind)
    text = read_markdown_text(path, report)
    if text is not None:
        check_markdown_artifact(text, kind, report)
    return report


def load_instruction_file(path: Path) -> InstructionFile:
    """Load an instruction file, failing if its front matter has errors.

    Raises:
        InstructionFileValidationError: Carrying every problem found in the file.
    """
    report = ValidationReport(path=path, kind=ArtifactKind.INSTRUCTION)
    text = read_markdown_text(path, report)
    if text is None:
        raise InstructionFileValidationError(report)
    front_matter, body = check_markdown_artifact(text, ArtifactKind.INSTRUCTION, report)
    if not isinstance(front_matter, InstructionFrontMatter) or not report.ok:
        raise InstructionFileValidationError(report)
    return InstructionFile(path=path, front_matter=front_matter, body=body)
