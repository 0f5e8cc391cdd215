"""Selects the instruction files whose applyTo globs match an edited file."""

from pathlib import PurePath

import structlog
from structlog.stdlib import BoundLogger

from github_bundle_validator.bundle.discovery import Bundle
from github_bundle_validator.schemas.markdown_artifacts import InstructionFile
from github_bundle_validator.utils.globs import glob_matches
from github_bundle_validator.validation.exceptions import InstructionFileValidationError
from github_bundle_validator.validation.markdown_artifacts import load_instruction_file

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


def applies_to(instruction: InstructionFile, path: PurePath | str) -> bool:
    """Return True if any of the instruction's applyTo patterns matches the path.

    Files without applyTo are only attached manually and never match.
    """
    path_string = PurePath(path).as_posix()
    return any(glob_matches(pattern, path_string) for pattern in instruction.patterns)


def load_instruction_files(bundle: Bundle) -> list[InstructionFile]:
    """Load every valid instruction file of a bundle, skipping and logging invalid ones."""
    instructions: list[InstructionFile] = []
    for path in bundle.instructions:
        try:
            instructions.append(load_instruction_file(path))
        except InstructionFileValidationError as exc:
            logger.warning(
                "Skipping invalid instruction file",
                path=str(path),
                errors=[issue.format() for issue in exc.report.errors],
            )
    return instructions


def select_instructions(bundle: Bundle, path: PurePath | str) -> list[InstructionFile]:
    """Return the instruction files that apply to a workspace-relative file path, sorted by file path."""
    selected = [instruction for instruction in load_instruction_files(bundle) if applies_to(instruction, path)]
    logger.debug("Selected instruction files", path=str(path), selected=[instruction.path.name for instruction in selected])
    return selected
