"""Finds the instruction, chat-mode, prompt and issue-template files under a configuration root."""

from dataclasses import dataclass, field
from pathlib import Path

import structlog
from structlog.stdlib import BoundLogger

from github_bundle_validator.utils.constants import (
    CHAT_MODE_FILE_SUFFIX,
    CHAT_MODES_DIRECTORY,
    INSTRUCTION_FILE_SUFFIX,
    INSTRUCTIONS_DIRECTORY,
    ISSUE_TEMPLATE_DIRECTORY,
    ISSUE_TEMPLATE_EXTENSIONS,
    PROMPT_FILE_SUFFIX,
    PROMPTS_DIRECTORY,
    TEMPLATE_CONFIG_FILENAMES,
)
from github_bundle_validator.validation.models import ArtifactKind

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore

MARKDOWN_KIND_LAYOUT: dict[ArtifactKind, tuple[str, str]] = {
    ArtifactKind.INSTRUCTION: (INSTRUCTIONS_DIRECTORY, INSTRUCTION_FILE_SUFFIX),
    ArtifactKind.CHAT_MODE: (CHAT_MODES_DIRECTORY, CHAT_MODE_FILE_SUFFIX),
    ArtifactKind.PROMPT: (PROMPTS_DIRECTORY, PROMPT_FILE_SUFFIX),
}


@dataclass
class Bundle:
    """The artifacts found under one configuration root, grouped by kind and sorted by path."""

    root: Path
    instructions: list[Path] = field(default_factory=list)
    chat_modes: list[Path] = field(default_factory=list)
    prompts: list[Path] = field(default_factory=list)
    issue_templates: list[Path] = field(default_factory=list)
    template_config: Path | None = None
    unexpected: list[Path] = field(default_factory=list)

    def artifacts(self) -> list[tuple[ArtifactKind, Path]]:
        """Return every recognized artifact with its kind."""
        artifacts: list[tuple[ArtifactKind, Path]] = []
        artifacts.extend((ArtifactKind.INSTRUCTION, path) for path in self.instructions)
        artifacts.extend((ArtifactKind.CHAT_MODE, path) for path in self.chat_modes)
        artifacts.extend((ArtifactKind.PROMPT, path) for path in self.prompts)
        artifacts.extend((ArtifactKind.ISSUE_TEMPLATE, path) for path in self.issue_templates)
        if self.template_config is not None:
            artifacts.append((ArtifactKind.TEMPLATE_CONFIG, self.template_config))
        return artifacts

    def relative(self, path: Path) -> Path:
        """Return a path relative to the bundle root."""
        return path.relative_to(self.root)


def _discover_markdown(root: Path, kind: ArtifactKind, bundle: Bundle) -> list[Path]:
    directory_name, suffix = MARKDOWN_KIND_LAYOUT[kind]
    directory = root / directory_name
    if not directory.is_dir():
        return []
    found: list[Path] = []
    for path in sorted(directory.glob("*.md")):
        if path.name.endswith(suffix):
            found.append(path)
        else:
            logger.warning("Markdown file does not follow the naming convention", path=str(path), expected_suffix=suffix)
            bundle.unexpected.append(path)
    return found


def _discover_issue_templates(root: Path, bundle: Bundle) -> None:
    directory = root / ISSUE_TEMPLATE_DIRECTORY
    if not directory.is_dir():
        return
    yaml_files: list[Path] = []
    for extension in ISSUE_TEMPLATE_EXTENSIONS:
        yaml_files.extend(directory.glob(f"*{extension}"))
    for path in sorted(yaml_files):
        if path.name in TEMPLATE_CONFIG_FILENAMES:
            bundle.template_config = path
        else:
            bundle.issue_templates.append(path)


def discover_bundle(root: Path) -> Bundle:
    """Discover every artifact of a bundle.

    Args:
        root: The configuration root, e.g. a project's .github directory.

    Raises:
        FileNotFoundError: If the root doesn't exist.
        ValueError: If the root is not a directory.
    """
    if not root.exists():
        raise FileNotFoundError(f"Bundle root not found: {root.absolute()}")

    if not root.is_dir():
        raise ValueError(f"Bundle root is not a directory: {root.absolute()}")

    bundle = Bundle(root=root)
    bundle.instructions = _discover_markdown(root, ArtifactKind.INSTRUCTION, bundle)
    bundle.chat_modes = _discover_markdown(root, ArtifactKind.CHAT_MODE, bundle)
    bundle.prompts = _discover_markdown(root, ArtifactKind.PROMPT, bundle)
    _discover_issue_templates(root, bundle)

    logger.info(
        "Discovered bundle",
        root=str(root),
        instructions=len(bundle.instructions),
        chat_modes=len(bundle.chat_modes),
        prompts=len(bundle.prompts),
        issue_templates=len(bundle.issue_templates),
    )
    return bundle
