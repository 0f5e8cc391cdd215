"""Contains utility functions for splitting YAML front matter from Markdown documents."""

from typing import Any

from ruamel.yaml.error import YAMLError

from github_bundle_validator.utils.constants import FRONT_MATTER_DELIMITER
from github_bundle_validator.utils.exceptions import FrontMatterError
from github_bundle_validator.utils.yaml import load_yaml_string


def has_front_matter(text: str) -> bool:
    """Returns True if the document opens with a front matter delimiter line."""
    first_line = text.lstrip("\ufeff").split("\n", 1)[0]
    return first_line.rstrip() == FRONT_MATTER_DELIMITER


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a Markdown document into its front matter mapping and its body.

    A document without a leading '---' line has no front matter; the whole
    text is returned as the body with empty metadata. The body is returned
    verbatim and is never parsed further.

    Args:
        text: The full contents of the Markdown document.

    Returns:
        A tuple of (metadata, body).

    Raises:
        FrontMatterError: If the block is unterminated, is not valid YAML, or
            does not hold a mapping.
    """
    text = text.lstrip("\ufeff")
    if not has_front_matter(text):
        return {}, text

    lines = text.splitlines(keepends=True)
    for index in range(1, len(lines)):
        if lines[index].rstrip() == FRONT_MATTER_DELIMITER:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        raise FrontMatterError("Front matter block is not terminated by a '---' line")

    try:
        metadata = load_yaml_string(block)
    except YAMLError as exc:
        raise FrontMatterError(f"Front matter is not valid YAML: {exc}") from exc

    if metadata is None:
        return {}, body
    if not isinstance(metadata, dict):
        raise FrontMatterError(f"Front matter must be a mapping, got {type(metadata).__name__}")
    return metadata, body
