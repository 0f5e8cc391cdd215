"""Utilities for parsing applyTo glob lists and matching file paths against them.

Patterns are matched against '/'-separated paths relative to the workspace
root. Supported syntax:

- ``*`` matches any run of characters within one path segment.
- ``**`` as a whole segment matches any number of segments, including none.
- ``?`` matches one character other than '/'.
- ``[...]`` matches a character class; ``[!...]`` or ``[^...]`` negates it.
- ``{a,b}`` matches either alternative. Alternatives may nest.
"""

import re
from functools import lru_cache

from github_bundle_validator.utils.exceptions import ApplyToSyntaxError


def split_glob_list(value: str) -> list[str]:
    """Split a comma-separated glob list on commas outside of {...} groups and [...] classes."""
    patterns: list[str] = []
    depth = 0
    in_class = False
    current: list[str] = []
    for char in value:
        if in_class:
            # Commas and braces are literal inside a class.
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
        elif char == "{":
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
        elif char == "," and depth == 0:
            patterns.append("".join(current))
            current = []
            continue
        current.append(char)
    patterns.append("".join(current))
    return patterns


def parse_apply_to(value: str) -> list[str]:
    """Parse an applyTo front matter value into a list of glob patterns.

    Args:
        value: The raw applyTo string, e.g. "**/*.py, docs/**/*.md".

    Returns:
        The stripped glob patterns, in declaration order.

    Raises:
        ApplyToSyntaxError: If the list has an empty entry or any pattern is malformed.
    """
    if not value.strip():
        raise ApplyToSyntaxError(value, "value is empty")

    patterns: list[str] = []
    for raw_pattern in split_glob_list(value):
        pattern = raw_pattern.strip()
        if not pattern:
            raise ApplyToSyntaxError(value, "list contains an empty pattern")
        try:
            compile_glob(pattern)
        except ApplyToSyntaxError as exc:
            raise ApplyToSyntaxError(value, f"pattern '{pattern}' {exc.reason}") from exc
        patterns.append(pattern)
    return patterns


def _translate_character_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the [...] class opening at `start`; returns the regex and the index after ']'."""
    index = start + 1
    negated = index < len(pattern) and pattern[index] in "!^"
    if negated:
        index += 1
    content_start = index
    while index < len(pattern) and pattern[index] != "]":
        index += 1
    if index >= len(pattern):
        raise ApplyToSyntaxError(pattern, "has an unterminated character class")
    content = pattern[content_start:index]
    if not content:
        raise ApplyToSyntaxError(pattern, "has an empty character class")
    content = content.replace("\\", "\\\\")
    return f"[{'^/' if negated else ''}{content}]", index + 1


def _translate(pattern: str) -> str:
    parts: list[str] = []
    depth = 0
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "*":
            segment_start = index == 0 or pattern[index - 1] == "/"
            if pattern.startswith("**", index):
                after = index + 2
                if segment_start and after == length:
                    parts.append(".*")
                    index = after
                    continue
                if segment_start and pattern[after] == "/":
                    parts.append("(?:.*/)?")
                    index = after + 1
                    continue
                index = after
            else:
                index += 1
            parts.append("[^/]*")
            continue
        if char == "?":
            parts.append("[^/]")
        elif char == "[":
            regex, index = _translate_character_class(pattern, index)
            parts.append(regex)
            continue
        elif char == "]":
            raise ApplyToSyntaxError(pattern, "has an unmatched ']'")
        elif char == "{":
            depth += 1
            parts.append("(?:")
        elif char == "}":
            if depth == 0:
                raise ApplyToSyntaxError(pattern, "has an unmatched '}'")
            depth -= 1
            parts.append(")")
        elif char == "," and depth > 0:
            parts.append("|")
        else:
            parts.append(re.escape(char))
        index += 1
    if depth:
        raise ApplyToSyntaxError(pattern, "has an unterminated '{' group")
    return "".join(parts)


@lru_cache(maxsize=512)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a single glob pattern into a regular expression matching whole paths."""
    return re.compile(rf"(?s:{_translate(normalize_path(pattern))})\Z")


def normalize_path(path: str) -> str:
    """Normalize a path for matching: '/' separators and no leading './'."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def glob_matches(pattern: str, path: str) -> bool:
    """Return True if `path` matches the glob `pattern`."""
    return compile_glob(pattern).match(normalize_path(path)) is not None
