"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_BUNDLE_ROOT,
    FIELD_TYPES,
    NO_RESPONSE_PLACEHOLDER,
)
from .frontmatter import parse_front_matter
from .globs import glob_matches, parse_apply_to

__all__ = [
    "DEFAULT_BUNDLE_ROOT",
    "FIELD_TYPES",
    "NO_RESPONSE_PLACEHOLDER",
    "parse_front_matter",
    "parse_apply_to",
    "glob_matches",
]
