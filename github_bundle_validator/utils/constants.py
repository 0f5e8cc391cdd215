"""Shared constants used across the application."""

# This file is intended to hold shared constants.

import re

# Bundle Layout Constants
# -----------------------

DEFAULT_BUNDLE_ROOT = ".github"
"""Default configuration root that holds a bundle in a consuming project."""

INSTRUCTIONS_DIRECTORY = "instructions"
CHAT_MODES_DIRECTORY = "chatmodes"
PROMPTS_DIRECTORY = "prompts"
ISSUE_TEMPLATE_DIRECTORY = "ISSUE_TEMPLATE"

INSTRUCTION_FILE_SUFFIX = ".instructions.md"
CHAT_MODE_FILE_SUFFIX = ".chatmode.md"
PROMPT_FILE_SUFFIX = ".prompt.md"
ISSUE_TEMPLATE_EXTENSIONS = (".yml", ".yaml")

TEMPLATE_CONFIG_FILENAMES = ("config.yml", "config.yaml")
"""Issue template chooser configuration; not an issue form itself."""

# Issue Form Constants
# --------------------

FIELD_TYPES = ("markdown", "input", "textarea", "dropdown", "checkboxes")
"""Field kinds recognized in the body of an issue form."""

FIELD_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
"""Field ids may only contain alphanumeric characters, '-' and '_'."""

PROJECT_REFERENCE_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*/\d+")
"""Project references look like 'octo-org/1'."""

NO_RESPONSE_PLACEHOLDER = "_No response_"
"""Text rendered in the issue body for a field left blank."""

# Front Matter Constants
# ----------------------

FRONT_MATTER_DELIMITER = "---"
