"""Bundle discovery, instruction matching and installation."""

from .discovery import Bundle, discover_bundle
from .install import InstallResult, install_bundle
from .matching import applies_to, select_instructions

__all__ = [
    "Bundle",
    "discover_bundle",
    "InstallResult",
    "install_bundle",
    "applies_to",
    "select_instructions",
]
