"""Exceptions raised by the low-level parsing utilities."""


class FrontMatterError(Exception):
    """Raised when a Markdown document's front matter block cannot be parsed."""

    pass


class ApplyToSyntaxError(ValueError):
    """Raised when an applyTo value is not a valid comma-separated glob list."""

    def __init__(self, value: str, reason: str) -> None:
        """Initializes the exception with the offending value and the reason it was rejected."""
        super().__init__(f"Invalid applyTo value '{value}': {reason}")
        self.value = value
        self.reason = reason
