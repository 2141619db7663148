"""
Custom exception classes for python_doc_a11y package.

Accessibility defects found in a document are never raised; they are
reported as result records. These exceptions cover the edges of the
library: loading a document from disk and reading configuration.
"""

from pathlib import Path


class DocA11yError(Exception):
    """Base exception for all python_doc_a11y errors."""

    pass


class DocumentLoadError(DocA11yError):
    """Raised when a document source cannot be read or recognized.

    Attributes:
        path: The path that was being loaded (None for in-memory sources)
        reason: Why loading failed
    """

    def __init__(self, reason: str, path: str | Path | None = None) -> None:
        self.path = path
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with the offending path, if any."""
        if self.path is None:
            return f"Could not load document: {self.reason}"
        return f"Could not load document '{self.path}': {self.reason}"


class ConfigError(DocA11yError):
    """Raised when a configuration file is malformed.

    Attributes:
        errors: List of specific problems found (optional)
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        if self.errors:
            msg += "\n" + "\n".join(f"  • {error}" for error in self.errors)
        return msg
