"""
Exception hierarchy for the note compiler.

Compiling HTML never raises: malformed input degrades to empty or partial
structures. These exceptions cover the configuration layer only.
"""

from typing import Any, Optional


class NoteCompilerError(Exception):
    """Base exception for note compiler errors.

    Attributes:
        message: Human-readable error message
        context: Additional context about the error
    """

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}: {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base += f" (context: {context_str})"
        return base


class ConfigError(NoteCompilerError):
    """Raised when a configuration file cannot be read or applied."""
    pass
