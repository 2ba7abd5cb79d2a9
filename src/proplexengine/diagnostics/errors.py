"""PropLexEngine exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class PropertiesError(Exception):
    """Base exception for all PropLexEngine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize PropertiesError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class SerializationValidationError(PropertiesError, ValueError):
    """Raised when stringify input cannot be written as .properties text.

    Parsing never raises: every string has a defined result. Serialization
    rejects input that has no .properties rendering:
    - Line entries that are neither text, a (key, value) pair nor a record
    - Tree values that are sequences or sets
    - Mappings that contain themselves
    """
