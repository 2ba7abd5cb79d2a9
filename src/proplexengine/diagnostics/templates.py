"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This solves EM101/EM102 violations while providing:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # =========================================================================
    # SCANNER ERRORS (3000-3999)
    # =========================================================================

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Unexpected end of input.

        Args:
            position: The position where EOF was encountered

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            hint="Check Cursor.is_eof before reading Cursor.current",
        )

    # =========================================================================
    # SERIALIZATION ERRORS (6000-6999)
    # =========================================================================

    @staticmethod
    def line_entry_invalid(index: int, received: object) -> Diagnostic:
        """A stringify line entry has no .properties rendering.

        Args:
            index: Position of the entry in the input sequence
            received: The offending entry

        Returns:
            Diagnostic for LINE_ENTRY_INVALID
        """
        msg = f"Line {index} is not a comment, blank or pair"
        return Diagnostic(
            code=DiagnosticCode.LINE_ENTRY_INVALID,
            message=msg,
            key_path=f"line {index}",
            received_type=type(received).__name__,
            hint="Use a string, a (key, value) pair or a line record",
        )

    @staticmethod
    def tree_value_invalid(key_path: str, received: object) -> Diagnostic:
        """A tree leaf is a sequence or set instead of a scalar.

        Args:
            key_path: Flattened key at which the value was found
            received: The offending value

        Returns:
            Diagnostic for TREE_VALUE_INVALID
        """
        msg = f"Value at '{key_path}' cannot be written as a property"
        return Diagnostic(
            code=DiagnosticCode.TREE_VALUE_INVALID,
            message=msg,
            key_path=key_path,
            received_type=type(received).__name__,
            hint="Tree values must be strings, scalars or nested mappings",
        )

    @staticmethod
    def tree_cycle(key_path: str) -> Diagnostic:
        """A mapping in the tree contains itself.

        Args:
            key_path: Flattened key of the mapping that closes the cycle

        Returns:
            Diagnostic for TREE_CYCLE
        """
        msg = f"Mapping at '{key_path}' contains itself"
        return Diagnostic(
            code=DiagnosticCode.TREE_CYCLE,
            message=msg,
            key_path=key_path,
            hint="Break the reference cycle before calling stringify()",
        )
