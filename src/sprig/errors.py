"""
Sprig Error Hierarchy
=====================

This module defines the exception hierarchy for the Sprig front end.
All exceptions inherit from SprigError, allowing callers to catch all
Sprig-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
SprigError (base)
├── ConfigError - invalid scanner configuration
├── LexicalError - the scanner could not tokenize the source
│   ├── UnrecognizedOperatorError - operator spelling not in the table
│   ├── MalformedNumberError - bad numeric literal (dots, range)
│   ├── UnterminatedStringError - missing closing quote
│   └── UnrecognizedCharacterError - no scanner claims the character
└── LexicalErrorReport - aggregate report from ErrorCollector

Lexical errors are fatal: the scanner raises at the first malformed
lexeme and never returns a partial token list.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from sprig.tokens import Token


# =============================================================================
# Base Exception Class
# =============================================================================

class SprigError(Exception):
    """
    Base exception for all Sprig errors.

    Callers can catch every front-end failure with a single clause:

        try:
            tokens = tokenize(source, "main.sp")
        except SprigError as e:
            print(f"Error: {e}")
    """
    pass


class ConfigError(SprigError):
    """Invalid scanner configuration (bad option or environment value)."""
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(SprigError):
    """
    Base exception for all scanner errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text of the offending line (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        return self.location.line if self.location else None

    @property
    def column(self) -> Optional[int]:
        return self.location.column if self.location else None

    @classmethod
    def from_token(
        cls,
        token: "Token",
        message: str,
        hint: Optional[str] = None,
    ) -> "LexicalError":
        """
        Build a diagnostic positioned at an existing token.

        This is the reporting hook for consumers of the token stream
        (e.g. a parser) that want the same rendering as scanner errors.
        """
        return cls(
            message,
            location=token.location,
            hint=hint,
            source_line=token.source_line,
        )

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            main.sp:3:9: error: unrecognized character '$'
                let x = $5
                        ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnrecognizedOperatorError(LexicalError):
    """
    Operator spelling that is not in the reserved-word table.

    The operator scanner greedily takes a trailing '=', so spellings
    such as '+=' or '*=' end up here, as do a lone '|' or '&'.
    """

    def __init__(
        self,
        spelling: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.spelling = spelling

        hint = None
        if spelling in ("|", "&"):
            hint = f"did you mean '{spelling}{spelling}'?"

        super().__init__(
            f"unrecognized operator '{spelling}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MalformedNumberError(LexicalError):
    """
    Malformed numeric literal.

    Examples:
        1.      trailing-dot decimals are not allowed
        -.5     leading-dot decimals are not allowed
        99999999999999999999   out of range for the integer width
    """
    pass


class UnterminatedStringError(LexicalError):
    """
    End of input reached before the closing quote of a string literal.

    Strings may span lines, so the error is only raised at end of input
    and is positioned at the opening quote.
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class UnrecognizedCharacterError(LexicalError):
    """Character that no sub-scanner accepts."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            message or f"unrecognized character {char!r} (0x{ord(char):02X})",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class LexicalErrorReport(SprigError):
    """
    Aggregate of lexical errors from several buffers.

    The message is the pre-formatted report from ErrorCollector.
    """

    def __init__(self, report: str, errors: List[LexicalError]):
        self.errors = errors
        super().__init__(report)


# =============================================================================
# Error Collection (for multi-buffer reporting)
# =============================================================================

class ErrorCollector:
    """
    Collects lexical errors across several buffers for batch reporting.

    Each buffer still stops at its first error; the collector lets a
    caller scan many files and report every failure in one go.

    Example:
        collector = ErrorCollector()

        for name, text in sources:
            try:
                tokenize(text, name)
            except LexicalError as e:
                collector.add(e)
                if collector.should_stop():
                    break

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        self.errors: List[LexicalError] = []
        self.max_errors = max_errors

    def add(self, error: LexicalError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def should_stop(self) -> bool:
        """Return True if max_errors has been reached."""
        return len(self.errors) >= self.max_errors

    def report(self) -> str:
        """Format all errors for display, followed by a summary line."""
        lines = []
        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")
        return "\n".join(lines)

    def raise_if_errors(self) -> None:
        """Raise a LexicalErrorReport if any errors were collected."""
        if self.has_errors():
            raise LexicalErrorReport(self.report(), list(self.errors))
