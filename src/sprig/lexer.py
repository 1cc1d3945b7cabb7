"""
Sprig Lexer (Scanner)
=====================

This module implements the lexical analysis stage of the Sprig front
end. It converts a source text buffer into a list of tokens for the
parser, terminated by a single end-of-stream (EOF) token.

Dispatch
--------
The scanner looks at the current character (and at most one character
of lookahead) to pick a sub-scanner. First match wins:

| Start                     | Sub-scanner              |
|---------------------------|--------------------------|
| letter or _               | identifier / keyword     |
| -> / -digit / -.          | punctuation / number     |
| one of OPERATOR_CHARS     | operator                 |
| digit                     | number                   |
| "                         | string                   |
| \\r or \\n                | end of line              |
| #                         | comment (no token)       |
| anything else             | punctuation              |

Line Sensitivity
----------------
Newlines are tokens, not whitespace: each line terminator ('\\n' or
'\\r\\n') produces one EOL token, so blank lines each yield their own.
A comment swallows the rest of its line including the terminator.

Negative Numbers
----------------
A '-' immediately followed by a digit is folded into the literal, so
"-5" is a single INT_LITERAL with value -5. In every other position
'-' is the MINUS operator and the parser decides whether it is unary
or binary.

Example Usage
-------------
>>> from sprig.lexer import tokenize
>>> for token in tokenize("let x = -3.14"):
...     print(token)
Token(LET, 'let', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(ASSIGN, '=', 1:7)
Token(FLOAT_LITERAL, -3.14, 1:9)
Token(EOF, 1:14)
"""

from typing import List, NamedTuple, Optional
import logging
import math
import string

from sprig.config import ScannerOptions
from sprig.errors import (
    LexicalError,
    MalformedNumberError,
    SourceLocation,
    UnrecognizedCharacterError,
    UnrecognizedOperatorError,
    UnterminatedStringError,
)
from sprig.tokens import RESERVED, Token, TokenKind, line_at

logger = logging.getLogger(__name__)


# =============================================================================
# Character Classification
# =============================================================================

# Returned by the cursor primitives past the end of the buffer.
END = ""

IDENT_START = string.ascii_letters + "_"
IDENT_CHARS = string.ascii_letters + string.digits + "_"
DIGITS = string.digits
OPERATOR_CHARS = "=+-*/^<>!|&"
WHITESPACE = " \t"
LINE_TERMINATORS = "\r\n"


def is_alpha(char: str) -> bool:
    return char != END and char in IDENT_START


def is_alphanumeric(char: str) -> bool:
    return char != END and char in IDENT_CHARS


def is_digit(char: str) -> bool:
    return char != END and char in DIGITS


def is_operator_char(char: str) -> bool:
    return char != END and char in OPERATOR_CHARS


def is_whitespace(char: str) -> bool:
    return char != END and char in WHITESPACE


def is_line_terminator(char: str) -> bool:
    return char != END and char in LINE_TERMINATORS


class _Mark(NamedTuple):
    """Cursor snapshot taken at the first character of a token."""
    pos: int
    line: int
    column: int


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes Sprig source code.

    A Scanner is built for one buffer, driven to completion by a single
    tokenize() call, and then discarded. Scanning stops at the first
    malformed lexeme with a LexicalError subclass.

    Usage:
        scanner = Scanner(source_text, "main.sp")
        tokens = scanner.tokenize()

    Attributes:
        source: The source code being tokenized (never modified)
        filename: Name of the source file (for error reporting)
        options: ScannerOptions in effect
    """

    def __init__(
        self,
        source: str,
        filename: Optional[str] = None,
        options: Optional[ScannerOptions] = None,
    ):
        """
        Initialize the scanner with source code.

        Args:
            source: The Sprig source code to tokenize
            filename: Name of the source file; overrides options.filename
            options: Scanner configuration (uses defaults if None)
        """
        self.options = options or ScannerOptions()
        self.source = source
        self.filename = filename if filename is not None else self.options.filename

        # Cursor
        self._pos = 0
        self._line = 1
        self._column = 1

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    @property
    def offset(self) -> int:
        return self._pos

    def tokenize(self) -> List[Token]:
        """
        Scan the whole buffer.

        Returns:
            Tokens in source order, ending with exactly one EOF token

        Raises:
            LexicalError: At the first malformed lexeme
        """
        tokens: List[Token] = []

        self.skip_whitespace()
        while not self.at_end():
            token = self._scan_token()
            if token is not None:
                tokens.append(token)
            self.skip_whitespace()

        tokens.append(self._make_token(TokenKind.EOF, self._mark()))

        logger.debug(
            f"Tokenized {self.filename}: {len(tokens)} tokens, {self._line} lines"
        )
        return tokens

    # =========================================================================
    # Cursor Primitives
    # =========================================================================

    def at_end(self) -> bool:
        """Check if the whole buffer has been consumed."""
        return self._pos >= len(self.source)

    def current(self) -> str:
        """Return the character at the cursor, or END past the buffer."""
        if self.at_end():
            return END
        return self.source[self._pos]

    def peek(self, offset: int = 1) -> str:
        """
        Look at the character `offset` positions ahead without advancing.

        Returns END if that position is outside the buffer.
        """
        pos = self._pos + offset
        if pos < 0 or pos >= len(self.source):
            return END
        return self.source[pos]

    def advance(self) -> str:
        """
        Consume and return the current character.

        Updates line and column: '\\n' ends a line, so does the '\\n' of
        a '\\r\\n' pair. A lone '\\r' ends a line only when the options
        allow it.
        """
        if self.at_end():
            return END

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n" or (
            char == "\r"
            and self.current() != "\n"
            and self.options.lone_cr_is_newline
        ):
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def skip_whitespace(self) -> None:
        """Skip spaces and tabs. Newlines are tokens and are kept."""
        while is_whitespace(self.current()):
            self.advance()

    # =========================================================================
    # Token Creation and Errors
    # =========================================================================

    def _mark(self) -> _Mark:
        return _Mark(self._pos, self._line, self._column)

    def _make_token(
        self,
        kind: TokenKind,
        start: _Mark,
        int_value: Optional[int] = None,
        float_value: Optional[float] = None,
    ) -> Token:
        """Create a token spanning from `start` to the cursor."""
        return Token(
            kind=kind,
            lexeme=self.source[start.pos:self._pos],
            line=start.line,
            column=start.column,
            offset=start.pos,
            int_value=int_value,
            float_value=float_value,
            filename=self.filename,
            source=self.source,
        )

    def _location(self, start: _Mark) -> SourceLocation:
        return SourceLocation(self.filename, start.line, start.column)

    def _source_line(self, start: _Mark) -> str:
        return line_at(self.source, start.pos, self.options.lone_cr_is_newline)

    def _fail(self, error: LexicalError) -> LexicalError:
        """Log a lexical error; the caller raises it."""
        logger.debug(f"{error.location}: lexical error: {error.message}")
        return error

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _scan_token(self) -> Optional[Token]:
        """
        Scan the next token from the cursor.

        Returns:
            The next Token, or None when a comment was skipped
        """
        start = self._mark()
        char = self.current()

        if is_alpha(char):
            return self._scan_identifier(start)

        # '-' is '->', a number sign, or the MINUS operator
        if char == "-":
            next_char = self.peek(1)
            if next_char == ">":
                return self._scan_punctuation(start)
            if is_digit(next_char) or next_char == ".":
                return self._scan_number(start)
            return self._scan_operator(start)

        if is_operator_char(char):
            return self._scan_operator(start)

        if is_digit(char):
            return self._scan_number(start)

        if char == '"':
            return self._scan_string(start)

        if is_line_terminator(char):
            return self._scan_end_of_line(start)

        if char == "#":
            self._skip_comment()
            return None

        return self._scan_punctuation(start)

    # =========================================================================
    # Sub-scanners
    # =========================================================================

    def _scan_identifier(self, start: _Mark) -> Token:
        """
        Scan an identifier or keyword.

        Identifiers start with a letter or underscore and continue with
        letters, digits and underscores. Reserved spellings become
        keyword tokens.
        """
        while is_alphanumeric(self.current()):
            self.advance()

        name = self.source[start.pos:self._pos]
        return self._make_token(RESERVED.get(name, TokenKind.IDENTIFIER), start)

    def _scan_operator(self, start: _Mark) -> Token:
        """
        Scan a one- or two-character operator.

        A trailing '=' is always taken (==, !=, <=, >=); '|' and '&'
        pair with themselves (||, &&). Spellings outside the reserved
        table are errors, not split into smaller operators.
        """
        char = self.advance()
        if char in "|&" and self.current() == char:
            self.advance()
        elif self.current() == "=":
            self.advance()

        spelling = self.source[start.pos:self._pos]
        kind = RESERVED.get(spelling)
        if kind is None:
            raise self._fail(UnrecognizedOperatorError(
                spelling,
                self._location(start),
                self._source_line(start),
            ))

        return self._make_token(kind, start)

    def _scan_digits(self) -> int:
        """Consume a run of digits and return how many were taken."""
        count = 0
        while is_digit(self.current()):
            self.advance()
            count += 1
        return count

    def _scan_number(self, start: _Mark) -> Token:
        """
        Scan an int or float literal with an optional leading '-'.

        Grammar: ['-'] digit+ ['.' digit+]

        The sign is part of the lexeme and of the value.
        """
        if self.current() == "-":
            self.advance()

        int_digits = self._scan_digits()
        is_float = False

        if self.current() == ".":
            if not is_digit(self.peek(1)):
                raise self._fail(MalformedNumberError(
                    "trailing-dot decimals not allowed",
                    self._location(start),
                    hint="add digits after the decimal point, e.g. '1.0'",
                    source_line=self._source_line(start),
                ))
            if int_digits == 0:
                raise self._fail(MalformedNumberError(
                    "leading-dot decimals not allowed",
                    self._location(start),
                    hint="add digits before the decimal point, e.g. '0.5'",
                    source_line=self._source_line(start),
                ))
            self.advance()  # consume '.'
            self._scan_digits()
            is_float = True

        text = self.source[start.pos:self._pos]
        shown = text if len(text) <= 20 else f"{text[:20]}..."

        if is_float:
            value = float(text)
            if not math.isfinite(value):
                raise self._fail(MalformedNumberError(
                    f"float literal '{shown}' out of range",
                    self._location(start),
                    source_line=self._source_line(start),
                ))
            return self._make_token(TokenKind.FLOAT_LITERAL, start, float_value=value)

        try:
            value = int(text)
        except ValueError:
            # int() refuses digit strings past the interpreter's length limit
            raise self._fail(MalformedNumberError(
                f"malformed integer literal '{shown}'",
                self._location(start),
                source_line=self._source_line(start),
            )) from None

        if not self.options.int_min <= value <= self.options.int_max:
            raise self._fail(MalformedNumberError(
                f"integer literal '{shown}' out of range",
                self._location(start),
                hint=(
                    f"int literals must fit in {self.options.int_bits} bits "
                    f"({self.options.int_min} to {self.options.int_max})"
                ),
                source_line=self._source_line(start),
            ))

        return self._make_token(TokenKind.INT_LITERAL, start, int_value=value)

    def _scan_string(self, start: _Mark) -> Token:
        """
        Scan a double-quoted string literal.

        No escape sequences are processed and line terminators may
        appear inside the literal. The lexeme keeps both quotes.
        """
        self.advance()  # consume opening "

        while not self.at_end() and self.current() != '"':
            self.advance()

        if self.at_end():
            raise self._fail(UnterminatedStringError(
                self._location(start),
                self._source_line(start),
            ))

        self.advance()  # consume closing "
        return self._make_token(TokenKind.STRING_LITERAL, start)

    def _scan_punctuation(self, start: _Mark) -> Token:
        """
        Scan a punctuation token.

        Handles ( ) { } @ and the two-character :: and ->. Everything
        else, including a single ':', is an unrecognized character.
        """
        char = self.current()

        if char in "(){}":
            self.advance()
            return self._make_token(RESERVED[char], start)

        if char == "@":
            self.advance()
            return self._make_token(TokenKind.TYPE_SIG, start)

        if char == ":":
            if self.peek(1) == ":":
                self.advance()
                self.advance()
                return self._make_token(TokenKind.PARAM_INDICATOR, start)
            raise self._fail(UnrecognizedCharacterError(
                char,
                self._location(start),
                self._source_line(start),
                hint="parameters are introduced with '::'",
            ))

        if char == "-" and self.peek(1) == ">":
            self.advance()
            self.advance()
            return self._make_token(TokenKind.LEFT_ARROW, start)

        raise self._fail(UnrecognizedCharacterError(
            char,
            self._location(start),
            self._source_line(start),
        ))

    def _scan_end_of_line(self, start: _Mark) -> Token:
        """
        Scan exactly one line terminator: '\\n', '\\r\\n', or a lone
        '\\r' when the options treat it as a newline.
        """
        char = self.current()

        if char == "\r" and self.peek(1) == "\n":
            self.advance()
            self.advance()
        elif char == "\n" or self.options.lone_cr_is_newline:
            self.advance()
        else:
            raise self._fail(UnrecognizedCharacterError(
                char,
                self._location(start),
                self._source_line(start),
                hint="use '\\n' or '\\r\\n' line endings",
                message="stray carriage return",
            ))

        return self._make_token(TokenKind.EOL, start)

    def _skip_comment(self) -> None:
        """
        Skip a '#' comment through the end of its line.

        The terminator is consumed too, so a comment produces no
        tokens at all.
        """
        self.advance()  # consume #

        while not self.at_end() and not is_line_terminator(self.current()):
            self.advance()

        if self.current() == "\n":
            self.advance()
        elif self.current() == "\r":
            if self.peek(1) == "\n":
                self.advance()
                self.advance()
            elif self.options.lone_cr_is_newline:
                self.advance()
            # otherwise the stray '\r' is reported by the next dispatch


# =============================================================================
# Convenience Function
# =============================================================================

def tokenize(
    source: str,
    filename: Optional[str] = None,
    options: Optional[ScannerOptions] = None,
) -> List[Token]:
    """
    Tokenize a source buffer.

    Args:
        source: Sprig source code
        filename: Source filename for error messages; defaults to
                  options.filename, then "<input>"
        options: Scanner configuration (uses defaults if None)

    Returns:
        List of tokens ending with one EOF token

    Raises:
        LexicalError: At the first malformed lexeme
    """
    return Scanner(source, filename, options).tokenize()
