"""
Sprig Tokens
============

Token kinds, the reserved-word table and the immutable Token record
produced by the scanner.

Token Categories
----------------
- Keywords: let, if
- Identifiers: variable and function names
- Literals: int (42, -7), float (3.14, -0.5), string ("...")
- Operators: = + - * / ^ == != < <= > >= || && !
- Punctuation: ( ) { } :: -> @
- Structure: end-of-line (significant), end-of-stream
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping, Optional, Union

from sprig.errors import SourceLocation


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the Sprig language.

    Keywords are distinguished from identifiers to simplify parsing.
    End-of-line is a real token: the language is line-sensitive.
    """

    # === Keywords ===
    LET = auto()            # let
    IF = auto()             # if

    # === Assignment ===
    ASSIGN = auto()         # =

    # === Arithmetic Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    MULT = auto()           # *
    DIV = auto()            # /
    EXP = auto()            # ^

    # === Comparison Operators ===
    EQUALS = auto()         # ==
    NOT_EQUALS = auto()     # !=
    LESS = auto()           # <
    LESS_EQ = auto()        # <=
    GREATER = auto()        # >
    GREATER_EQ = auto()     # >=

    # === Logical Operators ===
    OR = auto()             # ||
    AND = auto()            # &&
    NOT = auto()            # !

    # === Punctuation ===
    PAREN_OPEN = auto()     # (
    PAREN_CLOSE = auto()    # )
    CURLY_OPEN = auto()     # {
    CURLY_CLOSE = auto()    # }
    PARAM_INDICATOR = auto()  # ::
    LEFT_ARROW = auto()     # ->
    TYPE_SIG = auto()       # @

    # === Identifiers and Literals ===
    IDENTIFIER = auto()
    INT_LITERAL = auto()
    FLOAT_LITERAL = auto()
    STRING_LITERAL = auto()

    # === Structural Tokens ===
    EOL = auto()            # \n or \r\n
    EOF = auto()            # end of stream


KEYWORD_KINDS = frozenset({TokenKind.LET, TokenKind.IF})

OPERATOR_KINDS = frozenset({
    TokenKind.ASSIGN,
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.MULT,
    TokenKind.DIV,
    TokenKind.EXP,
    TokenKind.EQUALS,
    TokenKind.NOT_EQUALS,
    TokenKind.LESS,
    TokenKind.LESS_EQ,
    TokenKind.GREATER,
    TokenKind.GREATER_EQ,
    TokenKind.OR,
    TokenKind.AND,
    TokenKind.NOT,
})

COMPARISON_KINDS = frozenset({
    TokenKind.EQUALS,
    TokenKind.NOT_EQUALS,
    TokenKind.LESS,
    TokenKind.LESS_EQ,
    TokenKind.GREATER,
    TokenKind.GREATER_EQ,
})

LITERAL_KINDS = frozenset({
    TokenKind.INT_LITERAL,
    TokenKind.FLOAT_LITERAL,
    TokenKind.STRING_LITERAL,
})

PUNCTUATION_KINDS = frozenset({
    TokenKind.PAREN_OPEN,
    TokenKind.PAREN_CLOSE,
    TokenKind.CURLY_OPEN,
    TokenKind.CURLY_CLOSE,
    TokenKind.PARAM_INDICATOR,
    TokenKind.LEFT_ARROW,
    TokenKind.TYPE_SIG,
})


# =============================================================================
# Reserved-Word Table
# =============================================================================

# Shared, read-only: every scanner looks spellings up here.
RESERVED: Mapping[str, TokenKind] = MappingProxyType({
    # Keywords
    "let": TokenKind.LET,
    "if": TokenKind.IF,

    # Assignment
    "=": TokenKind.ASSIGN,

    # Arithmetic
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULT,
    "/": TokenKind.DIV,
    "^": TokenKind.EXP,

    # Comparison
    "==": TokenKind.EQUALS,
    "!=": TokenKind.NOT_EQUALS,
    "<": TokenKind.LESS,
    "<=": TokenKind.LESS_EQ,
    ">": TokenKind.GREATER,
    ">=": TokenKind.GREATER_EQ,

    # Logical
    "||": TokenKind.OR,
    "&&": TokenKind.AND,
    "!": TokenKind.NOT,

    # Punctuation
    "(": TokenKind.PAREN_OPEN,
    ")": TokenKind.PAREN_CLOSE,
    "{": TokenKind.CURLY_OPEN,
    "}": TokenKind.CURLY_CLOSE,
    "::": TokenKind.PARAM_INDICATOR,
    "->": TokenKind.LEFT_ARROW,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token from Sprig source code.

    Attributes:
        kind: The TokenKind classification
        lexeme: The exact source text the token was matched from
        line: Line number of the first character (1-indexed)
        column: Column number of the first character (1-indexed)
        offset: Offset of the first character in the source (0-indexed)
        int_value: Parsed value, INT_LITERAL only
        float_value: Parsed value, FLOAT_LITERAL only
        filename: Name of the source file
        source: The buffer the token was scanned from (borrowed)
    """
    kind: TokenKind
    lexeme: str
    line: int
    column: int
    offset: int = 0
    int_value: Optional[int] = None
    float_value: Optional[float] = None
    filename: str = "<input>"
    source: str = field(default="", repr=False, compare=False)

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.kind in (TokenKind.EOL, TokenKind.EOF):
            return f"Token({self.kind.name}, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def value(self) -> Union[int, float, str]:
        """Numeric value for number literals, the lexeme otherwise."""
        if self.kind is TokenKind.INT_LITERAL:
            return self.int_value
        if self.kind is TokenKind.FLOAT_LITERAL:
            return self.float_value
        return self.lexeme

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def source_line(self) -> str:
        """Text of the source line this token starts on, without terminator."""
        return line_at(self.source, self.offset)

    def is_keyword(self) -> bool:
        return self.kind in KEYWORD_KINDS

    def is_operator(self) -> bool:
        return self.kind in OPERATOR_KINDS

    def is_comparison(self) -> bool:
        return self.kind in COMPARISON_KINDS

    def is_literal(self) -> bool:
        return self.kind in LITERAL_KINDS

    def is_punctuation(self) -> bool:
        return self.kind in PUNCTUATION_KINDS


def line_at(source: str, offset: int, lone_cr_is_newline: bool = True) -> str:
    """
    Return the line of `source` containing `offset`, without terminator.

    '\\n' and '\\r\\n' always end a line. A '\\r' on its own ends a line
    only when `lone_cr_is_newline` is true, matching the scanner's
    line counting.
    """
    offset = min(max(offset, 0), len(source))

    if lone_cr_is_newline:
        start = max(source.rfind("\n", 0, offset), source.rfind("\r", 0, offset)) + 1
        end = offset
        while end < len(source) and source[end] not in "\r\n":
            end += 1
        return source[start:end]

    start = source.rfind("\n", 0, offset) + 1
    end = source.find("\n", offset)
    if end == -1:
        end = len(source)
    elif end > start and source[end - 1] == "\r":
        end -= 1
    return source[start:end]
