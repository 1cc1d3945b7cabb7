"""
Sprig - Lexical Front End
=========================

This package provides the lexical analysis stage of the Sprig language
front end: it turns source text into the token stream a parser consumes.

Main Components
---------------
- **lexer**: the Scanner and the tokenize() helper
- **tokens**: TokenKind, Token and the reserved-word table
- **errors**: the LexicalError hierarchy and ErrorCollector
- **config**: ScannerOptions (with environment overrides)
- **cli**: the sprig-lex command-line tool

Quick Start
-----------
    >>> from sprig import tokenize
    >>> [t.kind.name for t in tokenize("a -> b")]
    ['IDENTIFIER', 'LEFT_ARROW', 'IDENTIFIER', 'EOF']

Or from the command line:
    $ sprig-lex main.sp
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from sprig.config import ScannerOptions
from sprig.errors import (
    SprigError,
    ConfigError,
    SourceLocation,
    LexicalError,
    UnrecognizedOperatorError,
    MalformedNumberError,
    UnterminatedStringError,
    UnrecognizedCharacterError,
    LexicalErrorReport,
    ErrorCollector,
)
from sprig.lexer import Scanner, tokenize
from sprig.tokens import RESERVED, Token, TokenKind

__all__ = [
    "__version__",
    # Scanner
    "Scanner",
    "tokenize",
    "ScannerOptions",
    # Tokens
    "Token",
    "TokenKind",
    "RESERVED",
    # Errors
    "SprigError",
    "ConfigError",
    "SourceLocation",
    "LexicalError",
    "UnrecognizedOperatorError",
    "MalformedNumberError",
    "UnterminatedStringError",
    "UnrecognizedCharacterError",
    "LexicalErrorReport",
    "ErrorCollector",
]
