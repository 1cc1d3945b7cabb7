# =============================================================================
# test_tokens.py - Token Model Unit Tests
# =============================================================================
# Tests for sprig.tokens: the reserved-word table, the Token record and
# its helpers.
# =============================================================================

import dataclasses

import pytest

from sprig.errors import SourceLocation
from sprig.lexer import tokenize
from sprig.tokens import RESERVED, Token, TokenKind, line_at


# =============================================================================
# Reserved-Word Table Tests
# =============================================================================

class TestReservedTable:
    """Test the shared reserved-word table."""

    def test_spellings(self):
        assert set(RESERVED) == {
            "let", "if",
            "=", "+", "-", "*", "/", "^",
            "==", "!=", "<", "<=", ">", ">=",
            "||", "&&", "!",
            "(", ")", "{", "}", "::", "->",
        }

    def test_lookup(self):
        assert RESERVED["let"] is TokenKind.LET
        assert RESERVED["->"] is TokenKind.LEFT_ARROW
        assert RESERVED["!="] is TokenKind.NOT_EQUALS

    def test_read_only(self):
        with pytest.raises(TypeError):
            RESERVED["while"] = TokenKind.IF


# =============================================================================
# Token Tests
# =============================================================================

class TestToken:
    """Test the Token record."""

    def test_frozen(self):
        token = tokenize("x")[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.lexeme = "y"

    def test_value(self):
        int_token, float_token, ident = tokenize("-7 2.5 name")[:3]
        assert int_token.value == -7
        assert float_token.value == 2.5
        assert ident.value == "name"

    def test_repr(self):
        tokens = tokenize("x 42\n")
        assert repr(tokens[0]) == "Token(IDENTIFIER, 'x', 1:1)"
        assert repr(tokens[1]) == "Token(INT_LITERAL, 42, 1:3)"
        assert repr(tokens[2]) == "Token(EOL, 1:5)"
        assert repr(tokens[3]) == "Token(EOF, 2:1)"

    def test_location(self):
        token = tokenize("a\n  b", "prog.sp")[2]
        assert token.location == SourceLocation("prog.sp", 2, 3)

    def test_source_line(self):
        token = tokenize("let a = 1\nlet b = 2\n")[6]
        assert token.lexeme == "b"
        assert token.source_line == "let b = 2"

    def test_equality_ignores_source(self):
        a = Token(TokenKind.IDENTIFIER, "x", 1, 1, source="x")
        b = Token(TokenKind.IDENTIFIER, "x", 1, 1, source="x + 1")
        assert a == b

    def test_classification_helpers(self):
        let, name, assign, number, lt, paren = tokenize("let n = 1 < (")[:6]
        assert let.is_keyword()
        assert not name.is_keyword()
        assert assign.is_operator()
        assert not assign.is_comparison()
        assert lt.is_operator() and lt.is_comparison()
        assert number.is_literal()
        assert paren.is_punctuation()
        assert not paren.is_operator()

    def test_string_is_literal(self):
        assert tokenize('"s"')[0].is_literal()


# =============================================================================
# line_at Tests
# =============================================================================

class TestLineAt:
    """Test source line extraction used for diagnostics."""

    def test_first_line(self):
        assert line_at("ab\ncd", 1) == "ab"

    def test_second_line(self):
        assert line_at("ab\ncd", 3) == "cd"

    def test_crlf(self):
        assert line_at("ab\r\ncd", 0) == "ab"
        assert line_at("ab\r\ncd", 4) == "cd"

    def test_offset_on_terminator(self):
        assert line_at("ab\ncd", 2) == "ab"

    def test_offset_at_end(self):
        assert line_at("ab\ncd", 5) == "cd"
        assert line_at("", 0) == ""

    def test_lone_cr_splits_by_default(self):
        assert line_at("a\rb", 2) == "b"

    def test_lone_cr_kept_when_not_a_newline(self):
        assert line_at("a\rb\ncd", 1, lone_cr_is_newline=False) == "a\rb"
        assert line_at("a\rb\ncd", 2, lone_cr_is_newline=False) == "a\rb"
        assert line_at("ab\r\ncd", 0, lone_cr_is_newline=False) == "ab"
        assert line_at("ab\r\ncd", 4, lone_cr_is_newline=False) == "cd"
