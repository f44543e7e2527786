"""Token kinds, data structures, and byte classification helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenKind(Enum):
    ILLEGAL = auto()
    EOF = auto()

    # Identifiers and literals
    IDENT = auto()  # add, foobar, x, y
    INT = auto()  # 1343456

    # Operators
    ASSIGN = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    BANG = auto()  # !
    ASTERISK = auto()  # *
    SLASH = auto()  # /
    EQUAL = auto()  # ==
    BANG_EQUAL = auto()  # !=
    LESS_THAN = auto()  # <
    GREATER_THAN = auto()  # >

    # Delimiters
    COMMA = auto()
    SEMICOLON = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()

    # Keywords
    FUNCTION = auto()
    LET = auto()
    RETURN = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based byte offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token: its kind and the exact source text that produced it.

    The span only feeds diagnostics; two tokens compare equal when kind and
    literal match, wherever they came from.
    """

    kind: TokenKind
    literal: str
    span: Span | None = field(default=None, compare=False)


KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "return": TokenKind.RETURN,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
}

# Single-byte operators and delimiters that need no lookahead.
SINGLE_CHAR_TOKENS: dict[int, TokenKind] = {
    ord(";"): TokenKind.SEMICOLON,
    ord("("): TokenKind.LPAREN,
    ord(")"): TokenKind.RPAREN,
    ord(","): TokenKind.COMMA,
    ord("+"): TokenKind.PLUS,
    ord("{"): TokenKind.LBRACE,
    ord("}"): TokenKind.RBRACE,
    ord("-"): TokenKind.MINUS,
    ord("*"): TokenKind.ASTERISK,
    ord("/"): TokenKind.SLASH,
    ord("<"): TokenKind.LESS_THAN,
    ord(">"): TokenKind.GREATER_THAN,
}

_WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")


def lookup_ident(text: str) -> TokenKind:
    """Return the keyword kind for text, or IDENT."""
    return KEYWORDS.get(text, TokenKind.IDENT)


def is_letter(ch: int) -> bool:
    """Return True if ch is an ASCII letter or underscore."""
    return 0x61 <= ch <= 0x7A or 0x41 <= ch <= 0x5A or ch == 0x5F


def is_digit(ch: int) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return 0x30 <= ch <= 0x39


def is_whitespace(ch: int) -> bool:
    """Return True if ch is ASCII whitespace."""
    return ch in _WHITESPACE
