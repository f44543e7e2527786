"""Monkey lexer — turns source text into tokens, one pull at a time."""

from __future__ import annotations

from collections.abc import Iterator

from monkey.tokens import (
    SINGLE_CHAR_TOKENS,
    Position,
    Span,
    Token,
    TokenKind,
    is_digit,
    is_letter,
    is_whitespace,
    lookup_ident,
)

_EQ = ord("=")
_BANG = ord("!")
_NEWLINE = ord("\n")


class Lexer:
    """Single-pass tokenizer with one byte of lookahead.

    The lexer never fails: bytes it does not understand come back as
    ILLEGAL tokens, and once the input is exhausted every further call
    to next_token() returns EOF.
    """

    def __init__(self, source: str | bytes) -> None:
        if isinstance(source, str):
            source = source.encode("utf-8")
        self.input = bytes(source)
        self.position = 0  # index of self.ch
        self.read_position = 0  # index of the next byte to read
        self.ch = 0  # 0 once past the end of input
        self._line = 1
        self._col = 0
        self._read_char()

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def _read_char(self) -> None:
        if self.ch == _NEWLINE and self.read_position > 0:
            self._line += 1
            self._col = 1
        else:
            self._col += 1

        if self.read_position >= len(self.input):
            self.ch = 0
        else:
            self.ch = self.input[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def _peek_char(self) -> int:
        if self.read_position >= len(self.input):
            return 0
        return self.input[self.read_position]

    def _at_end(self) -> bool:
        return self.position >= len(self.input)

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self.position)

    def _skip_whitespace(self) -> None:
        while not self._at_end() and is_whitespace(self.ch):
            self._read_char()

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def _emit(self, kind: TokenKind, start: Position, literal: str | None = None) -> Token:
        if literal is None:
            literal = self.input[start.offset : self.position].decode("ascii")
        return Token(kind, literal, Span(start, self._current_pos()))

    def next_token(self) -> Token:
        """Skip whitespace and return the next token."""
        self._skip_whitespace()
        start = self._current_pos()

        if self._at_end():
            return self._emit(TokenKind.EOF, start, "")

        ch = self.ch

        if ch == _EQ:
            self._read_char()
            if self.ch == _EQ:
                self._read_char()
                return self._emit(TokenKind.EQUAL, start)
            return self._emit(TokenKind.ASSIGN, start)

        if ch == _BANG:
            self._read_char()
            if self.ch == _EQ:
                self._read_char()
                return self._emit(TokenKind.BANG_EQUAL, start)
            return self._emit(TokenKind.BANG, start)

        kind = SINGLE_CHAR_TOKENS.get(ch)
        if kind is not None:
            self._read_char()
            return self._emit(kind, start)

        if is_letter(ch):
            self._read_identifier()
            tok = self._emit(TokenKind.IDENT, start)
            kind = lookup_ident(tok.literal)
            if kind != TokenKind.IDENT:
                return Token(kind, tok.literal, tok.span)
            return tok

        if is_digit(ch):
            self._read_number()
            return self._emit(TokenKind.INT, start)

        if ch >= 0x80:
            # Treat a whole non-ASCII run (e.g. one UTF-8 sequence) as one token.
            while not self._at_end() and self.ch >= 0x80:
                self._read_char()
            return self._emit(TokenKind.ILLEGAL, start, "")

        self._read_char()
        return self._emit(TokenKind.ILLEGAL, start, "")

    def _read_identifier(self) -> None:
        while not self._at_end() and is_letter(self.ch):
            self._read_char()

    def _read_number(self) -> None:
        while not self._at_end() and is_digit(self.ch):
            self._read_char()


def tokenize(source: str | bytes) -> list[Token]:
    """Convenience function: lex the whole source, EOF included."""
    return list(Lexer(source))
