"""Monkey parser — Pratt expression parsing over a two-token lookahead window."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import IntEnum
from types import MappingProxyType

from monkey.ast import (
    Expression,
    ExpressionStatement,
    Identifier,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.errors import Diagnostic, ParseError
from monkey.lexer import Lexer
from monkey.tokens import Span, Token, TokenKind

logger = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # my_function(X)


PRECEDENCES: Mapping[TokenKind, Precedence] = MappingProxyType(
    {
        TokenKind.EQUAL: Precedence.EQUALS,
        TokenKind.BANG_EQUAL: Precedence.EQUALS,
        TokenKind.LESS_THAN: Precedence.LESSGREATER,
        TokenKind.GREATER_THAN: Precedence.LESSGREATER,
        TokenKind.PLUS: Precedence.SUM,
        TokenKind.MINUS: Precedence.SUM,
        TokenKind.ASTERISK: Precedence.PRODUCT,
        TokenKind.SLASH: Precedence.PRODUCT,
        TokenKind.LPAREN: Precedence.CALL,
    }
)

PrefixParseFn = Callable[["Parser"], Expression | None]
InfixParseFn = Callable[["Parser", Expression], Expression | None]

# Tokens that always begin a fresh statement; error recovery stops before them.
_STATEMENT_KEYWORDS = frozenset({TokenKind.LET, TokenKind.RETURN})


class Parser:
    """Pratt parser pulling tokens from a Lexer it owns.

    Syntax errors never abort the parse. Each one is recorded and
    parse_program() carries on with the next statement, so callers get
    the whole Program plus every problem found in a single pass.
    """

    max_depth: int = 256

    def __init__(
        self,
        lexer: Lexer,
        infix_handlers: Mapping[TokenKind, InfixParseFn] | None = None,
    ) -> None:
        self.lexer = lexer
        self._diagnostics: list[Diagnostic] = []
        self._depth = 0

        self.prefix_handlers: Mapping[TokenKind, PrefixParseFn] = MappingProxyType(
            {
                TokenKind.IDENT: Parser.parse_identifier,
                TokenKind.INT: Parser.parse_integer_literal,
                TokenKind.BANG: Parser.parse_prefix_expression,
                TokenKind.MINUS: Parser.parse_prefix_expression,
            }
        )
        self.infix_handlers: Mapping[TokenKind, InfixParseFn] = MappingProxyType(
            dict(infix_handlers or {})
        )

        # Fill the lookahead window: cur_token and peek_token.
        self.cur_token = Token(TokenKind.ILLEGAL, "")
        self.peek_token = Token(TokenKind.ILLEGAL, "")
        self.next_token()
        self.next_token()

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def errors(self) -> list[str]:
        """Error messages recorded so far, in the order they were found."""
        return [d.message for d in self._diagnostics]

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    def _error(self, message: str, span: Span | None) -> None:
        logger.debug("parse error: %s", message)
        self._diagnostics.append(Diagnostic(message, span))

    def _peek_error(self, kind: TokenKind) -> None:
        self._error(
            f"expected next token to be {kind.name}, got {self.peek_token.kind.name} instead",
            self.peek_token.span,
        )

    def _no_prefix_parse_fn_error(self, tok: Token) -> None:
        self._error(f"no prefix parse function for {tok.kind.name} found", tok.span)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind == kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind == kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the peek token is `kind`; otherwise record an error and stay put."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self._peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    def _synchronize(self) -> None:
        """Skip the rest of a broken statement.

        Stops on its ';' or EOF, or just before a token that starts a new
        statement, so parse_program() resumes at a clean boundary.
        """
        while not self.cur_token_is(TokenKind.SEMICOLON) and not self.cur_token_is(
            TokenKind.EOF
        ):
            if self.peek_token.kind in _STATEMENT_KEYWORDS:
                return
            self.next_token()

    def _skip_expression(self) -> None:
        """Advance until the peek token is ';' or EOF."""
        while not self.peek_token_is(TokenKind.SEMICOLON) and not self.peek_token_is(
            TokenKind.EOF
        ):
            self.next_token()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        statements: list[Statement] = []

        while not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        return Program(tuple(statements))

    def parse_statement(self) -> Statement | None:
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        token = self.cur_token

        if not self.expect_peek(TokenKind.IDENT):
            self._synchronize()
            return None

        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            self._synchronize()
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()

        return LetStatement(token, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        token = self.cur_token

        # Bare `return;` has no value to parse.
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
            return ReturnStatement(token)
        if self.peek_token_is(TokenKind.EOF):
            return ReturnStatement(token)

        self.next_token()
        return_value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()

        return ReturnStatement(token, return_value)

    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()

        return ExpressionStatement(token, expression)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        if self._depth >= self.max_depth:
            self._error("expression nesting too deep", self.cur_token.span)
            self._skip_expression()
            return None

        prefix = self.prefix_handlers.get(self.cur_token.kind)
        if prefix is None:
            self._no_prefix_parse_fn_error(self.cur_token)
            return None

        self._depth += 1
        try:
            left = prefix(self)

            while (
                left is not None
                and not self.peek_token_is(TokenKind.SEMICOLON)
                and precedence < self.peek_precedence()
            ):
                infix = self.infix_handlers.get(self.peek_token.kind)
                if infix is None:
                    return left
                self.next_token()
                left = infix(self, left)

            return left
        finally:
            self._depth -= 1

    def parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> IntegerLiteral | None:
        literal = self.cur_token.literal
        try:
            value = int(literal, 10)
        except ValueError:
            value = None

        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self._error(f"could not parse {literal} as integer", self.cur_token.span)
            return None

        return IntegerLiteral(self.cur_token, value)

    def parse_prefix_expression(self) -> PrefixExpression | None:
        token = self.cur_token
        self.next_token()

        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None

        return PrefixExpression(token, token.literal, right)


def parse(source: str | bytes) -> tuple[Program, list[Diagnostic]]:
    """Parse source and return the program together with every diagnostic."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.diagnostics


def parse_strict(source: str, filename: str = "input.mk") -> Program:
    """Parse source, raising ParseError if anything went wrong."""
    program, diagnostics = parse(source)
    if diagnostics:
        raise ParseError(diagnostics, source, filename)
    return program
