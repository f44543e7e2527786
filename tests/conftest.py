"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from monkey.ast import ExpressionStatement, Program
from monkey.lexer import Lexer, tokenize
from monkey.parser import Parser
from monkey.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str | bytes) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.kind != TokenKind.EOF]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and fails the test on any parse error."""

    def _parse(source: str) -> Program:
        parser = Parser(Lexer(source))
        program = parser.parse_program()
        assert parser.errors == [], f"parser has {len(parser.errors)} errors: {parser.errors}"
        return program

    return _parse


@pytest.fixture
def parse_with_errors():
    """Return a helper that parses source and returns (Program, error messages)."""

    def _parse(source: str) -> tuple[Program, list[str]]:
        parser = Parser(Lexer(source))
        program = parser.parse_program()
        return program, parser.errors

    return _parse


@pytest.fixture
def single_expression(parse_source):
    """Return a helper that parses a one-statement program and returns its expression."""

    def _expr(source: str):
        program = parse_source(source)
        assert len(program.statements) == 1, (
            f"Expected 1 statement, got {len(program.statements)}"
        )
        stmt = program.statements[0]
        assert isinstance(stmt, ExpressionStatement), (
            f"Expected ExpressionStatement, got {type(stmt).__name__}"
        )
        assert stmt.expression is not None
        return stmt.expression

    return _expr
