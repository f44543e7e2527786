"""Tests for prefix expressions, integer literals, and the infix extension point."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from monkey.ast import Expression, Identifier, IntegerLiteral, PrefixExpression
from monkey.lexer import Lexer
from monkey.parser import PRECEDENCES, Parser, Precedence
from monkey.tokens import Token, TokenKind


class TestIntegerLiterals:
    def test_simple(self, single_expression):
        expr = single_expression("5;")
        assert isinstance(expr, IntegerLiteral)
        assert expr.value == 5
        assert expr.token_literal() == "5"

    def test_int64_max(self, single_expression):
        expr = single_expression("9223372036854775807")
        assert expr.value == 2**63 - 1

    def test_leading_zeros_preserved(self, single_expression):
        expr = single_expression("0042;")
        assert expr.value == 42
        assert expr.string() == "0042"


class TestPrefixExpressions:
    @pytest.mark.parametrize(
        ("source", "operator", "value"),
        [
            ("!5;", "!", 5),
            ("-15;", "-", 15),
        ],
    )
    def test_integer_operand(self, single_expression, source, operator, value):
        expr = single_expression(source)
        assert isinstance(expr, PrefixExpression)
        assert expr.operator == operator
        assert isinstance(expr.right, IntegerLiteral)
        assert expr.right.value == value
        assert expr.right.token_literal() == str(value)

    def test_string_form(self, single_expression):
        assert single_expression("!5;").string() == "(!5)"
        assert single_expression("-15;").string() == "(-15)"

    def test_identifier_operand(self, single_expression):
        expr = single_expression("!foobar;")
        assert isinstance(expr.right, Identifier)
        assert expr.string() == "(!foobar)"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("!-a", "(!(-a))"),
            ("--5", "(-(-5))"),
            ("!!true_", "(!(!true_))"),
        ],
    )
    def test_nested(self, single_expression, source, expected):
        assert single_expression(source).string() == expected


# ---------------------------------------------------------------------------
# Infix extension point
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class InfixNode:
    token: Token
    left: Expression
    operator: str
    right: Expression

    def token_literal(self) -> str:
        return self.token.literal

    def string(self) -> str:
        return f"({self.left.string()} {self.operator} {self.right.string()})"


def parse_infix(parser: Parser, left: Expression) -> InfixNode | None:
    token = parser.cur_token
    precedence = parser.cur_precedence()
    parser.next_token()
    right = parser.parse_expression(precedence)
    if right is None:
        return None
    return InfixNode(token, left, token.literal, right)


BINARY = {kind: parse_infix for kind in PRECEDENCES if kind != TokenKind.LPAREN}


def parse_with_infix(source: str) -> tuple[str, list[str]]:
    parser = Parser(Lexer(source), infix_handlers=BINARY)
    program = parser.parse_program()
    return program.string(), parser.errors


class TestInfixExtension:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("-a * b", "((-a) * b)"),
            ("!-a", "(!(-a))"),
            ("a + b + c", "((a + b) + c)"),
            ("a + b - c", "((a + b) - c)"),
            ("a * b * c", "((a * b) * c)"),
            ("a * b / c", "((a * b) / c)"),
            ("a + b / c", "(a + (b / c))"),
            ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
            ("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))"),
            ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
        ],
    )
    def test_precedence(self, source, expected):
        rendered, errors = parse_with_infix(source)
        assert errors == []
        assert rendered == expected

    def test_let_value_uses_infix(self):
        rendered, errors = parse_with_infix("let x = 1 + 2 * 3;")
        assert errors == []
        assert rendered == "let x = (1 + (2 * 3));"

    def test_missing_right_operand(self):
        _, errors = parse_with_infix("1 + ;")
        assert errors == ["no prefix parse function for SEMICOLON found"]

    def test_without_handlers_operator_is_not_consumed(self, parse_with_errors):
        program, errors = parse_with_errors("a + b;")
        assert errors == ["no prefix parse function for PLUS found"]
        assert [s.string() for s in program.statements] == ["a", "", "b"]


class TestPrecedenceTable:
    def test_ordering(self):
        order = [
            Precedence.LOWEST,
            Precedence.EQUALS,
            Precedence.LESSGREATER,
            Precedence.SUM,
            Precedence.PRODUCT,
            Precedence.PREFIX,
            Precedence.CALL,
        ]
        assert order == sorted(order)
        assert len(set(order)) == len(order)

    @pytest.mark.parametrize(
        ("kind", "precedence"),
        [
            (TokenKind.EQUAL, Precedence.EQUALS),
            (TokenKind.BANG_EQUAL, Precedence.EQUALS),
            (TokenKind.LESS_THAN, Precedence.LESSGREATER),
            (TokenKind.GREATER_THAN, Precedence.LESSGREATER),
            (TokenKind.PLUS, Precedence.SUM),
            (TokenKind.MINUS, Precedence.SUM),
            (TokenKind.ASTERISK, Precedence.PRODUCT),
            (TokenKind.SLASH, Precedence.PRODUCT),
            (TokenKind.LPAREN, Precedence.CALL),
        ],
    )
    def test_mapping(self, kind, precedence):
        assert PRECEDENCES[kind] == precedence

    def test_prefix_binds_tighter_than_binary(self):
        assert all(p < Precedence.PREFIX for k, p in PRECEDENCES.items() if k != TokenKind.LPAREN)

    def test_unknown_token_is_lowest(self):
        parser = Parser(Lexer("a ;"))
        assert parser.peek_precedence() == Precedence.LOWEST


class TestHandlerTables:
    def test_prefix_handlers_registered(self):
        parser = Parser(Lexer(""))
        assert set(parser.prefix_handlers) == {
            TokenKind.IDENT,
            TokenKind.INT,
            TokenKind.BANG,
            TokenKind.MINUS,
        }

    def test_tables_are_read_only(self):
        parser = Parser(Lexer(""))
        with pytest.raises(TypeError):
            parser.prefix_handlers[TokenKind.PLUS] = Parser.parse_identifier  # type: ignore[index]
        with pytest.raises(TypeError):
            parser.infix_handlers[TokenKind.PLUS] = parse_infix  # type: ignore[index]

    def test_no_infix_handlers_by_default(self):
        assert dict(Parser(Lexer("")).infix_handlers) == {}
