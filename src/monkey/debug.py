"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

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


def dump_ast(program: Program, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Program\n")
    for stmt in program.statements:
        _dump_statement(stmt, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_statement(stmt: Statement, depth: int, f: TextIO) -> None:
    if isinstance(stmt, LetStatement):
        f.write(f"{_indent(depth)}LetStatement {stmt.name.value}\n")
        _dump_expression(stmt.value, depth + 1, f)
    elif isinstance(stmt, ReturnStatement):
        f.write(f"{_indent(depth)}ReturnStatement\n")
        if stmt.return_value is not None:
            _dump_expression(stmt.return_value, depth + 1, f)
    elif isinstance(stmt, ExpressionStatement):
        f.write(f"{_indent(depth)}ExpressionStatement\n")
        _dump_expression(stmt.expression, depth + 1, f)


def _dump_expression(expr: Expression | None, depth: int, f: TextIO) -> None:
    if expr is None:
        f.write(f"{_indent(depth)}<missing>\n")
    elif isinstance(expr, Identifier):
        f.write(f"{_indent(depth)}Identifier({expr.value!r})\n")
    elif isinstance(expr, IntegerLiteral):
        f.write(f"{_indent(depth)}IntegerLiteral({expr.value})\n")
    elif isinstance(expr, PrefixExpression):
        f.write(f"{_indent(depth)}PrefixExpression {expr.operator}\n")
        _dump_expression(expr.right, depth + 1, f)
    else:
        # Nodes built by caller-supplied infix handlers.
        f.write(f"{_indent(depth)}{type(expr).__name__}({expr.string()!r})\n")
