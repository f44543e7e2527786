"""Lexer and Pratt parser for the Monkey scripting language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from monkey.ast import Program

__version__ = "0.1.0"


def compile(source: str, filename: str = "input.mk") -> Program:
    """Parse Monkey source into a Program, raising ParseError on any syntax error."""
    from monkey.parser import parse_strict

    return parse_strict(source, filename)
