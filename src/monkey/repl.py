"""Interactive read loop: dumps tokens (or parsed statements) per input line."""

from __future__ import annotations

import sys
from typing import TextIO

from monkey.lexer import Lexer
from monkey.parser import Parser
from monkey.tokens import TokenKind

PROMPT = ">> "
MODES = ("tokens", "ast")


def start(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    *,
    prompt: str = PROMPT,
    mode: str = "tokens",
) -> None:
    """Read lines until end of input, echoing each one back as tokens or AST."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    if mode not in MODES:
        raise ValueError(f"unknown repl mode: {mode!r}")

    while True:
        stdout.write(prompt)
        stdout.flush()

        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return

        if mode == "tokens":
            print_tokens(line, stdout)
        else:
            print_program(line, stdout)


def print_tokens(line: str, out: TextIO) -> None:
    """Write every token in line, one per row, stopping before EOF."""
    for tok in Lexer(line):
        if tok.kind == TokenKind.EOF:
            break
        out.write(f"Token({tok.kind.name}, {tok.literal!r})\n")


def print_program(line: str, out: TextIO) -> None:
    parser = Parser(Lexer(line))
    program = parser.parse_program()
    if parser.errors:
        for msg in parser.errors:
            out.write(f"\t{msg}\n")
        return
    out.write(program.string() + "\n")
