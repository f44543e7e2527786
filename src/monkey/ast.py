"""AST node types for parsed Monkey programs."""

from __future__ import annotations

from dataclasses import dataclass, field

from monkey.tokens import Token


@dataclass(frozen=True, slots=True)
class Identifier:
    """A bare name in expression position, or the target of a let."""

    token: Token
    value: str

    def token_literal(self) -> str:
        return self.token.literal

    def string(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.string()


@dataclass(frozen=True, slots=True)
class IntegerLiteral:
    """Signed 64-bit integer; prints back its original source text."""

    token: Token
    value: int

    def token_literal(self) -> str:
        return self.token.literal

    def string(self) -> str:
        return self.token.literal

    def __str__(self) -> str:
        return self.string()


@dataclass(frozen=True, slots=True)
class PrefixExpression:
    """Unary operator applied to its operand: !x, -5."""

    token: Token
    operator: str
    right: Expression

    def token_literal(self) -> str:
        return self.token.literal

    def string(self) -> str:
        return f"({self.operator}{self.right.string()})"

    def __str__(self) -> str:
        return self.string()


Expression = Identifier | IntegerLiteral | PrefixExpression


@dataclass(frozen=True, slots=True)
class LetStatement:
    """let <name> = <value>;"""

    token: Token
    name: Identifier
    value: Expression | None = None

    def token_literal(self) -> str:
        return self.token.literal

    def string(self) -> str:
        value = self.value.string() if self.value is not None else ""
        return f"{self.token_literal()} {self.name.string()} = {value};"

    def __str__(self) -> str:
        return self.string()


@dataclass(frozen=True, slots=True)
class ReturnStatement:
    """return <value>;"""

    token: Token
    return_value: Expression | None = None

    def token_literal(self) -> str:
        return self.token.literal

    def string(self) -> str:
        value = self.return_value.string() if self.return_value is not None else ""
        return f"{self.token_literal()} {value};"

    def __str__(self) -> str:
        return self.string()


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    """A lone expression used as a statement; the trailing ';' is optional."""

    token: Token
    expression: Expression | None = None

    def token_literal(self) -> str:
        return self.token.literal

    def string(self) -> str:
        if self.expression is None:
            return ""
        return self.expression.string()

    def __str__(self) -> str:
        return self.string()


Statement = LetStatement | ReturnStatement | ExpressionStatement


@dataclass(frozen=True, slots=True)
class Program:
    """Root node: the statements of a source file, in order."""

    statements: tuple[Statement, ...] = field(default_factory=tuple)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def string(self) -> str:
        return "".join(stmt.string() for stmt in self.statements)

    def __str__(self) -> str:
        return self.string()
