"""Diagnostic records and error types with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass

from monkey.tokens import Span


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One recoverable syntax problem found while parsing."""

    message: str
    span: Span | None = None

    def format(self, source: str, filename: str = "input.mk") -> str:
        if self.span is None:
            return f"error: {self.message}\n --> {filename}"

        lines = source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Span columns count bytes; the snippet is drawn in characters.
        line_bytes = source_line.encode("utf-8")
        prefix_len = len(line_bytes[: col - 1].decode("utf-8", errors="replace"))

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            segment = line_bytes[col - 1 : self.span.end.column - 1]
            underline_len = max(1, len(segment.decode("utf-8", errors="replace")))
        else:
            underline_len = max(1, len(source_line) - prefix_len)

        pad = " " * prefix_len
        carets = "^" * underline_len
        col = prefix_len + 1

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class ParseError(Exception):
    """Raised by parse_strict when a program has any syntax errors."""

    def __init__(
        self, diagnostics: list[Diagnostic], source: str, filename: str = "input.mk"
    ) -> None:
        self.diagnostics = list(diagnostics)
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    @property
    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    def format(self, filename: str | None = None) -> str:
        name = filename if filename is not None else self.filename
        return "\n\n".join(d.format(self.source, name) for d in self.diagnostics)
