"""Cursor-level scanning of a type declaration.

The scanner owns only the immutable declaration text. Every method takes
a cursor offset and returns the offset it advanced to, so nested regions
can save, resume and compare positions without shared state.
"""

from __future__ import annotations

from typedecl.errors import (
    EMPTY_LENGTH,
    UNCLOSED_PAREN,
    MalformedType,
)
from typedecl.source import Span

_WHITESPACE = frozenset(" \t\r\n")


def is_identifier_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == '_')


def is_identifier_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == '_')


class Scanner:
    """Classifies lexical runs of one declaration string."""

    def __init__(self, declaration: str) -> None:
        self.declaration = declaration
        self.length = len(declaration)

    # ── Cursor ───────────────────────────────────────────────────

    def peek(self, pos: int) -> str:
        """Character at ``pos``, or ``""`` past the end."""
        if pos < self.length:
            return self.declaration[pos]
        return ""

    def at_end(self, pos: int) -> bool:
        return pos >= self.length

    def skip_whitespace(self, pos: int) -> int:
        while pos < self.length and self.declaration[pos] in _WHITESPACE:
            pos += 1
        return pos

    def error(
        self,
        code: str,
        message: str,
        span: Span,
        *,
        label: str = "",
        related: Span | None = None,
        related_label: str = "",
        note: str | None = None,
    ) -> MalformedType:
        return MalformedType.at(
            self.declaration, code, message, span,
            label=label, related=related, related_label=related_label, note=note,
        )

    # ── Lexical runs ─────────────────────────────────────────────

    def read_identifier(self, pos: int) -> tuple[str, Span, int]:
        """Read an identifier starting at ``pos``; caller checks the first char."""
        start = pos
        while pos < self.length and is_identifier_char(self.declaration[pos]):
            pos += 1
        return self.declaration[start:pos], Span(start, pos), pos

    def identifier_follows(self, pos: int) -> bool:
        """One-identifier lookahead: does an identifier start after whitespace?"""
        return is_identifier_start(self.peek(self.skip_whitespace(pos)))

    def read_length(self, pos: int) -> tuple[str, Span, int]:
        """Read a parenthesized length region; ``pos`` points at ``(``.

        Paren depth is counted until it returns to zero, so commas and
        inner parens stay part of the lexeme. Returns the raw interior,
        its span and the offset just past the closing ``)``.
        """
        opened = pos
        depth = 0
        while pos < self.length:
            ch = self.declaration[pos]
            if ch == '(':
                depth += 1
            elif ch == ')':
                depth -= 1
                if depth == 0:
                    interior = Span(opened + 1, pos)
                    lexeme = interior.text(self.declaration)
                    if not lexeme.strip():
                        raise self.error(
                            EMPTY_LENGTH,
                            "empty length argument",
                            Span(opened, pos + 1),
                            label="expected a length or precision here",
                        )
                    return lexeme, interior, pos + 1
            pos += 1
        raise self.error(
            UNCLOSED_PAREN,
            "unclosed `(` in length argument",
            Span(opened, opened + 1),
            label="this `(` is never closed",
        )
