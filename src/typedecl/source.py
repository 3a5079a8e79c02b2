"""Span tracking inside a single type-declaration string."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """A half-open range of character offsets within a declaration."""

    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"

    @property
    def width(self) -> int:
        return self.end - self.start

    def text(self, declaration: str) -> str:
        """Extract the text covered by this span."""
        return declaration[self.start:self.end]
