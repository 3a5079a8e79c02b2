"""Diagnostics for malformed type declarations, rendered Rust-style."""

from __future__ import annotations

from dataclasses import dataclass, field

from typedecl.source import Span

# ANSI color codes
_RED = "\033[1;31m"
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"

# Error codes
EMPTY_DECLARATION = "E100"
UNCLOSED_ANGLE = "E101"
UNCLOSED_PAREN = "E102"
EMPTY_NESTED = "E103"
EMPTY_LENGTH = "E104"
MISSING_TYPE = "E105"
UNEXPECTED_CHARACTER = "E106"
FIELD_COUNT = "E107"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a range of the declaration."""

    span: Span
    message: str
    style: str = "primary"  # "primary" or "secondary"


@dataclass
class Diagnostic:
    """A single error with labels into the declaration and optional notes."""

    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @property
    def primary_span(self) -> Span | None:
        for label in self.labels:
            if label.style == "primary":
                return label.span
        return None


def _locate(declaration: str, offset: int) -> tuple[int, int, int]:
    """Return (1-indexed line, line start offset, line end offset) for ``offset``."""
    line = declaration.count("\n", 0, offset) + 1
    start = declaration.rfind("\n", 0, offset) + 1
    end = declaration.find("\n", offset)
    if end == -1:
        end = len(declaration)
    return line, start, end


class DiagnosticRenderer:
    """Renders diagnostics against the declaration they were raised for."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic, declaration: str) -> str:
        lines: list[str] = []

        # Header: error[E101]: message
        lines.append(
            f"{self._c(_RED)}error[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            span = label.span
            line_num, line_start, line_end = _locate(declaration, span.start)
            source_line = declaration[line_start:line_end]
            lines.append(
                f"  {self._c(_BLUE)}-->{self._c(_RESET)} "
                f"<input>:{line_num}:{span.start - line_start + 1}"
            )
            lines.append(f"  {self._c(_BLUE)}     |{self._c(_RESET)}")
            lines.append(
                f"  {self._c(_BLUE)}{line_num:>4} |{self._c(_RESET)} "
                f"{source_line.expandtabs()}"
            )

            # Carets are measured on the tab-expanded line and clipped to it
            pad_width = len(source_line[:span.start - line_start].expandtabs())
            end_width = len(source_line[:min(span.end, line_end) - line_start].expandtabs())
            caret_len = max(1, end_width - pad_width)
            marker = "^" if label.style == "primary" else "-"
            padding = " " * pad_width
            lines.append(
                f"  {self._c(_BLUE)}     |{self._c(_RESET)} "
                f"{padding}{self._c(_RED)}{marker * caret_len}{self._c(_RESET)}"
            )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}     |{self._c(_RESET)} {padding}"
                    f"{self._c(_RED)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


class MalformedType(Exception):
    """A type declaration that cannot be tokenized."""

    def __init__(self, diagnostic: Diagnostic, declaration: str) -> None:
        self.diagnostic = diagnostic
        self.declaration = declaration
        super().__init__(f"{diagnostic.code}: {diagnostic.message}")

    @property
    def code(self) -> str:
        return self.diagnostic.code

    @property
    def span(self) -> Span | None:
        return self.diagnostic.primary_span

    @classmethod
    def at(
        cls,
        declaration: str,
        code: str,
        message: str,
        span: Span,
        *,
        label: str = "",
        related: Span | None = None,
        related_label: str = "",
        note: str | None = None,
    ) -> MalformedType:
        """Build an error pointing at ``span``, optionally with a secondary label."""
        labels = [DiagnosticLabel(span=span, message=label)]
        if related is not None:
            labels.append(
                DiagnosticLabel(span=related, message=related_label, style="secondary")
            )
        diag = Diagnostic(
            code=code,
            message=message,
            labels=labels,
            notes=[note] if note else [],
        )
        return cls(diag, declaration)
