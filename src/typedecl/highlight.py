"""Pygments lexer for column-type declarations."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, words
from pygments.token import Error, Keyword, Name, Number, Punctuation, Text


class TypeDeclarationLexer(RegexLexer):
    """Pygments lexer for catalog type declarations such as ``ARRAY<STRUCT<x INT64>>``."""

    name = "Type declaration"
    aliases = ["typedecl"]
    filenames = ["*.typedecl"]
    mimetypes = ["text/x-typedecl"]

    tokens = {
        "root": [
            # Whitespace
            (r"\s+", Text),
            # Complex types that open a nested region
            (
                words(("ARRAY", "STRUCT", "RANGE"), prefix=r"\b", suffix=r"\b(?=\s*<)"),
                Keyword.Declaration,
            ),
            # Field name: an identifier followed by another identifier
            (r"[A-Za-z_][A-Za-z0-9_]*(?=\s+[A-Za-z_])", Name.Variable),
            # Type keyword
            (r"[A-Za-z_][A-Za-z0-9_]*", Keyword.Type),
            # Length or precision argument
            (r"\(", Punctuation, "length"),
            (r"[<>,]", Punctuation),
            (r".", Error),
        ],
        "length": [
            (r"\s+", Text),
            (r"[0-9]+", Number.Integer),
            (r"[A-Za-z_][A-Za-z0-9_]*", Name.Constant),
            (r",", Punctuation),
            (r"\(", Punctuation, "#push"),
            (r"\)", Punctuation, "#pop"),
            (r"[^\s0-9A-Za-z_,()]+", Text),
        ],
    }


def highlight_declaration(declaration: str, *, color: bool = True) -> str:
    """Return the declaration with ANSI colors, or unchanged when ``color`` is off."""
    if not color:
        return declaration
    return highlight(declaration, TypeDeclarationLexer(), TerminalFormatter()).rstrip("\n")
