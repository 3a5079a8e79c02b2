"""Tokenizer for nested column-type declarations."""

from typedecl.definitions import FieldDefinition, build_fields, parse_declaration, render
from typedecl.errors import MalformedType
from typedecl.tokenizer import tokenize
from typedecl.tokens import LeafToken, NestedToken, Token, TokenKind

__version__ = "0.1.0"

__all__ = [
    "FieldDefinition",
    "LeafToken",
    "MalformedType",
    "NestedToken",
    "Token",
    "TokenKind",
    "__version__",
    "build_fields",
    "parse_declaration",
    "render",
    "tokenize",
]
