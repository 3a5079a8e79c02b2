"""Fold token trees into field definitions and render them back to text."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from typedecl.errors import FIELD_COUNT, MalformedType
from typedecl.source import Span
from typedecl.tokenizer import tokenize
from typedecl.tokens import LeafToken, NestedToken, Token, TokenKind


@dataclass(frozen=True)
class FieldDefinition:
    """One ``[name] TYPE [(length) | <fields>]`` unit of a declaration.

    ``ARRAY<T>`` has a single unnamed field for its element type;
    ``STRUCT<a A, b B>`` has one field per member.
    """

    name: str | None
    type: str
    length: str | None = None
    fields: tuple[FieldDefinition, ...] = ()

    @property
    def is_complex(self) -> bool:
        return bool(self.fields)

    def to_declaration(self) -> str:
        text = self.type if self.name is None else f"{self.name} {self.type}"
        if self.length is not None:
            return f"{text}({self.length})"
        if self.fields:
            inner = ", ".join(f.to_declaration() for f in self.fields)
            return f"{text}<{inner}>"
        return text


def build_fields(tokens: Iterable[Token]) -> tuple[FieldDefinition, ...]:
    """Split a token sequence on FIELD_DELIMITER and fold each field."""
    fields: list[FieldDefinition] = []
    current: list[Token] = []
    for tok in tokens:
        if isinstance(tok, LeafToken) and tok.kind is TokenKind.FIELD_DELIMITER:
            fields.append(_fold(current))
            current = []
        else:
            current.append(tok)
    if current:
        fields.append(_fold(current))
    return tuple(fields)


def _fold(group: Sequence[Token]) -> FieldDefinition:
    name: str | None = None
    type_name: str | None = None
    length: str | None = None
    nested: tuple[FieldDefinition, ...] = ()
    for tok in group:
        match tok:
            case NestedToken(children=children):
                nested = build_fields(children)
            case LeafToken(kind=TokenKind.NAME, lexeme=lexeme):
                name = lexeme
            case LeafToken(kind=TokenKind.TYPE, lexeme=lexeme):
                type_name = lexeme
            case LeafToken(kind=TokenKind.LENGTH, lexeme=lexeme):
                length = lexeme
    if type_name is None:
        raise ValueError("field definition has no TYPE token")
    return FieldDefinition(name=name, type=type_name, length=length, fields=nested)


def render(tokens: Iterable[Token]) -> str:
    """Canonical text for a token sequence: ``", "`` between fields, no other spaces."""
    return ", ".join(f.to_declaration() for f in build_fields(tokens))


def parse_declaration(declaration: str) -> FieldDefinition:
    """Tokenize a single-column declaration and fold it. Raises MalformedType."""
    fields = build_fields(tokenize(declaration))
    if len(fields) != 1:
        raise MalformedType.at(
            declaration,
            FIELD_COUNT,
            f"expected one field definition, found {len(fields)}",
            Span(0, len(declaration)),
        )
    return fields[0]
