"""Token kinds and the token tree produced by the type-declaration tokenizer."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Union

from typedecl.source import Span


class TokenKind(Enum):
    # Leaf tokens
    NAME = auto()
    TYPE = auto()
    LENGTH = auto()
    FIELD_DELIMITER = auto()

    # Carries children instead of a lexeme
    NESTED = auto()


LEAF_KINDS: frozenset[TokenKind] = frozenset({
    TokenKind.NAME,
    TokenKind.TYPE,
    TokenKind.LENGTH,
    TokenKind.FIELD_DELIMITER,
})


@dataclass(frozen=True)
class LeafToken:
    kind: TokenKind
    lexeme: str
    span: Span

    def __post_init__(self) -> None:
        if self.kind not in LEAF_KINDS:
            raise ValueError(f"{self.kind.name} is not a leaf token kind")


@dataclass(frozen=True)
class NestedToken:
    """Contents of an angle-bracket region following a TYPE token."""

    children: tuple[Token, ...]
    span: Span

    @property
    def kind(self) -> TokenKind:
        return TokenKind.NESTED


Token = Union[LeafToken, NestedToken]


def walk(tokens: Iterable[Token]) -> Iterator[Token]:
    """Yield every token of the tree, depth-first in source order."""
    stack = [iter(tokens)]
    while stack:
        tok = next(stack[-1], None)
        if tok is None:
            stack.pop()
            continue
        yield tok
        if isinstance(tok, NestedToken):
            stack.append(iter(tok.children))


def shape(tokens: Iterable[Token]) -> list[tuple[str, Any]]:
    """Strip spans: ``(kind, lexeme)`` for leaves, ``("NESTED", [...])`` otherwise."""
    result: list[tuple[str, Any]] = []
    for tok in tokens:
        if isinstance(tok, NestedToken):
            result.append((tok.kind.name, shape(tok.children)))
        else:
            result.append((tok.kind.name, tok.lexeme))
    return result


def to_json(tokens: Iterable[Token]) -> list[dict[str, Any]]:
    """JSON-ready form of a token tree, spans included."""
    result: list[dict[str, Any]] = []
    for tok in tokens:
        entry: dict[str, Any] = {
            "kind": tok.kind.name,
            "start": tok.span.start,
            "end": tok.span.end,
        }
        if isinstance(tok, NestedToken):
            entry["children"] = to_json(tok.children)
        else:
            entry["lexeme"] = tok.lexeme
        result.append(entry)
    return result
