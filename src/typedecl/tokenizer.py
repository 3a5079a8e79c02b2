"""Tokenizer for nested column-type declarations.

Turns text such as ``ARRAY<STRUCT<x NUMERIC(10,10), y STRING>>`` into a
token tree. A nested ``<...>`` region is tokenized by the same field
definition loop as the whole input: ``<`` pushes a fresh region onto a
stack of open regions, and the matching ``>`` pops it back into its
parent as a NESTED token. Nesting depth is bounded only by memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from typedecl.errors import (
    EMPTY_DECLARATION,
    EMPTY_NESTED,
    MISSING_TYPE,
    UNCLOSED_ANGLE,
    UNEXPECTED_CHARACTER,
    MalformedType,
)
from typedecl.scanner import Scanner, is_identifier_start
from typedecl.source import Span
from typedecl.tokens import LeafToken, NestedToken, Token, TokenKind

logger = logging.getLogger(__name__)


@dataclass
class _Region:
    """An open region: the top level, or the inside of one ``<...>``."""

    opened: Span | None  # the `<`; None at top level
    tokens: list[Token] = field(default_factory=list)


def tokenize(declaration: str) -> tuple[Token, ...]:
    """Tokenize one type declaration. Raises MalformedType."""
    scanner = Scanner(declaration)
    start = scanner.skip_whitespace(0)
    if scanner.at_end(start):
        raise scanner.error(
            EMPTY_DECLARATION,
            "empty type declaration",
            Span(0, len(declaration)),
            label="expected a type",
        )
    try:
        tokens = _tokenize_regions(scanner, start)
    except MalformedType as e:
        logger.debug("malformed type declaration %r: %s", declaration, e)
        raise
    logger.debug("tokenized %r into %d top-level tokens", declaration, len(tokens))
    return tokens


def _tokenize_regions(scanner: Scanner, pos: int) -> tuple[Token, ...]:
    """Run the field definition loop over every region, innermost on top."""
    stack = [_Region(opened=None)]
    while True:
        region = stack[-1]
        pos, opens_nested = _field_definition(scanner, pos, len(stack) - 1, region)
        if opens_nested:
            stack.append(_Region(opened=Span(pos, pos + 1)))
            pos += 1
            continue

        # Close finished regions until a delimiter starts the next field
        while True:
            pos = scanner.skip_whitespace(pos)
            ch = scanner.peek(pos)
            region = stack[-1]
            if ch == ',':
                region.tokens.append(
                    LeafToken(TokenKind.FIELD_DELIMITER, ',', Span(pos, pos + 1))
                )
                pos += 1
                break
            if ch == '>' and len(stack) > 1:
                stack.pop()
                assert region.opened is not None
                pos += 1
                stack[-1].tokens.append(
                    NestedToken(tuple(region.tokens), Span(region.opened.start, pos))
                )
                continue
            if ch == '':
                if len(stack) == 1:
                    return tuple(region.tokens)
                raise _unclosed(scanner, region.opened)
            raise _unexpected(scanner, pos)


def _field_definition(
    scanner: Scanner, pos: int, depth: int, region: _Region,
) -> tuple[int, bool]:
    """Append ``[NAME] TYPE [LENGTH]`` to ``region``.

    Returns the offset after the field and False, or the offset of the
    ``<`` opening the field's nested region and True.
    """
    pos = scanner.skip_whitespace(pos)
    ch = scanner.peek(pos)
    if not is_identifier_start(ch):
        raise _missing_type(scanner, pos, depth, region)

    first, first_span, pos = scanner.read_identifier(pos)
    # One identifier of lookahead decides whether the first was a name
    if scanner.identifier_follows(pos):
        second, second_span, pos = scanner.read_identifier(scanner.skip_whitespace(pos))
        region.tokens.append(LeafToken(TokenKind.NAME, first, first_span))
        region.tokens.append(LeafToken(TokenKind.TYPE, second, second_span))
    else:
        region.tokens.append(LeafToken(TokenKind.TYPE, first, first_span))

    after = scanner.skip_whitespace(pos)
    ch = scanner.peek(after)
    if ch == '(':
        lexeme, span, pos = scanner.read_length(after)
        region.tokens.append(LeafToken(TokenKind.LENGTH, lexeme, span))
    elif ch == '<':
        return after, True
    return pos, False


# ── Errors ───────────────────────────────────────────────────────


def _unclosed(scanner: Scanner, opened: Span | None) -> MalformedType:
    assert opened is not None
    end = scanner.length
    return scanner.error(
        UNCLOSED_ANGLE,
        "unclosed `<` in nested type",
        opened,
        label="this `<` is never closed",
        related=Span(end, end),
        related_label="expected `>` before end of input",
    )


def _missing_type(scanner: Scanner, pos: int, depth: int, region: _Region) -> MalformedType:
    ch = scanner.peek(pos)
    if depth > 0 and ch == '':
        return _unclosed(scanner, region.opened)
    if depth > 0 and ch == '>' and not region.tokens:
        assert region.opened is not None
        return scanner.error(
            EMPTY_NESTED,
            "empty nested type",
            Span(region.opened.start, pos + 1),
            label="expected at least one field definition",
            note="ARRAY needs an element type and STRUCT at least one member",
        )

    found = f"`{ch}`" if ch else "end of input"
    span = Span(pos, pos + 1) if ch else Span(pos, pos)
    note = None
    if ch.isdigit():
        note = "type names start with a letter or `_`"
    elif ch.isalpha():
        note = "only ASCII letters, digits and `_` form identifiers"
    previous = region.tokens[-1] if region.tokens else None
    if isinstance(previous, LeafToken) and previous.kind is TokenKind.FIELD_DELIMITER:
        return scanner.error(
            MISSING_TYPE,
            f"expected a type name, found {found}",
            span,
            label="expected a field definition",
            related=previous.span,
            related_label="after this `,`",
            note=note,
        )
    return scanner.error(
        MISSING_TYPE,
        f"expected a type name, found {found}",
        span,
        label="expected a field definition",
        note=note,
    )


def _unexpected(scanner: Scanner, pos: int) -> MalformedType:
    ch = scanner.peek(pos)
    if is_identifier_start(ch):
        word, span, _ = scanner.read_identifier(pos)
        return scanner.error(
            UNEXPECTED_CHARACTER,
            f"unexpected identifier `{word}`",
            span,
            label="a field definition is at most a name and a type",
        )
    span = Span(pos, pos + 1)
    note = None
    if ch in ('>', ')'):
        message = f"unmatched `{ch}`"
        label = "no opening bracket for this"
    elif ch in ('(', '<'):
        message = f"unexpected `{ch}`"
        label = "a type takes either one length argument or one nested region"
    else:
        message = f"unexpected character `{ch}`"
        label = ""
        if ch.isalpha():
            note = "only ASCII letters, digits and `_` form identifiers"
    return scanner.error(UNEXPECTED_CHARACTER, message, span, label=label, note=note)
