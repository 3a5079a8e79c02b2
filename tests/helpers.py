"""Shared test helpers for the typedecl test suite."""

from __future__ import annotations

import pytest

from typedecl.errors import MalformedType
from typedecl.tokenizer import tokenize
from typedecl.tokens import shape


def tok(declaration: str) -> list:
    """Tokenize and strip spans."""
    return shape(tokenize(declaration))


def tokenize_fails(declaration: str, error_code: str) -> MalformedType:
    """Tokenize, asserting MalformedType with the given code."""
    with pytest.raises(MalformedType) as info:
        tokenize(declaration)
    assert info.value.code == error_code, (
        f"Expected {error_code} but got {info.value.code}: {info.value}"
    )
    return info.value
