"""Tests for the cursor-level scanner."""

from __future__ import annotations

import pytest

from typedecl.errors import EMPTY_LENGTH, UNCLOSED_PAREN, MalformedType
from typedecl.scanner import Scanner, is_identifier_char, is_identifier_start
from typedecl.source import Span


class TestCharacterClasses:
    @pytest.mark.parametrize("ch", ["a", "Z", "_"])
    def test_identifier_start(self, ch):
        assert is_identifier_start(ch)

    @pytest.mark.parametrize("ch", ["1", "<", "(", ",", " ", "", "é"])
    def test_not_identifier_start(self, ch):
        assert not is_identifier_start(ch)

    def test_digits_continue_identifiers(self):
        assert is_identifier_char("7")
        assert not is_identifier_char("-")


class TestCursor:
    def test_peek_past_end(self):
        sc = Scanner("AB")
        assert sc.peek(1) == "B"
        assert sc.peek(2) == ""
        assert sc.at_end(2)

    def test_skip_whitespace(self):
        sc = Scanner("  \t\nX")
        assert sc.skip_whitespace(0) == 4
        assert sc.skip_whitespace(4) == 4

    def test_read_identifier(self):
        sc = Scanner("col_1 INT64")
        assert sc.read_identifier(0) == ("col_1", Span(0, 5), 5)

    def test_identifier_follows(self):
        sc = Scanner("col  INT64<")
        assert sc.identifier_follows(3)
        assert not sc.identifier_follows(10)

    def test_positions_are_independent(self):
        sc = Scanner("a b")
        first = sc.read_identifier(0)
        assert sc.read_identifier(2) == ("b", Span(2, 3), 3)
        assert sc.read_identifier(0) == first


class TestReadLength:
    def test_single_argument(self):
        sc = Scanner("STRING(10)")
        assert sc.read_length(6) == ("10", Span(7, 9), 10)

    def test_comma_preserved(self):
        lexeme, span, pos = Scanner("NUMERIC(10,10)>").read_length(7)
        assert lexeme == "10,10"
        assert pos == 14

    def test_inner_parens_are_depth_counted(self):
        lexeme, _, pos = Scanner("X(a(1),b) tail").read_length(1)
        assert lexeme == "a(1),b"
        assert pos == 9

    def test_unclosed(self):
        with pytest.raises(MalformedType) as info:
            Scanner("NUMERIC(10,").read_length(7)
        assert info.value.code == UNCLOSED_PAREN
        assert info.value.span == Span(7, 8)

    def test_blank(self):
        with pytest.raises(MalformedType) as info:
            Scanner("STRING( )").read_length(6)
        assert info.value.code == EMPTY_LENGTH
