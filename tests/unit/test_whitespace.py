"""
Unit tests for the whitespace finalizer (whitespace.py).
"""

import pytest

from prompt_cleaner.cleaning.whitespace import finalize_whitespace
from prompt_cleaner.models.options import WhitespaceOptions
from prompt_cleaner.models.rules import (
    WHITESPACE_COLLAPSE_BLANK_LINES,
    WHITESPACE_COLLAPSE_SPACES,
    WHITESPACE_FINAL_NEWLINE,
    WHITESPACE_TRIM_DOCUMENT,
    WHITESPACE_TRIM_LINES,
)
from tests.fixtures.samples import MESSY_WHITESPACE

ALL_ON = WhitespaceOptions(collapse_spaces=True, collapse_blank_lines=True, ensure_final_newline=True)
ALL_OFF = WhitespaceOptions(
    collapse_spaces=False, collapse_blank_lines=False, ensure_final_newline=False
)


class TestFinalizeWhitespace:
    """Tests for finalize_whitespace()."""

    @pytest.mark.unit
    def test_full_normalization(self, counter):
        text = "  hello   world  \n\n\n\nnext\t\n"
        assert finalize_whitespace(text, ALL_ON, counter) == "hello world\n\nnext\n"
        assert counter[WHITESPACE_TRIM_LINES] == 2
        assert counter[WHITESPACE_COLLAPSE_SPACES] == 1
        assert counter[WHITESPACE_COLLAPSE_BLANK_LINES] == 1
        assert counter[WHITESPACE_TRIM_DOCUMENT] == 1
        assert counter[WHITESPACE_FINAL_NEWLINE] == 0

    @pytest.mark.unit
    def test_messy_sample(self, counter):
        result = finalize_whitespace(MESSY_WHITESPACE, ALL_ON, counter)
        assert result == "Too many spaces\n\nand blank lines\n"

    @pytest.mark.unit
    def test_options_off(self, counter):
        text = "\n\na   b\n\n\n\nc  \n"
        assert finalize_whitespace(text, ALL_OFF, counter) == "a   b\n\n\n\nc"
        assert counter[WHITESPACE_COLLAPSE_SPACES] == 0
        assert counter[WHITESPACE_COLLAPSE_BLANK_LINES] == 0

    @pytest.mark.unit
    def test_literal_lines_untouched(self, counter):
        text = "Intro  text\n\n    x   =   1\n\tkey:   value"
        result = finalize_whitespace(text, ALL_ON, counter)
        assert result == "Intro text\n\n    x   =   1\n\tkey:   value\n"

    @pytest.mark.unit
    def test_indentation_preserved(self, counter):
        assert finalize_whitespace("- a\n  -   b", ALL_ON, counter) == "- a\n  - b\n"

    @pytest.mark.unit
    def test_first_literal_line_keeps_indentation(self, counter):
        assert finalize_whitespace("\n\n    code\n", ALL_ON, counter) == "    code\n"

    @pytest.mark.unit
    def test_empty_stays_empty(self, counter):
        assert finalize_whitespace("", ALL_ON, counter) == ""
        assert finalize_whitespace(" \n\n \t", ALL_ON, counter) == ""
        assert counter[WHITESPACE_FINAL_NEWLINE] == 0

    @pytest.mark.unit
    def test_exactly_one_final_newline(self, counter):
        assert finalize_whitespace("text\n\n\n", ALL_ON, counter) == "text\n"

    @pytest.mark.unit
    def test_idempotent(self, counter):
        once = finalize_whitespace("  a  b \n\n\n c", ALL_ON, counter)
        assert finalize_whitespace(once, ALL_ON, counter) == once

    @pytest.mark.unit
    def test_counts_only_real_changes(self, counter):
        assert finalize_whitespace("done\n", ALL_ON, counter) == "done\n"
        assert counter.total() == 0

        assert finalize_whitespace("done", ALL_ON, counter) == "done\n"
        assert counter[WHITESPACE_FINAL_NEWLINE] == 1
        assert counter[WHITESPACE_TRIM_DOCUMENT] == 0
