"""
Unit tests for punctuation normalization (punctuation.py).
"""

import pytest

from prompt_cleaner.cleaning.punctuation import normalize_punctuation
from prompt_cleaner.models.options import (
    CurlyQuotesMode,
    EllipsisMode,
    EmDashMode,
    EnDashMode,
    PunctuationOptions,
)
from prompt_cleaner.models.rules import (
    PUNCTUATION_CURLY_QUOTES,
    PUNCTUATION_ELLIPSIS,
    PUNCTUATION_EM_DASH,
    PUNCTUATION_EN_DASH,
)
from tests.fixtures.timing import growth_ratio


def options(
    em_dash: EmDashMode = EmDashMode.COMMA,
    en_dash: EnDashMode = EnDashMode.HYPHEN,
    curly_quotes: CurlyQuotesMode = CurlyQuotesMode.STRAIGHT,
    ellipsis: EllipsisMode = EllipsisMode.THREE_DOTS,
) -> PunctuationOptions:
    return PunctuationOptions(
        em_dash=em_dash, en_dash=en_dash, curly_quotes=curly_quotes, ellipsis=ellipsis
    )


class TestEmDash:
    """Tests for em dash handling."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("word — next", "word, next"),
            ("word—next", "word, next"),
            ("a — — b", "a, b"),
            ("ends with —", "ends with,"),
            ("— opens the line", "opens the line"),
        ],
    )
    def test_comma(self, counter, text, expected):
        assert normalize_punctuation(text, options(), counter) == expected

    @pytest.mark.unit
    def test_comma_counts_each_dash(self, counter):
        normalize_punctuation("a — — b and c—d", options(), counter)
        assert counter[PUNCTUATION_EM_DASH] == 3

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("word — next", "word next"),
            ("word—next", "word next"),
            ("ends —", "ends"),
        ],
    )
    def test_remove(self, counter, text, expected):
        result = normalize_punctuation(text, options(em_dash=EmDashMode.REMOVE), counter)
        assert result == expected

    @pytest.mark.unit
    def test_keep(self, counter):
        text = "word — next"
        assert normalize_punctuation(text, options(em_dash=EmDashMode.KEEP), counter) == text
        assert counter[PUNCTUATION_EM_DASH] == 0

    @pytest.mark.unit
    def test_hyphen_untouched(self, counter):
        text = "well-known - fine"
        assert normalize_punctuation(text, options(), counter) == text

    @pytest.mark.unit
    def test_long_blank_run_scales_linearly(self, counter):
        def make_input(size: int) -> str:
            return "a—b x" + " " * size + "y"

        ratio = growth_ratio(
            lambda text: normalize_punctuation(text, options(), counter), make_input, 25_000
        )
        assert ratio < 8


class TestEnDash:
    """Tests for en dash handling."""

    @pytest.mark.unit
    def test_mapped_to_hyphen(self, counter):
        result = normalize_punctuation("pages 10–12 and 3 – 4", options(), counter)
        assert result == "pages 10-12 and 3 - 4"
        assert counter[PUNCTUATION_EN_DASH] == 2

    @pytest.mark.unit
    def test_minus_sign_and_non_breaking_hyphen(self, counter):
        result = normalize_punctuation("\u22125 and e‑mail", options(), counter)
        assert result == "-5 and e-mail"
        assert counter[PUNCTUATION_EN_DASH] == 2

    @pytest.mark.unit
    def test_keep(self, counter):
        text = "pages 10–12"
        result = normalize_punctuation(text, options(en_dash=EnDashMode.KEEP), counter)
        assert result == text
        assert counter[PUNCTUATION_EN_DASH] == 0

    @pytest.mark.unit
    def test_em_dash_is_not_an_en_dash(self, counter):
        assert normalize_punctuation("a — b", options(), counter) == "a, b"
        assert counter[PUNCTUATION_EN_DASH] == 0


class TestQuotesAndEllipsis:
    """Tests for curly quote and ellipsis handling."""

    @pytest.mark.unit
    def test_curly_quotes_straightened(self, counter):
        result = normalize_punctuation("“Hi,” she said. It‘s ‘fine’", options(), counter)

        assert result == "\"Hi,\" she said. It's 'fine'"
        assert counter[PUNCTUATION_CURLY_QUOTES] == 5

    @pytest.mark.unit
    def test_curly_quotes_kept(self, counter):
        text = "“Hi”"
        result = normalize_punctuation(text, options(curly_quotes=CurlyQuotesMode.KEEP), counter)
        assert result == text

    @pytest.mark.unit
    def test_ellipsis_three_dots(self, counter):
        assert normalize_punctuation("Wait…", options(), counter) == "Wait..."
        assert counter[PUNCTUATION_ELLIPSIS] == 1

    @pytest.mark.unit
    def test_ellipsis_removed(self, counter):
        result = normalize_punctuation("Wait…", options(ellipsis=EllipsisMode.REMOVE), counter)
        assert result == "Wait"

    @pytest.mark.unit
    def test_ellipsis_kept(self, counter):
        result = normalize_punctuation("Wait…", options(ellipsis=EllipsisMode.KEEP), counter)
        assert result == "Wait…"

    @pytest.mark.unit
    def test_emoji_untouched(self, counter):
        assert normalize_punctuation("ok 👍", options(), counter) == "ok 👍"
