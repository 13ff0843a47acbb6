"""
Unit tests for emoji stripping (emoji.py).
"""

import inspect
import warnings

import pytest

from prompt_cleaner.cleaning import emoji
from prompt_cleaner.cleaning.emoji import strip_emojis
from prompt_cleaner.models.rules import EMOJI_STRIP
from tests.fixtures.timing import growth_ratio


class TestStripEmojis:
    """Tests for strip_emojis()."""

    @pytest.mark.unit
    def test_between_words_leaves_one_space(self, counter):
        assert strip_emojis("Great job 🎉 team", counter) == "Great job team"
        assert counter[EMOJI_STRIP] == 1

    @pytest.mark.unit
    def test_line_edges(self, counter):
        assert strip_emojis("🚀 Launch\nDone ✅", counter) == "Launch\nDone"
        assert counter[EMOJI_STRIP] == 2

    @pytest.mark.unit
    def test_indentation_kept(self, counter):
        assert strip_emojis("  🔥 hot", counter) == "  hot"

    @pytest.mark.unit
    def test_adjacent_to_word(self, counter):
        assert strip_emojis("yes👍", counter) == "yes"
        assert strip_emojis("a😀b", counter) == "ab"

    @pytest.mark.unit
    def test_skin_tone_is_one_sequence(self, counter):
        assert strip_emojis("ok 👍🏽 ok", counter) == "ok ok"
        assert counter[EMOJI_STRIP] == 1

    @pytest.mark.unit
    def test_zwj_family_is_one_sequence(self, counter):
        assert strip_emojis("hi 👨\u200d👩\u200d👧 there", counter) == "hi there"
        assert counter[EMOJI_STRIP] == 1

    @pytest.mark.unit
    def test_flag_pair(self, counter):
        assert strip_emojis("Made in 🇮🇹 today", counter) == "Made in today"
        assert counter[EMOJI_STRIP] == 1

    @pytest.mark.unit
    def test_keycap(self, counter):
        assert strip_emojis("1\ufe0f\u20e3 first", counter) == "first"
        assert counter[EMOJI_STRIP] == 1

    @pytest.mark.unit
    def test_variation_selector(self, counter):
        assert strip_emojis("love ❤\ufe0f it", counter) == "love it"

    @pytest.mark.unit
    def test_run_of_emojis(self, counter):
        assert strip_emojis("Hi 😀 😀😀 there", counter) == "Hi there"
        assert counter[EMOJI_STRIP] == 3

    @pytest.mark.unit
    def test_text_symbols_kept(self, counter):
        text = "©2024 ACME™ and ® mark, digits 123 and #tag"
        assert strip_emojis(text, counter) == text
        assert counter[EMOJI_STRIP] == 0

    @pytest.mark.unit
    def test_typographic_punctuation_untouched(self, counter):
        text = "“quoted” — dash… ‘single’"
        assert strip_emojis(text, counter) == text

    @pytest.mark.unit
    def test_empty(self, counter):
        assert strip_emojis("", counter) == ""

    @pytest.mark.unit
    def test_long_blank_runs_around_emoji(self, counter):
        text = "a" + " " * 50 + "🙂" + " " * 50 + "b"
        assert strip_emojis(text, counter) == "a b"

    @pytest.mark.unit
    def test_long_blank_run_scales_linearly(self, counter):
        def make_input(size: int) -> str:
            return "a—b x" + " " * size + "y"

        ratio = growth_ratio(lambda text: strip_emojis(text, counter), make_input, 25_000)
        assert ratio < 8


class TestModuleSource:
    """The emoji module compiles cleanly."""

    @pytest.mark.unit
    def test_no_invalid_escape_warnings(self):
        source = inspect.getsource(emoji)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(source, emoji.__file__, "exec")
