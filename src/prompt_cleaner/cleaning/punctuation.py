"""
Typographic punctuation normalization: em dashes, en dashes, curly quotes and
ellipses.
"""

import re

from ..models.options import (
    CurlyQuotesMode,
    EllipsisMode,
    EmDashMode,
    EnDashMode,
    PunctuationOptions,
)
from ..models.rules import (
    PUNCTUATION_CURLY_QUOTES,
    PUNCTUATION_ELLIPSIS,
    PUNCTUATION_EM_DASH,
    PUNCTUATION_EN_DASH,
    RuleCounter,
)

_EM_DASH = "\u2014"
# The lookbehind keeps a match from starting inside a run of blanks
_EM_DASH_RE = re.compile(r"(?<![ \t])[ \t]*(?:\u2014[ \t]*)+")
# En dash, non-breaking hyphen, minus sign
_EN_DASH_RE = re.compile(r"[\u2013\u2011\u2212]")
_DOUBLE_QUOTES_RE = re.compile(r"[\u201c\u201d]")
_SINGLE_QUOTES_RE = re.compile(r"[\u2018\u2019]")
_ELLIPSIS_RE = re.compile(r"\u2026")


class PunctuationNormalizer:
    """Applies the punctuation policy line-agnostically, code included."""

    def __init__(self, options: PunctuationOptions, counter: RuleCounter):
        self.options = options
        self.counter = counter

    def normalize(self, text: str) -> str:
        text = self.normalize_em_dashes(text)
        text = self.normalize_en_dashes(text)
        text = self.normalize_quotes(text)
        return self.normalize_ellipses(text)

    def normalize_em_dashes(self, text: str) -> str:
        """
        Map em dashes to a comma separator or remove them.

        comma: "word — next" and "word—next" become "word, next"
        remove: the dash goes and the words are separated by one space
        A dash that opens a line is removed in both modes; indentation stays.
        """
        mode = self.options.em_dash
        if mode == EmDashMode.KEEP or _EM_DASH not in text:
            return text

        def _replace(match: "re.Match[str]") -> str:
            self.counter.hit(PUNCTUATION_EM_DASH, match.group(0).count(_EM_DASH))
            start, end = match.span()
            if start == 0 or text[start - 1] == "\n":
                return match.group(0)[: len(match.group(0)) - len(match.group(0).lstrip(" \t"))]
            at_end = end == len(text) or text[end] == "\n"
            if mode == EmDashMode.COMMA:
                return "," if at_end else ", "
            return "" if at_end else " "

        return _EM_DASH_RE.sub(_replace, text)

    def normalize_en_dashes(self, text: str) -> str:
        """Map en dashes ("1–3"), non-breaking hyphens and minus signs to "-"."""
        if self.options.en_dash == EnDashMode.KEEP:
            return text
        text, count = _EN_DASH_RE.subn("-", text)
        self.counter.hit(PUNCTUATION_EN_DASH, count)
        return text

    def normalize_quotes(self, text: str) -> str:
        if self.options.curly_quotes == CurlyQuotesMode.KEEP:
            return text
        text, double = _DOUBLE_QUOTES_RE.subn('"', text)
        text, single = _SINGLE_QUOTES_RE.subn("'", text)
        self.counter.hit(PUNCTUATION_CURLY_QUOTES, double + single)
        return text

    def normalize_ellipses(self, text: str) -> str:
        mode = self.options.ellipsis
        if mode == EllipsisMode.KEEP:
            return text
        replacement = "..." if mode == EllipsisMode.THREE_DOTS else ""
        text, count = _ELLIPSIS_RE.subn(replacement, text)
        self.counter.hit(PUNCTUATION_ELLIPSIS, count)
        return text


def normalize_punctuation(text: str, options: PunctuationOptions, counter: RuleCounter) -> str:
    """Apply em dash, en dash, curly quote and ellipsis policies."""
    return PunctuationNormalizer(options, counter).normalize(text)
