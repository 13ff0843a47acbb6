"""
Emoji stripping.

Uses the regex library for Unicode emoji properties (Extended_Pictographic,
Emoji_Modifier, Regional_Indicator), which the standard re module lacks.
"""

import regex

from ..models.rules import EMOJI_STRIP, RuleCounter

# Pictographs except the text-like (C) (R) (TM) symbols
_PICTOGRAPH = r"(?:(?![\u00a9\u00ae\u2122])\p{Extended_Pictographic})"
_MODIFIERS = r"[\ufe0e\ufe0f]?\p{Emoji_Modifier}?"

# One emoji sequence: flag pair, keycap, or pictograph with modifiers, tag
# characters and ZWJ-joined components. Stray selectors and modifiers count too.
_SEQUENCE = (
    r"\p{Regional_Indicator}{2}"
    r"|[#*0-9]\ufe0f?\u20e3"
    r"|" + _PICTOGRAPH + _MODIFIERS + r"[\U000e0020-\U000e007f]*"
    r"(?:\u200d" + _PICTOGRAPH + _MODIFIERS + r")*"
    r"|[\ufe0f\u20e3]|\p{Emoji_Modifier}|\p{Regional_Indicator}"
)

_SEQUENCE_RE = regex.compile(_SEQUENCE)
# A run of emoji and the blanks around it. The lookbehind keeps a match from
# starting inside a run of blanks.
_RUN_RE = regex.compile(
    r"(?P<lead>(?<![ \t])[ \t]*)"
    r"(?P<run>(?:" + _SEQUENCE + r")(?:[ \t]*(?:" + _SEQUENCE + r"))*)"
    r"(?P<trail>[ \t]*)"
)


def strip_emojis(text: str, counter: RuleCounter) -> str:
    """
    Remove emoji sequences.

    Between two words a single space survives; at a line's start only the
    indentation is kept, and at its end nothing is left.

    Args:
        text: Rendered text
        counter: Rule counter for this call

    Returns:
        Text without emoji
    """
    if not text:
        return text

    def _replace(match: "regex.Match[str]") -> str:
        counter.hit(EMOJI_STRIP, len(_SEQUENCE_RE.findall(match.group("run"))))
        start, end = match.span()
        if start == 0 or text[start - 1] == "\n":
            return match.group("lead")
        if end == len(text) or text[end] == "\n":
            return ""
        return " " if match.group("lead") or match.group("trail") else ""

    return _RUN_RE.sub(_replace, text)

