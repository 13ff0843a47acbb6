"""
Input guard: bounds-check and truncate oversized input.

Truncation backs off to the nearest preceding character boundary so that no
surrogate pair, combining sequence or multi-codepoint emoji is split.
"""

import unicodedata
from dataclasses import dataclass

from ..models.rules import IO_TRUNCATED, RuleCounter

MAX_INPUT_CHARS = 100_000
TRUNCATION_MARKER = f"[... Input truncated at {MAX_INPUT_CHARS:,} characters]"

_ZWJ = "\u200d"
_VARIATION_SELECTORS = {"\ufe0e", "\ufe0f"}


@dataclass(frozen=True)
class GuardedInput:
    """
    Input after bounds checking.

    Attributes:
        text: Body to clean (at most MAX_INPUT_CHARS characters)
        truncated: True when the input was cut or already carried the marker
    """

    text: str
    truncated: bool

    def with_marker(self, cleaned: str) -> str:
        """Attach the truncation marker line to cleaned output."""
        if not self.truncated:
            return cleaned
        body = cleaned.rstrip("\n")
        trailing = "\n" if cleaned.endswith("\n") else ""
        if not body:
            return TRUNCATION_MARKER + trailing
        return f"{body}\n{TRUNCATION_MARKER}{trailing}"


def guard_input(text: str, counter: RuleCounter, limit: int = MAX_INPUT_CHARS) -> GuardedInput:
    """
    Bounds-check input text.

    Input that already ends with the truncation marker (i.e. previously
    truncated output) is measured without the marker and keeps it.

    Args:
        text: Raw input; None or non-str values are treated as empty
        counter: Rule counter for this call
        limit: Maximum number of characters to keep

    Returns:
        GuardedInput with the body to clean
    """
    if not isinstance(text, str) or not text:
        return GuardedInput(text="", truncated=False)

    body = text
    already_truncated = False
    stripped = text.rstrip()
    if stripped.endswith(TRUNCATION_MARKER):
        body = stripped[: -len(TRUNCATION_MARKER)].rstrip()
        already_truncated = True

    if len(body) <= limit:
        return GuardedInput(text=body, truncated=already_truncated)

    cut = safe_cut_index(body, limit)
    counter.hit(IO_TRUNCATED)
    return GuardedInput(text=body[:cut], truncated=True)


def safe_cut_index(text: str, limit: int) -> int:
    """
    Find the largest index <= limit that does not split a character sequence.

    Args:
        text: Text to cut
        limit: Desired cut position

    Returns:
        Cut index; text[:index] ends on a boundary
    """
    cut = min(limit, len(text))
    while 0 < cut < len(text) and _splits_sequence(text, cut):
        cut -= 1
    return cut


def _splits_sequence(text: str, cut: int) -> bool:
    before, after = text[cut - 1], text[cut]

    # Surrogate halves (only reachable with surrogateescape-decoded input)
    if "\ud800" <= before <= "\udbff" and "\udc00" <= after <= "\udfff":
        return True

    if before == _ZWJ or _is_extender(after):
        return True

    # Flags are regional indicator pairs; cutting after an odd count splits one
    if _is_regional_indicator(after) and _is_regional_indicator(before):
        run = 0
        index = cut - 1
        while index >= 0 and _is_regional_indicator(text[index]):
            run += 1
            index -= 1
        return run % 2 == 1

    return False


def _is_extender(char: str) -> bool:
    if char == _ZWJ or char in _VARIATION_SELECTORS:
        return True
    code = ord(char)
    if 0x1F3FB <= code <= 0x1F3FF:  # skin tone modifiers
        return True
    if 0xE0020 <= code <= 0xE007F:  # tag sequences (subdivision flags)
        return True
    return unicodedata.category(char) in ("Mn", "Mc", "Me")


def _is_regional_indicator(char: str) -> bool:
    return 0x1F1E6 <= ord(char) <= 0x1F1FF
