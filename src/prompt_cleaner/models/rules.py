"""
Rule identifiers reported by the cleaning pipeline.

Each identifier names one transformation; the report counts how many times it
fired during a single clean_text() call.
"""

from collections import Counter
from typing import Dict

# Input guard
IO_TRUNCATED = "io:truncated"

# Text preparation (structural parser)
PARSE_LINE_ENDINGS = "parse:line-endings"
PARSE_STRIP_CONTROL = "parse:strip-control"
PARSE_STRIP_INVISIBLE = "parse:strip-invisible"
PARSE_NBSP = "parse:nbsp"
PARSE_SANITIZE_HTML = "parse:sanitize-html"
PARSE_DECODE_ENTITY = "parse:decode-entity"

# Structural renderer
STRUCTURE_DROP_HEADING = "structure:drop-heading"
STRUCTURE_UNWRAP_HEADING = "structure:unwrap-heading"
STRUCTURE_DROP_RULE = "structure:drop-rule"
STRUCTURE_DROP_TABLE = "structure:drop-table"
STRUCTURE_UNWRAP_BLOCKQUOTE = "structure:unwrap-blockquote"
STRUCTURE_UNWRAP_LIST_ITEM = "structure:unwrap-list-item"
STRUCTURE_NORMALIZE_BULLET = "structure:normalize-bullet"
STRUCTURE_DROP_CODE_BLOCK = "structure:drop-code-block"
STRUCTURE_INDENT_CODE_BLOCK = "structure:indent-code-block"
STRUCTURE_UNTERMINATED_FENCE = "structure:unterminated-fence"
STRUCTURE_LINK = "structure:link"
STRUCTURE_IMAGE = "structure:image"
STRUCTURE_STRIP_EMPHASIS = "structure:strip-emphasis"

# Punctuation & contact normalizer
EMOJI_STRIP = "emoji:strip"
PUNCTUATION_EM_DASH = "punctuation:em-dash"
PUNCTUATION_EN_DASH = "punctuation:en-dash"
PUNCTUATION_CURLY_QUOTES = "punctuation:curly-quotes"
PUNCTUATION_ELLIPSIS = "punctuation:ellipsis"
CONTACTS_URL = "contacts:url"
CONTACTS_EMAIL = "contacts:email"

# Whitespace finalizer
WHITESPACE_COLLAPSE_SPACES = "whitespace:collapse-spaces"
WHITESPACE_COLLAPSE_BLANK_LINES = "whitespace:collapse-blank-lines"
WHITESPACE_TRIM_LINES = "whitespace:trim-lines"
WHITESPACE_TRIM_DOCUMENT = "whitespace:trim-document"
WHITESPACE_FINAL_NEWLINE = "whitespace:final-newline"

ALL_RULE_IDS = (
    IO_TRUNCATED,
    PARSE_LINE_ENDINGS,
    PARSE_STRIP_CONTROL,
    PARSE_STRIP_INVISIBLE,
    PARSE_NBSP,
    PARSE_SANITIZE_HTML,
    PARSE_DECODE_ENTITY,
    STRUCTURE_DROP_HEADING,
    STRUCTURE_UNWRAP_HEADING,
    STRUCTURE_DROP_RULE,
    STRUCTURE_DROP_TABLE,
    STRUCTURE_UNWRAP_BLOCKQUOTE,
    STRUCTURE_UNWRAP_LIST_ITEM,
    STRUCTURE_NORMALIZE_BULLET,
    STRUCTURE_DROP_CODE_BLOCK,
    STRUCTURE_INDENT_CODE_BLOCK,
    STRUCTURE_UNTERMINATED_FENCE,
    STRUCTURE_LINK,
    STRUCTURE_IMAGE,
    STRUCTURE_STRIP_EMPHASIS,
    EMOJI_STRIP,
    PUNCTUATION_EM_DASH,
    PUNCTUATION_EN_DASH,
    PUNCTUATION_CURLY_QUOTES,
    PUNCTUATION_ELLIPSIS,
    CONTACTS_URL,
    CONTACTS_EMAIL,
    WHITESPACE_COLLAPSE_SPACES,
    WHITESPACE_COLLAPSE_BLANK_LINES,
    WHITESPACE_TRIM_LINES,
    WHITESPACE_TRIM_DOCUMENT,
    WHITESPACE_FINAL_NEWLINE,
)


class RuleCounter:
    """
    Call-local tally of rule firings.

    One instance is created per clean_text() call and threaded through the
    stages; it is never shared between calls.
    """

    def __init__(self) -> None:
        self._counts: Counter = Counter()

    def hit(self, rule_id: str, times: int = 1) -> None:
        """
        Record that a rule fired.

        Args:
            rule_id: One of ALL_RULE_IDS
            times: Number of occurrences (zero is a no-op)
        """
        if rule_id not in ALL_RULE_IDS:
            raise KeyError(f"Unknown rule id '{rule_id}'")
        if times > 0:
            self._counts[rule_id] += times

    def __getitem__(self, rule_id: str) -> int:
        return self._counts[rule_id]

    def total(self) -> int:
        return sum(self._counts.values())

    def snapshot(self) -> Dict[str, int]:
        """Return counts for every known rule id, zero-filled."""
        return {rule_id: self._counts[rule_id] for rule_id in ALL_RULE_IDS}
