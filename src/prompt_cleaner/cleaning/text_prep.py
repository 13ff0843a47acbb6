"""
Text preparation ahead of structural parsing.

Normalizes line endings, sanitizes HTML, removes control and invisible
characters and maps non-breaking spaces to plain spaces.
"""

import re
from typing import List

from ..models.rules import (
    PARSE_LINE_ENDINGS,
    PARSE_NBSP,
    PARSE_STRIP_CONTROL,
    PARSE_STRIP_INVISIBLE,
    RuleCounter,
)
from .html_sanitizer import looks_like_html_document, sanitize_html
from .markdown_parser import verbatim_lines

_LINE_ENDING_RE = re.compile(r"\r\n?|[\u2028\u2029\x85]")

# C0/C1 controls except TAB and LF, DEL, BOM, lone surrogates
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x84\x86-\x9f\ufeff\ud800-\udfff]")

# Zero-width space/non-joiner, word joiner, soft hyphen, bidi marks and embeddings.
# ZWJ (U+200D) is kept: it glues emoji sequences together.
_INVISIBLE_RE = re.compile(r"[\u200b\u200c\u2060\u00ad\u200e\u200f\u202a-\u202e\u2066-\u2069]")

_NBSP_RE = re.compile(r"[\u00a0\u202f]")


def prepare_text(text: str, counter: RuleCounter) -> str:
    """
    Prepare raw text for line-oriented parsing.

    Steps:
    1. Normalize line endings to \\n
    2. Sanitize HTML outside code (fenced blocks and literal lines stay
       byte-for-byte); entities may decode to line breaks, so line endings
       are normalized once more
    3. Strip control characters, BOM and lone surrogates
    4. Strip invisible format characters
    5. Map non-breaking spaces to regular spaces

    Args:
        text: Guarded input text
        counter: Rule counter for this call

    Returns:
        Prepared text
    """
    if not text:
        return ""

    text = _normalize_line_endings(text, counter)
    if "<" in text or "&" in text:
        text = _normalize_line_endings(sanitize_outside_code(text, counter), counter)

    text, stripped = _CONTROL_RE.subn("", text)
    counter.hit(PARSE_STRIP_CONTROL, stripped)

    text, stripped = _INVISIBLE_RE.subn("", text)
    counter.hit(PARSE_STRIP_INVISIBLE, stripped)

    text, mapped = _NBSP_RE.subn(" ", text)
    counter.hit(PARSE_NBSP, mapped)

    return text


def sanitize_outside_code(text: str, counter: RuleCounter) -> str:
    """
    Sanitize HTML in every line that is not code.

    A pasted HTML document is converted as a whole. Otherwise the lines of
    closed fenced blocks and literal (indented) lines are kept as written and
    the text between them is sanitized stretch by stretch.

    Args:
        text: Text with \\n line endings
        counter: Rule counter for this call

    Returns:
        Text with HTML removed outside code
    """
    if looks_like_html_document(text):
        return sanitize_html(text, counter)

    code = verbatim_lines(text)
    if not code:
        return sanitize_html(text, counter)

    out: List[str] = []
    stretch: List[str] = []
    for index, line in enumerate(text.split("\n")):
        if index in code:
            if stretch:
                out.append(sanitize_html("\n".join(stretch), counter))
                stretch = []
            out.append(line)
        else:
            stretch.append(line)
    if stretch:
        out.append(sanitize_html("\n".join(stretch), counter))
    return "\n".join(out)


def _normalize_line_endings(text: str, counter: RuleCounter) -> str:
    text, replaced = _LINE_ENDING_RE.subn("\n", text)
    counter.hit(PARSE_LINE_ENDINGS, replaced)
    return text
