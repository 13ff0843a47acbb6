"""
Whitespace finalizer: trailing whitespace, space runs, blank lines, document
edges and the final newline.
"""

import re

from ..models.options import WhitespaceOptions
from ..models.rules import (
    WHITESPACE_COLLAPSE_BLANK_LINES,
    WHITESPACE_COLLAPSE_SPACES,
    WHITESPACE_FINAL_NEWLINE,
    WHITESPACE_TRIM_DOCUMENT,
    WHITESPACE_TRIM_LINES,
    RuleCounter,
)
from .markdown_parser import is_literal_line

_SPACE_RUN_RE = re.compile(r"[^\S\n]{2,}")
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_INDENT_RE = re.compile(r"^[ \t]*")


def finalize_whitespace(text: str, options: WhitespaceOptions, counter: RuleCounter) -> str:
    """
    Normalize whitespace of rendered text.

    Steps:
    1. Trim trailing whitespace from every line
    2. Collapse runs of spaces/tabs after the indentation (literal lines excepted)
    3. Collapse 3+ newlines into one blank line
    4. Remove blank lines and spaces at the start and end of the document
    5. End non-empty output with exactly one newline

    Args:
        text: Normalized text
        options: Whitespace policy
        counter: Rule counter for this call

    Returns:
        Final text; empty input stays empty
    """
    lines = text.split("\n")

    trimmed = [line.rstrip() for line in lines]
    counter.hit(WHITESPACE_TRIM_LINES, sum(1 for a, b in zip(lines, trimmed) if a != b))
    lines = trimmed

    if options.collapse_spaces:
        lines = [_collapse_spaces(line, counter) for line in lines]

    text = "\n".join(lines)

    if options.collapse_blank_lines:
        text, collapsed = _BLANK_RUN_RE.subn("\n\n", text)
        counter.hit(WHITESPACE_COLLAPSE_BLANK_LINES, collapsed)

    head = text.lstrip("\n")
    if not is_literal_line(head):
        head = head.lstrip()
    body = head.rstrip()

    # A single trailing newline that is kept anyway is not a change
    tail = "\n" if body and options.ensure_final_newline else ""
    if head != text or head[len(body):] != tail:
        counter.hit(WHITESPACE_TRIM_DOCUMENT)
    if tail and not head.endswith("\n"):
        counter.hit(WHITESPACE_FINAL_NEWLINE)

    text = body + tail

    return text


def _collapse_spaces(line: str, counter: RuleCounter) -> str:
    if is_literal_line(line):
        return line
    indent = _INDENT_RE.match(line).group(0)
    body, collapsed = _SPACE_RUN_RE.subn(" ", line[len(indent):])
    counter.hit(WHITESPACE_COLLAPSE_SPACES, collapsed)
    return indent + body
