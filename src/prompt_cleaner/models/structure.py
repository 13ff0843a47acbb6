"""
Structural nodes produced by the markdown parser and consumed by the renderer.

Blocks form a flat ordered sequence, one node per source line (code blocks
and tables span several lines). Blockquote and ListItem wrap exactly one
inner line node; the quote is always the outermost container.
"""

from dataclasses import dataclass
from typing import Tuple, Union


# ---------------------------------------------------------------------------
# Inline runs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextRun:
    """Plain text, possibly containing emphasis marker pairs."""

    text: str


@dataclass(frozen=True)
class CodeSpanRun:
    """Inline code, kept verbatim including its backticks."""

    text: str


@dataclass(frozen=True)
class LinkRun:
    """
    Markdown link [text](url) or autolink <url>.

    Attributes:
        text: Link text (may contain emphasis markers)
        url: Link destination; a title, if present in the source, is dropped
        autolink: True for <https://...> links, where text == url
    """

    text: str
    url: str
    autolink: bool = False


@dataclass(frozen=True)
class ImageRun:
    """Markdown image ![alt](src)."""

    alt: str
    url: str


InlineRun = Union[TextRun, CodeSpanRun, LinkRun, ImageRun]


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BlankLine:
    """An empty (or whitespace-only) line."""


@dataclass(frozen=True)
class Heading:
    level: int
    runs: Tuple[InlineRun, ...]
    raw: str = ""  # Heading text without markers


@dataclass(frozen=True)
class HorizontalRule:
    text: str  # The rule as written, e.g. "---" or "* * *"


@dataclass(frozen=True)
class Paragraph:
    """
    An ordinary text line.

    raw is the source text of the line (after container markers). Literal
    paragraphs (tab or 4+ space indentation outside a list) have no inline runs
    and are rendered from raw verbatim.
    """

    runs: Tuple[InlineRun, ...] = ()
    raw: str = ""
    literal: bool = False


LineNode = Union[Heading, HorizontalRule, Paragraph]


@dataclass(frozen=True)
class ListItem:
    """
    A list item line.

    Attributes:
        indent: Leading whitespace before the marker (nesting depth)
        marker: Marker as written: "-", "*", "+", "•", "1." or "1)"
        child: The item content
    """

    indent: str
    marker: str
    child: LineNode

    @property
    def ordered(self) -> bool:
        return self.marker[:1].isdigit()


@dataclass(frozen=True)
class Blockquote:
    """A quoted line; nested quote markers collapse to one level."""

    child: Union[ListItem, LineNode]


@dataclass(frozen=True)
class CodeBlock:
    """
    Fenced code block.

    An unterminated fence runs to the end of the input. The parser then keeps
    parsing the following lines as ordinary blocks, so the renderer can either
    treat everything after the fence as code or drop only the fence line.

    Attributes:
        fence: Opening fence characters, e.g. "```" or "~~~~"
        info: Info string after the opening fence (language hint)
        lines: Content lines, verbatim (quote markers removed)
        closed: False when the input ended before a closing fence
    """

    fence: str
    info: str
    lines: Tuple[str, ...]
    closed: bool = True


@dataclass(frozen=True)
class Table:
    """Pipe table: header row, delimiter row and body rows, as written."""

    rows: Tuple[str, ...]


Block = Union[
    BlankLine, Heading, HorizontalRule, Paragraph, ListItem, Blockquote, CodeBlock, Table
]

