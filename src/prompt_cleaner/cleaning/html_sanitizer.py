"""
HTML sanitization for pasted text.

Raw HTML never reaches the output: script/style elements are removed with
their content, pasted HTML documents are converted to markdown-ish text with
html2text, and any remaining tag is stripped while its text is kept. Entities
decode to their characters, except for entity-encoded markup ("&lt;b&gt;"):
decoding it would form a tag, so it stays encoded and reads as text. The
passes repeat until the text is stable.
"""

import html
import re
from typing import List, Tuple

import html2text
import structlog

from ..models.rules import PARSE_DECODE_ENTITY, PARSE_SANITIZE_HTML, RuleCounter

logger = structlog.get_logger(__name__)

# Elements whose content is never rendered text
_DROP_ELEMENTS = ("script", "style", "noscript", "template")
_DROP_OPEN_RES = {
    name: re.compile(r"<" + name + r"\b[^<>]*>", re.IGNORECASE) for name in _DROP_ELEMENTS
}
_DROP_CLOSE_RES = {
    name: re.compile(r"</" + name + r"\s*>", re.IGNORECASE) for name in _DROP_ELEMENTS
}

_HTML_ELEMENTS = (
    "a|abbr|address|article|aside|audio|b|base|bdi|bdo|big|blockquote|body|br|"
    "button|canvas|caption|center|cite|code|col|colgroup|data|dd|del|details|dfn|"
    "dialog|div|dl|dt|em|embed|fieldset|figcaption|figure|font|footer|form|frame|"
    "frameset|h[1-6]|head|header|hr|html|i|iframe|img|input|ins|kbd|label|legend|"
    "li|link|main|map|mark|meta|meter|nav|noscript|object|ol|optgroup|option|"
    "output|p|param|picture|pre|progress|q|rp|rt|ruby|s|samp|script|section|"
    "select|small|source|span|strike|strong|style|sub|summary|sup|svg|table|"
    "tbody|td|template|textarea|tfoot|th|thead|time|title|tr|track|tt|u|ul|var|"
    "video|wbr"
)

# Known elements only, so placeholders such as <URL> or <EMAIL> are left alone
_TAG_RE = re.compile(
    r"</?(?:" + _HTML_ELEMENTS + r")(?:\s[^<>]*)?/?>", re.IGNORECASE
)
_COMMENT_RE = re.compile(r"<!--.*?(?:-->|\Z)", re.DOTALL)
_DECLARATION_RE = re.compile(r"<![A-Za-z][^<>]*>|<\?[^<>]*\?>")
_BLOCK_BREAK_RE = re.compile(
    r"<(?:br|/p|/div|/li|/tr|/h[1-6]|/blockquote|/pre)\s*/?>", re.IGNORECASE
)
_ENTITY = r"&(?:[A-Za-z][A-Za-z0-9]{1,31}|#[0-9]{1,7}|#[xX][0-9A-Fa-f]{1,6});?"

# A known tag written with encoded angle brackets, e.g. "&lt;/b&gt;". Attribute
# text is bounded so a stray "&lt;b " cannot scan to the end of the input.
_ENCODED_LT = r"(?:&lt;|&#0*60;|&#[xX]0*3[cC];)"
_ENCODED_GT = r"(?:&gt;|&#0*62;|&#[xX]0*3[eE];)"
_ENCODED_TAG = (
    _ENCODED_LT
    + r"/?(?:" + _HTML_ELEMENTS + r")"
    + r"(?:\s(?:(?!" + _ENCODED_GT + r")[^<>\n]){0,256})?/?"
    + _ENCODED_GT
)
_DECODE_RE = re.compile(r"(?P<tag>" + _ENCODED_TAG + r")|" + _ENTITY, re.IGNORECASE)

# A pasted document or fragment: starts with a block-level tag and ends with a tag
_DOCUMENT_START_RE = re.compile(
    r"\A\s*(?:<!doctype\b|<(?:html|head|body|div|p|table|ul|ol|section|article|main|"
    r"header|footer|h[1-6]|blockquote|pre)\b[^<>]*>)",
    re.IGNORECASE,
)

_MAX_PASSES = 8


def sanitize_html(text: str, counter: RuleCounter) -> str:
    """
    Remove HTML markup from text while keeping its readable content.

    Args:
        text: Input text, possibly containing HTML
        counter: Rule counter for this call

    Returns:
        Text without HTML tags, comments or encoded entities
    """
    if "<" not in text and "&" not in text:
        return text

    if looks_like_html_document(text):
        text = html_to_text(_drop_non_text_elements(text, counter))
        counter.hit(PARSE_SANITIZE_HTML)

    for _ in range(_MAX_PASSES):
        before = text
        text = _drop_non_text_elements(text, counter)
        text, removed = strip_html_tags(text)
        counter.hit(PARSE_SANITIZE_HTML, removed)
        text, decoded = decode_entities(text)
        counter.hit(PARSE_DECODE_ENTITY, decoded)
        if text == before:
            break

    return text


def looks_like_html_document(text: str) -> bool:
    """Check whether text is a pasted HTML document/fragment rather than prose."""
    return bool(_DOCUMENT_START_RE.match(text)) and text.rstrip().endswith(">")


def html_to_text(markup: str) -> str:
    """
    Convert an HTML document to markdown-ish plain text.

    Uses html2text so that headings, lists, links and emphasis become markdown
    the structural parser understands.

    Args:
        markup: HTML content

    Returns:
        Markdown-ish text representation
    """
    if not markup:
        return ""

    # Configure html2text
    h = html2text.HTML2Text()
    h.ignore_links = False
    h.ignore_images = False
    h.ignore_emphasis = False
    h.emphasis_mark = "*"
    h.strong_mark = "**"
    h.body_width = 0  # Don't wrap lines
    h.unicode_snob = True  # Use unicode instead of ASCII replacements

    try:
        return h.handle(markup).strip("\n")
    except Exception as e:
        # Fallback to simple tag stripping if html2text fails
        logger.warning("html2text_failed", error=str(e))
        text, _ = strip_html_tags(_BLOCK_BREAK_RE.sub("\n", markup))
        return text


def strip_html_tags(text: str) -> Tuple[str, int]:
    """
    Strip known HTML tags, comments and declarations, keeping inner text.

    Args:
        text: Text containing HTML tags

    Returns:
        Tuple of (text_without_tags, number_of_tags_removed)
    """
    text, comments = _COMMENT_RE.subn("", text)
    text, declarations = _DECLARATION_RE.subn("", text)
    text, tags = _TAG_RE.subn("", text)
    return text, comments + declarations + tags


def decode_entities(text: str) -> Tuple[str, int]:
    """
    Decode named and numeric character references.

    Encoded markup such as "&lt;b&gt;" is left as is: decoded, it would be
    stripped as a tag and the text the writer meant to show would be lost.

    Args:
        text: Text possibly containing entities

    Returns:
        Tuple of (decoded_text, number_of_entities_decoded)
    """
    count = 0

    def _decode(match: "re.Match[str]") -> str:
        nonlocal count
        if match.group("tag"):
            return match.group(0)
        decoded = html.unescape(match.group(0))
        if decoded != match.group(0):
            count += 1
        return decoded

    return _DECODE_RE.sub(_decode, text), count


def _drop_non_text_elements(text: str, counter: RuleCounter) -> str:
    for name in _DROP_ELEMENTS:
        if "<" not in text:
            break
        text, dropped = _drop_element(text, name)
        counter.hit(PARSE_SANITIZE_HTML, dropped)
    return text


def _drop_element(text: str, name: str) -> Tuple[str, int]:
    """
    Remove every complete <name>...</name> element, content included.

    Each stretch of text is searched at most once. An opening tag without a
    closing one is left for strip_html_tags, which keeps what follows it.
    """
    opener_re = _DROP_OPEN_RES[name]
    closer_re = _DROP_CLOSE_RES[name]
    pieces: List[str] = []
    position = 0
    dropped = 0

    while True:
        opener = opener_re.search(text, position)
        if opener is None:
            break
        closer = closer_re.search(text, opener.end())
        if closer is None:
            break
        pieces.append(text[position:opener.start()])
        position = closer.end()
        dropped += 1

    if not dropped:
        return text, 0
    pieces.append(text[position:])
    return "".join(pieces), dropped
