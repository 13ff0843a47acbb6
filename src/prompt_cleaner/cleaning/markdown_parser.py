"""
Line-oriented markdown parser.

Produces a flat sequence of block nodes, one per source line except fenced
code blocks and pipe tables. Container markers (quote, list item, heading) are
peeled off the front of each line in any order; the remainder becomes the
inner line node.
"""

import re
from typing import FrozenSet, List, Optional, Tuple

from ..models.structure import (
    BlankLine,
    Block,
    Blockquote,
    CodeBlock,
    CodeSpanRun,
    Heading,
    HorizontalRule,
    ImageRun,
    InlineRun,
    LinkRun,
    ListItem,
    Paragraph,
    Table,
    TextRun,
)

_QUOTE_RE = re.compile(r"^ {0,3}>[ \t]?")
_QUOTE_PREFIX_RE = re.compile(r"^(?: {0,3}>[ \t]?)+")
_LIST_RE = re.compile(r"^(?P<indent>[ \t]*)(?P<marker>[-*+\u2022]|\d{1,9}[.)])(?:[ \t]+|$)")
_HEADING_RE = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+|$)")
_HEADING_CLOSE_RE = re.compile(r"(?:^|(?<![ \t])[ \t]+)#+[ \t]*$")
_RULE_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_TABLE_CELL_RE = re.compile(r"^[ \t]*:?-+:?[ \t]*$")

_TITLE = r"(?:[ \t]+(?:\"[^\"\n]*\"|'[^'\n]*'|\([^()\n]*\)))?[ \t]*"
_URL = r"(?:[^()\s]|\([^()\s]*\))+"

_INLINE_RE = re.compile(
    r"(?P<code>`{1,3})(?P<code_body>[^`\n]+)(?P=code)"
    r"|!\[(?P<alt>[^\[\]\n]*)\]\((?P<img_url>" + _URL + r")?" + _TITLE + r"\)"
    r"|\[(?P<text>[^\[\]\n]+)\]\((?P<url>" + _URL + r")" + _TITLE + r"\)"
    r"|<(?P<auto>(?:https?://|mailto:)[^<>\s]+)>"
)


def is_literal_line(line: str) -> bool:
    """A line indented by a tab or 4+ spaces is passed through verbatim."""
    return line.startswith("\t") or line.startswith("    ")


def parse_document(text: str) -> Tuple[Block, ...]:
    """
    Parse prepared text into block nodes.

    Args:
        text: Text with \\n line endings

    Returns:
        Tuple of blocks in source order
    """
    if not text:
        return ()
    return _DocumentParser(text.split("\n")).parse()


def verbatim_lines(text: str) -> FrozenSet[int]:
    """
    Indices of the lines that are code: closed fenced blocks (fence lines
    included) and literal lines.

    Args:
        text: Text with \\n line endings

    Returns:
        Zero-based line indices
    """
    if not text:
        return frozenset()
    parser = _DocumentParser(text.split("\n"))
    parser.parse()
    return frozenset(parser.verbatim)


class _DocumentParser:
    def __init__(self, lines: List[str]):
        self.lines = lines
        self.verbatim: List[int] = []
        self._closers: Optional[_FenceClosers] = None

    def parse(self) -> Tuple[Block, ...]:
        lines = self.lines
        blocks: List[Block] = []
        in_list = False
        unclosed_seen = False
        index = 0

        while index < len(lines):
            line = lines[index]
            index += 1

            if not line.strip():
                blocks.append(BlankLine())
                in_list = False
                continue

            if is_literal_line(line) and not in_list:
                blocks.append(Paragraph(raw=line, literal=True))
                self.verbatim.append(index - 1)
                continue

            if _is_table_start(lines, index - 1):
                end = index + 1
                while end < len(lines) and _is_table_row(lines[end]):
                    end += 1
                blocks.append(Table(rows=tuple(lines[index - 1:end])))
                index = end
                in_list = False
                continue

            quoted, list_info, level, rest, literal = _peel(line, in_list)

            if literal:
                node: Block = Paragraph(raw=rest, literal=True)
                blocks.append(Blockquote(node) if quoted else node)
                self.verbatim.append(index - 1)
                in_list = False
                continue

            fence = _FENCE_OPEN_RE.match(rest)
            if fence and not (fence.group("fence")[0] == "`" and "`" in fence.group("info")):
                if self._closers is None:
                    self._closers = _FenceClosers(lines)
                opener = index - 1
                index, block = _read_fence(
                    lines,
                    index,
                    fence.group("fence"),
                    fence.group("info").strip(),
                    quoted,
                    self._closers,
                    keep_unclosed=not unclosed_seen,
                )
                if block.closed:
                    self.verbatim.extend(range(opener, index))
                else:
                    unclosed_seen = True
                blocks.append(block)
                in_list = False
                continue

            if _RULE_RE.match(rest):
                child = HorizontalRule(text=rest.strip())
            elif level:
                content = rest.strip()
                content = _HEADING_CLOSE_RE.sub("", content)
                child = Heading(level=level, runs=parse_inline(content), raw=content)
            else:
                child = Paragraph(runs=parse_inline(rest), raw=rest)

            node = child
            if list_info is not None:
                node = ListItem(indent=list_info[0], marker=list_info[1], child=child)
                in_list = True
            elif quoted:
                in_list = False
            # Otherwise an unmarked line right after a list item continues the list
            if quoted:
                node = Blockquote(node)
            blocks.append(node)

        return tuple(blocks)


def _peel(line: str, in_list: bool) -> Tuple[bool, Optional[Tuple[str, str]], int, str, bool]:
    """
    Strip container markers from the front of a line.

    Returns:
        (quoted, (list_indent, list_marker) or None, heading_level, remainder,
        remainder_is_literal)
    """
    quoted = False
    list_info: Optional[Tuple[str, str]] = None
    level = 0
    rest = line

    while True:
        match = _QUOTE_RE.match(rest)
        if match:
            quoted = True
            rest = rest[match.end():]
            if is_literal_line(rest) and list_info is None and not in_list:
                return quoted, list_info, level, rest, True
            continue
        if _RULE_RE.match(rest):
            break
        match = _LIST_RE.match(rest)
        if match and (list_info is not None or in_list or len(match.group("indent")) <= 3):
            if list_info is None:
                list_info = (match.group("indent"), match.group("marker"))
            rest = rest[match.end():]
            continue
        match = _HEADING_RE.match(rest)
        if match:
            if not level:
                level = len(match.group("hashes"))
            rest = rest[match.end():]
            continue
        break

    return quoted, list_info, level, rest, False


def _is_table_row(line: str) -> bool:
    return "|" in line and bool(line.strip()) and not is_literal_line(line)


def _is_table_start(lines: List[str], index: int) -> bool:
    """A row with a pipe followed by a delimiter row such as |---|:--:|."""
    if index + 1 >= len(lines) or not _is_table_row(lines[index]):
        return False
    delimiter = lines[index + 1]
    if not _is_table_row(delimiter):
        return False
    cells = delimiter.strip().strip("|").split("|")
    return all(_TABLE_CELL_RE.match(cell) for cell in cells)


class _FenceClosers:
    """
    Longest possible closing fence at or after each line, per fence character.

    Quoted openers are closed by unquoted lines and unquoted openers by raw
    lines, so each has its own table. Lets an unterminated fence be recognized
    without rescanning to the end of input for every opener.
    """

    _CANDIDATE_RE = re.compile(r"^[ \t]*(`{3,}|~{3,})[ \t]*$")

    def __init__(self, lines: List[str]):
        size = len(lines)
        self._longest = {
            quoted: {"`": [0] * (size + 1), "~": [0] * (size + 1)} for quoted in (False, True)
        }
        for position in range(size - 1, -1, -1):
            for quoted, table in self._longest.items():
                for longest in table.values():
                    longest[position] = longest[position + 1]
                line = _unquote(lines[position]) if quoted else lines[position]
                match = self._CANDIDATE_RE.match(line)
                if match:
                    run = match.group(1)
                    table[run[0]][position] = max(table[run[0]][position], len(run))

    def may_close(self, fence: str, position: int, quoted: bool) -> bool:
        return self._longest[quoted][fence[0]][position] >= len(fence)


def _read_fence(
    lines: List[str],
    index: int,
    fence: str,
    info: str,
    quoted: bool,
    closers: _FenceClosers,
    keep_unclosed: bool,
) -> Tuple[int, CodeBlock]:
    """
    Read a fenced block whose opening fence is lines[index - 1].

    Returns:
        (index of the next line to parse, CodeBlock). For an unterminated
        fence the next line is the one right after the opener.
    """
    if closers.may_close(fence, index, quoted):
        close_re = re.compile(
            r"^[ \t]*" + re.escape(fence[0]) + "{" + str(len(fence)) + r",}[ \t]*$"
        )
        content: List[str] = []
        for position in range(index, len(lines)):
            line = _unquote(lines[position]) if quoted else lines[position]
            if close_re.match(line):
                return position + 1, CodeBlock(fence=fence, info=info, lines=tuple(content))
            content.append(line)

    # Only the first unterminated fence keeps its content: it already spans
    # every later line.
    remainder: Tuple[str, ...] = ()
    if keep_unclosed:
        remainder = tuple(_unquote(line) if quoted else line for line in lines[index:])
    return index, CodeBlock(fence=fence, info=info, lines=remainder, closed=False)


def _unquote(line: str) -> str:
    return _QUOTE_PREFIX_RE.sub("", line, count=1)


def parse_inline(text: str) -> Tuple[InlineRun, ...]:
    """
    Split a line into inline runs: text, code spans, links, images and autolinks.

    Args:
        text: Line content without block markers

    Returns:
        Tuple of inline runs covering the whole input
    """
    runs: List[InlineRun] = []
    position = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > position:
            runs.append(TextRun(text[position:match.start()]))
        if match.group("code") is not None:
            runs.append(CodeSpanRun(match.group(0)))
        elif match.group("alt") is not None:
            runs.append(ImageRun(alt=match.group("alt"), url=match.group("img_url") or ""))
        elif match.group("text") is not None:
            runs.append(LinkRun(text=match.group("text"), url=match.group("url")))
        else:
            url = match.group("auto")
            runs.append(LinkRun(text=url, url=url, autolink=True))
        position = match.end()
    if position < len(text):
        runs.append(TextRun(text[position:]))
    return tuple(runs)
