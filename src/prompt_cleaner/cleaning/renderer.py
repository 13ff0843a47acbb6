"""
Structural renderer: block nodes -> text according to StructureOptions.
"""

import re
from typing import Callable, List, Optional, Sequence, Tuple

from ..models.options import CodeBlockMode, LinkMode, ListMode, StructureOptions
from ..models.rules import (
    STRUCTURE_DROP_CODE_BLOCK,
    STRUCTURE_DROP_HEADING,
    STRUCTURE_DROP_RULE,
    STRUCTURE_DROP_TABLE,
    STRUCTURE_IMAGE,
    STRUCTURE_INDENT_CODE_BLOCK,
    STRUCTURE_LINK,
    STRUCTURE_NORMALIZE_BULLET,
    STRUCTURE_STRIP_EMPHASIS,
    STRUCTURE_UNTERMINATED_FENCE,
    STRUCTURE_UNWRAP_BLOCKQUOTE,
    STRUCTURE_UNWRAP_HEADING,
    STRUCTURE_UNWRAP_LIST_ITEM,
    RuleCounter,
)
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
from .markdown_parser import parse_inline

_EMPHASIS_RES = (
    re.compile(r"\*\*(?=[^\s*])([^*]+?)(?<=[^\s*])\*\*"),
    re.compile(r"~~(?=[^\s~])([^~]+?)(?<=[^\s~])~~"),
    re.compile(r"\*(?=[^\s*])([^*]+?)(?<=[^\s*])\*"),
)
_MASK_RE = re.compile(r"\x00(\d+)\x00")
_CODE_INDENT = "    "

# Every inline rewrite shortens the line, so this cap is never reached in practice
_MAX_INLINE_PASSES = 32


def strip_emphasis(text: str) -> Tuple[str, int]:
    """
    Remove bold, italic and strikethrough marker pairs, keeping their content.

    Returns:
        Tuple of (text, number_of_pairs_removed)
    """
    removed = 0
    while True:
        before = removed
        for pattern in _EMPHASIS_RES:
            text, count = pattern.subn(r"\1", text)
            removed += count
        if removed == before:
            return text, removed


class StructureRenderer:
    """
    Renders parsed blocks back to text.

    Headings, rules, quotes, lists, tables, links, images, emphasis and code
    blocks are each kept, unwrapped or dropped as configured. Every change is
    counted on the rule counter.
    """

    def __init__(self, options: StructureOptions, counter: RuleCounter):
        self.options = options
        self.counter = counter

    def render(self, blocks: Sequence[Block]) -> str:
        out: List[str] = []
        separate_next = False

        for block in blocks:
            if isinstance(block, CodeBlock):
                if not block.closed:
                    self.counter.hit(STRUCTURE_UNTERMINATED_FENCE)
                    if self.options.code_block_mode != CodeBlockMode.KEEP_INDENTED:
                        # Only the fence line goes; what follows renders as text
                        continue
                code = self._render_code_block(block)
                if code:
                    if out and out[-1].strip():
                        out.append("")
                    out.extend(code)
                    separate_next = True
                if not block.closed:
                    # The block runs to the end of input
                    break
                continue

            if isinstance(block, Table):
                if self.options.drop_tables:
                    self.counter.hit(STRUCTURE_DROP_TABLE)
                    continue
                if separate_next:
                    out.append("")
                separate_next = False
                out.extend(self.render_inline(parse_inline(row), row) for row in block.rows)
                continue

            line = self._render_line(block)
            if line is None:
                continue
            if separate_next and line.strip():
                out.append("")
            separate_next = False
            out.append(line)

        return "\n".join(out)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _render_code_block(self, block: CodeBlock) -> List[str]:
        if self.options.code_block_mode == CodeBlockMode.DROP:
            self.counter.hit(STRUCTURE_DROP_CODE_BLOCK)
            return []
        if not block.lines:
            return []
        self.counter.hit(STRUCTURE_INDENT_CODE_BLOCK)
        return [_CODE_INDENT + line if line.strip() else "" for line in block.lines]

    def _render_line(self, block: Block) -> Optional[str]:
        if isinstance(block, BlankLine):
            return ""

        if isinstance(block, Blockquote):
            inner = self._render_line(block.child)
            if inner is None:
                return None
            if self.options.drop_blockquotes:
                self.counter.hit(STRUCTURE_UNWRAP_BLOCKQUOTE)
                return inner
            return f"> {inner}" if inner else ">"

        if isinstance(block, ListItem):
            inner = self._render_line(block.child)
            if inner is None:
                return None
            if self.options.list_mode == ListMode.SENTENCES:
                self.counter.hit(STRUCTURE_UNWRAP_LIST_ITEM)
                return inner
            marker = block.marker
            if not block.ordered and marker != "-":
                self.counter.hit(STRUCTURE_NORMALIZE_BULLET)
                marker = "-"
            prefix = block.indent + marker
            return f"{prefix} {inner}" if inner else prefix

        if isinstance(block, Heading):
            if self.options.drop_headings:
                self.counter.hit(STRUCTURE_DROP_HEADING)
                return None
            self.counter.hit(STRUCTURE_UNWRAP_HEADING)
            return self.render_inline(block.runs, block.raw)

        if isinstance(block, HorizontalRule):
            if self.options.drop_horizontal_rules:
                self.counter.hit(STRUCTURE_DROP_RULE)
                return None
            return block.text

        if isinstance(block, Paragraph):
            if block.literal:
                return block.raw
            return self.render_inline(block.runs, block.raw)

        raise TypeError(f"Unsupported block: {type(block).__name__}")

    # ------------------------------------------------------------------
    # Inline
    # ------------------------------------------------------------------

    def render_inline(self, runs: Sequence[InlineRun], source: str) -> str:
        """
        Render inline runs, repeating until the line no longer changes.

        Removing emphasis can expose a link (and the other way around), so the
        result is parsed and rendered again until stable.
        """
        text = self._render_runs(runs)
        for _ in range(_MAX_INLINE_PASSES):
            if text == source:
                break
            source = text
            text = self._render_runs(parse_inline(text))
        return text

    def _render_runs(self, runs: Sequence[InlineRun]) -> str:
        masked: List[str] = []

        def mask(value: str) -> str:
            masked.append(value)
            return f"\x00{len(masked) - 1}\x00"

        pieces: List[str] = []
        for run in runs:
            if isinstance(run, TextRun):
                pieces.append(run.text)
            elif isinstance(run, CodeSpanRun):
                pieces.append(mask(run.text))
            elif isinstance(run, LinkRun):
                pieces.append(self._render_link(run, mask))
            elif isinstance(run, ImageRun):
                pieces.append(self._render_image(run, mask))
            else:
                raise TypeError(f"Unsupported inline run: {type(run).__name__}")

        text = "".join(pieces)
        text = self._emphasis(text)
        return _MASK_RE.sub(lambda m: masked[int(m.group(1))], text)

    def _render_link(self, run: LinkRun, mask: Callable[[str], str]) -> str:
        mode = self.options.link_mode
        if mode == LinkMode.MARKDOWN:
            if run.autolink:
                return mask(f"<{run.url}>")
            return mask(f"[{self._emphasis(run.text)}]({run.url})")

        self.counter.hit(STRUCTURE_LINK)
        if run.autolink:
            return run.url
        if mode == LinkMode.TEXT_AND_URL:
            return f"{run.text} ({run.url})"
        return run.text

    def _render_image(self, run: ImageRun, mask: Callable[[str], str]) -> str:
        mode = self.options.link_mode
        if mode == LinkMode.MARKDOWN:
            return mask(f"![{self._emphasis(run.alt)}]({run.url})")

        self.counter.hit(STRUCTURE_IMAGE)
        if mode == LinkMode.TEXT_AND_URL and run.url:
            return f"{run.alt} ({run.url})" if run.alt else run.url
        return run.alt

    def _emphasis(self, text: str) -> str:
        if self.options.keep_basic_markdown:
            return text
        text, removed = strip_emphasis(text)
        self.counter.hit(STRUCTURE_STRIP_EMPHASIS, removed)
        return text


def render_document(
    blocks: Sequence[Block], options: StructureOptions, counter: RuleCounter
) -> str:
    """Render parsed blocks with the given structure options."""
    return StructureRenderer(options, counter).render(blocks)
