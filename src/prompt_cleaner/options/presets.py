"""
Preset option tables.

Each preset is a complete, frozen CleanOptions. The tables are built once at
import time and exposed through a read-only mapping; resolution always builds
new objects from them and never hands out a mutable reference.
"""

from types import MappingProxyType
from typing import Mapping

from ..models.options import (
    CleanOptions,
    CodeBlockMode,
    CurlyQuotesMode,
    EllipsisMode,
    EmDashMode,
    EnDashMode,
    LinkMode,
    ListMode,
    Preset,
    PunctuationOptions,
    StructureOptions,
    WhitespaceOptions,
)

# Punctuation policy is shared by every preset
_TYPOGRAPHIC_TO_ASCII = PunctuationOptions(
    em_dash=EmDashMode.COMMA,
    en_dash=EnDashMode.HYPHEN,
    curly_quotes=CurlyQuotesMode.STRAIGHT,
    ellipsis=EllipsisMode.THREE_DOTS,
)

PLAIN_OPTIONS = CleanOptions(
    preset=Preset.PLAIN,
    structure=StructureOptions(
        drop_headings=True,
        keep_basic_markdown=False,
        drop_blockquotes=True,
        drop_horizontal_rules=True,
        drop_tables=True,
        link_mode=LinkMode.TEXT_ONLY,
        list_mode=ListMode.SENTENCES,
        code_block_mode=CodeBlockMode.DROP,
    ),
    punctuation=_TYPOGRAPHIC_TO_ASCII,
    anonymize_contacts=False,
    strip_emojis=False,
    whitespace=WhitespaceOptions(
        collapse_spaces=True,
        collapse_blank_lines=True,
        ensure_final_newline=True,
    ),
)

EMAIL_OPTIONS = CleanOptions(
    preset=Preset.EMAIL,
    structure=StructureOptions(
        drop_headings=False,
        keep_basic_markdown=False,
        drop_blockquotes=True,
        drop_horizontal_rules=True,
        drop_tables=False,
        link_mode=LinkMode.TEXT_AND_URL,
        list_mode=ListMode.KEEP_BULLETS,
        code_block_mode=CodeBlockMode.KEEP_INDENTED,
    ),
    punctuation=_TYPOGRAPHIC_TO_ASCII,
    anonymize_contacts=False,
    strip_emojis=False,
    whitespace=WhitespaceOptions(
        collapse_spaces=True,
        collapse_blank_lines=True,
        ensure_final_newline=True,
    ),
)

MARKDOWN_SLIM_OPTIONS = CleanOptions(
    preset=Preset.MARKDOWN_SLIM,
    structure=StructureOptions(
        drop_headings=False,
        keep_basic_markdown=True,
        drop_blockquotes=False,
        drop_horizontal_rules=False,
        drop_tables=False,
        link_mode=LinkMode.MARKDOWN,
        list_mode=ListMode.KEEP_BULLETS,
        code_block_mode=CodeBlockMode.KEEP_INDENTED,
    ),
    punctuation=_TYPOGRAPHIC_TO_ASCII,
    anonymize_contacts=False,
    strip_emojis=False,
    whitespace=WhitespaceOptions(
        collapse_spaces=True,
        collapse_blank_lines=True,
        ensure_final_newline=False,
    ),
)

CHAT_OPTIONS = CleanOptions(
    preset=Preset.CHAT,
    structure=StructureOptions(
        drop_headings=False,
        keep_basic_markdown=False,
        drop_blockquotes=True,
        drop_horizontal_rules=True,
        drop_tables=False,
        link_mode=LinkMode.TEXT_AND_URL,
        list_mode=ListMode.KEEP_BULLETS,
        code_block_mode=CodeBlockMode.KEEP_INDENTED,
    ),
    punctuation=_TYPOGRAPHIC_TO_ASCII,
    anonymize_contacts=False,
    strip_emojis=True,
    whitespace=WhitespaceOptions(
        collapse_spaces=True,
        collapse_blank_lines=True,
        ensure_final_newline=False,
    ),
)

PRESETS: Mapping[Preset, CleanOptions] = MappingProxyType(
    {
        Preset.PLAIN: PLAIN_OPTIONS,
        Preset.EMAIL: EMAIL_OPTIONS,
        Preset.MARKDOWN_SLIM: MARKDOWN_SLIM_OPTIONS,
        Preset.CHAT: CHAT_OPTIONS,
    }
)

# Ground truth used as merge base when no preset is named
DEFAULT_CLEAN_OPTIONS = PLAIN_OPTIONS


def get_preset_options(name: str) -> CleanOptions:
    """
    Get a fresh copy of a preset's options.

    Args:
        name: Preset name ("plain", "email", "markdown-slim", "chat")

    Returns:
        New CleanOptions instance equal to the preset table entry

    Raises:
        ValueError: If name is not a selectable preset
    """
    preset = Preset(name)
    if preset not in PRESETS:
        raise ValueError(f"'{name}' is not a selectable preset")
    return PRESETS[preset].model_copy(deep=True)
