"""
Cleaning option models.

This module defines the fully-resolved, immutable option structure consumed
read-only by every cleaning stage, plus the partial override model accepted
from callers (API requests, CLI flags, stored extension settings).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Preset(str, Enum):
    """Named bundles of option values."""

    PLAIN = "plain"
    EMAIL = "email"
    MARKDOWN_SLIM = "markdown-slim"
    CHAT = "chat"
    CUSTOM = "custom"  # Any preset with overrides applied


class LinkMode(str, Enum):
    """How markdown links are rendered."""

    TEXT_ONLY = "textOnly"
    TEXT_AND_URL = "textAndUrl"
    MARKDOWN = "markdown"


class ListMode(str, Enum):
    """How list items are rendered."""

    SENTENCES = "sentences"
    KEEP_BULLETS = "keepBullets"


class CodeBlockMode(str, Enum):
    """How fenced code blocks are rendered."""

    DROP = "drop"
    KEEP_INDENTED = "keepIndented"


class EmDashMode(str, Enum):
    COMMA = "comma"
    KEEP = "keep"
    REMOVE = "remove"


class EnDashMode(str, Enum):
    """En dashes, non-breaking hyphens and minus signs."""

    HYPHEN = "hyphen"
    KEEP = "keep"


class CurlyQuotesMode(str, Enum):
    STRAIGHT = "straight"
    KEEP = "keep"


class EllipsisMode(str, Enum):
    THREE_DOTS = "threeDots"
    KEEP = "keep"
    REMOVE = "remove"


class StructureOptions(BaseModel):
    """Per-construct policy for the structural renderer."""

    drop_headings: bool = Field(description="Omit heading lines entirely")
    keep_basic_markdown: bool = Field(
        description="Keep **bold**, *italic* and ~~strike~~ markers"
    )
    drop_blockquotes: bool = Field(
        description="Strip quote markers (the quoted text is always kept)"
    )
    drop_horizontal_rules: bool = Field(description="Omit --- / *** / ___ lines")
    drop_tables: bool = Field(description="Omit pipe tables (header, delimiter row and body)")
    link_mode: LinkMode
    list_mode: ListMode
    code_block_mode: CodeBlockMode

    model_config = {"frozen": True}


class PunctuationOptions(BaseModel):
    """Typographic punctuation policy."""

    em_dash: EmDashMode
    en_dash: EnDashMode
    curly_quotes: CurlyQuotesMode
    ellipsis: EllipsisMode

    model_config = {"frozen": True}


class WhitespaceOptions(BaseModel):
    """Whitespace finalizer policy."""

    collapse_spaces: bool
    collapse_blank_lines: bool
    ensure_final_newline: bool

    model_config = {"frozen": True}


class CleanOptions(BaseModel):
    """
    Fully-resolved cleaning configuration.

    Instances are frozen: one object is built per resolution and shared
    read-only by all stages of a single clean_text() call.
    """

    preset: Preset = Field(description="Effective preset ('custom' once overridden)")
    structure: StructureOptions
    punctuation: PunctuationOptions
    anonymize_contacts: bool = Field(
        description="Replace URLs with <URL> and emails with <EMAIL>"
    )
    strip_emojis: bool
    whitespace: WhitespaceOptions
    locale: str = Field(
        default="en-US",
        description="Informational; does not alter rule semantics",
    )

    model_config = {"frozen": True}


class StructureOverrides(BaseModel):
    drop_headings: Optional[bool] = None
    keep_basic_markdown: Optional[bool] = None
    drop_blockquotes: Optional[bool] = None
    drop_horizontal_rules: Optional[bool] = None
    drop_tables: Optional[bool] = None
    link_mode: Optional[LinkMode] = None
    list_mode: Optional[ListMode] = None
    code_block_mode: Optional[CodeBlockMode] = None


class PunctuationOverrides(BaseModel):
    em_dash: Optional[EmDashMode] = None
    en_dash: Optional[EnDashMode] = None
    curly_quotes: Optional[CurlyQuotesMode] = None
    ellipsis: Optional[EllipsisMode] = None


class WhitespaceOverrides(BaseModel):
    collapse_spaces: Optional[bool] = None
    collapse_blank_lines: Optional[bool] = None
    ensure_final_newline: Optional[bool] = None


class CleanOptionsOverrides(BaseModel):
    """
    Partial option set supplied by a caller.

    Every field is optional; nested groups may be partial. Unset fields keep
    the preset's value during resolution.
    """

    preset: Optional[Preset] = None
    structure: Optional[StructureOverrides] = None
    punctuation: Optional[PunctuationOverrides] = None
    anonymize_contacts: Optional[bool] = None
    strip_emojis: Optional[bool] = None
    whitespace: Optional[WhitespaceOverrides] = None
    locale: Optional[str] = None
