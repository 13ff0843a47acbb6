"""
Cleaning pipeline orchestrator.

Runs the five stages in order on one input:
input guard -> text preparation + structural parse -> structural render ->
emoji/punctuation/contact normalization -> whitespace finalization.

The pipeline is pure: same input + same options + same CLEANER_VERSION gives
the same output, and cleaning an already cleaned text changes nothing.
"""

from typing import Any

import structlog

from ..models.options import CleanOptions
from ..models.result import CleanReport, CleanResult
from ..models.rules import RuleCounter
from ..options.resolver import OverridesInput, resolve_clean_options
from ..version import CLEANER_VERSION
from .contacts import redact_contacts
from .emoji import strip_emojis
from .input_guard import guard_input
from .markdown_parser import parse_document
from .punctuation import normalize_punctuation
from .renderer import render_document
from .text_prep import prepare_text
from .whitespace import finalize_whitespace

logger = structlog.get_logger(__name__)

# Parse and render rounds after stage 4 before its result is taken as is
_MAX_SETTLE_PASSES = 8


def clean_text(text: Any, overrides: OverridesInput = None) -> CleanResult:
    """
    Clean text for storage as a reusable prompt.

    Args:
        text: Raw input; None or non-str values are treated as empty
        overrides: Option overrides (see resolve_clean_options), or resolved
            CleanOptions

    Returns:
        CleanResult with the cleaned text and a per-rule report

    Never raises for any string input or any overrides value.
    """
    options = resolve_clean_options(overrides)
    counter = RuleCounter()

    guarded = guard_input(text, counter)
    cleaned = _run_stages(guarded.text, options, counter)
    cleaned = guarded.with_marker(cleaned)

    report = CleanReport(
        rule_counts=counter.snapshot(),
        preset=options.preset.value,
        truncated=guarded.truncated,
        cleaner_version=CLEANER_VERSION,
    )

    logger.debug(
        "text_cleaned",
        preset=report.preset,
        input_length=len(text) if isinstance(text, str) else 0,
        output_length=len(cleaned),
        total_changes=report.total_changes,
        truncated=report.truncated,
    )

    return CleanResult(text=cleaned, report=report)


def _run_stages(text: str, options: CleanOptions, counter: RuleCounter) -> str:
    if not text:
        return ""

    # Stage 2: preparation and structural parse
    blocks = parse_document(prepare_text(text, counter))

    # Stage 3: structural render
    rendered = render_document(blocks, options.structure, counter)

    # Stage 4: emoji, punctuation, contacts
    text = _normalize(rendered, options, counter)

    # Removing a leading emoji or dash can expose block syntax ("— # Title"),
    # so the result is parsed and rendered again until it settles
    passes = 0
    while text != rendered and passes < _MAX_SETTLE_PASSES:
        rendered = render_document(parse_document(text), options.structure, counter)
        text = _normalize(rendered, options, counter)
        passes += 1

    # Stage 5: whitespace
    return finalize_whitespace(text, options.whitespace, counter)


def _normalize(text: str, options: CleanOptions, counter: RuleCounter) -> str:
    if options.strip_emojis:
        text = strip_emojis(text, counter)
    text = normalize_punctuation(text, options.punctuation, counter)
    if options.anonymize_contacts:
        text = redact_contacts(text, counter)
    return text
