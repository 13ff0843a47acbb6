"""
Option resolution: preset baseline + caller overrides -> CleanOptions.

Merging is explicit and field-by-field per nested group, so an override that
supplies a single nested key leaves its siblings at the preset's value.
Invalid values never raise: they are logged and treated as absent.
"""

from enum import Enum
from typing import Any, List, Mapping, Optional, Type, Union

import structlog

from ..models.options import (
    CleanOptions,
    CleanOptionsOverrides,
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
from .presets import PRESETS

logger = structlog.get_logger(__name__)

OverridesInput = Union[None, Mapping[str, Any], CleanOptionsOverrides, CleanOptions]

_UNSET = object()

_TOP_LEVEL_KEYS = {
    "preset",
    "structure",
    "punctuation",
    "anonymize_contacts",
    "strip_emojis",
    "whitespace",
    "locale",
}


def resolve_clean_options(overrides: OverridesInput = None) -> CleanOptions:
    """
    Resolve caller overrides against a preset baseline.

    Resolution rules:
    1. Baseline is the preset named by overrides["preset"] (plain if absent or invalid)
    2. Top-level scalars (anonymize_contacts, strip_emojis, locale) replace the baseline
    3. structure / punctuation / whitespace merge key by key
    4. The resulting preset is "custom" once any field other than preset/locale
       was applied; a pure preset switch keeps the preset's name

    Args:
        overrides: None, a mapping (snake_case or camelCase keys), a
            CleanOptionsOverrides model, or an already-resolved CleanOptions

    Returns:
        New frozen CleanOptions (an already-resolved CleanOptions is copied)
    """
    if isinstance(overrides, CleanOptions):
        return overrides.model_copy(deep=True)
    if isinstance(overrides, CleanOptionsOverrides):
        overrides = overrides.model_dump(exclude_none=True)
    if overrides is None:
        overrides = {}
    if not isinstance(overrides, Mapping):
        _warn_invalid("<root>", overrides)
        overrides = {}

    for key in overrides:
        if _snake(key) not in _TOP_LEVEL_KEYS:
            logger.warning("unknown_clean_option", option=str(key))

    selected = _coerce_preset(_lookup(overrides, "preset"))
    base = PRESETS.get(selected, PRESETS[Preset.PLAIN])
    applied: List[str] = []

    structure = _merge_structure(base.structure, _group(overrides, "structure"), applied)
    punctuation = _merge_punctuation(
        base.punctuation, _group(overrides, "punctuation"), applied
    )
    whitespace = _merge_whitespace(base.whitespace, _group(overrides, "whitespace"), applied)
    anonymize_contacts = _pick_bool(
        overrides, "anonymize_contacts", base.anonymize_contacts, "", applied
    )
    strip_emojis = _pick_bool(overrides, "strip_emojis", base.strip_emojis, "", applied)
    locale = _pick_locale(overrides, base.locale)

    if applied or selected == Preset.CUSTOM:
        preset = Preset.CUSTOM
    else:
        preset = base.preset

    return CleanOptions(
        preset=preset,
        structure=structure,
        punctuation=punctuation,
        anonymize_contacts=anonymize_contacts,
        strip_emojis=strip_emojis,
        whitespace=whitespace,
        locale=locale,
    )


def _merge_structure(
    base: StructureOptions, group: Mapping[str, Any], applied: List[str]
) -> StructureOptions:
    return StructureOptions(
        drop_headings=_pick_bool(group, "drop_headings", base.drop_headings, "structure", applied),
        keep_basic_markdown=_pick_bool(
            group, "keep_basic_markdown", base.keep_basic_markdown, "structure", applied
        ),
        drop_blockquotes=_pick_bool(
            group, "drop_blockquotes", base.drop_blockquotes, "structure", applied
        ),
        drop_horizontal_rules=_pick_bool(
            group, "drop_horizontal_rules", base.drop_horizontal_rules, "structure", applied
        ),
        drop_tables=_pick_bool(group, "drop_tables", base.drop_tables, "structure", applied),
        link_mode=_pick_enum(group, "link_mode", LinkMode, base.link_mode, "structure", applied),
        list_mode=_pick_enum(group, "list_mode", ListMode, base.list_mode, "structure", applied),
        code_block_mode=_pick_enum(
            group, "code_block_mode", CodeBlockMode, base.code_block_mode, "structure", applied
        ),
    )


def _merge_punctuation(
    base: PunctuationOptions, group: Mapping[str, Any], applied: List[str]
) -> PunctuationOptions:
    return PunctuationOptions(
        em_dash=_pick_enum(group, "em_dash", EmDashMode, base.em_dash, "punctuation", applied),
        en_dash=_pick_enum(group, "en_dash", EnDashMode, base.en_dash, "punctuation", applied),
        curly_quotes=_pick_enum(
            group, "curly_quotes", CurlyQuotesMode, base.curly_quotes, "punctuation", applied
        ),
        ellipsis=_pick_enum(
            group, "ellipsis", EllipsisMode, base.ellipsis, "punctuation", applied
        ),
    )


def _merge_whitespace(
    base: WhitespaceOptions, group: Mapping[str, Any], applied: List[str]
) -> WhitespaceOptions:
    return WhitespaceOptions(
        collapse_spaces=_pick_bool(
            group, "collapse_spaces", base.collapse_spaces, "whitespace", applied
        ),
        collapse_blank_lines=_pick_bool(
            group, "collapse_blank_lines", base.collapse_blank_lines, "whitespace", applied
        ),
        ensure_final_newline=_pick_bool(
            group, "ensure_final_newline", base.ensure_final_newline, "whitespace", applied
        ),
    )


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _snake(name: Any) -> str:
    if not isinstance(name, str):
        return ""
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name)


def _lookup(mapping: Mapping[str, Any], field: str) -> Any:
    """Find a field by snake_case or camelCase key; _UNSET when absent."""
    if field in mapping:
        return mapping[field]
    camel = _camel(field)
    if camel in mapping:
        return mapping[camel]
    return _UNSET


def _group(overrides: Mapping[str, Any], field: str) -> Mapping[str, Any]:
    value = _lookup(overrides, field)
    if value is _UNSET or value is None:
        return {}
    if not isinstance(value, Mapping):
        _warn_invalid(field, value)
        return {}
    return value


def _path(prefix: str, field: str) -> str:
    return f"{prefix}.{field}" if prefix else field


def _pick_bool(
    mapping: Mapping[str, Any], field: str, default: bool, prefix: str, applied: List[str]
) -> bool:
    value = _lookup(mapping, field)
    if value is _UNSET or value is None:
        return default
    if not isinstance(value, bool):
        _warn_invalid(_path(prefix, field), value)
        return default
    applied.append(_path(prefix, field))
    return value


def _pick_enum(
    mapping: Mapping[str, Any],
    field: str,
    enum_type: Type[Enum],
    default: Enum,
    prefix: str,
    applied: List[str],
) -> Any:
    value = _lookup(mapping, field)
    if value is _UNSET or value is None:
        return default
    try:
        member = enum_type(value)
    except (ValueError, TypeError):
        _warn_invalid(_path(prefix, field), value)
        return default
    applied.append(_path(prefix, field))
    return member


def _pick_locale(mapping: Mapping[str, Any], default: str) -> str:
    value = _lookup(mapping, "locale")
    if value is _UNSET or value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        _warn_invalid("locale", value)
        return default
    return value.strip()


def _coerce_preset(value: Any) -> Optional[Preset]:
    if value is _UNSET or value is None:
        return None
    try:
        return Preset(value)
    except (ValueError, TypeError):
        _warn_invalid("preset", value)
        return None


def _warn_invalid(option: str, value: Any) -> None:
    logger.warning("invalid_clean_option", option=option, value=repr(value)[:80])
