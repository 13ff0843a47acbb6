"""
Option endpoints - defaults, presets and override resolution.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body

from ...models.api_models import PresetsResponse
from ...models.options import CleanOptions, Preset
from ...options import DEFAULT_CLEAN_OPTIONS, PRESETS, resolve_clean_options
from .clean import with_default_preset

router = APIRouter()


@router.get("/defaults", response_model=CleanOptions)
async def get_defaults() -> CleanOptions:
    """Default options (the plain preset)."""
    return DEFAULT_CLEAN_OPTIONS


@router.get("/presets", response_model=PresetsResponse)
async def get_presets() -> PresetsResponse:
    """Options of every built-in preset."""
    return PresetsResponse(
        presets={preset.value: options for preset, options in PRESETS.items()},
        names=[preset.value for preset in Preset],
    )


@router.post("/resolve", response_model=CleanOptions)
async def resolve(overrides: Dict[str, Any] = Body(default_factory=dict)) -> CleanOptions:
    """
    Resolve overrides against their preset without cleaning any text.

    Invalid values are ignored, exactly as during cleaning.
    """
    return resolve_clean_options(with_default_preset(overrides))
