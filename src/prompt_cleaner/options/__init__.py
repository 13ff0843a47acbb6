# Option presets and resolution

from .presets import DEFAULT_CLEAN_OPTIONS, PRESETS, get_preset_options
from .resolver import resolve_clean_options

__all__ = [
    "DEFAULT_CLEAN_OPTIONS",
    "PRESETS",
    "get_preset_options",
    "resolve_clean_options",
]
