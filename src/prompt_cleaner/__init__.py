"""
Prompt Cleaner - deterministic text normalization for saved prompts.

Turns pasted chat, email or markdown text into clean reusable prompt text.
"""

from .cleaning.pipeline import clean_text
from .options import DEFAULT_CLEAN_OPTIONS, PRESETS, get_preset_options, resolve_clean_options
from .version import API_VERSION, CLEANER_VERSION

__version__ = API_VERSION

__all__ = [
    "clean_text",
    "resolve_clean_options",
    "get_preset_options",
    "DEFAULT_CLEAN_OPTIONS",
    "PRESETS",
    "CLEANER_VERSION",
]
