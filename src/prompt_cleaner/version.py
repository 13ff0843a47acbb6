"""
Version constants for the prompt cleaning pipeline.

Bump a stage version whenever its output for the same input changes, so saved
prompts can be traced to the algorithm that produced them.
"""

from .models.cleaner_version import CleanerVersion

# API Version
API_VERSION = "1.0.0"

# Overall cleaning algorithm version (reported with every result)
CLEANER_VERSION = "prompt-clean-1.0.0"

# Stage versions
INPUT_GUARD_VERSION = "input-guard-1.0.0"
PARSER_VERSION = "md-parser-1.0.0"
RENDERER_VERSION = "md-renderer-1.0.0"
NORMALIZER_VERSION = "normalizer-1.0.0"
WHITESPACE_VERSION = "whitespace-1.0.0"


def get_current_cleaner_version() -> CleanerVersion:
    """
    Get current cleaner version configuration.

    Returns:
        CleanerVersion instance with current stage versions
    """
    return CleanerVersion(
        cleaner_version=CLEANER_VERSION,
        input_guard_version=INPUT_GUARD_VERSION,
        parser_version=PARSER_VERSION,
        renderer_version=RENDERER_VERSION,
        normalizer_version=NORMALIZER_VERSION,
        whitespace_version=WHITESPACE_VERSION,
    )
