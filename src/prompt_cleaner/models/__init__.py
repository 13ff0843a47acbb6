# Data models for the prompt cleaning pipeline

from .cleaner_version import CleanerVersion
from .options import (
    CleanOptions,
    CleanOptionsOverrides,
    CodeBlockMode,
    CurlyQuotesMode,
    EllipsisMode,
    EmDashMode,
    LinkMode,
    ListMode,
    Preset,
    PunctuationOptions,
    StructureOptions,
    WhitespaceOptions,
)
from .result import CleanReport, CleanResult
from .api_models import (
    CleanRequest,
    CleanResponse,
    HealthResponse,
    PresetsResponse,
    VersionResponse,
)

__all__ = [
    "CleanerVersion",
    "CleanOptions",
    "CleanOptionsOverrides",
    "CodeBlockMode",
    "CurlyQuotesMode",
    "EllipsisMode",
    "EmDashMode",
    "LinkMode",
    "ListMode",
    "Preset",
    "PunctuationOptions",
    "StructureOptions",
    "WhitespaceOptions",
    "CleanReport",
    "CleanResult",
    "CleanRequest",
    "CleanResponse",
    "HealthResponse",
    "PresetsResponse",
    "VersionResponse",
]
