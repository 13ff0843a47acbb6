"""
API request and response models for FastAPI endpoints.

This module defines the Pydantic models used for API request/response validation.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .cleaner_version import CleanerVersion
from .options import CleanOptions
from .result import CleanResult


class CleanRequest(BaseModel):
    """Request model for the clean endpoint."""

    text: str = Field(description="Raw text to clean")
    options: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Option overrides (snake_case or camelCase keys); invalid values are ignored",
    )


class CleanResponse(BaseModel):
    """Response model for the clean endpoint."""

    success: bool = Field(description="Whether cleaning succeeded")
    result: Optional[CleanResult] = Field(None, description="Cleaned text and report")
    options: Optional[CleanOptions] = Field(None, description="Resolved options used")
    error: Optional[str] = Field(None, description="Error message if failed")


class PresetsResponse(BaseModel):
    """All built-in presets."""

    presets: Dict[str, CleanOptions] = Field(description="Preset name -> options")
    names: List[str] = Field(description="Selectable preset names, including 'custom'")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status", examples=["healthy"])
    version: str = Field(description="API version", examples=["1.0.0"])
    cleaner_version: str = Field(
        description="Cleaning algorithm version", examples=["prompt-clean-1.0.0"]
    )
    presets: List[str] = Field(description="Built-in presets served by this instance")
    uptime_seconds: float = Field(description="Seconds since the process started")


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str = Field(description="API version")
    cleaner_version: CleanerVersion = Field(description="Current cleaner version")
