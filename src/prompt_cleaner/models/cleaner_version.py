"""
Cleaner version model for deterministic processing.

Tracks the algorithm version of every cleaning stage so that a stored result
can be traced back to the exact rules that produced it: same versions + same
input + same options = same output.
"""

from pydantic import BaseModel, Field


class CleanerVersion(BaseModel):
    """Immutable version contract for the cleaning pipeline."""

    cleaner_version: str = Field(
        description="Overall cleaning algorithm version", examples=["prompt-clean-1.0.0"]
    )
    input_guard_version: str = Field(
        description="Input bounds-check and truncation", examples=["input-guard-1.0.0"]
    )
    parser_version: str = Field(
        description="Text preparation and structural parser", examples=["md-parser-1.0.0"]
    )
    renderer_version: str = Field(
        description="Structural renderer", examples=["md-renderer-1.0.0"]
    )
    normalizer_version: str = Field(
        description="Emoji, punctuation and contact normalizer", examples=["normalizer-1.0.0"]
    )
    whitespace_version: str = Field(
        description="Whitespace finalizer", examples=["whitespace-1.0.0"]
    )

    model_config = {"frozen": True}

    def to_repr(self) -> str:
        """
        Short representation for logging.

        Returns:
            Compact string with the overall version and parser/renderer versions.
        """
        return f"{self.cleaner_version}/{self.parser_version}/{self.renderer_version}"
