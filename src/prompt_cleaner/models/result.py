"""
Result models returned by clean_text().
"""

from typing import Dict

from pydantic import BaseModel, Field, computed_field


class CleanReport(BaseModel):
    """
    Per-call report used for UI feedback ("N adjustments made").

    rule_counts holds every known rule id; rules that did not fire are zero.
    """

    rule_counts: Dict[str, int] = Field(
        default_factory=dict, description="Rule id -> number of times it fired"
    )
    preset: str = Field(description="Effective preset of the resolved options")
    truncated: bool = Field(default=False, description="Input exceeded the size cap")
    cleaner_version: str = Field(description="Cleaning algorithm version")

    @computed_field
    @property
    def total_changes(self) -> int:
        """Sum of all rule counts."""
        return sum(self.rule_counts.values())


class CleanResult(BaseModel):
    """Output of one clean_text() invocation."""

    text: str = Field(description="Final cleaned text")
    report: CleanReport
