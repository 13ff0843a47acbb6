"""Text cleaning stages and pipeline."""

from .pipeline import clean_text

__all__ = ["clean_text"]
