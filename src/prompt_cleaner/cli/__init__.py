"""
CLI module for prompt cleaning.

Provides command-line tools for cleaning text files and piped input.
"""

from prompt_cleaner.cli.clean import main as clean_main

__all__ = ["clean_main"]
