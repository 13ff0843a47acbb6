"""
Command-line interface for prompt cleaning.

Usage:
    # Clean a file with the default (plain) preset
    prompt-clean notes.md

    # Pipe from the clipboard, chat preset, keep bullets
    pbpaste | prompt-clean --preset chat --set structure.list_mode=keepBullets

    # Write to a file and print the rule report to stderr
    prompt-clean notes.md --output prompt.txt --report
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from prompt_cleaner.cleaning import clean_text
from prompt_cleaner.config import settings
from prompt_cleaner.logging_config import setup_logging
from prompt_cleaner.models.options import Preset
from prompt_cleaner.options import resolve_clean_options

logger = structlog.get_logger(__name__)


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def parse_assignment(assignment: str) -> tuple:
    """
    Parse a --set assignment.

    Args:
        assignment: "group.field=value" or "field=value"

    Returns:
        Tuple of (key_path, value); "true"/"false" become booleans

    Raises:
        ValueError: If the assignment has no "=" or an empty key
    """
    key, sep, raw = assignment.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"Expected KEY=VALUE, got '{assignment}'")

    path = tuple(part for part in key.split(".") if part)
    if not path:
        raise ValueError(f"Expected KEY=VALUE, got '{assignment}'")

    value: Any = raw.strip()
    if value.lower() in ("true", "false"):
        value = value.lower() == "true"
    return path, value


def build_overrides(preset: Optional[str], assignments: List[str]) -> Dict[str, Any]:
    """
    Build an overrides mapping from CLI arguments.

    Args:
        preset: Preset name, or None for settings.default_preset
        assignments: --set values

    Returns:
        Overrides mapping for resolve_clean_options
    """
    overrides: Dict[str, Any] = {"preset": preset or settings.default_preset}
    for assignment in assignments:
        path, value = parse_assignment(assignment)
        target = overrides
        for part in path[:-1]:
            target = target.setdefault(part, {})
            if not isinstance(target, dict):
                raise ValueError(f"'{part}' is not an option group")
        target[path[-1]] = value
    return overrides


def read_input(source: Optional[str]) -> str:
    """
    Read input text from a file path, or stdin for None / "-".

    Raises:
        OSError: If the file cannot be read
    """
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def write_output(text: str, output_path: Optional[str]) -> None:
    """
    Write cleaned text to a file, or stdout when no path is given.
    """
    if not output_path:
        sys.stdout.write(text)
        return

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info("output_written", path=str(path), length=len(text))


# ============================================================================
# MAIN CLI
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="prompt-clean",
        description="Prompt Cleaner CLI - Clean pasted text into a reusable prompt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s notes.md
  %(prog)s notes.md --preset markdown-slim --output prompt.md
  cat chat.txt | %(prog)s --preset chat --set strip_emojis=false --report

Option keys for --set (snake_case or camelCase):
  structure.drop_headings, structure.keep_basic_markdown, structure.drop_blockquotes,
  structure.drop_horizontal_rules, structure.drop_tables, structure.link_mode,
  structure.list_mode, structure.code_block_mode, punctuation.em_dash,
  punctuation.en_dash, punctuation.curly_quotes, punctuation.ellipsis,
  whitespace.collapse_spaces, whitespace.collapse_blank_lines,
  whitespace.ensure_final_newline, anonymize_contacts, strip_emojis, locale
        """
    )

    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Path to a text file (default: stdin; '-' also reads stdin)"
    )

    parser.add_argument(
        "--preset",
        "-p",
        choices=[preset.value for preset in Preset],
        default=None,
        help=f"Preset to start from (default: {settings.default_preset})"
    )

    parser.add_argument(
        "--set",
        "-s",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override one option, e.g. structure.link_mode=markdown (repeatable)"
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout)"
    )

    parser.add_argument(
        "--report",
        "-r",
        action="store_true",
        help="Print the JSON rule report to stderr"
    )

    args = parser.parse_args(argv)

    # Logs go to stderr so stdout carries only the cleaned text
    setup_logging(stream=sys.stderr)

    try:
        overrides = build_overrides(args.preset, args.assignments)
    except ValueError as e:
        parser.error(str(e))

    try:
        text = read_input(args.input)
    except OSError as e:
        logger.error("input_read_failed", path=args.input, error=str(e))
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    options = resolve_clean_options(overrides)
    result = clean_text(text, options)

    try:
        write_output(result.text, args.output)
    except OSError as e:
        logger.error("output_write_failed", path=args.output, error=str(e))
        print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
        return 1

    if args.report:
        print(json.dumps(result.report.model_dump(), ensure_ascii=False, indent=2), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
