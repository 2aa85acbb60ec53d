"""Command-line interface for the spreadsheet translator."""

import argparse
import os
import sys
from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from .config import Settings
from .errors import SheetTranslatorError
from .languages import DEFAULT_TARGET_LANGUAGE, display_name, get_supported_languages, is_supported_language
from .service import TranslationService, error_message
from .translators import CellTranslator, DictionaryTranslator, OpenAITranslator
from .utils import setup_logging


def get_translator(name: str, model: str, settings: Settings) -> CellTranslator:
    """Get translator instance.

    Args:
        name: Name of the translator ('dictionary' or 'openai')
        model: Model name for the OpenAI translator
        settings: Runtime settings

    Returns:
        Translator instance
    """
    if name.lower() == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            print("Error: OPENAI_API_KEY environment variable not set")
            sys.exit(1)
        return OpenAITranslator(api_key=api_key, model=model, max_retries=settings.max_retries)
    return DictionaryTranslator(latency=settings.latency)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheet-translator",
        description="Sheet Translator - Translate spreadsheet cells and append translated columns",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Dictionary translation into Chinese
  python -m sheet_translator input.xlsx --target-lang chinese

  # OpenAI translation with four calls in flight
  python -m sheet_translator input.csv --translator openai --target-lang french \\
    --max-concurrency 4 --output out/input_fr.xlsx

  # Print the copyable per-column blocks as well
  python -m sheet_translator input.xlsx --export-groups

Environment variables:
  OPENAI_API_KEY                     Required for the openai translator
  SHEET_TRANSLATOR_MAX_FILE_SIZE_MB  Upload limit (default: 10)
  SHEET_TRANSLATOR_MAX_CONCURRENCY   Outstanding calls per sheet (default: 1)
  SHEET_TRANSLATOR_CELL_TIMEOUT      Seconds per cell (default: 30)
        """
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        help="Input spreadsheet (.xlsx, .xls or .csv)"
    )

    parser.add_argument(
        "--output", "-o",
        help="Output .xlsx path (default: <name>_translated_<lang>.xlsx next to the input)"
    )

    parser.add_argument(
        "--target-lang", "-t",
        default=DEFAULT_TARGET_LANGUAGE,
        help=f"Target language code (default: {DEFAULT_TARGET_LANGUAGE})"
    )

    parser.add_argument(
        "--translator",
        default="dictionary",
        choices=["dictionary", "openai"],
        help="Translator to use (default: dictionary)"
    )

    parser.add_argument(
        "--model",
        default="gpt-4o",
        help="Model for the openai translator (default: gpt-4o)"
    )

    parser.add_argument(
        "--max-concurrency",
        type=int,
        help="Translation calls in flight per sheet (overrides the environment)"
    )

    parser.add_argument(
        "--cell-timeout",
        type=float,
        help="Seconds allowed per cell before it counts as failed"
    )

    parser.add_argument(
        "--export-groups",
        action="store_true",
        help="Print one copyable text block per column after translating"
    )

    parser.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported target languages and exit"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: SHEET_TRANSLATOR_LOG_LEVEL or INFO)"
    )

    parser.add_argument(
        "--log-file",
        help="Optional log file path (default: sheet_translation_<timestamp>.log)"
    )
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    changes = {}
    if args.max_concurrency is not None:
        changes["max_concurrency"] = args.max_concurrency
    if args.cell_timeout is not None:
        changes["cell_timeout"] = args.cell_timeout or None
    if not changes:
        return settings
    return replace(settings, **changes)


def print_groups(blocks) -> None:
    for key, block in blocks.items():
        print(f"\n[{display_name(key)}]")
        print(block)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_languages:
        for language in get_supported_languages():
            print(f"{language['code']:<12} {language['name']}")
        return 0

    if not args.input_file:
        parser.error("input_file is required unless --list-languages is given")

    try:
        settings = _apply_overrides(Settings.from_env(), args)
    except (TypeError, ValueError) as e:
        print(f"Error: invalid configuration: {e}")
        return 1

    # Set up logging
    if not args.log_file:
        args.log_file = f"sheet_translation_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    setup_logging(args.log_level or settings.log_level, args.log_file)

    # Clean up file paths
    input_file = args.input_file.strip("\"'")
    if not os.path.exists(input_file):
        print(f"Error: Input file '{input_file}' does not exist")
        return 1

    if not is_supported_language(args.target_lang):
        print(f"Warning: '{args.target_lang}' is not a listed language code, continuing anyway")

    translator = get_translator(args.translator, args.model, settings)
    service = TranslationService(
        settings=settings,
        translator=translator,
        show_progress=not args.no_progress
    )

    print(f"Translating {input_file} -> {args.target_lang}")
    print(f"Translator: {args.translator}")

    try:
        with open(input_file, "rb") as f:
            data = f.read()
        result = service.translate_file_sync(os.path.basename(input_file), data, args.target_lang)
    except KeyboardInterrupt:
        print("\nTranslation interrupted by user")
        return 1
    except SheetTranslatorError as e:
        print(error_message(e))
        return 1

    output_file = (args.output or os.path.join(
        os.path.dirname(input_file), result.output_filename
    )).strip("\"'")
    output_dir = os.path.dirname(output_file)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)
        print(f"Created output directory: {output_dir}")

    with open(output_file, "wb") as f:
        f.write(result.output_bytes)

    if result.failure_count:
        print(f"Translation completed with {result.failure_count} untranslated cells")
    else:
        print("Translation completed successfully!")
    print(f"Output saved to: {output_file}")

    if args.export_groups:
        print_groups(result.export_blocks)
    return 0


if __name__ == "__main__":
    sys.exit(main())
