"""Command line interface for the Interlinear formatter."""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import uuid
from typing import Iterable, Optional

from .configuration import InterlinearConfig, get_settings
from .errors import (
    InterlinearError,
    TranslationInProgressError,
    TranslationProviderConfigurationError,
    UnknownLanguageError,
)
from .formatter import format_translation
from .languages import LANGUAGES, get_language
from .providers import build_requester
from .translator import TranslationSession

EXIT_FALLBACK = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="interlinear",
        description=(
            "Request word-by-word translations and lay them out as aligned, "
            "wrapped two-row blocks."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed progress information.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    format_parser = subparsers.add_parser(
        "format",
        help="Reflow an existing two-row bracketed translation.",
    )
    format_parser.add_argument(
        "input_file",
        nargs="?",
        default="-",
        help="File holding the raw response ('-' or omitted reads stdin).",
    )
    _add_line_length_option(format_parser)
    format_parser.add_argument(
        "--strict",
        action="store_true",
        help=f"Exit with status {EXIT_FALLBACK} when the input cannot be formatted.",
    )

    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate a sentence word by word and format the result.",
    )
    translate_parser.add_argument("sentence", help="Sentence to translate.")
    translate_parser.add_argument(
        "-s",
        "--source-language",
        help="Language of the sentence (name or locale code).",
    )
    translate_parser.add_argument(
        "-t",
        "--target-language",
        help="Destination language (name or locale code).",
    )
    translate_parser.add_argument(
        "-p",
        "--provider",
        help="Translation provider identifier (default: openai).",
    )
    translate_parser.add_argument(
        "-m",
        "--model",
        help="Provider-specific model or deployment identifier.",
    )
    translate_parser.add_argument(
        "--message-id",
        help="Identifier of the message being translated.",
    )
    translate_parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the provider response without formatting it.",
    )
    translate_parser.add_argument(
        "--debug-provider",
        action="store_true",
        help="Log complete provider requests and responses for troubleshooting.",
    )
    _add_line_length_option(translate_parser)

    subparsers.add_parser("languages", help="List the supported languages.")
    return parser


def _add_line_length_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-w",
        "--max-line-length",
        type=int,
        help="Characters per wrapped row, excluding the marker (default: 25).",
    )


def read_input(input_file: str) -> str:
    if input_file == "-":
        return sys.stdin.read()
    return pathlib.Path(input_file).expanduser().read_text(encoding="utf-8")


def resolve_max_line_length(
    args: argparse.Namespace, settings: InterlinearConfig
) -> int:
    if args.max_line_length is not None:
        return args.max_line_length
    return settings.INTERLINEAR_MAX_LINE_LENGTH


def run_format(args: argparse.Namespace, settings: InterlinearConfig) -> int:
    try:
        text = read_input(args.input_file)
    except OSError as exc:
        print(f"Could not read {args.input_file}: {exc}", file=sys.stderr)
        return 1

    result = format_translation(text, resolve_max_line_length(args, settings))
    print(result.text.rstrip("\n"))
    if not result.ok and args.strict:
        print(f"Input left unformatted: {result.detail}", file=sys.stderr)
        return EXIT_FALLBACK
    return 0


def run_translate(
    args: argparse.Namespace,
    settings: InterlinearConfig,
    *,
    provider_debug: bool,
) -> int:
    try:
        source = get_language(
            args.source_language or settings.INTERLINEAR_SOURCE_LANGUAGE
        )
        target = get_language(
            args.target_language or settings.INTERLINEAR_TARGET_LANGUAGE
        )
        requester = build_requester(
            args.provider, settings=settings, debug=provider_debug
        )
    except (UnknownLanguageError, TranslationProviderConfigurationError) as exc:
        print(exc, file=sys.stderr)
        return 1

    session = TranslationSession(
        requester,
        source=source,
        target=target,
        max_line_length=resolve_max_line_length(args, settings),
        model=args.model or settings.INTERLINEAR_MODEL,
    )
    message_id = args.message_id or uuid.uuid4().hex

    try:
        outcome = session.translate(message_id, args.sentence)
    except TranslationInProgressError as exc:
        print(exc, file=sys.stderr)
        return 1
    except InterlinearError as exc:
        print(f"Translation failed: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Translation interrupted by user.", file=sys.stderr)
        return 2

    print(outcome.raw_text if args.raw else outcome.text)
    return 0


def run_languages() -> int:
    for language in LANGUAGES:
        print(f"{language.flag}  {language.name:<10} {language.code}")
    return 0


def configure_logging(verbose: bool, debug: bool = False) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # basicConfig leaves an already configured root logger alone.
    logging.getLogger().setLevel(level)


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.command == "languages":
        configure_logging(args.verbose)
        return run_languages()

    try:
        settings = get_settings()
    except TranslationProviderConfigurationError as exc:
        configure_logging(args.verbose)
        print(exc, file=sys.stderr)
        return 1

    provider_debug = bool(
        getattr(args, "debug_provider", False) or settings.INTERLINEAR_PROVIDER_DEBUG
    )
    configure_logging(args.verbose, provider_debug)

    if args.command == "format":
        return run_format(args, settings)
    return run_translate(args, settings, provider_debug=provider_debug)




if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
