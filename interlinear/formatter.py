"""Alignment parsing and line wrapping for word-by-word translations."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .errors import FormatFailureKind, TokenCountMismatchError
from .structures import FormattedBlock, FormatResult, Segment, TokenPair

log = logging.getLogger(__name__)

DEFAULT_MAX_LINE_LENGTH = 25


def split_rows(text: str) -> Optional[Tuple[str, str]]:
    """Return the first two non-blank lines, or None when there are fewer."""

    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        return None
    return lines[0], lines[1]


def extract_marker(row: str) -> str:
    """Return the leading label of a row, up to the first space."""

    return row.split(" ", 1)[0]


def extract_tokens(row: str) -> List[str]:
    """Collect the bracket-enclosed tokens of a row in order.

    Nesting is not tracked: a second ``[`` flushes what has been read so far
    and stays inside. Every closing ``]`` of an open bracket yields a token,
    possibly empty. Text outside brackets is ignored, and an unclosed
    trailing ``[`` loses its content.
    """

    tokens: List[str] = []
    current: List[str] = []
    inside = False

    for char in row:
        if char == "[":
            if current:
                tokens.append("".join(current).strip())
                current.clear()
            inside = True
        elif char == "]":
            if inside:
                tokens.append("".join(current).strip())
                current.clear()
            inside = False
        elif inside:
            current.append(char)
    return tokens


def pair_tokens(
    source_tokens: Sequence[str],
    target_tokens: Sequence[str],
) -> List[TokenPair]:
    """Zip both rows into pairs, refusing rows of different length."""

    if len(source_tokens) != len(target_tokens):
        raise TokenCountMismatchError(len(source_tokens), len(target_tokens))
    return [
        TokenPair(source=source, target=target)
        for source, target in zip(source_tokens, target_tokens)
    ]


def wrap_pairs(pairs: Sequence[TokenPair], max_line_length: int) -> List[Segment]:
    """Greedily pack pairs into segments bounded by ``max_line_length``.

    The width check looks at what both rows already hold, before the next
    cell is appended, so a row may run past the budget by one cell.
    """

    segments: List[Segment] = []
    current = Segment()
    source_length = 0
    target_length = 0

    for pair in pairs:
        if source_length >= max_line_length or target_length >= max_line_length:
            segments.append(current)
            current = Segment()
            source_length = 0
            target_length = 0
        current.pairs.append(pair)
        source_length += len(pair.source_cell)
        target_length += len(pair.target_cell)

    if current.pairs:
        segments.append(current)
    return segments


def format_translation(
    text: str,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> FormatResult:
    """Reflow a two-row bracketed translation into aligned, wrapped blocks.

    Malformed input never raises: the result falls back to ``text`` and
    records why.
    """

    rows = split_rows(text)
    if rows is None:
        log.debug("Fewer than two non-blank lines; leaving response as is.")
        return FormatResult.fallback(
            text,
            FormatFailureKind.INSUFFICIENT_INPUT,
            "Expected two non-blank lines.",
        )

    source_row, target_row = rows
    source_marker = extract_marker(source_row)
    target_marker = extract_marker(target_row)
    if not source_marker.strip() or not target_marker.strip():
        log.debug("Blank row marker; leaving response as is.")
        return FormatResult.fallback(
            text,
            FormatFailureKind.BLANK_MARKER,
            "Each row must start with a marker.",
        )

    try:
        pairs = pair_tokens(extract_tokens(source_row), extract_tokens(target_row))
        block = FormattedBlock(
            source_marker=source_marker,
            target_marker=target_marker,
            segments=wrap_pairs(pairs, max(1, max_line_length)),
        )
        return FormatResult.success(block)
    except TokenCountMismatchError as exc:
        log.warning("Could not align translation rows: %s", exc)
        return FormatResult.fallback(
            text,
            FormatFailureKind.TOKEN_COUNT_MISMATCH,
            str(exc),
        )
    except Exception as exc:
        log.exception("Unexpected failure while formatting translation.")
        return FormatResult.fallback(
            text,
            FormatFailureKind.INTERNAL_FAULT,
            str(exc),
        )


def process_translation(
    text: str,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> str:
    """Return the formatted translation, or ``text`` unchanged if it is malformed."""

    return format_translation(text, max_line_length).text
