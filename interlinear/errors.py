"""Error definitions for the Interlinear formatter and its collaborators."""

from __future__ import annotations

from enum import Enum


class FormatFailureKind(Enum):
    """Reasons for returning a response verbatim instead of formatting it."""

    INSUFFICIENT_INPUT = "insufficient_input"
    BLANK_MARKER = "blank_marker"
    TOKEN_COUNT_MISMATCH = "token_count_mismatch"
    INTERNAL_FAULT = "internal_fault"


class InterlinearError(Exception):
    """Base exception for all custom errors."""


class TokenCountMismatchError(InterlinearError):
    """Raised when the two rows do not hold the same number of tokens."""

    def __init__(self, source_count: int, target_count: int) -> None:
        super().__init__(
            f"Token count mismatch: row 1 has {source_count} tokens, "
            f"row 2 has {target_count}."
        )
        self.source_count = source_count
        self.target_count = target_count


class UnknownLanguageError(InterlinearError):
    """Raised when a language name or locale code is not registered."""


class TranslationInProgressError(InterlinearError):
    """Raised when a message already has a translation request in flight."""


class TranslationProviderConfigurationError(InterlinearError):
    """Raised when the translation provider is misconfigured."""


class TranslationProviderError(InterlinearError):
    """Raised when the translation provider fails."""
