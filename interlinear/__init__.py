"""Word-by-word bilingual translation formatter."""

from .formatter import format_translation, process_translation

__all__ = ["format_translation", "process_translation"]
