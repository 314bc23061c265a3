"""Registry of languages offered for word-by-word translation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .errors import UnknownLanguageError


@dataclass(frozen=True)
class Language:
    """A selectable language with its locale code and row marker."""

    name: str
    code: str
    flag: str


LANGUAGES: List[Language] = [
    Language(name="France", code="fr", flag="🇫🇷"),
    Language(name="Canadian", code="en-CA", flag="🇨🇦"),
    Language(name="English", code="en", flag="🇬🇧"),
    Language(name="Arabic", code="ar", flag="🇸🇦"),
]


def _build_index(languages: List[Language]) -> Dict[str, Language]:
    index: Dict[str, Language] = {}
    for language in languages:
        index[language.name.lower()] = language
        index[language.code.lower()] = language
    return index


_INDEX = _build_index(LANGUAGES)


def get_language(identifier: str) -> Language:
    """Look up a language by name or locale code, ignoring case."""

    language = _INDEX.get(identifier.strip().lower())
    if language is None:
        known = ", ".join(language_names())
        raise UnknownLanguageError(
            f"Unknown language '{identifier}'. Choose one of: {known}."
        )
    return language


def language_names() -> List[str]:
    return [language.name for language in LANGUAGES]


def locale_code(name: str) -> str:
    return get_language(name).code
