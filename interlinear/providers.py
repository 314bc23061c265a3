"""Translation requesters that fetch word-by-word translations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from .configuration import InterlinearConfig, validate_provider_settings
from .errors import (
    TranslationProviderConfigurationError,
    TranslationProviderError,
)
from .languages import Language

log = logging.getLogger(__name__)

PROMPT = """
Translate the sentence from {source} to {target} word by word.

Answer with exactly two lines and nothing else:
{source_flag} followed by each {source} word or expression in square brackets
{target_flag} followed by the matching {target} translation in square brackets

Both lines must contain the same number of bracketed items, in the same order.
Example:
{source_flag} [word] [another word]
{target_flag} [translation] [another translation]
""".strip()
"""Instruction sent alongside every sentence."""


def build_prompt(source: Language, target: Language) -> str:
    return PROMPT.format(
        source=source.name,
        target=target.name,
        source_flag=source.flag,
        target_flag=target.flag,
    )


class TranslationRequester(ABC):
    """Abstract adapter for text-generation services."""

    @abstractmethod
    def request(
        self,
        sentence: str,
        *,
        source: Language,
        target: Language,
        prompt: str,
        model: str | None = None,
    ) -> str:
        """Send the sentence with its prompt and return the raw response text."""


class EchoTranslationRequester(TranslationRequester):
    """Returns the sentence's own words on both rows (useful for testing)."""

    def request(
        self,
        sentence: str,
        *,
        source: Language,
        target: Language,
        prompt: str,
        model: str | None = None,
    ) -> str:
        cells = " ".join(f"[{word}]" for word in sentence.split())
        return f"{source.flag} {cells}\n{target.flag} {cells}"


class OpenAITranslationRequester(TranslationRequester):
    """Requester that uses OpenAI (or Azure OpenAI) through the Responses API."""

    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        settings: InterlinearConfig | None,
        *,
        debug: bool = False,
        client: Any | None = None,
    ) -> None:
        self.debug = debug
        if client is not None:
            self._client, self._default_model = client, self.DEFAULT_MODEL
        else:
            validate_provider_settings(settings)
            self._client, self._default_model = self._build_client(settings)
        if getattr(settings, "INTERLINEAR_MODEL", None):
            self._default_model = settings.INTERLINEAR_MODEL

    def _build_client(self, settings: InterlinearConfig) -> tuple[Any, str]:
        try:
            from openai import AzureOpenAI, OpenAI  # type: ignore
        except ImportError as exc:  # pragma: no cover - import guard
            raise TranslationProviderConfigurationError(
                "OpenAI Python SDK not installed. Install with `pip install openai`."
            ) from exc

        if settings.LLM_PROVIDER == "azure_openai":
            client = AzureOpenAI(
                api_key=settings.AZURE_OPENAI_API_KEY,
                api_version=settings.AZURE_OPENAI_API_VERSION,
                azure_endpoint=settings.AZURE_OPENAI_ENDPOINT,
            )
            return client, settings.AZURE_OPENAI_DEPLOYMENT_NAME

        return OpenAI(api_key=settings.OPENAI_API_KEY), self.DEFAULT_MODEL

    def request(
        self,
        sentence: str,
        *,
        source: Language,
        target: Language,
        prompt: str,
        model: str | None = None,
    ) -> str:
        chosen_model = model or self._default_model
        self._log_debug("provider.request.prompt", prompt)
        self._log_debug("provider.request.sentence", sentence)

        try:
            response = self._client.responses.create(
                model=chosen_model,
                input=[
                    {
                        "role": "system",
                        "content": [{"type": "input_text", "text": prompt}],
                    },
                    {
                        "role": "user",
                        "content": [{"type": "input_text", "text": sentence}],
                    },
                ],
            )
        except Exception as exc:  # network call
            raise TranslationProviderError(
                f"Translation service unavailable: {exc}"
            ) from exc

        text = self._extract_text(response)
        self._log_debug("provider.response.text", text)
        return text

    def _extract_text(self, response: Any) -> str:
        """Pull the response text out of a Responses API result."""

        output_text = getattr(response, "output_text", None)
        if hasattr(output_text, "value"):
            output_text = output_text.value
        if not output_text:
            parts: list[str] = []
            for item in getattr(response, "output", None) or []:
                for part in getattr(item, "content", None) or []:
                    text_value = getattr(part, "text", None)
                    if hasattr(text_value, "value"):
                        text_value = text_value.value
                    if text_value:
                        parts.append(str(text_value))
            output_text = "\n".join(parts)

        stripped = strip_code_fence(str(output_text or ""))
        if not stripped:
            raise TranslationProviderError(
                "Translation provider response empty or unrecognised."
            )
        return stripped

    def _log_debug(self, label: str, text: str) -> None:
        """Emit request and response details when debugging is enabled."""

        if self.debug:
            log.debug("%s:\n%s", label, text)


def strip_code_fence(text: str) -> str:
    """Remove leading/trailing markdown code fences if present."""

    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped

    # Drop opening fence and optional language hint.
    first_newline = stripped.find("\n")
    if first_newline == -1:
        return ""
    body = stripped[first_newline + 1 :]
    closing_index = body.rfind("```")
    if closing_index != -1:
        body = body[:closing_index]
    return body.strip()


def build_requester(
    name: str | None,
    *,
    settings: InterlinearConfig,
    debug: bool = False,
) -> TranslationRequester:
    """Factory to create requesters by name."""

    normalized = (name or "openai").strip().lower()
    if normalized in {"openai", "gpt", "default", "azure", "azure_openai"}:
        return OpenAITranslationRequester(settings, debug=debug)
    if normalized in {"echo", "noop", "mock"}:
        return EchoTranslationRequester()
    raise TranslationProviderConfigurationError(
        f"Unknown translation provider '{name}'."
    )
