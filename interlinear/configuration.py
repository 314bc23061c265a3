"""Layered configuration for Interlinear.

Values come, in order of precedence, from the process environment, a local
``.env`` file, ``./interlinear.yaml`` and ``~/.interlinear.yaml``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional, Sequence

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .errors import TranslationProviderConfigurationError, UnknownLanguageError
from .languages import get_language

CONFIG_FILE_NAME = "interlinear.yaml"


def config_file_paths() -> list[Path]:
    """YAML files to read; later entries win."""

    return [Path.home() / f".{CONFIG_FILE_NAME}", Path.cwd() / CONFIG_FILE_NAME]


def normalise_provider_name(raw_value: str) -> str:
    """Map provider spellings onto ``openai`` or ``azure_openai``."""

    normalized = raw_value.strip().lower().replace("-", "_")
    synonyms = {
        "azure_open_ai": "azure_openai",
        "azureopenai": "azure_openai",
    }
    normalized = synonyms.get(normalized, normalized)
    if normalized not in {"openai", "azure_openai"}:
        normalized = "openai"
    return normalized


class InterlinearConfig(BaseSettings):
    """Settings for requesting and laying out word-by-word translations."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    LLM_PROVIDER: Literal["azure_openai", "openai"] = "openai"
    OPENAI_API_KEY: Optional[str] = None
    AZURE_OPENAI_API_KEY: Optional[str] = None
    AZURE_OPENAI_ENDPOINT: Optional[str] = None
    AZURE_OPENAI_API_VERSION: Optional[str] = None
    AZURE_OPENAI_DEPLOYMENT_NAME: Optional[str] = None

    INTERLINEAR_MODEL: Optional[str] = None
    # Characters per wrapped row, excluding the marker.
    INTERLINEAR_MAX_LINE_LENGTH: int = Field(default=25, ge=1)
    INTERLINEAR_SOURCE_LANGUAGE: str = "English"
    INTERLINEAR_TARGET_LANGUAGE: str = "France"
    INTERLINEAR_PROVIDER_DEBUG: bool = False

    @field_validator("LLM_PROVIDER", mode="before")
    @classmethod
    def _normalise_provider(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalise_provider_name(value)
        return value

    @field_validator("INTERLINEAR_SOURCE_LANGUAGE", "INTERLINEAR_TARGET_LANGUAGE")
    @classmethod
    def _known_language(cls, value: str) -> str:
        try:
            return get_language(value).name
        except UnknownLanguageError as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=config_file_paths()),
        )


def validate_provider_settings(settings: InterlinearConfig) -> None:
    """Check that the selected provider has the credentials it needs."""

    if settings.LLM_PROVIDER == "openai":
        missing = [] if settings.OPENAI_API_KEY else ["OPENAI_API_KEY"]
    else:
        missing = [
            name
            for name in (
                "AZURE_OPENAI_API_KEY",
                "AZURE_OPENAI_ENDPOINT",
                "AZURE_OPENAI_API_VERSION",
                "AZURE_OPENAI_DEPLOYMENT_NAME",
            )
            if not getattr(settings, name)
        ]

    if missing:
        raise TranslationProviderConfigurationError(
            f"LLM_PROVIDER '{settings.LLM_PROVIDER}' needs the following settings: "
            f"{', '.join(missing)}."
        )


def _format_validation_errors(entries: Sequence[Any]) -> str:
    details = []
    for entry in entries:
        location = ".".join(str(part) for part in entry.get("loc", ()))
        prefix = f"{location}: " if location else ""
        details.append(f"- {prefix}{entry.get('msg', 'Invalid value')}")
    return "Configuration validation errors detected:\n" + "\n".join(details)


@lru_cache(maxsize=1)
def get_settings() -> InterlinearConfig:
    """Load the configuration once and return the validated settings."""

    try:
        return InterlinearConfig()
    except ValidationError as exc:
        raise TranslationProviderConfigurationError(
            _format_validation_errors(exc.errors())
        ) from exc
    except yaml.YAMLError as exc:
        raise TranslationProviderConfigurationError(
            f"Configuration file could not be parsed: {exc}"
        ) from exc
