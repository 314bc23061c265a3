"""
Translation requester tests (no network access)
"""
import logging
from types import SimpleNamespace

import pytest

from interlinear.errors import (
    TranslationProviderConfigurationError,
    TranslationProviderError,
)
from interlinear.providers import (
    EchoTranslationRequester,
    OpenAITranslationRequester,
    build_prompt,
    build_requester,
    strip_code_fence,
)


class FakeResponses:
    """Stands in for ``client.responses``."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def make_client(response=None, error=None):
    return SimpleNamespace(responses=FakeResponses(response=response, error=error))


@pytest.mark.unit
class TestOpenAIRequester:
    """Responses API handling"""

    def test_returns_output_text(self, english, french):
        client = make_client(SimpleNamespace(output_text="🇬🇧 [Hi]\n🇫🇷 [Salut]"))
        requester = OpenAITranslationRequester(None, client=client)

        text = requester.request(
            "Hi", source=english, target=french, prompt=build_prompt(english, french)
        )

        assert text == "🇬🇧 [Hi]\n🇫🇷 [Salut]"
        call = client.responses.calls[0]
        assert call["model"] == OpenAITranslationRequester.DEFAULT_MODEL
        assert call["input"][1]["content"][0]["text"] == "Hi"
        assert "France" in call["input"][0]["content"][0]["text"]

    def test_code_fences_are_removed(self, english, french):
        client = make_client(SimpleNamespace(output_text="```text\nA [a]\nB [b]\n```"))
        requester = OpenAITranslationRequester(None, client=client)

        assert requester.request("a", source=english, target=french, prompt="p") == (
            "A [a]\nB [b]"
        )

    def test_falls_back_to_output_parts(self, english, french):
        response = SimpleNamespace(
            output_text=None,
            output=[SimpleNamespace(content=[SimpleNamespace(text="A [a]\nB [b]")])],
        )
        requester = OpenAITranslationRequester(None, client=make_client(response))

        assert requester.request("a", source=english, target=french, prompt="p") == (
            "A [a]\nB [b]"
        )

    def test_empty_response_raises(self, english, french):
        response = SimpleNamespace(output_text="", output=[])
        requester = OpenAITranslationRequester(None, client=make_client(response))

        with pytest.raises(TranslationProviderError):
            requester.request("a", source=english, target=french, prompt="p")

    def test_transport_failure_raises(self, english, french):
        client = make_client(error=ConnectionError("connection reset"))
        requester = OpenAITranslationRequester(None, client=client)

        with pytest.raises(TranslationProviderError) as exc_info:
            requester.request("a", source=english, target=french, prompt="p")
        assert "connection reset" in str(exc_info.value)

    def test_model_selection(self, settings, english, french):
        settings.INTERLINEAR_MODEL = "configured-model"
        client = make_client(SimpleNamespace(output_text="A [a]\nB [b]"))
        requester = OpenAITranslationRequester(settings, client=client)

        requester.request("a", source=english, target=french, prompt="p")
        requester.request("a", source=english, target=french, prompt="p", model="other")

        assert [call["model"] for call in client.responses.calls] == [
            "configured-model",
            "other",
        ]

    @pytest.mark.parametrize("debug", [True, False])
    def test_debug_logging(self, caplog, english, french, debug):
        client = make_client(SimpleNamespace(output_text="A [a]\nB [b]"))
        requester = OpenAITranslationRequester(None, client=client, debug=debug)

        with caplog.at_level(logging.DEBUG, logger="interlinear.providers"):
            requester.request("a", source=english, target=french, prompt="the prompt")

        messages = [record.getMessage() for record in caplog.records]
        if debug:
            assert "provider.request.prompt:\nthe prompt" in messages
            assert "provider.response.text:\nA [a]\nB [b]" in messages
        else:
            assert messages == []


@pytest.mark.unit
class TestRequesterFactory:
    """build_requester and provider settings"""

    def test_echo_requester(self, settings, english, french):
        requester = build_requester("echo", settings=settings)

        assert isinstance(requester, EchoTranslationRequester)
        assert requester.request(
            "hello  world", source=english, target=french, prompt="p"
        ) == "🇬🇧 [hello] [world]\n🇫🇷 [hello] [world]"

    def test_unknown_provider(self, settings):
        with pytest.raises(TranslationProviderConfigurationError):
            build_requester("carrier-pigeon", settings=settings)

    def test_openai_without_key_is_rejected(self, settings):
        with pytest.raises(TranslationProviderConfigurationError) as exc_info:
            build_requester("openai", settings=settings)
        assert "OPENAI_API_KEY" in str(exc_info.value)


@pytest.mark.unit
class TestPromptHelpers:
    """Prompt and response text helpers"""

    def test_prompt_names_both_languages_and_flags(self, english, french):
        prompt = build_prompt(english, french)

        assert "from English to France" in prompt
        assert "🇬🇧" in prompt and "🇫🇷" in prompt

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("  plain  ", "plain"),
            ("```\nbody\n```", "body"),
            ("```json\nbody", "body"),
            ("```", ""),
        ],
    )
    def test_strip_code_fence(self, text, expected):
        assert strip_code_fence(text) == expected
