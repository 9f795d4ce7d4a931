"""Unit tests for GeminiTranslationService."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from hosted_translation.core import LanguagePair, TranslationInput, TranslationUnavailable
from hosted_translation.services import GeminiTranslationService

EN_FR = LanguagePair("en", "fr")


def response(text):
    return MagicMock(text=text)


@pytest.fixture
def client():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response("Bonne nuit\n"))
    return client


@pytest.fixture
def translator(client):
    return GeminiTranslationService(client=client)


class TestGeminiTranslationService:
    """Tests for the Gemini-backed translator."""

    def test_returns_stripped_translation(self, translator):
        translation = asyncio.run(translator.translate(TranslationInput("Good night"), EN_FR))

        assert translation.output == "Bonne nuit"
        assert translation.language_pair == EN_FR

    def test_prompt_names_both_languages(self, translator, client):
        asyncio.run(translator.translate(TranslationInput("Good night"), EN_FR))

        prompt = client.aio.models.generate_content.call_args.kwargs["contents"]
        assert "English text to natural, idiomatic French" in prompt
        assert prompt.endswith("Good night")

    def test_empty_response_is_unavailable(self, translator, client):
        client.aio.models.generate_content.return_value = response(None)

        with pytest.raises(TranslationUnavailable):
            asyncio.run(translator.translate(TranslationInput("Good night"), EN_FR))

    def test_echoed_input_is_unavailable(self, translator, client):
        client.aio.models.generate_content.return_value = response("Good night")

        with pytest.raises(TranslationUnavailable):
            asyncio.run(translator.translate(TranslationInput("Good night"), EN_FR))

    def test_rate_limit_is_retried(self, translator, client):
        client.aio.models.generate_content.side_effect = [
            Exception("429 RESOURCE_EXHAUSTED"),
            response("Bonne nuit"),
        ]

        with patch("hosted_translation.services.translation.gemini_translation_service.asyncio.sleep", new=AsyncMock()) as sleep:
            translation = asyncio.run(translator.translate(TranslationInput("Good night"), EN_FR))

        assert translation.output == "Bonne nuit"
        sleep.assert_awaited_once_with(2.0)

    def test_other_errors_propagate(self, translator, client):
        client.aio.models.generate_content.side_effect = ValueError("invalid argument")

        with pytest.raises(ValueError):
            asyncio.run(translator.translate(TranslationInput("Good night"), EN_FR))

    def test_requires_api_key_or_client(self):
        with pytest.raises(ValueError):
            GeminiTranslationService(api_key=None)
