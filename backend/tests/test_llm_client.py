import asyncio

import pytest

from backend.recipe_cart.core.config import Settings
from backend.recipe_cart.services.llm_client import (
    GeminiTextGenerator,
    GenerationError,
    OpenAITextGenerator,
    get_text_generator,
)


def test_provider_selection():
    assert isinstance(get_text_generator(Settings(llm_provider="openai")), OpenAITextGenerator)
    assert isinstance(get_text_generator(Settings(llm_provider="gemini")), GeminiTextGenerator)


def test_missing_openai_key_fails_at_call_time():
    generator = OpenAITextGenerator(Settings(openai_api_key=""))

    with pytest.raises(GenerationError):
        asyncio.run(generator.generate("prompt"))


def test_missing_gemini_key_fails_at_call_time():
    generator = GeminiTextGenerator(Settings(llm_provider="gemini", gemini_api_key=""))

    with pytest.raises(GenerationError):
        asyncio.run(generator.generate("prompt"))


def test_llm_configured_follows_provider():
    assert Settings(llm_provider="openai", openai_api_key="sk-test").llm_configured
    assert not Settings(llm_provider="gemini", openai_api_key="sk-test", gemini_api_key="").llm_configured
