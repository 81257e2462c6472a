"""
Text generation clients. The rest of the app only sees
`generate(prompt) -> str`; which model answers is a settings detail.
"""

import logging
from typing import Optional, Protocol

from google import genai
from google.genai import types
from openai import AsyncOpenAI

from ..core.config import Settings, get_settings

log = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when the text generation backend cannot produce a reply."""


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> Optional[str]:
        ...


class OpenAITextGenerator:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.client: AsyncOpenAI | None = None

    def _client(self) -> AsyncOpenAI:
        if not self.settings.openai_api_key:
            raise GenerationError("OpenAI API key not configured. Please set OPENAI_API_KEY in your .env file.")
        if self.client is None:
            kwargs = {"api_key": self.settings.openai_api_key}
            if self.settings.llm_timeout_seconds is not None:
                kwargs["timeout"] = self.settings.llm_timeout_seconds
            self.client = AsyncOpenAI(**kwargs)
        return self.client

    async def generate(self, prompt: str) -> Optional[str]:
        client = self._client()
        log.info(f"🔗 Requesting completion from {self.settings.openai_model}")

        params = {
            "model": self.settings.openai_model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if self.settings.llm_temperature is not None:
            params["temperature"] = self.settings.llm_temperature

        try:
            response = await client.chat.completions.create(**params)
        except Exception as e:
            raise GenerationError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            return None
        return response.choices[0].message.content


class GeminiTextGenerator:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.client: genai.Client | None = None

    def _client(self) -> genai.Client:
        if not self.settings.gemini_api_key:
            raise GenerationError("Gemini API key not configured. Please set GEMINI_API_KEY in your .env file.")
        if self.client is None:
            http_options = None
            if self.settings.llm_timeout_seconds is not None:
                # google-genai takes milliseconds
                http_options = types.HttpOptions(timeout=int(self.settings.llm_timeout_seconds * 1000))
            self.client = genai.Client(api_key=self.settings.gemini_api_key, http_options=http_options)
        return self.client

    async def generate(self, prompt: str) -> Optional[str]:
        client = self._client()
        log.info(f"🔗 Requesting completion from {self.settings.gemini_model}")

        config = None
        if self.settings.llm_temperature is not None:
            config = types.GenerateContentConfig(temperature=self.settings.llm_temperature)

        try:
            response = await client.aio.models.generate_content(
                model=self.settings.gemini_model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {e}") from e

        return response.text


def get_text_generator(settings: Optional[Settings] = None) -> TextGenerator:
    settings = settings or get_settings()
    if settings.llm_provider == "gemini":
        return GeminiTextGenerator(settings)
    return OpenAITextGenerator(settings)
