from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    llm_provider: Literal["openai", "gemini"] = "openai"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash-latest"
    llm_temperature: Optional[float] = None
    llm_timeout_seconds: Optional[float] = None

    model_config = {
        "env_file": ".env",
        "env_prefix": "",
        "extra": "ignore",
    }

    @property
    def llm_configured(self) -> bool:
        if self.llm_provider == "gemini":
            return bool(self.gemini_api_key)
        return bool(self.openai_api_key)

@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
