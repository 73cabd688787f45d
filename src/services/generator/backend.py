"""Generative model backends."""

from typing import Protocol

from google import genai

from src.config import Settings
from src.utils.logging import get_logger

logger = get_logger(__name__)


class GenerationError(Exception):
    """The backend answered without usable text."""


class GenerativeBackend(Protocol):
    """Anything that turns one prompt into one completion."""

    name: str

    async def complete(self, prompt: str) -> str: ...


class GeminiBackend:
    """Google Gemini through the ``google-genai`` async client."""

    name = "gemini"

    def __init__(self, client: genai.Client, model: str) -> None:
        self._client = client
        self.model = model

    async def complete(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
        )
        if not (text := response.text):
            raise GenerationError(f"Empty response from {self.model}")
        return text


def create_generative_backend(settings: Settings) -> GenerativeBackend | None:
    """Build the configured backend, or None when no API key is set."""
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set - READMEs will use the built-in template")
        return None
    client = genai.Client(api_key=settings.gemini_api_key)
    return GeminiBackend(client, settings.gemini_model)
