import logging
from functools import lru_cache
from typing import Protocol
import google.generativeai as genai
import httpx
from google.api_core import exceptions as google_exceptions
from resume_ia.core.config import settings
from resume_ia.core.errors import ConfigurationError, ModelClientError

logger = logging.getLogger(__name__)


class LLMProvider(Protocol):
    def generate(self, prompt: str, context: str, json_output: bool = False) -> str:
        ...


class GeminiProvider:
    def __init__(self) -> None:
        if not settings.google_api_key:
            raise ConfigurationError(
                "La configuration de Google AI est absente. Veuillez définir GOOGLE_API_KEY dans votre fichier .env."
            )
        genai.configure(api_key=settings.google_api_key)

    def generate(self, prompt: str, context: str, json_output: bool = False) -> str:
        model = genai.GenerativeModel(settings.gemini_model, system_instruction=prompt)
        generation_config = {"temperature": settings.llm_temperature}
        if json_output:
            generation_config["response_mime_type"] = "application/json"
        try:
            response = model.generate_content(context, generation_config=generation_config)
            # .text raises ValueError when the candidate was blocked or is empty
            text = response.text
        except (google_exceptions.GoogleAPIError, ValueError) as exc:
            logger.error("Gemini call failed", extra={"model": settings.gemini_model, "error": str(exc)})
            raise ModelClientError() from exc
        return (text or "").strip()


class OpenAIProvider:
    def __init__(self) -> None:
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY est requise pour le fournisseur OpenAI.")

    def generate(self, prompt: str, context: str, json_output: bool = False) -> str:
        payload = {
            "model": settings.openai_model,
            "messages": [
                {"role": "system", "content": prompt},
                {"role": "user", "content": context},
            ],
            "temperature": settings.llm_temperature,
        }
        if json_output:
            payload["response_format"] = {"type": "json_object"}
        headers = {
            "Authorization": f"Bearer {settings.openai_api_key}",
            "Content-Type": "application/json",
        }
        try:
            with httpx.Client(timeout=settings.llm_timeout_s) as client:
                response = client.post("https://api.openai.com/v1/chat/completions", json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            logger.error("OpenAI call failed", extra={"model": settings.openai_model, "error": str(exc)})
            raise ModelClientError() from exc
        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message", {}).get("content") or "").strip()


@lru_cache(maxsize=1)
def get_provider() -> LLMProvider:
    provider = settings.llm_provider.lower()
    if provider == "gemini":
        logger.info("Using Gemini provider", extra={"model": settings.gemini_model})
        return GeminiProvider()
    if provider == "openai":
        logger.info("Using OpenAI provider", extra={"model": settings.openai_model})
        return OpenAIProvider()
    raise ConfigurationError(f"Fournisseur LLM non pris en charge : {settings.llm_provider}")
