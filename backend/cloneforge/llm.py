"""
Generative model clients.

Both expose the same coroutine:
    generate(prompt, *, system, temperature, max_output_tokens) -> str
Every call is bounded by asyncio.wait_for so a hung request can't stall a
project pipeline forever.
"""

import asyncio
import os

import anthropic

from cloneforge.config import get_settings
from cloneforge.exceptions import ConfigError, GenerationError


class GeminiClient:
    def __init__(self, api_key: str, model: str, timeout: float = 300):
        from google import genai

        self._client = genai.Client(api_key=api_key)
        self.model = model
        self.timeout = timeout

    async def generate(self, prompt: str, *, system: str = "",
                       temperature: float = 0.3, max_output_tokens: int = 8192) -> str:
        from google.genai import types

        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            system_instruction=system or None,
        )
        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self.model,
                    contents=prompt,
                    config=config,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationError(f"Gemini call timed out after {self.timeout}s") from e
        except Exception as e:
            raise GenerationError(f"Gemini call failed: {e}") from e
        return response.text or ""


class AnthropicClient:
    def __init__(self, api_key: str, model: str, timeout: float = 300):
        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model
        self.timeout = timeout

    async def generate(self, prompt: str, *, system: str = "",
                       temperature: float = 0.3, max_output_tokens: int = 8192) -> str:
        kwargs = {
            "model": self.model,
            "max_tokens": max_output_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        try:
            response = await asyncio.wait_for(
                self._client.messages.create(**kwargs),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationError(f"Claude call timed out after {self.timeout}s") from e
        except Exception as e:
            raise GenerationError(f"Claude call failed: {e}") from e

        if getattr(response, "stop_reason", None) == "max_tokens":
            print("  [llm] WARNING: Output truncated (max_tokens reached)")
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )


def create_llm_client(settings=None):
    """Build the client for settings.llm_provider. Raises ConfigError without a key."""
    settings = settings or get_settings()
    provider = settings.llm_provider.lower()

    if provider == "gemini":
        api_key = os.getenv("GEMINI_API_KEY") or settings.gemini_api_key
        if not api_key:
            raise ConfigError("GEMINI_API_KEY must be set in .env")
        return GeminiClient(api_key, settings.gemini_model, timeout=settings.llm_timeout)

    if provider == "anthropic":
        api_key = os.getenv("ANTHROPIC_API_KEY") or settings.anthropic_api_key
        if not api_key:
            raise ConfigError("ANTHROPIC_API_KEY must be set in .env")
        return AnthropicClient(api_key, settings.anthropic_model, timeout=settings.llm_timeout)

    raise ConfigError(f"Unknown LLM provider: {settings.llm_provider}")
