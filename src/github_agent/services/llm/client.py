"""
LLM text-completion client

Wraps a llama_index LLM chosen by settings.llm_provider. The only contract
offered to services is generate(prompt) -> raw text; callers never assume the
text is well-formed JSON.
"""

import asyncio
from typing import Optional

from loguru import logger

# LLM Providers
from llama_index.llms.ollama import Ollama
from llama_index.llms.openai import OpenAI
from llama_index.llms.gemini import Gemini
from llama_index.llms.openrouter import OpenRouter

from github_agent.config import settings
from github_agent.core.exceptions import InvalidInputError, LLMError


def create_llm():
    """create LLM instance based on config"""
    provider = settings.llm_provider.lower()

    if provider == "ollama":
        return Ollama(
            model=settings.ollama_model,
            base_url=settings.ollama_base_url,
            temperature=settings.temperature,
            request_timeout=settings.llm_timeout,
        )
    elif provider == "openai":
        if not settings.openai_api_key:
            raise ValueError("OpenAI API key is required for OpenAI provider")
        return OpenAI(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            api_base=settings.openai_base_url,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.llm_timeout,
        )
    elif provider == "gemini":
        if not settings.google_api_key:
            raise ValueError("Google API key is required for Gemini provider")
        return Gemini(
            model=settings.gemini_model,
            api_key=settings.google_api_key,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
    elif provider == "openrouter":
        if not settings.openrouter_api_key:
            raise ValueError("OpenRouter API key is required for OpenRouter provider")
        return OpenRouter(
            model=settings.openrouter_model,
            api_key=settings.openrouter_api_key,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.llm_timeout,
        )
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")


class LLMClient:
    """Text-completion client"""

    def __init__(self, llm=None, timeout: Optional[float] = None):
        self._llm = llm
        self.timeout = timeout or settings.llm_timeout

    @property
    def llm(self):
        if self._llm is None:
            try:
                self._llm = create_llm()
            except ValueError as e:
                raise LLMError.wrap(e, "LLM provider is not configured")
            logger.info(f"Initialized LLM provider '{settings.llm_provider}'")
        return self._llm

    async def generate(self, prompt: str) -> str:
        """Send prompt and return the raw response text"""
        if not prompt or not prompt.strip():
            raise InvalidInputError("prompt cannot be empty")

        llm = self.llm
        try:
            response = await asyncio.wait_for(llm.acomplete(prompt), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"LLM request timed out after {self.timeout}s")
            raise LLMError.wrap(e, "LLM request timed out")
        except Exception as e:
            logger.error(f"LLM generation failed: {e}")
            raise LLMError.wrap(e, "failed to generate content")

        text = str(response)
        if not text.strip():
            raise LLMError("no response generated")
        return text
