"""Ollama backend for english_optimizer.

Handles communication with a local Ollama server via /api/generate.
"""

from __future__ import annotations

import logging
import time

import httpx

from english_optimizer.backends.base import GENERATION_TIMEOUT, LIVENESS_TIMEOUT, Provider
from english_optimizer.errors import InvalidResponseError, ServiceUnavailableError, TransportError

logger = logging.getLogger(__name__)


class OllamaProvider(Provider):
    """Ollama LLM backend."""

    name = "ollama"

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.2:3b",
        timeout: float = GENERATION_TIMEOUT,
        temperature: float = 0.7,
        top_p: float = 0.9,
    ):
        super().__init__(model)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.options = {
            "temperature": temperature,
            "top_p": top_p,
        }

    async def complete(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": self.options,
        }

        url = f"{self.base_url}/api/generate"
        started = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.ConnectError as e:
            raise ServiceUnavailableError(
                f"Cannot connect to Ollama at {self.base_url}. Make sure Ollama is running.",
                address=self.base_url,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"Ollama API error: {e}") from e
        except ValueError as e:
            raise InvalidResponseError("Invalid response from Ollama") from e
        finally:
            logger.debug("POST %s took %.2fs", url, time.monotonic() - started)

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise InvalidResponseError("Invalid response from Ollama")
        return text

    async def is_available(self) -> bool:
        """Check if Ollama is available."""
        try:
            async with httpx.AsyncClient(timeout=LIVENESS_TIMEOUT) as client:
                response = await client.get(f"{self.base_url}/api/tags")
                return response.status_code == 200
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Ollama at %s is not reachable: %s", self.base_url, e)
            return False

    async def list_models(self) -> list[str]:
        """List models installed on the server."""
        try:
            async with httpx.AsyncClient(timeout=LIVENESS_TIMEOUT) as client:
                response = await client.get(f"{self.base_url}/api/tags")
                response.raise_for_status()
                data = response.json()
                return [m["name"] for m in data.get("models", [])]
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, KeyError, TypeError):
            return []
