"""Abstract provider interface for text generation."""

from abc import ABC, abstractmethod

from english_optimizer.errors import InvalidResponseError
from english_optimizer.prompts.templates import OptimizationMode, render

# Labels some models echo back in front of the rewrite
KNOWN_PREFIXES = ("Rewritten text:", "Corrected text:", "Optimized text:")

GENERATION_TIMEOUT = 60.0
LIVENESS_TIMEOUT = 5.0


def clean_response(raw: str, strip_prefixes: bool = False) -> str:
    """Strip one layer of wrapping quotes and, optionally, one echoed label."""
    result = raw.strip()

    if len(result) >= 2 and result.startswith('"') and result.endswith('"'):
        result = result[1:-1]

    if strip_prefixes:
        for prefix in KNOWN_PREFIXES:
            if result.startswith(prefix):
                result = result[len(prefix):].strip()
                break

    return result


class Provider(ABC):
    """A text-generation backend.

    Subclasses implement the transport (:meth:`complete`) and a liveness
    probe; prompt construction and response cleanup live here.
    """

    name: str = "provider"

    def __init__(self, model: str):
        self.model = model

    async def optimize(self, text: str, mode: OptimizationMode) -> str:
        """Rewrite ``text`` using the fixed template for ``mode``."""
        raw = await self.complete(render(mode, text))
        return self._finish(raw, strip_prefixes=True)

    async def generate_with_prompt(self, prompt: str) -> str:
        """Run an already-built prompt."""
        raw = await self.complete(prompt)
        return self._finish(raw, strip_prefixes=False)

    def _finish(self, raw: str, strip_prefixes: bool) -> str:
        result = clean_response(raw, strip_prefixes=strip_prefixes)
        if not result:
            raise InvalidResponseError(f"Empty response from {self.name}")
        return result

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Send one prompt and return the raw generated text."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Check if the backend can serve requests."""
