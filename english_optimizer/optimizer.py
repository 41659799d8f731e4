"""Optimizer: ties prompt construction, a provider and history together."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
import logging
from typing import TYPE_CHECKING

from english_optimizer.errors import ConfigurationMissingError
from english_optimizer.prompts.structured import StructuredPromptConfig, render_structured
from english_optimizer.prompts.templates import DEFAULT_MODE, OptimizationMode, frame_instruction
from english_optimizer.prompts.translation import fill_template

if TYPE_CHECKING:
    from english_optimizer.backends.base import Provider
    from english_optimizer.history import HistoryLogger
    from english_optimizer.prompts.custom import CustomPrompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizationResult:
    """Outcome of one optimization call."""

    original: str
    optimized: str
    mode: OptimizationMode
    timestamp: datetime
    provider: str
    model: str


class Optimizer:
    """Runs optimizations and stamps the results.

    Provider errors propagate unchanged. History failures are logged and
    never fail the optimization.
    """

    def __init__(
        self,
        provider: Provider,
        history: HistoryLogger | None = None,
        structured_config: StructuredPromptConfig | None = None,
    ):
        self.provider = provider
        self.history = history
        self.structured_config = structured_config

    @property
    def has_structured_prompt(self) -> bool:
        return self.structured_config is not None

    async def optimize(self, text: str, mode: OptimizationMode) -> OptimizationResult:
        optimized = await self.provider.optimize(text, mode)
        return self._record(text, optimized, mode)

    async def optimize_with_structured_prompt(self, text: str) -> OptimizationResult:
        if self.structured_config is None:
            raise ConfigurationMissingError("Structured prompt configuration is not loaded")
        prompt = render_structured(self.structured_config, text)
        optimized = await self.provider.generate_with_prompt(prompt)
        return self._record(text, optimized, DEFAULT_MODE)

    async def optimize_with_template(self, text: str, template: str) -> OptimizationResult:
        """Run a user-supplied template containing a ``{text}`` placeholder."""
        optimized = await self.provider.generate_with_prompt(fill_template(template, text))
        return self._record(text, optimized, DEFAULT_MODE)

    async def optimize_with_custom_prompt(
        self, text: str, custom_prompt: CustomPrompt
    ) -> OptimizationResult:
        prompt = frame_instruction(custom_prompt.prompt, text)
        optimized = await self.provider.generate_with_prompt(prompt)
        return self._record(text, optimized, DEFAULT_MODE)

    def _record(self, original: str, optimized: str, mode: OptimizationMode) -> OptimizationResult:
        result = OptimizationResult(
            original=original,
            optimized=optimized,
            mode=mode,
            timestamp=datetime.now(UTC),
            provider=self.provider.name,
            model=self.provider.model,
        )

        if self.history is not None:
            try:
                self.history.add_entry(result)
            except Exception as e:
                logger.warning("Failed to record history entry: %s", e)

        return result
