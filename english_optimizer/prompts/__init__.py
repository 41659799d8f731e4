"""Prompt construction: fixed mode templates, structured YAML, custom prompts."""

from english_optimizer.prompts.custom import CustomPrompt, CustomPromptStore
from english_optimizer.prompts.structured import (
    StructuredPromptConfig,
    StructuredPromptLoader,
    render_structured,
)
from english_optimizer.prompts.templates import (
    DEFAULT_MODE,
    ModeInfo,
    OptimizationMode,
    all_modes,
    get_mode_info,
    render,
)
from english_optimizer.prompts.translation import TranslationPromptLoader, fill_template

__all__ = [
    "CustomPrompt",
    "CustomPromptStore",
    "DEFAULT_MODE",
    "ModeInfo",
    "OptimizationMode",
    "StructuredPromptConfig",
    "StructuredPromptLoader",
    "TranslationPromptLoader",
    "all_modes",
    "fill_template",
    "get_mode_info",
    "render",
    "render_structured",
]
