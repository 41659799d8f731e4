"""User-editable plain-text prompt used by instant mode."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PLACEHOLDER = "{text}"

DEFAULT_TRANSLATION_PROMPT = """You are a professional translator and editor for software developers.

Your task is to:
1. Detect if the text is Chinese or English
2. If Chinese: Translate to natural, professional English
3. If English: Optimize the English to be more natural and professional
4. Use terminology and phrasing common in software development
5. Make it sound like a native English-speaking developer
6. Preserve technical terms, API names, and code snippets
7. For multi-line text, maintain the paragraph structure

Text to process:
"{text}"

Provide ONLY the translated/optimized English text, nothing else.
Do not include any explanations, notes, or additional text."""


def fill_template(template: str, text: str) -> str:
    """Substitute ``text`` for the first ``{text}`` placeholder."""
    return template.replace(PLACEHOLDER, text, 1)


class TranslationPromptLoader:
    """Reads the translation prompt, seeding the file with the default."""

    def __init__(self, path: str | Path | None = None):
        self.path = (
            Path(path).expanduser()
            if path
            else Path.home() / ".english-optimizer" / "translation-prompt.txt"
        )

    def get_prompt(self) -> str:
        if self.path.exists():
            try:
                return self.path.read_text(encoding="utf-8")
            except OSError as e:
                logger.warning("Cannot read %s, using default prompt: %s", self.path, e)
                return DEFAULT_TRANSLATION_PROMPT

        self._write_default()
        return DEFAULT_TRANSLATION_PROMPT

    def _write_default(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(DEFAULT_TRANSLATION_PROMPT, encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot create %s: %s", self.path, e)
