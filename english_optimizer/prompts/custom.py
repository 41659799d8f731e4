"""Custom prompts stored as a JSON array, addressable by name or hotkey."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class CustomPrompt(BaseModel):
    name: str
    description: str
    prompt: str
    hotkey: str | None = None


EXAMPLE_PROMPTS = [
    CustomPrompt(
        name="Academic",
        description="Rewrite in an academic style suitable for research papers",
        prompt=(
            "Please rewrite the following text in an academic style suitable for "
            "research papers or scholarly articles. Use formal language, precise "
            "terminology, and maintain objectivity."
        ),
        hotkey="a",
    ),
    CustomPrompt(
        name="Friendly",
        description="Make the text more friendly and casual",
        prompt=(
            "Please rewrite the following text to sound more friendly and casual, "
            "while maintaining the core message. Use conversational language."
        ),
        hotkey="f",
    ),
]


class CustomPromptStore:
    """Manages the custom prompts file."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self._ensure_file()

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write(EXAMPLE_PROMPTS)

    def _write(self, prompts: list[CustomPrompt]) -> None:
        data = [p.model_dump(exclude_none=True) for p in prompts]
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get_prompts(self) -> list[CustomPrompt]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [CustomPrompt(**item) for item in data]
        except (OSError, json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning("Cannot read custom prompts from %s: %s", self.path, e)
            return []

    def get_by_name(self, name: str) -> CustomPrompt | None:
        wanted = name.lower()
        for prompt in self.get_prompts():
            if prompt.name.lower() == wanted:
                return prompt
        return None

    def get_by_hotkey(self, hotkey: str) -> CustomPrompt | None:
        for prompt in self.get_prompts():
            if prompt.hotkey == hotkey:
                return prompt
        return None

    def add(self, prompt: CustomPrompt) -> None:
        prompts = self.get_prompts()
        prompts.append(prompt)
        self._write(prompts)

    def remove(self, name: str) -> bool:
        """Remove a prompt by name. Returns False if nothing matched."""
        prompts = self.get_prompts()
        kept = [p for p in prompts if p.name.lower() != name.lower()]
        if len(kept) == len(prompts):
            return False
        self._write(kept)
        return True
