"""Structured (YAML) prompt configuration.

A structured prompt describes the assistant in sections: role, goals, user
profile, instructions, output format, examples and constraints. Only
``role`` is required. Sections that are absent or empty are left out of the
rendered prompt entirely.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError
import yaml

from english_optimizer.errors import ConfigurationMissingError

logger = logging.getLogger(__name__)

OUTPUT_DIRECTIVE = "Provide ONLY the optimized English text, nothing else."


class Role(BaseModel):
    name: str
    description: str = ""


class UserProfile(BaseModel):
    background: str | None = None
    native_language: str | None = None
    learning_goal: str | None = None


class OutputFormat(BaseModel):
    style: str | None = None
    structure: list[str] = Field(default_factory=list)


class Example(BaseModel):
    input: str
    output: str


class StructuredPromptConfig(BaseModel):
    role: Role
    goals: list[str] = Field(default_factory=list)
    user_profile: UserProfile | None = None
    instructions: list[str] = Field(default_factory=list)
    output_format: OutputFormat | None = None
    examples: list[Example] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def _profile_section(profile: UserProfile | None) -> str | None:
    if profile is None:
        return None
    lines = []
    if profile.background:
        lines.append(f"Background: {profile.background}")
    if profile.native_language:
        lines.append(f"Native Language: {profile.native_language}")
    if profile.learning_goal:
        lines.append(f"Learning Goal: {profile.learning_goal}")
    if not lines:
        return None
    return "## User Profile\n" + "\n".join(lines)


def _output_format_section(fmt: OutputFormat | None) -> str | None:
    if fmt is None:
        return None
    lines = []
    if fmt.style:
        lines.append(f"Style: {fmt.style}")
    if fmt.structure:
        lines.append(f"Structure: {', '.join(fmt.structure)}")
    if not lines:
        return None
    return "## Output Format\n" + "\n".join(lines)


def render_structured(config: StructuredPromptConfig | None, text: str) -> str:
    """Render a structured configuration into a single prompt for ``text``."""
    if config is None:
        raise ConfigurationMissingError("Structured prompt configuration is not loaded")

    role = config.role
    sections: list[str | None] = [
        f"## Role\n{role.name}\n{role.description}".rstrip("\n"),
        f"## Goals\n{_bullets(config.goals)}" if config.goals else None,
        _profile_section(config.user_profile),
        f"## Instructions\n{_bullets(config.instructions)}" if config.instructions else None,
        _output_format_section(config.output_format),
    ]

    if config.examples:
        examples = "\n\n".join(
            f'Input: "{ex.input}"\nOutput: {ex.output}' for ex in config.examples
        )
        sections.append(f"## Examples\n{examples}")

    if config.constraints:
        sections.append(f"## Constraints\n{_bullets(config.constraints)}")

    sections.append(f'## Input to Optimize\n"{text}"')
    sections.append(f"## Output\n{OUTPUT_DIRECTIVE}")

    return "\n\n".join(s for s in sections if s)


class StructuredPromptLoader:
    """Loads a :class:`StructuredPromptConfig` from a YAML file."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path).expanduser() if path else Path.cwd() / "prompt.yaml"

    def load(self) -> StructuredPromptConfig | None:
        """Return the parsed config, or None if the file is missing or invalid."""
        if not self.path.exists():
            return None
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
            return StructuredPromptConfig(**(data or {}))
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            logger.warning("Failed to load structured prompt %s: %s", self.path, e)
            return None

    def exists(self) -> bool:
        return self.load() is not None
