"""Fixed per-mode prompt templates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OptimizationMode(str, Enum):
    """The four built-in rewriting styles."""

    PROFESSIONAL = "professional"
    CONCISE = "concise"
    GRAMMAR = "grammar"
    SENIOR_DEVELOPER = "senior_developer"


# Results that were not produced by a mode template are stored under this one
DEFAULT_MODE = OptimizationMode.PROFESSIONAL


@dataclass(frozen=True)
class ModeInfo:
    """Display metadata for a mode."""

    name: str
    description: str
    instruction: str
    label: str = "Rewritten text:"


MODE_INFO: dict[OptimizationMode, ModeInfo] = {
    OptimizationMode.PROFESSIONAL: ModeInfo(
        name="Professional",
        description="Make the text sound more professional and formal",
        instruction=(
            "Please rewrite the following text to make it sound more professional "
            "and formal, while maintaining the original meaning. Use appropriate "
            "business language and tone."
        ),
    ),
    OptimizationMode.CONCISE: ModeInfo(
        name="Concise",
        description="Make the text more concise while keeping the meaning",
        instruction=(
            "Please rewrite the following text to be more concise and to the point, "
            "while preserving all the key information and meaning."
        ),
    ),
    OptimizationMode.GRAMMAR: ModeInfo(
        name="Grammar",
        description="Fix grammar and spelling errors only",
        instruction=(
            "Please fix any grammar, spelling, or punctuation errors in the following "
            "text. Do not change the style or meaning - only correct mistakes."
        ),
        label="Corrected text:",
    ),
    OptimizationMode.SENIOR_DEVELOPER: ModeInfo(
        name="Senior Developer",
        description="Rewrite as a senior software engineer would write it",
        instruction=(
            "Please rewrite the following text as a senior software engineer would "
            "write it in a professional context (e.g., code review, technical "
            "discussion, or documentation). Use clear, precise technical language "
            "and follow industry best practices for communication."
        ),
    ),
}


def frame_instruction(instruction: str, text: str, label: str = "Rewritten text:") -> str:
    """Wrap an instruction and the input text in the shared layout."""
    return f'{instruction}\n\nOriginal text:\n"{text}"\n\n{label}'


def render(mode: OptimizationMode, text: str) -> str:
    """Render the prompt for ``mode`` with ``text`` substituted in."""
    info = MODE_INFO[OptimizationMode(mode)]
    return frame_instruction(info.instruction, text, info.label)


def get_mode_info(mode: OptimizationMode) -> ModeInfo:
    return MODE_INFO[OptimizationMode(mode)]


def all_modes() -> list[OptimizationMode]:
    return list(OptimizationMode)
