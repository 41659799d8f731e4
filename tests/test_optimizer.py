"""Tests for the Optimizer: stamping, history and prompt routing."""

import pytest

from english_optimizer.errors import AuthError, ConfigurationMissingError
from english_optimizer.optimizer import Optimizer
from english_optimizer.prompts.custom import CustomPrompt
from english_optimizer.prompts.structured import StructuredPromptConfig
from english_optimizer.prompts.templates import DEFAULT_MODE, OptimizationMode, render
from tests._utils.fakes import FakeProvider, RecordingHistory


@pytest.mark.asyncio
async def test_optimize_stamps_result_and_records_once():
    provider = FakeProvider(reply="X")
    history = RecordingHistory()
    optimizer = Optimizer(provider, history=history)

    result = await optimizer.optimize("i has went", OptimizationMode.GRAMMAR)

    assert result.original == "i has went"
    assert result.optimized == "X"
    assert result.mode is OptimizationMode.GRAMMAR
    assert result.provider == "fake"
    assert result.model == "fake-model"
    assert result.timestamp.tzinfo is not None
    assert history.results == [result]
    assert provider.prompts == [render(OptimizationMode.GRAMMAR, "i has went")]


@pytest.mark.asyncio
async def test_history_failure_is_not_fatal():
    optimizer = Optimizer(FakeProvider(reply="X"), history=RecordingHistory(fail=True))

    result = await optimizer.optimize("text", OptimizationMode.CONCISE)

    assert result.optimized == "X"


@pytest.mark.asyncio
async def test_provider_errors_propagate_and_nothing_is_recorded():
    history = RecordingHistory()
    optimizer = Optimizer(FakeProvider(error=AuthError()), history=history)

    with pytest.raises(AuthError):
        await optimizer.optimize("text", OptimizationMode.PROFESSIONAL)
    assert history.results == []


@pytest.mark.asyncio
async def test_structured_prompt_requires_config():
    optimizer = Optimizer(FakeProvider())
    assert optimizer.has_structured_prompt is False
    with pytest.raises(ConfigurationMissingError):
        await optimizer.optimize_with_structured_prompt("text")


@pytest.mark.asyncio
async def test_structured_prompt_uses_default_mode():
    provider = FakeProvider(reply="Rewritten text: kept")
    config = StructuredPromptConfig(role={"name": "Coach"})
    optimizer = Optimizer(provider, structured_config=config)

    result = await optimizer.optimize_with_structured_prompt("hello")

    assert optimizer.has_structured_prompt is True
    assert result.mode is DEFAULT_MODE
    # generate_with_prompt keeps echoed labels
    assert result.optimized == "Rewritten text: kept"
    assert "## Role\nCoach" in provider.prompts[0]


@pytest.mark.asyncio
async def test_template_fills_first_placeholder_only():
    provider = FakeProvider(reply="done")
    optimizer = Optimizer(provider)

    await optimizer.optimize_with_template("你好", "Translate: {text} / {text}")

    assert provider.prompts == ["Translate: 你好 / {text}"]


@pytest.mark.asyncio
async def test_custom_prompt_frames_instruction():
    provider = FakeProvider(reply="Hey there!")
    history = RecordingHistory()
    optimizer = Optimizer(provider, history=history)
    custom = CustomPrompt(name="Friendly", description="d", prompt="Be friendly.", hotkey="f")

    result = await optimizer.optimize_with_custom_prompt("Greetings.", custom)

    assert result.optimized == "Hey there!"
    assert provider.prompts[0].startswith("Be friendly.")
    assert 'Original text:\n"Greetings."' in provider.prompts[0]
    assert len(history.results) == 1
