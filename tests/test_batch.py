"""Tests for batch file optimization."""

from pathlib import Path

import pytest

from english_optimizer.batch import BatchProcessor, output_path_for
from english_optimizer.errors import InvalidResponseError
from english_optimizer.optimizer import Optimizer
from english_optimizer.prompts.templates import OptimizationMode, render
from tests._utils.fakes import FakeProvider, ScriptedTerminal


class FlakyProvider(FakeProvider):
    """Fails on any prompt containing ``poison``."""

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if "poison" in prompt:
            raise InvalidResponseError("Invalid response from API")
        return f"fixed {len(self.prompts)}"


@pytest.mark.parametrize(
    ("name", "suffix", "expected"),
    [
        ("notes.txt", ".optimized", "notes.optimized.txt"),
        ("notes.md", ".v2", "notes.v2.md"),
        ("README", ".optimized", "README.optimized"),
        ("archive.tar.gz", ".optimized", "archive.tar.optimized.gz"),
        ("notes.txt", None, "notes.optimized.txt"),
    ],
)
def test_output_path_for(name, suffix, expected):
    assert output_path_for(Path("docs") / name, suffix) == Path("docs") / expected


@pytest.mark.asyncio
async def test_writes_suffixed_copies(tmp_path):
    source = tmp_path / "a.txt"
    source.write_text("i has went", encoding="utf-8")
    provider = FakeProvider(reply="I went.")
    processor = BatchProcessor(Optimizer(provider), ScriptedTerminal())

    report = await processor.process_batch([source], OptimizationMode.GRAMMAR)

    target = tmp_path / "a.optimized.txt"
    assert target.read_text(encoding="utf-8") == "I went."
    assert source.read_text(encoding="utf-8") == "i has went"
    assert report.written == {str(source): str(target)}
    assert report.failed == {}
    assert provider.prompts == [render(OptimizationMode.GRAMMAR, "i has went")]


@pytest.mark.asyncio
async def test_in_place(tmp_path):
    source = tmp_path / "a.md"
    source.write_text("draft", encoding="utf-8")
    processor = BatchProcessor(Optimizer(FakeProvider(reply="final")), ScriptedTerminal())

    report = await processor.process_batch([source], OptimizationMode.CONCISE, in_place=True)

    assert source.read_text(encoding="utf-8") == "final"
    assert report.written == {str(source): str(source)}
    assert list(tmp_path.iterdir()) == [source]


@pytest.mark.asyncio
async def test_one_failure_does_not_stop_the_rest(tmp_path):
    first = tmp_path / "1.txt"
    bad = tmp_path / "2.txt"
    missing = tmp_path / "3.txt"
    last = tmp_path / "4.txt"
    first.write_text("alpha", encoding="utf-8")
    bad.write_text("poison", encoding="utf-8")
    last.write_text("omega", encoding="utf-8")
    terminal = ScriptedTerminal()
    processor = BatchProcessor(Optimizer(FlakyProvider()), terminal)

    report = await processor.process_batch(
        [first, bad, missing, last], OptimizationMode.PROFESSIONAL
    )

    assert set(report.written) == {str(first), str(last)}
    assert set(report.failed) == {str(bad), str(missing)}
    assert (tmp_path / "1.optimized.txt").exists()
    assert (tmp_path / "4.optimized.txt").exists()
    assert not (tmp_path / "2.optimized.txt").exists()
    assert "Batch processing complete!" in terminal.text
