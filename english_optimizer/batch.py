"""Batch optimization of files."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from english_optimizer import display
from english_optimizer.errors import OptimizerError
from english_optimizer.prompts.templates import OptimizationMode

if TYPE_CHECKING:
    from english_optimizer.optimizer import Optimizer
    from english_optimizer.terminal import Terminal

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".optimized"


def output_path_for(path: Path, suffix: str | None) -> Path:
    """Where the optimized copy of ``path`` goes.

    ``notes.txt`` with suffix ``.optimized`` becomes ``notes.optimized.txt``;
    a file without an extension gets the suffix appended.
    """
    suffix = suffix or DEFAULT_SUFFIX
    if path.suffix:
        return path.with_name(f"{path.stem}{suffix}{path.suffix}")
    return path.with_name(f"{path.name}{suffix}")


@dataclass
class BatchReport:
    written: dict[str, str] = field(default_factory=dict)  # input -> output
    failed: dict[str, str] = field(default_factory=dict)  # input -> error message


class BatchProcessor:
    """Optimizes files one after another. A failing file never stops the rest."""

    def __init__(self, optimizer: Optimizer, terminal: Terminal):
        self.optimizer = optimizer
        self.terminal = terminal

    async def process_batch(
        self,
        files: list[str | Path],
        mode: OptimizationMode,
        in_place: bool = False,
        suffix: str | None = DEFAULT_SUFFIX,
    ) -> BatchReport:
        report = BatchReport()
        display.show_info(self.terminal, f"Processing {len(files)} file(s)...")

        for file in files:
            path = Path(file)
            try:
                output = await self.process_file(path, mode, in_place, suffix)
            except (OptimizerError, OSError, UnicodeError) as e:
                logger.error("Error processing %s: %s", path, e)
                display.show_error(self.terminal, f"{path}: {e}")
                report.failed[str(path)] = str(e)
                continue
            report.written[str(path)] = str(output)

        display.show_info(self.terminal, "Batch processing complete!")
        return report

    async def process_file(
        self,
        path: Path,
        mode: OptimizationMode,
        in_place: bool,
        suffix: str | None,
    ) -> Path:
        content = path.read_text(encoding="utf-8")

        display.show_mode_info(self.terminal, mode)
        self.terminal.write(f"\nProcessing: {escape(str(path))}")

        result = await self.optimizer.optimize(content, mode)
        display.show_optimization(self.terminal, result.original, result.optimized)

        target = path if in_place else output_path_for(path, suffix)
        target.write_text(result.optimized, encoding="utf-8")
        verb = "Updated" if in_place else "Created"
        display.show_success(self.terminal, f"{verb}: {target}")
        return target
