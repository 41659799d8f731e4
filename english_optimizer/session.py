"""Interactive sessions for english_optimizer.

Two variants share one state shape:

- ClassicSession: collect a block of text, then drive rewrites with single
  keypresses and accept or reject each proposal.
- InstantSession: accumulate lines; a blank line sends the block off,
  shows the result side by side and copies it to the clipboard.

Both are strictly turn-based: the next key or line is read only after the
previous provider call has finished and the screen has been updated.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import Enum
import logging
from typing import TYPE_CHECKING, Protocol

from rich.markup import escape

from english_optimizer import display
from english_optimizer.errors import OptimizerError
from english_optimizer.prompts.templates import OptimizationMode

if TYPE_CHECKING:
    from english_optimizer.history import HistoryLogger
    from english_optimizer.optimizer import OptimizationResult, Optimizer
    from english_optimizer.prompts.custom import CustomPromptStore
    from english_optimizer.terminal import Terminal

logger = logging.getLogger(__name__)

CTRL_C = "\x03"
RECENT_HISTORY_COUNT = 5


class Clipboard(Protocol):
    def write(self, text: str) -> bool: ...


class SessionState(str, Enum):
    AWAITING_INITIAL_INPUT = "awaiting_initial_input"
    ACTIVE = "active"
    TERMINATED = "terminated"


class ClassicSession:
    """Keypress-driven editing of a single piece of text."""

    def __init__(
        self,
        optimizer: Optimizer,
        terminal: Terminal,
        hotkeys: dict[str, str],
        history: HistoryLogger | None = None,
        custom_prompts: CustomPromptStore | None = None,
    ):
        self.optimizer = optimizer
        self.terminal = terminal
        self.hotkeys = hotkeys
        self.history = history
        self.custom_prompts = custom_prompts

        self.state = SessionState.AWAITING_INITIAL_INPUT
        self.original_text = ""
        self.current_text = ""
        self.last_accepted_text: str | None = None

        self.mode_keys: dict[str, OptimizationMode] = {}
        for mode in OptimizationMode:
            key = hotkeys.get(mode.value)
            if key:
                self.mode_keys[key] = mode

    async def run(self) -> None:
        display.show_welcome(self.terminal)
        display.show_help(self.terminal, self.hotkeys)

        try:
            text = self.collect_initial_input()
        except (EOFError, KeyboardInterrupt):
            self.quit()
            return

        if not self.start(text):
            display.show_info(self.terminal, "No text provided. Exiting...")
            return

        try:
            while self.state is SessionState.ACTIVE:
                self.show_current_text()
                key = self.terminal.read_key()
                await self.handle_key(key)
        except (EOFError, KeyboardInterrupt):
            self.quit()

    def collect_initial_input(self) -> str:
        """Read lines until the first blank one."""
        self.terminal.write("\nEnter your text (press Enter on an empty line to finish):\n")
        lines: list[str] = []
        while True:
            line = self.terminal.read_line("")
            if not line.strip():
                break
            lines.append(line)
        return "\n".join(lines).strip()

    def start(self, text: str) -> bool:
        """Enter the active state. Empty text ends the session instead."""
        if not text:
            self.state = SessionState.TERMINATED
            return False
        self.original_text = text
        self.current_text = text
        self.state = SessionState.ACTIVE
        return True

    def quit(self) -> None:
        if self.state is not SessionState.TERMINATED:
            self.terminal.write("\n\nGoodbye! 👋\n")
        self.state = SessionState.TERMINATED

    def show_current_text(self) -> None:
        display.show_separator(self.terminal, "═")
        self.terminal.write("[cyan]Current text:[/cyan]")
        self.terminal.write(f"[dim]{escape(self.current_text)}[/dim]")
        display.show_separator(self.terminal, "═")
        quit_key = self.hotkeys.get("quit", "q")
        self.terminal.write(f"\n[yellow]Press a hotkey (or {escape(quit_key)} to quit):[/yellow]")

    async def handle_key(self, key: str) -> None:
        """Dispatch one keypress. Unbound keys do nothing."""
        if self.state is not SessionState.ACTIVE:
            return

        if key == CTRL_C or key == self.hotkeys.get("quit"):
            self.quit()
        elif key == self.hotkeys.get("reset"):
            self.reset()
        elif key == self.hotkeys.get("history"):
            self.show_history()
        elif key in self.mode_keys:
            await self.optimize_with_mode(self.mode_keys[key])
        elif self.custom_prompts is not None:
            await self.optimize_with_custom_hotkey(key)

    def reset(self) -> None:
        self.current_text = self.original_text
        self.terminal.write("\n[yellow]↺ Reset to original[/yellow]")

    def show_history(self) -> None:
        if self.history is None:
            display.show_info(self.terminal, "History is disabled.")
            return

        entries = self.history.get_recent_entries(RECENT_HISTORY_COUNT)
        if not entries:
            display.show_info(self.terminal, "No history yet.")
            return

        self.terminal.write("\n[cyan]📜 Recent Optimizations:[/cyan]\n")
        for entry in entries:
            display.show_history_entry(self.terminal, entry)

    async def optimize_with_mode(self, mode: OptimizationMode) -> None:
        display.show_mode_info(self.terminal, mode)
        await self._propose(lambda: self.optimizer.optimize(self.current_text, mode))

    async def optimize_with_custom_hotkey(self, key: str) -> None:
        prompt = self.custom_prompts.get_by_hotkey(key) if self.custom_prompts else None
        if prompt is None:
            return
        self.terminal.write(f"\n[yellow]{escape('[' + prompt.name + ']')}[/yellow]")
        self.terminal.write(f"[dim]{escape(prompt.description)}[/dim]")
        await self._propose(
            lambda: self.optimizer.optimize_with_custom_prompt(self.current_text, prompt)
        )

    async def _propose(self, run: Callable[[], Awaitable[OptimizationResult]]) -> None:
        """Run one rewrite and let the operator accept or reject it."""
        self.terminal.write("[dim]Optimizing...[/dim]")
        try:
            result = await run()
        except OptimizerError as e:
            logger.debug("Optimization failed: %s", e)
            display.show_error(self.terminal, e)
            return

        display.show_optimization(self.terminal, result.original, result.optimized)

        answer = self.terminal.read_line("\nUse this version? (y/n): ")
        if answer.strip().lower() == "y":
            self.current_text = result.optimized
            self.last_accepted_text = result.optimized
            display.show_success(self.terminal, "Text updated!")


class InstantSession:
    """Line-by-line translate-and-optimize loop."""

    def __init__(
        self,
        optimizer: Optimizer,
        terminal: Terminal,
        clipboard: Clipboard | None = None,
        translation_prompt: str | None = None,
        prompt_source: str | None = None,
    ):
        self.optimizer = optimizer
        self.terminal = terminal
        self.clipboard = clipboard
        self.translation_prompt = translation_prompt
        self.prompt_source = prompt_source

        # Decided once at startup
        self.use_structured = optimizer.has_structured_prompt

        self.state = SessionState.AWAITING_INITIAL_INPUT
        self.pending_lines: list[str] = []
        self.last_accepted_text: str | None = None

    @property
    def current_text(self) -> str:
        return "\n".join(self.pending_lines)

    async def run(self) -> None:
        self.show_instructions()
        self.state = SessionState.ACTIVE
        self.terminal.write("\n[cyan]✨ Ready! Start typing...[/cyan]\n")

        try:
            while self.state is SessionState.ACTIVE:
                line = self.terminal.read_line("> ")
                await self.handle_line(line)
        except (EOFError, KeyboardInterrupt):
            self.quit()

    def quit(self) -> None:
        if self.state is not SessionState.TERMINATED:
            display.show_separator(self.terminal)
            self.terminal.write("\n[cyan]👋 Goodbye![/cyan]\n")
        self.state = SessionState.TERMINATED

    async def handle_line(self, line: str) -> None:
        if line.strip():
            self.pending_lines.append(line)
            self.terminal.write(
                f"[dim]  ✓ Line {len(self.pending_lines)} added. "
                "Press Enter (empty line) to optimize[/dim]"
            )
            return

        if self.pending_lines:
            await self.flush()

    async def flush(self) -> None:
        """Optimize the accumulated block. Pending lines are cleared either way."""
        text = self.current_text.strip()
        try:
            self.terminal.write("\n[cyan]🔄 Translating and optimizing...[/cyan]\n")
            result = await self._optimize(text)
        except OptimizerError as e:
            display.show_error(self.terminal, e)
            self.terminal.write("\n[cyan]Continue typing...[/cyan]\n")
            return
        finally:
            self.pending_lines.clear()

        self.last_accepted_text = result.optimized
        display.show_bilingual_result(self.terminal, result.original, result.optimized)
        self.copy_to_clipboard(result.optimized)
        self.terminal.write("\n[cyan]✨ Ready for next input![/cyan]\n")

    async def _optimize(self, text: str) -> OptimizationResult:
        if self.use_structured:
            return await self.optimizer.optimize_with_structured_prompt(text)
        if self.translation_prompt:
            return await self.optimizer.optimize_with_template(text, self.translation_prompt)
        return await self.optimizer.optimize(text, OptimizationMode.PROFESSIONAL)

    def copy_to_clipboard(self, text: str) -> None:
        if self.clipboard is None:
            return
        try:
            copied = self.clipboard.write(text)
        except Exception as e:
            logger.warning("Clipboard write raised: %s", e)
            copied = False
        if copied:
            self.terminal.write("\n[bold green]✓ Copied to clipboard![/bold green]\n")
        else:
            display.show_warning(self.terminal, "Failed to copy to clipboard")

    def show_instructions(self) -> None:
        display.show_welcome(self.terminal, "English Optimizer CLI - Instant Mode")
        self.terminal.write("[bold]How to use:[/bold]")
        self.terminal.write("[dim]1. Type your content (Chinese or English)[/dim]")
        self.terminal.write("[dim]2. Press Enter after each line[/dim]")
        self.terminal.write("3. When done, press [bold cyan]Enter (empty line)[/bold cyan] to translate & optimize")
        self.terminal.write("[dim]4. See the bilingual result[/dim]")
        self.terminal.write("[green]5. The optimized English is copied to the clipboard[/green]")
        if self.prompt_source:
            kind = "structured prompt" if self.use_structured else "prompt"
            self.terminal.write(f"\n[yellow]Using {kind}:[/yellow] [dim]{escape(self.prompt_source)}[/dim]")
        self.terminal.write("\n[dim]Ctrl+C - Quit[/dim]\n")
