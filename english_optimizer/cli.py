"""english-optimizer CLI entry point.

Rewrites text with a local Ollama model or a cloud chat-completion API.
Instant mode is the default; --classic switches to hotkey-driven editing.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape

from english_optimizer import __version__
from english_optimizer.backends import OllamaProvider, Provider, create_provider
from english_optimizer.batch import DEFAULT_SUFFIX, BatchProcessor
from english_optimizer.clipboard import SystemClipboard
from english_optimizer.config import Config, load_config
from english_optimizer.errors import BillingError, OptimizerError
from english_optimizer.history import HistoryLogger
from english_optimizer.logging_utils import configure_logging
from english_optimizer.optimizer import Optimizer
from english_optimizer.prompts import (
    CustomPromptStore,
    OptimizationMode,
    StructuredPromptLoader,
    TranslationPromptLoader,
)
from english_optimizer.session import ClassicSession, InstantSession
from english_optimizer.terminal import ConsoleTerminal

logger = logging.getLogger(__name__)

console = Console(stderr=True)  # Status and errors to stderr
stdout_console = Console()  # Session output to stdout


def _fail(message: str, code: int = 1) -> NoReturn:
    console.print(f"[red]❌ Error:[/red] {escape(message)}")
    raise SystemExit(code)


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", help="Config file path")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr")
@click.option("--version", is_flag=True, help="Show version")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool, version: bool) -> None:
    """english-optimizer - rewrite English with an LLM.

    \b
    Examples:
        english-optimizer                      Instant translate & optimize
        english-optimizer start --classic      Hotkey-driven editing
        english-optimizer batch notes.md -m grammar
        english-optimizer history -n 5
    """
    if version:
        click.echo(f"english-optimizer v{__version__}")
        ctx.exit()

    config = load_config(config_path)
    configure_logging("DEBUG" if verbose else config.logging.level, config.logging.file or None)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        ctx.invoke(start)


def _build_provider(config: Config) -> Provider:
    try:
        return create_provider(config.provider_config())
    except OptimizerError as e:
        _fail(str(e))


def _ensure_available(provider: Provider, config: Config) -> None:
    """Refuse to continue without a working backend."""
    try:
        available = asyncio.run(provider.is_available())
    except BillingError as e:
        _fail(f"{e}\nRecharge at: {e.remediation_url}")
    if available:
        return
    if config.ai.provider == "ollama":
        _fail(
            f"Ollama is not running at {config.ai.ollama.base_url}. "
            "Please start Ollama or run: docker-compose up -d"
        )
    _fail("API provider is not available. Please check your API key and configuration.")


def _build_history(config: Config) -> HistoryLogger | None:
    if not config.features.enable_history:
        return None
    try:
        return HistoryLogger(config.features.history_path, limit=config.features.history_limit)
    except OSError as e:
        logger.warning("History disabled, cannot open %s: %s", config.features.history_path, e)
        return None


def _build_custom_prompts(config: Config) -> CustomPromptStore | None:
    if not config.features.enable_custom_prompts:
        return None
    try:
        return CustomPromptStore(config.features.custom_prompts_path)
    except OSError as e:
        logger.warning("Custom prompts disabled, cannot open %s: %s", config.features.custom_prompts_path, e)
        return None


@main.command()
@click.option("-c", "--classic", is_flag=True, help="Classic mode (submit text, then optimize with hotkeys)")
@click.option("--model", help="Override model")
@click.pass_obj
def start(config: Config, classic: bool, model: str | None) -> None:
    """Start an interactive session."""
    if model:
        if config.ai.provider == "ollama":
            config.ai.ollama.model = model
        else:
            config.ai.api.model = model

    provider = _build_provider(config)
    _ensure_available(provider, config)

    history = _build_history(config)
    terminal = ConsoleTerminal(stdout_console)

    if classic:
        optimizer = Optimizer(provider, history)
        session = ClassicSession(
            optimizer,
            terminal,
            hotkeys=config.hotkeys,
            history=history,
            custom_prompts=_build_custom_prompts(config),
        )
    else:
        loader = StructuredPromptLoader(config.features.structured_prompt_path)
        structured = loader.load()
        optimizer = Optimizer(provider, history, structured_config=structured)
        if structured is not None:
            session = InstantSession(
                optimizer, terminal, clipboard=SystemClipboard(), prompt_source=str(loader.path)
            )
        else:
            text_loader = TranslationPromptLoader(config.features.translation_prompt_path)
            session = InstantSession(
                optimizer,
                terminal,
                clipboard=SystemClipboard(),
                translation_prompt=text_loader.get_prompt(),
                prompt_source=str(text_loader.path),
            )

    try:
        asyncio.run(session.run())
    except KeyboardInterrupt:
        if classic:
            console.print("\n[dim]Interrupted[/dim]")
            raise SystemExit(130)
        console.print("\n[cyan]👋 Goodbye![/cyan]")


@main.command()
@click.option("-n", "--number", default=10, show_default=True, help="Number of recent entries")
@click.option("--clear", is_flag=True, help="Delete all history entries")
@click.pass_obj
def history(config: Config, number: int, clear: bool) -> None:
    """View optimization history."""
    if not config.features.enable_history:
        console.print("[dim]History is disabled in configuration.[/dim]")
        return

    history_log = _build_history(config)
    if history_log is None:
        _fail(f"Cannot open history at {config.features.history_path}")

    if clear:
        history_log.clear_history()
        console.print("[green]History cleared.[/green]")
        return

    entries = history_log.get_recent_entries(number)
    if not entries:
        console.print("[dim]No history yet.[/dim]")
        return

    stdout_console.print(f"\nShowing {len(entries)} recent optimizations:\n")
    for entry in entries:
        stdout_console.print("─" * 60)
        stdout_console.print(f"ID: {entry.id}", markup=False)
        stdout_console.print(f"Time: {entry.timestamp}", markup=False)
        stdout_console.print(f"Mode: {entry.mode}", markup=False)
        stdout_console.print(f"Original: {entry.original[:100]}", markup=False)
        stdout_console.print(f"Optimized: {entry.optimized[:100]}", markup=False)
        stdout_console.print()


@main.command("config")
@click.option("--test", "run_test", is_flag=True, help="Test the backend connection")
@click.pass_obj
def config_cmd(config: Config, run_test: bool) -> None:
    """Show the effective configuration."""
    if not run_test:
        click.echo(json.dumps(config.to_dict(), indent=2))
        return
    asyncio.run(_test_configuration(config))


async def _test_configuration(config: Config) -> None:
    provider = _build_provider(config)

    console.print("[bold cyan]🧪 Testing configuration...[/bold cyan]\n")
    if isinstance(provider, OllamaProvider):
        console.print(
            f"Provider: [bold]ollama[/bold]  URL: {escape(provider.base_url)}  Model: {escape(provider.model)}"
        )
    else:
        api = config.ai.api
        console.print(
            f"Provider: [bold]{escape(api.provider)}[/bold]  URL: {escape(api.base_url)}  Model: {escape(api.model)}"
        )

    try:
        available = await provider.is_available()
    except BillingError as e:
        _fail(f"{e}\nRecharge at: {e.remediation_url}")

    if not available:
        _fail("Connection test failed. Check the URL, model and API key.")

    console.print("[green]✓ Backend is reachable[/green]")

    if isinstance(provider, OllamaProvider):
        models = await provider.list_models()
        if models:
            console.print(f"  Models: {escape(', '.join(models[:5]))}")
        return

    sample = "Hello"
    try:
        optimized = await provider.optimize(sample, OptimizationMode.PROFESSIONAL)
    except OptimizerError as e:
        console.print(f"[yellow]⚠ Connection successful but request failed:[/yellow] {escape(str(e))}")
        raise SystemExit(1)

    console.print(f"Test Input:  {sample}")
    console.print(f"Test Output: {escape(optimized)}")
    console.print("[green]✓ Full test passed[/green]")


@main.command()
@click.pass_obj
def prompts(config: Config) -> None:
    """List custom prompts."""
    store = _build_custom_prompts(config)
    items = store.get_prompts() if store else []
    if not items:
        console.print("[dim]No custom prompts found.[/dim]")
        return

    stdout_console.print("\nCustom Prompts:\n")
    for item in items:
        stdout_console.print(f"Name: {item.name}", markup=False)
        stdout_console.print(f"Description: {item.description}", markup=False)
        stdout_console.print(f"Hotkey: {item.hotkey or 'None'}", markup=False)
        stdout_console.print()


@main.command()
@click.option("-s", "--show", is_flag=True, help="Show the current prompt")
@click.option("-e", "--edit", is_flag=True, help="Edit the prompt file")
@click.pass_obj
def prompt(config: Config, show: bool, edit: bool) -> None:
    """Show or edit the instant-mode prompt."""
    structured_loader = StructuredPromptLoader(config.features.structured_prompt_path)
    text_loader = TranslationPromptLoader(config.features.translation_prompt_path)
    structured = structured_loader.load()

    if structured is not None:
        console.print("[cyan]✓ Structured YAML prompt detected[/cyan]")
        path = structured_loader.path
    else:
        path = text_loader.path

    if show:
        stdout_console.print(f"Prompt file: {path}\n", markup=False)
        if structured is not None:
            body = json.dumps(structured.model_dump(exclude_none=True), indent=2, ensure_ascii=False)
        else:
            body = text_loader.get_prompt()
        stdout_console.print("─" * 70)
        stdout_console.print(body, markup=False)
        stdout_console.print("─" * 70)
    elif edit:
        if structured is None:
            text_loader.get_prompt()  # seeds the default file
        console.print(f"Opening {path} in your editor...")
        try:
            click.edit(filename=str(path))
        except click.ClickException as e:
            console.print(f"[yellow]⚠ Could not open editor ({escape(str(e))}). Edit manually:[/yellow] {path}")
    else:
        stdout_console.print(f"Prompt file: {path}", markup=False)
        stdout_console.print("\nCommands:")
        stdout_console.print("  english-optimizer prompt --show    Show current prompt")
        stdout_console.print("  english-optimizer prompt --edit    Edit prompt file")


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option(
    "-m",
    "--mode",
    type=click.Choice([m.value for m in OptimizationMode]),
    default=OptimizationMode.PROFESSIONAL.value,
    show_default=True,
    help="Optimization mode",
)
@click.option("-i", "--in-place", is_flag=True, help="Modify files in place")
@click.option("-s", "--suffix", default=DEFAULT_SUFFIX, show_default=True, help="Output file suffix")
@click.pass_obj
def batch(config: Config, files: tuple[str, ...], mode: str, in_place: bool, suffix: str) -> None:
    """Batch optimize files."""
    provider = _build_provider(config)
    _ensure_available(provider, config)

    optimizer = Optimizer(provider, _build_history(config))
    processor = BatchProcessor(optimizer, ConsoleTerminal(stdout_console))
    try:
        report = asyncio.run(
            processor.process_batch(list(files), OptimizationMode(mode), in_place=in_place, suffix=suffix)
        )
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")
        raise SystemExit(130)
    if report.failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
