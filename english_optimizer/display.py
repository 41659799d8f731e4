"""Styled output helpers. Everything goes through a Terminal."""

from __future__ import annotations

from rich.markup import escape

from english_optimizer.history import HistoryEntry
from english_optimizer.prompts.templates import OptimizationMode, get_mode_info
from english_optimizer.terminal import Terminal

SEPARATOR_WIDTH = 60


def show_separator(term: Terminal, char: str = "─", width: int = SEPARATOR_WIDTH) -> None:
    term.write(f"[dim]{char * width}[/dim]")


def show_welcome(term: Terminal, title: str = "English Optimizer CLI") -> None:
    term.write(f"\n[bold cyan]🚀 {escape(title)}[/bold cyan]\n")


def show_mode_info(term: Terminal, mode: OptimizationMode) -> None:
    info = get_mode_info(mode)
    label = escape(f"[{info.name} Mode]")
    term.write(f"\n[yellow]{label}[/yellow]")
    term.write(f"[dim]{escape(info.description)}[/dim]")


def show_original_and_optimized(term: Terminal, original: str, optimized: str) -> None:
    term.write("\n[red]❌ Original:[/red]")
    term.write(f"[dim]{escape(original)}[/dim]")
    term.write("\n[green]✅ Optimized:[/green]")
    term.write(f"[white]{escape(optimized)}[/white]")


def show_optimization(term: Terminal, original: str, optimized: str) -> None:
    show_separator(term)
    show_original_and_optimized(term, original, optimized)
    show_separator(term)


def show_error(term: Terminal, error: Exception | str) -> None:
    term.write(f"\n[red]❌ Error:[/red] {escape(str(error))}")


def show_success(term: Terminal, message: str) -> None:
    term.write(f"\n[green]✅[/green] {escape(message)}")


def show_info(term: Terminal, message: str) -> None:
    term.write(f"\n[cyan]ℹ[/cyan] {escape(message)}")


def show_warning(term: Terminal, message: str) -> None:
    term.write(f"\n[yellow]⚠ {escape(message)}[/yellow]")


def show_help(term: Terminal, hotkeys: dict[str, str]) -> None:
    """List the classic-mode key bindings."""
    labels = [
        ("professional", "Professional tone"),
        ("concise", "Concise version"),
        ("grammar", "Grammar fix"),
        ("senior_developer", "Senior developer style"),
        ("reset", "Reset to original"),
        ("history", "View history"),
        ("quit", "Quit"),
    ]
    term.write("\n[cyan]📖 Hotkeys:[/cyan]\n")
    for action, label in labels:
        key = hotkeys.get(action)
        if key:
            term.write(f"[dim]  {escape(key)} - {label}[/dim]")
    term.write("")


def show_history_entry(term: Terminal, entry: HistoryEntry) -> None:
    show_separator(term)
    term.write(f"\n[cyan]ID: {escape(entry.id)}[/cyan]")
    term.write(f"[dim]Time: {escape(entry.timestamp)}[/dim]")
    try:
        mode_name = get_mode_info(OptimizationMode(entry.mode)).name
    except ValueError:
        mode_name = entry.mode
    term.write(f"[yellow]Mode: {escape(mode_name)}[/yellow]")
    show_original_and_optimized(term, entry.original, entry.optimized)
    show_separator(term)


def show_bilingual_result(term: Terminal, original: str, optimized: str) -> None:
    show_separator(term, "═", 70)
    term.write("\n[bold cyan]📝 Bilingual Comparison:[/bold cyan]\n")
    term.write("[yellow]Original:[/yellow]")
    term.write(f"[dim]{escape(original)}[/dim]")
    term.write("\n[green]Optimized English:[/green]")
    term.write(f"[bold white]{escape(optimized)}[/bold white]")
    show_separator(term, "═", 70)
