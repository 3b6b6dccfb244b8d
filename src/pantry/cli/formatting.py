"""
CLI output formatting utilities.

This module provides helpers for consistent terminal output using the
Rich library.
"""

from typing import Any, Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pantry.core.models import DuplicateDecision, SuggestedAction

console = Console()

ACTION_STYLES = {
    SuggestedAction.REJECT: "red",
    SuggestedAction.MERGE: "yellow",
    SuggestedAction.ALLOW: "green",
}


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_config(config_dict: Dict[str, Any], title: str = "Configuration") -> None:
    """Print a configuration dictionary."""
    console.print(f"\n[bold]{title}[/bold]")
    for key, value in config_dict.items():
        console.print(f"  [cyan]{key}:[/cyan] {value}")


def print_decision(name: str, decision: DuplicateDecision, suggestions: List[str]) -> None:
    """Print a decision panel with its suggestions."""
    style = ACTION_STYLES.get(decision.suggested_action, "white")
    lines = [
        f"[cyan]Item:[/cyan] {name}",
        f"[cyan]Duplicate:[/cyan] {'yes' if decision.is_duplicate else 'no'}",
        f"[cyan]Confidence:[/cyan] {decision.confidence:.0%}",
        f"[cyan]Reason:[/cyan] {decision.reason}",
    ]
    if decision.stage is not None:
        lines.append(f"[cyan]Stage:[/cyan] {decision.stage.value}")
    if decision.existing_item is not None:
        lines.append(f"[cyan]Matched:[/cyan] {decision.to_dict()['existingItem']}")
    lines.append("")
    lines.extend(f"• {s}" for s in suggestions)

    console.print(
        Panel(
            "\n".join(lines),
            title=f"[bold {style}]{decision.suggested_action.value.upper()}[/bold {style}]",
            border_style=style,
        )
    )


def print_normalized(pairs: List[tuple]) -> None:
    """Print raw -> normalized name pairs as a table."""
    table = Table(title="Normalized names", show_header=True)
    table.add_column("Input", style="cyan")
    table.add_column("Normalized", style="green")
    for raw, normalized in pairs:
        table.add_row(raw, normalized or "[dim](empty)[/dim]")
    console.print(table)
