"""
Utility functions for the folder sorter.

Includes:
- UI helpers (rich console)
- JSON report writer
"""

import json
from pathlib import Path
from typing import Any
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree
from rich.panel import Panel

# Global console instance
console = Console()

def print_header(title: str, subtitle: str = ""):
    """Print a styled header."""
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{subtitle}[/italic]", expand=False))

def print_plan_table(plan):
    """Print a summary table of the plan."""
    table = Table(title="Plan Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")

    table.add_row("Scanned", str(plan.scanned))
    table.add_row("Skipped", str(plan.skipped))
    table.add_row("Planned moves", str(plan.planned))

    console.print(table)

    if plan.moves:
        tree = Tree("[bold green]Sample Moves[/bold green]")
        for move in plan.moves[:10]:
            old_rel, new_rel = move.to_relative(plan.root)
            tree.add(f"[yellow]{escape(old_rel)}[/yellow] -> [blue]{escape(new_rel)}[/blue]")
        if len(plan.moves) > 10:
            tree.add(f"[italic]... and {len(plan.moves)-10} more[/italic]")
        console.print(tree)

def print_line(msg: str):
    """Print a plain status line such as "[INFO] ..." without markup."""
    console.print(msg, markup=False, highlight=False)

def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {escape(msg)}", highlight=False)

def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {escape(msg)}", highlight=False)

def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {escape(msg)}", highlight=False)


def relative_posix(path: Path, root: Path) -> str:
    """Path relative to root with forward slashes, or the full path if outside root."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def save_json(data: Any, path: Path) -> None:
    """
    Save data to a JSON file with pretty formatting.

    Args:
        data: The data to serialize.
        path: The output file path.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    print_line(f"[INFO] Saved: {path}")
