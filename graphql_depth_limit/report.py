"""Output formatting and reporting."""

from dataclasses import dataclass, field

from graphql import GraphQLError
from rich.console import Console
from rich.table import Table

from . import utils

console = Console()


@dataclass
class DepthReport:
    """Depths and validation errors for one document."""

    max_depth: int
    depths: dict[str, int]
    errors: list[GraphQLError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "max_depth": self.max_depth,
            "depths": self.depths,
            "errors": [
                {"message": e.message, "locations": utils.error_locations(e)} for e in self.errors
            ],
        }


def operation_label(name: str) -> str:
    return name or "<anonymous>"


def emit(report: DepthReport, fmt: str) -> None:
    """
    Output depth report.

    Args:
        report: Depth check results
        fmt: Output format ("json" or "console")
    """
    if fmt == "json":
        print(utils.to_json(report.to_dict()))
        return

    console.print(f"\n[bold cyan]Operation Depths[/bold cyan] [dim](max {report.max_depth})[/dim]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Operation", style="cyan")
    table.add_column("Depth")

    for name, depth in report.depths.items():
        if depth < 0:
            table.add_row(operation_label(name), "[red]✖[/red] error")
        elif depth == report.max_depth:
            table.add_row(operation_label(name), f"[yellow]⚠[/yellow] {depth}")
        else:
            table.add_row(operation_label(name), f"[green]✓[/green] {depth}")

    console.print(table)

    if report.errors:
        console.print("\n[bold cyan]Errors:[/bold cyan]\n")
        for e in report.errors:
            msg = f"  [red]✖[/red] {e.message}"
            locations = utils.error_locations(e)
            if locations:
                loc_str = ", ".join([f"line {l}:{c}" for l, c in locations])
                msg += f" [dim]({loc_str})[/dim]"
            console.print(msg)
    else:
        console.print("\n[green]✓ No issues found[/green]")

    console.print()


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs.

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
