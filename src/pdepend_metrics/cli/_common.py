"""Shared CLI helpers."""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..exceptions import PdependMetricsError
from ..ingest import IngestSummary
from ..model import ElementKind, Project
from ..serializers import project_to_dict

console = Console()


def fail(error: PdependMetricsError) -> None:
    """Print a pipeline error and exit with status 1."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    if error.output:
        console.print("[dim]Last tool output:[/dim]")
        console.print(escape(error.output), highlight=False)
    raise typer.Exit(1)


def print_project(
    project: Project, summary: IngestSummary, json_output: bool, top: Optional[int] = None
) -> None:
    """Render the ingestion result as JSON or a rich summary."""
    if json_output:
        payload = {"summary": summary.to_dict(), **project_to_dict(project)}
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print(
        f"[bold]{escape(project.dir)}[/bold]: "
        f"{summary.packages} packages, {summary.classes} classes, "
        f"{summary.operations} operations"
    )

    table = Table(title="Project metrics", show_header=True, header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for name, value in project.metrics.items():
        table.add_row(name, f"{value:.4g}" if isinstance(value, float) else str(value))
    console.print(table)

    if top:
        _print_top_classes(project, top)


def _print_top_classes(project: Project, top: int) -> None:
    key = "pdepend.weighted_method_count"
    classes = sorted(
        project.registry.elements(ElementKind.CLASS),
        key=lambda e: e.metrics.get(key, 0),
        reverse=True,
    )[:top]
    if not classes:
        return

    table = Table(title=f"Top {len(classes)} classes by WMC", header_style="bold cyan")
    table.add_column("Class")
    table.add_column("File")
    table.add_column("WMC", justify="right")
    table.add_column("LOC", justify="right")
    for cls in classes:
        table.add_row(
            escape(cls.name),
            escape(str(cls.location or "")),
            str(cls.metrics.get(key, 0)),
            str(cls.metrics.get("pdepend.lines_of_code", 0)),
        )
    console.print(table)
