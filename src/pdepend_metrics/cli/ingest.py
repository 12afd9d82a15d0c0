"""Ingest command: load an existing summary XML without running PDepend."""

from pathlib import Path

import typer

from ..exceptions import PdependMetricsError, ReportReadError
from ..ingest import ingest_report
from ..logging_config import setup_logging
from ..model import Project
from ..report import parse_report
from . import app
from ._common import fail, print_project


@app.command()
def ingest(
    report: Path = typer.Argument(
        ...,
        help="PDepend --summary-xml file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    root: Path = typer.Option(
        ...,
        "--root",
        "-r",
        help="Project root the report's file paths are relative to",
    ),
    top: int = typer.Option(10, "--top", help="Number of classes to list by WMC", min=0),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Attach metrics from an existing PDepend summary report.

    The report file is left in place.

    [bold cyan]Examples:[/bold cyan]

      pdepend-metrics ingest summary.xml --root /srv/app
    """
    setup_logging(verbose=verbose, quiet=json_output)

    try:
        raw = report.read_bytes()
    except OSError as e:
        fail(ReportReadError(report, e.strerror or str(e)))
        return

    try:
        project = Project(root)
        summary = ingest_report(project, parse_report(raw))
    except PdependMetricsError as e:
        fail(e)
        return

    print_project(project, summary, json_output, top=top)
