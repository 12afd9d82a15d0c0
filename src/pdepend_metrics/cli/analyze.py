"""Analyze command: run PDepend and show the resulting metrics."""

from pathlib import Path
from typing import List, Optional

import typer

from ..analyzer import PDependAnalyzer
from ..config import load_config
from ..exceptions import PdependMetricsError
from ..logging_config import setup_logging
from ..model import Project
from . import app
from ._common import fail, print_project


@app.command()
def analyze(
    path: Path = typer.Argument(
        ...,
        help="Project root to analyze",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        resolve_path=True,
    ),
    command: Optional[str] = typer.Option(
        None,
        "--command",
        help="PDepend executable (default: pdepend on PATH, else vendor/bin/pdepend)",
    ),
    configuration_file: Optional[str] = typer.Option(
        None,
        "--configuration-file",
        help="PDepend configuration file, relative to the project root",
    ),
    suffix: Optional[List[str]] = typer.Option(
        None,
        "--suffix",
        "-s",
        help="File suffix to analyze, repeatable (e.g. php, *.inc)",
    ),
    exclude_dir: Optional[List[str]] = typer.Option(
        None,
        "--exclude-dir",
        help="Deprecated: directory name to ignore, repeatable",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
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
    Run PDepend on a project and attach its metrics.

    [bold cyan]Examples:[/bold cyan]

      pdepend-metrics analyze src/

      pdepend-metrics analyze . --suffix php --suffix inc --json
    """
    setup_logging(verbose=verbose, quiet=json_output)

    try:
        analyzer_config = load_config(
            config_file=config,
            command=command,
            configuration_file=configuration_file,
            suffixes=suffix or None,
            excluded_dirs=exclude_dir or None,
        )
        project = Project(path)
        summary = PDependAnalyzer(analyzer_config).scrutinize(project)
    except PdependMetricsError as e:
        fail(e)
        return

    print_project(project, summary, json_output, top=top)
