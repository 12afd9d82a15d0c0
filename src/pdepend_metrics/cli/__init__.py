"""CLI entry point: registers the analyze and ingest subcommands."""

import typer

app = typer.Typer(
    name="pdepend-metrics",
    help="pdepend-metrics - PHP PDepend metrics for a project hierarchy",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .ingest import ingest as _ingest  # noqa: F401, E402


def main() -> None:
    app()
