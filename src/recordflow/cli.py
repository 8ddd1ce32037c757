"""Command-line interface for recordflow."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from recordflow.config.settings import ProcessingConfig

app = typer.Typer(
    name="recordflow",
    help="Validate, filter and aggregate CSV, JSON and XML datasets.",
    no_args_is_help=True,
)

console = Console()

DEMO_RESOURCES = (
    ("data.csv", "CSV"),
    ("data.json", "JSON"),
    ("data.xml", "XML"),
)


def _load_settings(ctx: typer.Context) -> "ProcessingConfig":
    """Load configuration and set up logging."""
    from recordflow.config.loader import load_config
    from recordflow.config.settings import LoggingConfig, ProcessingConfig
    from recordflow.utils.logging import configure_logging

    options = ctx.obj or {}
    config_path = options.get("config")
    log_level = options.get("log_level")

    if config_path is not None:
        settings = load_config(config_path)
    else:
        settings = ProcessingConfig()

    if log_level is not None:
        settings = settings.model_copy(
            update={
                "logging": LoggingConfig(
                    level=log_level,
                    json_output=settings.logging.json_output,
                )
            }
        )

    configure_logging(settings.logging.level, settings.logging.json_output)
    return settings


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration YAML file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    ] = None,
) -> None:
    """Record processing for delimited, structured and markup datasets."""
    ctx.obj = {"config": config, "log_level": log_level}


@app.command()
def process(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Resource name of the dataset.")],
    data_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Data format: CSV, JSON or XML."),
    ],
    validate: Annotated[
        bool,
        typer.Option("--validate/--no-validate", help="Validate before processing."),
    ] = False,
    category: Annotated[
        str | None,
        typer.Option("--category", help="Category filter (empty keeps all records)."),
    ] = None,
    aggregation: Annotated[
        str,
        typer.Option("--aggregation", "-a", help="Aggregation kind: SUM or COUNT."),
    ] = "SUM",
) -> None:
    """Process one dataset and print the aggregated result."""
    from recordflow.errors import ProcessingError
    from recordflow.processing.facade import DataProcessor

    settings = _load_settings(ctx)
    processor = DataProcessor(config=settings)

    try:
        result = processor.process(name, data_format, validate, category, aggregation)
    except ProcessingError as e:
        console.print(f"[red]{type(e).__name__}: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(result)


@app.command()
def validate(
    ctx: typer.Context,
    names: Annotated[list[str], typer.Argument(help="Resource names to validate.")],
    data_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Data format: CSV, JSON or XML."),
    ],
) -> None:
    """Validate datasets against their schemas."""
    from recordflow.errors import UnsupportedFormatError
    from recordflow.processing.facade import DataProcessor
    from recordflow.validation import ConsoleReporter

    settings = _load_settings(ctx)
    processor = DataProcessor(config=settings)

    console.print("[blue]Running validation...[/blue]")
    try:
        results = [processor.check(name, data_format) for name in names]
    except UnsupportedFormatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    reporter = ConsoleReporter(console)
    reporter.print_results(results)

    if not all(r.ok for r in results):
        raise typer.Exit(code=1)


@app.command()
def demo(ctx: typer.Context) -> None:
    """Run the bundled sample dataset through every format."""
    from recordflow.errors import ProcessingError
    from recordflow.processing.facade import DataProcessor

    settings = _load_settings(ctx)
    processor = DataProcessor(config=settings)

    table = Table(title="Sample Dataset Results")
    table.add_column("Resource", style="cyan")
    table.add_column("Format", style="blue")
    table.add_column("Electronics SUM (validated)", justify="right", style="green")
    table.add_column("Clothing COUNT", justify="right", style="green")

    try:
        for name, data_format in DEMO_RESOURCES:
            total = processor.process(name, data_format, True, "Electronics", "SUM")
            count = processor.process(name, data_format, False, "Clothing", "COUNT")
            table.add_row(name, data_format, str(total), str(count))
    except ProcessingError as e:
        console.print(f"[red]{type(e).__name__}: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(table)


@app.command()
def formats() -> None:
    """List the supported data formats."""
    from recordflow.ingestion.registry import FormatRegistry

    table = Table(title="Supported Formats")
    table.add_column("Format", style="cyan")
    table.add_column("Alias", style="blue")
    table.add_column("Description")

    for name in FormatRegistry.supported():
        info = FormatRegistry.get_info(name)
        table.add_row(info.data_format.name, info.data_format.value, info.description)

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from recordflow import __version__

    console.print(f"recordflow version {__version__}")


if __name__ == "__main__":
    app()
