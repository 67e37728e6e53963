"""
Click-based CLI for bqddl.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .config import GeneratorConfig
from .exceptions import BqDDLError
from .logging_setup import configure_logging
from .providers.bigquery.provider import BigQueryDDLProvider
from .providers.bigquery.types import SCALAR_TYPES
from .script import ScriptResult, generate_alter_script, generate_create_script
from .storage import read_delta, read_model

console = Console()
error_console = Console(stderr=True)
logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="bqddl")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with generator settings",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[Path]) -> None:
    """bqddl - BigQuery DDL generator for schema models"""
    configure_logging(verbose)
    try:
        config = GeneratorConfig.from_file(config_path) if config_path else GeneratorConfig()
    except BqDDLError as e:
        error_console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        sys.exit(1)
    ctx.obj = config


quote_identifiers_option = click.option(
    "--quote-identifiers",
    is_flag=True,
    help="Wrap qualified names in backticks",
)
output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file path (default: stdout)",
)


@cli.command()
@click.argument("model_path", type=click.Path(path_type=Path))
@output_option
@quote_identifiers_option
@click.pass_obj
def create(
    config: GeneratorConfig,
    model_path: Path,
    output: Optional[Path],
    quote_identifiers: bool,
) -> None:
    """Generate a CREATE script from a schema model"""
    try:
        model = read_model(model_path)
        provider = BigQueryDDLProvider(_apply_overrides(config, quote_identifiers))
        result = generate_create_script(model, provider)
    except BqDDLError as e:
        error_console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        sys.exit(1)

    _emit(result, output)


@cli.command()
@click.argument("delta_path", type=click.Path(path_type=Path))
@output_option
@quote_identifiers_option
@click.pass_obj
def alter(
    config: GeneratorConfig,
    delta_path: Path,
    output: Optional[Path],
    quote_identifiers: bool,
) -> None:
    """Generate an ALTER script from a precomputed model delta"""
    try:
        delta = read_delta(delta_path)
        provider = BigQueryDDLProvider(_apply_overrides(config, quote_identifiers))
        result = generate_alter_script(delta, provider)
    except BqDDLError as e:
        error_console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        sys.exit(1)

    _emit(result, output)


@cli.command()
def types() -> None:
    """List supported column types"""
    table = Table(title="Supported column types")
    table.add_column("Model type", style="cyan")
    table.add_column("BigQuery type", style="green")
    for source, target in SCALAR_TYPES.items():
        table.add_row(source, target)
    table.add_row("struct / record", "STRUCT<...>")
    table.add_row("array", "ARRAY<...>")
    console.print(table)


def _apply_overrides(config: GeneratorConfig, quote_identifiers: bool) -> GeneratorConfig:
    if not quote_identifiers:
        return config
    return config.model_copy(update={"quote_identifiers": True})


def _emit(result: ScriptResult, output: Optional[Path]) -> None:
    if not result.statements:
        error_console.print("[yellow]No statements to generate[/yellow]")
        return

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.sql + "\n", encoding="utf-8")
        error_console.print(
            f"[green]✓[/green] {len(result.statements)} statements written to {output}"
        )
        logger.debug("Wrote %s", output)
    elif console.is_terminal:
        syntax = Syntax(result.sql, "sql", theme="monokai", line_numbers=False)
        console.print(syntax)
    else:
        # Piped output must not be cropped to the console width
        click.echo(result.sql)


if __name__ == "__main__":
    cli()
