"""CLI for graphql-depth-limit."""

import logging
from dataclasses import dataclass, field
from typing import List, Literal, Optional

import typer
from rich.console import Console

from . import config, parser, schema_loader, utils
from .report import DepthReport, emit, print_kv

app = typer.Typer(help="GraphQL operation depth limiter")

console = Console()

logger = logging.getLogger(__name__)


@dataclass
class CheckOptions:
    """Options for check command."""

    max_depth: Optional[int] = None
    ignore: list[str] = field(default_factory=list)
    url: Optional[str] = None
    token: Optional[str] = None
    schema_file: Optional[str] = None
    config_file: Optional[str] = None
    output: Literal["console", "json"] = "console"


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("check")
def check_cmd(
    query_file: str = typer.Argument(..., help="GraphQL query file"),
    max_depth: Optional[int] = typer.Option(None, help="Maximum operation depth"),
    ignore: Optional[List[str]] = typer.Option(None, help="Regex of field names to skip (repeatable)"),
    schema: Optional[str] = typer.Option(None, help="Schema file path (SDL or introspection JSON)"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint to introspect"),
    token: Optional[str] = typer.Option(None, help="Bearer token for introspection"),
    config_file: Optional[str] = typer.Option(None, "--config", help="Config file path"),
    output: str = typer.Option("console", help="Output format (console|json)"),
    verbose: bool = typer.Option(False, help="Enable debug logging"),
    debug: bool = typer.Option(False, help="Re-raise unexpected errors with a traceback"),
):
    """Check the depth of every operation in a query file."""
    setup_logging(verbose)
    try:
        opts = CheckOptions(
            max_depth=max_depth,
            ignore=ignore or [],
            url=url,
            token=token,
            schema_file=schema,
            config_file=config_file,
            output=output,
        )

        report = run_check(query_file, opts)
        emit(report, output)

        if not report.ok:
            raise typer.Exit(2)

    except typer.Exit:
        raise
    except Exception as e:
        logger.debug("Depth check failed", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        if debug:
            raise
        raise typer.Exit(1)


@app.command("init-config")
def init_config_cmd(
    path: Optional[str] = typer.Option(None, help="Config file path"),
):
    """Write an example config file."""
    try:
        written = config.create_example_config(path)
        print_kv("Config written", {"path": written})
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def run_check(query_path: str, opts: CheckOptions) -> DepthReport:
    """
    Run the depth check on a query file.

    Args:
        query_path: Path to GraphQL query file
        opts: Check options

    Returns:
        DepthReport with results
    """
    cfg = config.load(opts.config_file)

    max_depth = opts.max_depth if opts.max_depth is not None else cfg.max_depth
    ignore = [*cfg.ignore, *opts.ignore]

    # Schema is optional: without one only the depth rule runs
    if opts.schema_file or opts.url:
        schema_file, url = opts.schema_file, opts.url
    else:
        schema_file, url = cfg.schema_file, cfg.default_url
    schema = schema_loader.load_schema(url=url, schema_file=schema_file, token=opts.token)

    doc = parser.parse_query(utils.read_text(query_path))

    if schema is None:
        depths, errors = parser.measure_depths(doc, max_depth, ignore)
    else:
        depths, errors = parser.validate_query(doc, schema, max_depth, ignore)

    return DepthReport(max_depth=max_depth, depths=depths, errors=list(errors))


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
