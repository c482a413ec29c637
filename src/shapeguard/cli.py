# src/shapeguard/cli.py
"""shapeguard Command Line Interface.

Entry point for the shapeguard CLI tool.
"""

import json
import sys
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from shapeguard import __version__
from shapeguard.contracts import SchemaError, SchemaVariant, ValidationFailure
from shapeguard.core.config import ShapeguardSettings, load_settings
from shapeguard.core.loader import load_schema_file
from shapeguard.core.logging import configure_logging, get_logger
from shapeguard.engine import format_result_type, validate

app = typer.Typer(
    name="shapeguard",
    help="shapeguard: validate JSON data against declarative schemas.",
    no_args_is_help=True,
)

# Exit codes
EXIT_INVALID_DATA = 1
EXIT_BAD_INPUT = 2

logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"shapeguard version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """shapeguard: validate JSON data against declarative schemas."""
    pass


def _load_config(config: str | None) -> ShapeguardSettings:
    """Load settings and configure logging, exiting on bad config."""
    try:
        settings = load_settings(Path(config) if config is not None else None)
    except FileNotFoundError:
        typer.echo(f"Error: Config file not found: {config}", err=True)
        raise typer.Exit(EXIT_BAD_INPUT) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(EXIT_BAD_INPUT) from None

    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
    )
    return settings


def _load_schema(schema: str, settings: ShapeguardSettings) -> SchemaVariant:
    """Load the schema file, exiting on any schema problem."""
    try:
        loaded = load_schema_file(
            Path(schema),
            default_description=settings.default_description,
        )
    except FileNotFoundError:
        typer.echo(f"Error: Schema file not found: {schema}", err=True)
        raise typer.Exit(EXIT_BAD_INPUT) from None
    except SchemaError as e:
        typer.echo(f"Schema error: {e}", err=True)
        raise typer.Exit(EXIT_BAD_INPUT) from None

    logger.debug("schema_loaded", path=schema, type=loaded.type)
    return loaded


def _read_data(data: str | None) -> Any:
    """Read JSON input from a file, or stdin when omitted or '-'."""
    try:
        if data is None or data == "-":
            return json.loads(sys.stdin.read())
        data_path = Path(data)
        if not data_path.exists():
            typer.echo(f"Error: Data file not found: {data}", err=True)
            raise typer.Exit(EXIT_BAD_INPUT)
        return json.loads(data_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Input is not valid JSON: {e}", err=True)
        raise typer.Exit(EXIT_BAD_INPUT) from None


@app.command()
def check(
    data: str | None = typer.Argument(
        None,
        help="Path to JSON data file ('-' or omitted reads stdin).",
    ),
    schema: str = typer.Option(
        ...,
        "--schema",
        "-s",
        help="Path to schema YAML/JSON file.",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Validate JSON data and print the validated value.

    Exits 1 when the data violates the schema, 2 when the schema,
    settings or input cannot be read.
    """
    settings = _load_config(config)
    loaded_schema = _load_schema(schema, settings)
    value = _read_data(data)

    try:
        result = validate(value, loaded_schema)
    except ValidationFailure as e:
        logger.info("validation_failed", kind=e.kind.value, path=e.location)
        typer.echo(f"{e.kind.value} at {e.location}: {e.message}", err=True)
        raise typer.Exit(EXIT_INVALID_DATA) from None

    typer.echo(
        json.dumps(
            result,
            indent=settings.output.indent or None,
            sort_keys=settings.output.sort_keys,
            ensure_ascii=False,
        )
    )


@app.command()
def describe(
    schema: str = typer.Option(
        ...,
        "--schema",
        "-s",
        help="Path to schema YAML/JSON file.",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to settings YAML file.",
    ),
) -> None:
    """Print the type of values the schema accepts."""
    settings = _load_config(config)
    loaded_schema = _load_schema(schema, settings)
    typer.echo(format_result_type(loaded_schema))


if __name__ == "__main__":
    app()
