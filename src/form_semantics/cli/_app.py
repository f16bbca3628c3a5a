"""Root Typer application with global options."""

import os
from pathlib import Path
from typing import Optional

import typer

from form_semantics import __version__
from form_semantics.config import reset_engine_config_cache
from form_semantics.config.engine import CONFIG_ENV_VAR

app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"form-semantics {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug-level logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Warnings and errors only"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON to stdout"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help=f"Engine config YAML (overrides ${CONFIG_ENV_VAR})"
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Evaluate rules, options and validation for schema-driven forms."""
    if config is not None:
        os.environ[CONFIG_ENV_VAR] = str(config)
        reset_engine_config_cache()

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["json"] = json_output
