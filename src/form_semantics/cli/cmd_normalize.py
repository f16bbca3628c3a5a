"""Normalize command - print the structural schema the validator compiles."""

from pathlib import Path

import typer

from form_semantics.cli._app import app
from form_semantics.cli._common import load_schema_or_exit, setup_logging
from form_semantics.cli._console import output_result


@app.command("normalize", help="Print the structural (JSON Schema) form of a schema.")
def normalize_cmd(
    ctx: typer.Context,
    schema_path: Path = typer.Argument(..., help="Form schema (JSON or YAML)"),
):
    """Strip ui:* metadata and flatten sections."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from form_semantics.runtime.normalizer import normalize

    schema = load_schema_or_exit(schema_path)
    output_result(normalize(schema), ctx=ctx, title="Structural schema")
