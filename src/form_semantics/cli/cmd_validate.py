"""Validate command - whole-form validation of a data snapshot."""

from pathlib import Path

import typer

from form_semantics.cli._app import app
from form_semantics.cli._common import load_data_or_exit, load_schema_or_exit, setup_logging
from form_semantics.cli._console import output_errors, output_result, print_err, print_ok
from form_semantics.errors import SchemaCompileError


@app.command("validate", help="Validate form data against a form schema.")
def validate_cmd(
    ctx: typer.Context,
    schema_path: Path = typer.Argument(..., help="Form schema (JSON or YAML)"),
    data_path: Path = typer.Argument(..., help="Form data snapshot (JSON or YAML)"),
):
    """Run whole-form validation; exit code 1 when the data is invalid."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from form_semantics.runtime.validators import validate_form

    schema = load_schema_or_exit(schema_path)
    data = load_data_or_exit(data_path)

    try:
        result = validate_form(schema, data)
    except SchemaCompileError as e:
        print_err(str(e))
        raise SystemExit(1)

    if ctx.obj["json"]:
        output_result(result, ctx=ctx)
    elif not ctx.obj["quiet"]:
        if result.valid:
            print_ok("Form data is valid")
        else:
            print_err(f"{len(result.errors)} field(s) with errors")
            output_errors(result.errors)

    if not result.valid:
        raise SystemExit(1)
