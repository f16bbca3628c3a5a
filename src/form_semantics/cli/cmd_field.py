"""Check-field command - single-field validation as done on blur."""

import json
from pathlib import Path

import typer

from form_semantics.cli._app import app
from form_semantics.cli._common import load_schema_or_exit, setup_logging
from form_semantics.cli._console import console, output_result, print_err, print_ok


def parse_cli_value(text: str):
    """Parse VALUE as JSON (10, true, null, "x"); anything else stays a string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


@app.command("check-field", help="Validate one value against a field of the schema.")
def check_field_cmd(
    ctx: typer.Context,
    schema_path: Path = typer.Argument(..., help="Form schema (JSON or YAML)"),
    field_path: str = typer.Argument(..., help="Field path, e.g. contact.email"),
    value: str = typer.Argument(..., help="Value, parsed as JSON when possible"),
):
    """Validate VALUE for FIELD_PATH; exit code 1 when it has errors."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from form_semantics.runtime.paths import flatten_sections
    from form_semantics.runtime.validators import validate_field

    schema = load_schema_or_exit(schema_path)
    field = flatten_sections(schema.get("sections") or []).get(field_path)
    if field is None:
        print_err(f"Unknown field: {field_path}")
        raise SystemExit(1)

    parsed = parse_cli_value(value)
    errors = validate_field(field, parsed, field_path)

    if ctx.obj["json"]:
        output_result({"path": field_path, "value": parsed, "errors": errors}, ctx=ctx)
    elif not ctx.obj["quiet"]:
        if errors:
            print_err(f"{field_path}: {len(errors)} error(s)")
            for message in errors:
                console.print(f"  - {message}")
        else:
            print_ok(f"{field_path}: valid")

    if errors:
        raise SystemExit(1)
