"""State command - visibility, disablement, widgets and options per field."""

from pathlib import Path
from typing import Optional

import typer

from form_semantics.cli._app import app
from form_semantics.cli._common import load_data_or_exit, load_schema_or_exit, setup_logging
from form_semantics.cli._console import console, output_result, output_table, print_err
from form_semantics.errors import SchemaCompileError


@app.command("state", help="Show the computed form state for a data snapshot.")
def state_cmd(
    ctx: typer.Context,
    schema_path: Path = typer.Argument(..., help="Form schema (JSON or YAML)"),
    data_path: Optional[Path] = typer.Argument(None, help="Form data snapshot (default: schema defaults)"),
    with_errors: bool = typer.Option(False, "--validate", help="Also run whole-form validation"),
):
    """Compute the FormState and print it as a table or JSON."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from form_semantics.runtime.form_state import compute_form_state, initial_form_data

    schema = load_schema_or_exit(schema_path)
    data = load_data_or_exit(data_path) if data_path else initial_form_data(schema)

    try:
        state = compute_form_state(schema, data, validate=with_errors)
    except SchemaCompileError as e:
        print_err(str(e))
        raise SystemExit(1)

    if ctx.obj["json"]:
        output_result(state, ctx=ctx)
        return

    rows = []
    for section in state.sections.values():
        for field in section.fields.values():
            rows.append({
                "field": field.path,
                "visible": "yes" if section.visible and field.visible else "no",
                "disabled": "yes" if field.disabled else "no",
                "widget": field.widget.value,
                "options": ", ".join(field.options.labels) if field.options else "",
                "errors": "; ".join(field.errors),
            })
    output_table(rows, title=state.title or "Form state")

    if with_errors and not ctx.obj["quiet"]:
        console.print(f"  Valid: {state.valid}")
