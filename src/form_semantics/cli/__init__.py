"""CLI package - Typer-based command-line interface.

Usage:
    python -m form_semantics --help
    form-semantics validate schema.json data.json
"""

from form_semantics.cli._app import app

# Register command modules (side-effect imports)
import form_semantics.cli.cmd_validate  # noqa: F401
import form_semantics.cli.cmd_state  # noqa: F401
import form_semantics.cli.cmd_field  # noqa: F401
import form_semantics.cli.cmd_normalize  # noqa: F401

__all__ = ["app"]
