"""Shared CLI utilities: logging setup and file loading."""

import logging
from pathlib import Path
from typing import Any, Dict

from rich.logging import RichHandler

from form_semantics.cli._console import console, print_err
from form_semantics.errors import SchemaLoadError
from form_semantics.runtime.schema_loader import load_form_data, load_form_schema

logger = logging.getLogger(__name__)


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def load_schema_or_exit(path: Path) -> Dict[str, Any]:
    """Load a form schema, printing the problem and exiting 1 on failure."""
    try:
        return load_form_schema(path)
    except SchemaLoadError as e:
        print_err(f"Cannot load schema {path}: {e}")
        raise SystemExit(1)


def load_data_or_exit(path: Path) -> Dict[str, Any]:
    """Load a form data snapshot, printing the problem and exiting 1 on failure."""
    try:
        return load_form_data(path)
    except SchemaLoadError as e:
        print_err(f"Cannot load data {path}: {e}")
        raise SystemExit(1)
