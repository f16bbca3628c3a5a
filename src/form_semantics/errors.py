"""Exception hierarchy for form-semantics.

Validation failures are never raised; they are returned as data
(see ``ValidationResult``). Exceptions are reserved for caller errors:
unreadable schema files, schemas the structural engine rejects, and
invalid engine configuration.
"""


class FormSemanticsError(Exception):
    """Base class for all errors raised by this package."""
    pass


class SchemaLoadError(FormSemanticsError):
    """Raised when a schema or data file cannot be loaded or is invalid."""
    pass


class SchemaCompileError(FormSemanticsError):
    """Raised when the structural engine rejects a (normalized) schema."""

    def __init__(self, message: str, schema_path: str = ""):
        self.schema_path = schema_path
        location = f" at '{schema_path}'" if schema_path else ""
        super().__init__(f"Invalid schema{location}: {message}")


class ConfigError(FormSemanticsError):
    """Raised when the engine configuration file is invalid."""
    pass
