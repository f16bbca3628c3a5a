"""
Structural Engine - the JSON Schema validator behind form validation.

Form and field validators depend on the StructuralEngine abstraction, not on
a specific validation library. JsonSchemaEngine is the concrete
implementation backed by the 'jsonschema' package.

Contract:
    compiled = engine.compile(schema)      # raises SchemaCompileError
    errors = compiled.validate(data)       # ordered List[StructuralError]

Compiled schemas return their errors instead of storing them, so one
compiled instance can be cached and shared between concurrent passes.
"""

import hashlib
import json
import logging
import re
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Mapping, Optional

from jsonschema import (
    Draft4Validator,
    Draft6Validator,
    Draft7Validator,
    Draft201909Validator,
    Draft202012Validator,
    FormatChecker,
    validators,
)
from jsonschema.exceptions import SchemaError
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError

from form_semantics.config import EngineConfig, get_engine_config
from form_semantics.errors import SchemaCompileError
from form_semantics.schemas.results import StructuralError

logger = logging.getLogger(__name__)

DRAFT_VALIDATORS = {
    "draft4": Draft4Validator,
    "draft6": Draft6Validator,
    "draft7": Draft7Validator,
    "draft201909": Draft201909Validator,
    "draft202012": Draft202012Validator,
}

# keyword -> param name carrying the keyword's schema value
_KEYWORD_PARAMS = {
    "minimum": "limit",
    "maximum": "limit",
    "exclusiveMinimum": "limit",
    "exclusiveMaximum": "limit",
    "minLength": "limit",
    "maxLength": "limit",
    "minItems": "limit",
    "maxItems": "limit",
    "multipleOf": "multipleOf",
    "enum": "allowedValues",
    "const": "allowedValue",
    "format": "format",
    "type": "type",
    "pattern": "pattern",
}


class CompiledSchema(ABC):
    """A schema prepared for repeated validation."""

    @abstractmethod
    def validate(self, data: Any) -> List[StructuralError]:
        """
        Validate data.

        Args:
            data: Instance to validate

        Returns:
            Failures in the order the engine reports them (empty when valid)
        """
        pass


class StructuralEngine(ABC):
    """
    Abstract interface for structural validation engines.

    Stateless apart from an optional compiled-schema cache.
    """

    @abstractmethod
    def compile(self, schema: Mapping[str, Any]) -> CompiledSchema:
        """
        Compile a structural schema.

        Raises:
            SchemaCompileError: If the engine rejects the schema
        """
        pass


class JsonSchemaCompiled(CompiledSchema):
    """Compiled schema backed by a jsonschema validator instance."""

    def __init__(self, validator: Any):
        self._validator = validator

    def validate(self, data: Any) -> List[StructuralError]:
        try:
            return [to_structural_error(error) for error in self._validator.iter_errors(data)]
        except re.error as e:
            raise SchemaCompileError(f"invalid pattern: {e}")


class JsonSchemaEngine(StructuralEngine):
    """
    Concrete StructuralEngine using the jsonschema library.

    The draft is taken from the schema's '$schema' when present, else from
    the configuration. Format checking is on unless disabled in config.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_engine_config()
        self.cache: Optional[ValidatorCache] = (
            ValidatorCache(self.config.cache_size) if self.config.cache_validators else None
        )

    def compile(self, schema: Mapping[str, Any]) -> CompiledSchema:
        if self.cache is None:
            return self._compile(schema)
        return self.cache.get_or_compile(schema, self._compile)

    def _compile(self, schema: Mapping[str, Any]) -> CompiledSchema:
        if not isinstance(schema, Mapping):
            raise SchemaCompileError(f"expected a mapping, got {type(schema).__name__}")

        default_cls = DRAFT_VALIDATORS[self.config.schema_draft]
        validator_cls = validators.validator_for(schema, default=default_cls)

        try:
            validator_cls.check_schema(schema)
        except SchemaError as e:
            schema_path = ".".join(str(p) for p in e.absolute_path)
            raise SchemaCompileError(e.message, schema_path) from e

        format_checker = FormatChecker() if self.config.check_formats else None
        logger.debug(f"Compiled schema with {validator_cls.__name__}")
        return JsonSchemaCompiled(validator_cls(schema, format_checker=format_checker))


class ValidatorCache:
    """
    Bounded LRU of compiled schemas keyed by schema fingerprint.

    The fingerprint is the SHA-256 of the schema's canonical JSON, so a
    changed schema always misses. Thread-safe.
    """

    def __init__(self, max_size: int = 64):
        self.max_size = max_size
        self._entries: "OrderedDict[str, CompiledSchema]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compile(
        self,
        schema: Mapping[str, Any],
        compile_fn: Callable[[Mapping[str, Any]], CompiledSchema],
    ) -> CompiledSchema:
        key = schema_fingerprint(schema)
        with self._lock:
            compiled = self._entries.get(key)
            if compiled is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return compiled

        compiled = compile_fn(schema)

        with self._lock:
            self.misses += 1
            self._entries[key] = compiled
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)
        logger.debug(f"Cached compiled schema {key[:12]} ({len(self._entries)} entries)")
        return compiled

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


def schema_fingerprint(schema: Any) -> str:
    """SHA-256 of the canonical JSON form of a schema."""
    canonical = json.dumps(schema, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def to_structural_error(error: JsonSchemaValidationError) -> StructuralError:
    """
    Translate a jsonschema error into the engine-neutral StructuralError.

    Params are named per keyword (limit, allowedValues, missingProperty, ...)
    so the message table does not depend on the validation library.
    """
    keyword = str(error.validator)
    params: Dict[str, Any] = {}

    if keyword == "required":
        missing = _missing_property(error)
        if missing is not None:
            params["missingProperty"] = missing
    elif keyword in _KEYWORD_PARAMS:
        value = error.validator_value
        if keyword == "type" and isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        params[_KEYWORD_PARAMS[keyword]] = value

    return StructuralError(
        instance_path=list(error.absolute_path),
        keyword=keyword,
        message=error.message,
        params=params,
    )


def _missing_property(error: JsonSchemaValidationError) -> Optional[str]:
    # jsonschema reports one error per missing property, worded
    # "'<name>' is a required property"
    required = error.validator_value if isinstance(error.validator_value, (list, tuple)) else []
    for prop in required:
        if error.message.startswith(f"{prop!r} "):
            return prop
    instance = error.instance if isinstance(error.instance, Mapping) else {}
    for prop in required:
        if prop not in instance:
            return prop
    return None


_default_engine: Optional[JsonSchemaEngine] = None
_default_lock = threading.Lock()


def get_default_engine() -> JsonSchemaEngine:
    """
    Shared engine built from the current engine configuration.

    Rebuilt (with an empty cache) whenever the configuration object changes.
    """
    global _default_engine
    config = get_engine_config()
    with _default_lock:
        if _default_engine is None or _default_engine.config is not config:
            _default_engine = JsonSchemaEngine(config)
        return _default_engine
