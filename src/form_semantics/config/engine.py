"""Engine configuration schema and loader.

Settings that change how schemas are compiled and how messages are
rendered. Configuration is loaded from a YAML file given explicitly, or
named by the FORM_SEMANTICS_CONFIG environment variable; without either,
defaults apply.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from form_semantics.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FORM_SEMANTICS_CONFIG"

# Draft names accepted for schema_draft
VALID_SCHEMA_DRAFTS = {"draft4", "draft6", "draft7", "draft201909", "draft202012"}


class EngineConfig(BaseModel):
    """Structural engine and message rendering settings.

    Attributes:
        schema_draft: JSON Schema draft used when a schema has no $schema.
        check_formats: Enforce the 'format' keyword (email, date, uri, ...).
        group_digits: Render numeric limits with thousands separators.
        cache_validators: Reuse compiled validators across validation passes.
        cache_size: Maximum number of compiled validators kept.
    """

    schema_draft: str = Field(
        default="draft7",
        description="JSON Schema draft for schemas without $schema",
    )
    check_formats: bool = Field(
        default=True,
        description="Validate the 'format' keyword",
    )
    group_digits: bool = Field(
        default=True,
        description="Group digits of numeric limits in messages (10,000)",
    )
    cache_validators: bool = Field(
        default=True,
        description="Memoize compiled validators by schema fingerprint",
    )
    cache_size: int = Field(
        default=64,
        ge=1,
        description="Maximum compiled validators kept in the cache",
    )

    @field_validator("schema_draft")
    @classmethod
    def validate_schema_draft(cls, v: str) -> str:
        """Validate that the draft is one jsonschema ships."""
        v = v.lower().replace("-", "")
        if v not in VALID_SCHEMA_DRAFTS:
            raise ValueError(
                f"Unknown schema draft '{v}'. Valid drafts: {sorted(VALID_SCHEMA_DRAFTS)}"
            )
        return v


def load_engine_config(config_path: Optional[Path] = None) -> EngineConfig:
    """Load engine configuration from a YAML file.

    Args:
        config_path: Optional explicit path to the YAML file.
            If not provided, uses $FORM_SEMANTICS_CONFIG when set.

    Returns:
        EngineConfig from the file, or defaults when no file applies.

    Raises:
        ConfigError: If the file exists but contains invalid configuration.
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return EngineConfig()
        config_path = Path(env_path)

    config_path = Path(config_path)
    if not config_path.exists():
        logger.debug(f"No engine config found at {config_path}, using defaults")
        return EngineConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in engine config {config_path}: {e}")

    if data is None:
        logger.warning(f"Empty engine config at {config_path}, using defaults")
        return EngineConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Engine config {config_path} must be a mapping")

    try:
        config = EngineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Failed to load engine config from {config_path}: {e}")

    logger.debug(f"Loaded engine config from {config_path}")
    return config


# Cached engine config (loaded once per process)
_cached_config: Optional[EngineConfig] = None


def get_engine_config(force_reload: bool = False) -> EngineConfig:
    """Get the current engine configuration (cached).

    Args:
        force_reload: If True, reload from disk even if cached.

    Returns:
        EngineConfig (defaults when no config file applies).
    """
    global _cached_config

    if force_reload or _cached_config is None:
        _cached_config = load_engine_config()

    return _cached_config


def reset_engine_config_cache() -> None:
    """Reset the engine config cache.

    Call this after changing FORM_SEMANTICS_CONFIG to pick up the new file.
    """
    global _cached_config
    _cached_config = None
