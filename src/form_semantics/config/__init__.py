"""Engine configuration management."""

from form_semantics.config.engine import (
    EngineConfig,
    get_engine_config,
    load_engine_config,
    reset_engine_config_cache,
)

__all__ = [
    "EngineConfig",
    "load_engine_config",
    "get_engine_config",
    "reset_engine_config_cache",
]
