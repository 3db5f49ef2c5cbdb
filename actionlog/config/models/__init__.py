"""Configuration model exports.

    from actionlog.config.models import EngineConfig, StorageConfig
"""

from actionlog.config.models.engine import EngineConfig
from actionlog.config.models.observability import (
    LoggingConfig,
    ObservabilityConfig,
)
from actionlog.config.models.storage import StorageConfig, StoreBackendConfig

__all__ = [
    # Engine
    "EngineConfig",
    # Observability
    "LoggingConfig",
    "ObservabilityConfig",
    # Storage
    "StorageConfig",
    "StoreBackendConfig",
]
