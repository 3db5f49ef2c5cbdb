"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory"]


class StoreBackendConfig(BaseModel):
    """Configuration for a single store backend."""

    backend: BackendType = Field(
        default="inmemory",
        description="Backend type",
    )


class StorageConfig(BaseModel):
    """Backends for record storage and the action log."""

    records: StoreBackendConfig = Field(
        default_factory=StoreBackendConfig,
        description="Record store backend",
    )
    audit: StoreBackendConfig = Field(
        default_factory=StoreBackendConfig,
        description="Action log store backend",
    )
