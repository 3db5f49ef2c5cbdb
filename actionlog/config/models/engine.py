"""Prepatch engine configuration."""

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Settings for the trigger cascade."""

    event_format_version: int = Field(
        default=1,
        ge=1,
        description="Version marker written as 'v' into prepatch event input data",
    )
    max_rounds: int | None = Field(
        default=None,
        ge=1,
        description="Optional cap on cascade rounds; the trigger count always bounds it",
    )
