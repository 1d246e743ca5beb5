"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict


class CloudPulseBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - All timestamps are ISO 8601 format with timezone (UTC preferred)
    - Field names are lowercase snake_case
    - Aliases are accepted on input alongside field names
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class FrozenModel(CloudPulseBaseModel):
    """Immutable model for definitions loaded once and shared read-only."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        frozen=True,
    )
