"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict


class CodexBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - Field names are lowercase snake_case
    - Enums are uppercase SNAKE_CASE, matching the upstream API type codes
    - Instances are immutable value objects
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        frozen=True,
    )
