"""Base models for vcd-tool."""

from pydantic import BaseModel, ConfigDict


class VcdToolBaseModel(BaseModel):
    """Base model for all vcd-tool domain models."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


__all__ = ["VcdToolBaseModel"]
