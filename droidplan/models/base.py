"""Base model for all droidplan Pydantic models.

This module provides base model classes that enforce consistent validation and
serialization behavior across manifest and plan models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class DroidplanBaseModel(BaseModel):
    """Base model class for all droidplan Pydantic models.

    Manifests are user written, so unknown keys are rejected instead of being
    silently carried along.
    """

    model_config = ConfigDict(
        extra="forbid",
        # Strip whitespace from string fields
        str_strip_whitespace=True,
        # Use enum values in serialization
        use_enum_values=True,
        validate_assignment=True,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary with consistent serialization parameters.

        Returns:
            Dictionary representation using JSON-compatible serialization
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")

    def to_dict_full(self) -> dict[str, Any]:
        """Convert model to dictionary including all fields (even unset ones)."""
        return self.model_dump(by_alias=True, exclude_unset=False, mode="json")


class FrozenModel(DroidplanBaseModel):
    """Immutable model, used for resolved values handed to callers."""

    model_config = ConfigDict(frozen=True)
