"""Base model class for all wutup models with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class WutupBaseModel(BaseModel):
    """Base model for all wutup models with built-in serialization.

    Provides common functionality for all wutup models including:
    - Serialization to dictionary via to_dict()
    - Consistent configuration
    - Proper handling of nested models
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_assignment=True
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Nested models become dictionaries and None values are dropped.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return self.model_dump(mode="json", by_alias=False, exclude_none=True)
