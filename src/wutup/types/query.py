"""Value objects accepted by the query builder and the finders."""

from datetime import datetime

from pydantic import Field, model_validator

from wutup.types.base import WutupBaseModel


class Circle(WutupBaseModel):
    """A search area: center point plus a radius in miles."""
    center_latitude: float = Field(..., ge=-90.0, le=90.0)
    center_longitude: float = Field(..., ge=-180.0, le=180.0)
    radius: float = Field(..., ge=0.0)


class Interval(WutupBaseModel):
    """A closed time interval."""
    start: datetime
    end: datetime

    @model_validator(mode='after')
    def validate_bounds(self) -> 'Interval':
        if self.end < self.start:
            raise ValueError(
                f"Interval end ({self.end.isoformat()}) precedes start ({self.start.isoformat()})"
            )
        return self


class PaginationData(WutupBaseModel):
    """Zero-based page number and page size."""
    page_number: int = Field(default=0, ge=0)
    page_size: int = Field(..., gt=0)

    @property
    def offset(self) -> int:
        return self.page_size * self.page_number
