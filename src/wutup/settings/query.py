"""Query construction settings.

Defaults used by the data-access layer when it builds finder queries:
page sizes, the spatial distance function and the time zone used to render
timestamp literals.
"""

import re

import pytz
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class QuerySettings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="QUERY_",
        case_sensitive=False,
        extra="ignore"
    )

    default_page_size: int = Field(
        default=10,
        ge=1,
        description="Page size used by finders when the caller gives no pagination"
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Largest page size a caller may request"
    )
    distance_function: str = Field(
        default="get_distance_miles",
        description="SQL function computing great-circle distance in miles"
    )
    location_alias: str = Field(
        default="v",
        description="Table alias whose latitude/longitude columns the circle filter reads"
    )
    time_zone: str = Field(
        default="UTC",
        description="Time zone used to render timestamp literals"
    )

    @field_validator('distance_function', 'location_alias')
    @classmethod
    def validate_sql_name(cls, v: str, info) -> str:
        """Only plain SQL names are accepted since they are inlined."""
        if not re.match(r'^[A-Za-z_][A-Za-z0-9_]*$', v):
            raise ValueError(f"Invalid {info.field_name}: '{v}'")
        return v

    @field_validator('time_zone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate that the timezone is valid."""
        try:
            pytz.timezone(v)
            return v
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {v}. Use pytz timezone names like 'US/Pacific'")

    @model_validator(mode='after')
    def validate_page_sizes(self) -> 'QuerySettings':
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"Default page size ({self.default_page_size}) "
                f"must be <= max page size ({self.max_page_size})"
            )
        return self
