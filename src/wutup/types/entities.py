"""Domain entities mapped from database rows.

Entities are plain pydantic models compared by value. The data-access
layer builds them from rows keyed by column name.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import Field

from wutup.types.base import WutupBaseModel


class User(WutupBaseModel):
    id: Optional[int] = None
    first_name: Optional[str] = Field(default=None, max_length=128)
    last_name: Optional[str] = Field(default=None, max_length=128)
    email: Optional[str] = Field(default=None, max_length=256)
    nickname: Optional[str] = Field(default=None, max_length=128)


class Event(WutupBaseModel):
    id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=256)
    description: Optional[str] = None
    owner: Optional[User] = None


class Venue(WutupBaseModel):
    """A place where events occur.

    ``property_map`` holds free-form attributes (parking, capacity, ...)
    stored in the venue_property table.
    """
    id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=256)
    address: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    property_map: Dict[str, str] = Field(default_factory=dict)


class EventOccurrence(WutupBaseModel):
    id: Optional[int] = None
    event: Event
    venue: Venue
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class Comment(WutupBaseModel):
    id: Optional[int] = None
    body: str = Field(..., min_length=1)
    post_date: datetime
    author: User
