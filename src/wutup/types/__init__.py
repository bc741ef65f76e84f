from wutup.types.base import WutupBaseModel
from wutup.types.query import Circle, Interval, PaginationData
from wutup.types.entities import Comment, Event, EventOccurrence, User, Venue

__all__ = [
    "WutupBaseModel",
    "Circle",
    "Interval",
    "PaginationData",
    "Comment",
    "Event",
    "EventOccurrence",
    "User",
    "Venue",
]
