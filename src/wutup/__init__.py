from wutup.__version__ import __version__

from wutup.common.exceptions import WutupError, ErrorCode

from wutup.query_builder import QueryBuilder, QueryBuilderFactory, get_query_builder

from wutup.types import (
    Circle,
    Interval,
    PaginationData,
    Comment,
    Event,
    EventOccurrence,
    User,
    Venue,
)

from wutup.settings import get_settings

from wutup.dao import (
    create_database_engine,
    create_schema,
    UserDao,
    EventDao,
    VenueDao,
    EventOccurrenceDao,
)


__all__ = [
    "__version__",

    # Query construction
    "QueryBuilder",
    "QueryBuilderFactory",
    "get_query_builder",

    # Value objects and entities
    "Circle",
    "Interval",
    "PaginationData",
    "Comment",
    "Event",
    "EventOccurrence",
    "User",
    "Venue",

    # Data access
    "create_database_engine",
    "create_schema",
    "UserDao",
    "EventDao",
    "VenueDao",
    "EventOccurrenceDao",

    # Exceptions (public API)
    "WutupError",
    "ErrorCode",

    "get_settings",
]
