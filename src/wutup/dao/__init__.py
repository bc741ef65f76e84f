"""Data-access layer.

DAOs run CRUD statements through SQLAlchemy ``text()`` and finder queries
produced by the QueryBuilder. Every DAO takes an engine and, optionally,
query settings.

Example:
    >>> from wutup.dao import UserDao, create_database_engine, create_schema
    >>> engine = create_database_engine()
    >>> create_schema(engine)
    >>> users = UserDao(engine).find_users(last_name="Len")
"""

from wutup.dao.base import BaseDao
from wutup.dao.comments import CommentDaoMixin
from wutup.dao.engine import create_database_engine, distance_miles
from wutup.dao.event import EventDao
from wutup.dao.event_occurrence import EventOccurrenceDao
from wutup.dao.schema import SCHEMA_STATEMENTS, create_schema
from wutup.dao.user import UserDao
from wutup.dao.venue import VenueDao

__all__ = [
    "BaseDao",
    "CommentDaoMixin",
    "create_database_engine",
    "distance_miles",
    "create_schema",
    "SCHEMA_STATEMENTS",
    "UserDao",
    "EventDao",
    "VenueDao",
    "EventOccurrenceDao",
]
