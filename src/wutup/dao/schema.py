"""Table definitions for the wutup store.

Written for the embedded SQLite database used in development and tests.
Column names are camelCase; the data-access objects alias them when
selecting so rows can be mapped by name.
"""

from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Engine

from wutup.logging import get_logger

logger = get_logger(__name__)

SCHEMA_STATEMENTS: List[str] = [
    """
    create table if not exists user (
        id integer primary key,
        firstName varchar(128),
        lastName varchar(128),
        email varchar(256),
        nickname varchar(128)
    )
    """,
    """
    create table if not exists event (
        id integer primary key,
        name varchar(256) not null,
        description varchar(4096),
        ownerId integer not null references user(id)
    )
    """,
    """
    create table if not exists venue (
        id integer primary key,
        name varchar(256) not null,
        address varchar(1024),
        latitude double,
        longitude double
    )
    """,
    """
    create table if not exists venue_property (
        venueId integer not null references venue(id),
        propertyName varchar(128) not null,
        propertyValue varchar(1024),
        primary key (venueId, propertyName)
    )
    """,
    """
    create table if not exists occurrence (
        id integer primary key,
        eventId integer not null references event(id),
        venueId integer not null references venue(id),
        "start" timestamp,
        "end" timestamp
    )
    """,
    """
    create table if not exists occurrence_attendee (
        occurrenceId integer not null references occurrence(id),
        userId integer not null references user(id),
        primary key (occurrenceId, userId)
    )
    """,
    """
    create table if not exists event_comment (
        id integer primary key,
        eventId integer not null references event(id),
        authorId integer not null references user(id),
        body varchar(4096) not null,
        postDate timestamp not null
    )
    """,
    """
    create table if not exists venue_comment (
        id integer primary key,
        venueId integer not null references venue(id),
        authorId integer not null references user(id),
        body varchar(4096) not null,
        postDate timestamp not null
    )
    """,
    """
    create table if not exists occurrence_comment (
        id integer primary key,
        occurrenceId integer not null references occurrence(id),
        authorId integer not null references user(id),
        body varchar(4096) not null,
        postDate timestamp not null
    )
    """,
]


def create_schema(engine: Engine) -> None:
    """Create all wutup tables that do not exist yet."""
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))
    logger.info(f"Schema ready ({len(SCHEMA_STATEMENTS)} tables)")
