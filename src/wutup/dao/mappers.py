"""Row-to-entity mapping.

Rows are dictionaries keyed by column label. When several tables are
selected together, each table's columns are aliased with a prefix
(``ownerFirstName``, ``venueLatitude``) so the same mapper can read them.
"""

from typing import Any, List, Mapping

from wutup.types.entities import Comment, Event, EventOccurrence, User, Venue

USER_COLUMNS = ("id", "firstName", "lastName", "email", "nickname")
EVENT_COLUMNS = ("id", "name", "description")
VENUE_COLUMNS = ("id", "name", "address", "latitude", "longitude")
COMMENT_COLUMNS = ("id", "body", "postDate")


def label(prefix: str, column: str) -> str:
    """Column label under a prefix: ``label("owner", "firstName") == "ownerFirstName"``."""
    if not prefix:
        return column
    return prefix + column[0].upper() + column[1:]


def aliased_columns(alias: str, columns: tuple, prefix: str = "") -> List[str]:
    """Select-list entries for ``columns`` of table ``alias`` under ``prefix``."""
    return [f"{alias}.{column} as {label(prefix, column)}" for column in columns]


def map_user(row: Mapping[str, Any], prefix: str = "") -> User:
    return User(
        id=row[label(prefix, "id")],
        first_name=row[label(prefix, "firstName")],
        last_name=row[label(prefix, "lastName")],
        email=row[label(prefix, "email")],
        nickname=row[label(prefix, "nickname")],
    )


def map_event(row: Mapping[str, Any], prefix: str = "", owner_prefix: str = "owner") -> Event:
    return Event(
        id=row[label(prefix, "id")],
        name=row[label(prefix, "name")],
        description=row[label(prefix, "description")],
        owner=map_user(row, owner_prefix),
    )


def map_venue(row: Mapping[str, Any], prefix: str = "") -> Venue:
    return Venue(
        id=row[label(prefix, "id")],
        name=row[label(prefix, "name")],
        address=row[label(prefix, "address")],
        latitude=row[label(prefix, "latitude")],
        longitude=row[label(prefix, "longitude")],
    )


def map_event_occurrence(row: Mapping[str, Any]) -> EventOccurrence:
    return EventOccurrence(
        id=row["id"],
        event=map_event(row, "event"),
        venue=map_venue(row, "venue"),
        start=row["occurrenceStart"],
        end=row["occurrenceEnd"],
    )


def map_comment(row: Mapping[str, Any], author_prefix: str = "author") -> Comment:
    return Comment(
        id=row["id"],
        body=row["body"],
        post_date=row["postDate"],
        author=map_user(row, author_prefix),
    )
