"""Shared fixtures: an in-memory SQLite store seeded with sample data.

Seed data summary:
    users: 1 (dondi), 8 (Ray Toal), 3503 (John Lennon), 3504 (Paul McCartney)
    events: 1 and 2 "Party" owned by user 1, 3 "Poetry Slam" owned by 3503
    venues: 1 Pantages Theater, 2 Hollywood Bowl (both in Los Angeles),
            3 The Fillmore (San Francisco)
    occurrences: ten, ids 1-10 in start-time order; only #1 falls on
                 2012-01-15/16
    comments: two on occurrence 1 by user 3503, one on event 1, one on venue 1
"""

from datetime import datetime

import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from wutup.dao import create_database_engine, create_schema
from wutup.settings import DatabaseSettings, QuerySettings
from wutup.types import Event, User, Venue

USERS = [
    {"id": 1, "firstName": None, "lastName": None, "email": "dondi@example.com", "nickname": "dondi"},
    {"id": 8, "firstName": "Ray", "lastName": "Toal", "email": "rtoal@example.com", "nickname": "rtoal"},
    {"id": 3503, "firstName": "John", "lastName": "Lennon", "email": "jlennon@gmail.com", "nickname": "John"},
    {"id": 3504, "firstName": "Paul", "lastName": "McCartney", "email": "paul@example.com", "nickname": "Paul"},
]

EVENTS = [
    {"id": 1, "name": "Party", "description": "A hoedown!", "ownerId": 1},
    {"id": 2, "name": "Party", "description": "Another hoedown!", "ownerId": 1},
    {"id": 3, "name": "Poetry Slam", "description": "Open mic night", "ownerId": 3503},
]

VENUES = [
    {"id": 1, "name": "Pantages Theater", "address": "6233 Hollywood Bl, Los Angeles, CA",
     "latitude": 34.1019444, "longitude": -118.3261111},
    {"id": 2, "name": "Hollywood Bowl", "address": "2301 North Highland Ave, Hollywood, CA",
     "latitude": 34.1127863, "longitude": -118.3392439},
    {"id": 3, "name": "The Fillmore", "address": "1805 Geary Blvd, San Francisco, CA",
     "latitude": 37.7840, "longitude": -122.4330},
]

VENUE_PROPERTIES = [
    {"venueId": 1, "propertyName": "capacity", "propertyValue": "2703"},
    {"venueId": 1, "propertyName": "parking", "propertyValue": "street"},
]

OCCURRENCES = [
    {"id": 1, "eventId": 1, "venueId": 1, "start": "2012-01-15 10:00:00", "end": "2012-01-15 22:00:00"},
    {"id": 2, "eventId": 1, "venueId": 2, "start": "2012-03-01 19:00:00", "end": "2012-03-01 23:00:00"},
    {"id": 3, "eventId": 2, "venueId": 1, "start": "2012-04-10 20:00:00", "end": "2012-04-10 23:30:00"},
    {"id": 4, "eventId": 2, "venueId": 3, "start": "2012-05-05 18:00:00", "end": "2012-05-05 22:00:00"},
    {"id": 5, "eventId": 3, "venueId": 3, "start": "2012-06-21 21:00:00", "end": "2012-06-21 23:59:00"},
    {"id": 6, "eventId": 1, "venueId": 1, "start": "2012-07-04 17:00:00", "end": "2012-07-04 23:00:00"},
    {"id": 7, "eventId": 3, "venueId": 2, "start": "2012-08-12 20:00:00", "end": "2012-08-12 22:30:00"},
    {"id": 8, "eventId": 2, "venueId": 2, "start": "2012-09-09 19:30:00", "end": "2012-09-09 23:00:00"},
    {"id": 9, "eventId": 1, "venueId": 3, "start": "2012-10-31 20:00:00", "end": "2012-11-01 02:00:00"},
    {"id": 10, "eventId": 3, "venueId": 1, "start": "2012-12-31 21:00:00", "end": "2013-01-01 01:00:00"},
]

ATTENDEES = [
    {"occurrenceId": 1, "userId": 3503},
    {"occurrenceId": 1, "userId": 8},
    {"occurrenceId": 2, "userId": 3503},
]

OCCURRENCE_COMMENTS = [
    {"id": 1, "occurrenceId": 1, "authorId": 3503, "body": "Aww yeah.", "postDate": "2012-04-18 00:00:00"},
    {"id": 2, "occurrenceId": 1, "authorId": 3503, "body": "Aww no.", "postDate": "2012-04-18 00:00:00"},
]

EVENT_COMMENTS = [
    {"id": 1, "eventId": 1, "authorId": 8, "body": "Can't wait", "postDate": "2012-02-01 12:00:00"},
]

VENUE_COMMENTS = [
    {"id": 1, "venueId": 1, "authorId": 3503, "body": "Great acoustics", "postDate": "2012-03-03 10:00:00"},
]

_SEED = [
    ("insert into user (id, firstName, lastName, email, nickname) "
     "values (:id, :firstName, :lastName, :email, :nickname)", USERS),
    ("insert into event (id, name, description, ownerId) "
     "values (:id, :name, :description, :ownerId)", EVENTS),
    ("insert into venue (id, name, address, latitude, longitude) "
     "values (:id, :name, :address, :latitude, :longitude)", VENUES),
    ("insert into venue_property (venueId, propertyName, propertyValue) "
     "values (:venueId, :propertyName, :propertyValue)", VENUE_PROPERTIES),
    ('insert into occurrence (id, eventId, venueId, "start", "end") '
     "values (:id, :eventId, :venueId, :start, :end)", OCCURRENCES),
    ("insert into occurrence_attendee (occurrenceId, userId) "
     "values (:occurrenceId, :userId)", ATTENDEES),
    ("insert into occurrence_comment (id, occurrenceId, authorId, body, postDate) "
     "values (:id, :occurrenceId, :authorId, :body, :postDate)", OCCURRENCE_COMMENTS),
    ("insert into event_comment (id, eventId, authorId, body, postDate) "
     "values (:id, :eventId, :authorId, :body, :postDate)", EVENT_COMMENTS),
    ("insert into venue_comment (id, venueId, authorId, body, postDate) "
     "values (:id, :venueId, :authorId, :body, :postDate)", VENUE_COMMENTS),
]


@pytest.fixture
def engine():
    """Fresh in-memory database per test, schema created and seeded."""
    engine = create_database_engine(
        DatabaseSettings(url="sqlite://"),
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_schema(engine)
    with engine.begin() as conn:
        for statement, rows in _SEED:
            conn.execute(text(statement), rows)
    yield engine
    engine.dispose()


@pytest.fixture
def query_settings():
    """Query settings independent of the environment."""
    return QuerySettings(
        default_page_size=10,
        max_page_size=100,
        distance_function="get_distance_miles",
        location_alias="v",
        time_zone="UTC",
    )


@pytest.fixture
def dondi():
    return User(id=1, email="dondi@example.com", nickname="dondi")


@pytest.fixture
def john():
    return User(id=3503, first_name="John", last_name="Lennon",
                email="jlennon@gmail.com", nickname="John")


@pytest.fixture
def party(dondi):
    return Event(id=1, name="Party", description="A hoedown!", owner=dondi)


@pytest.fixture
def another_party(dondi):
    return Event(id=2, name="Party", description="Another hoedown!", owner=dondi)


@pytest.fixture
def pantages():
    return Venue(id=1, name="Pantages Theater", address="6233 Hollywood Bl, Los Angeles, CA",
                 latitude=34.1019444, longitude=-118.3261111)


@pytest.fixture
def sample_datetime():
    return datetime(2012, 10, 31, 23, 56, 0)
