from typing import List, Optional

from wutup.common.exceptions import resource_not_found_error, validation_error
from wutup.dao.base import BaseDao
from wutup.dao.comments import CommentDaoMixin
from wutup.dao.mappers import (
    EVENT_COLUMNS,
    USER_COLUMNS,
    VENUE_COLUMNS,
    aliased_columns,
    map_event_occurrence,
    map_user,
)
from wutup.logging import get_logger
from wutup.query_builder import QueryBuilder
from wutup.types.entities import EventOccurrence, User
from wutup.types.query import Circle, Interval, PaginationData
from wutup.utils.decorators import traced

logger = get_logger(__name__)

CREATE_SQL = (
    'insert into occurrence (id, eventId, venueId, "start", "end") '
    "values (:id, :eventId, :venueId, :start, :end)"
)
UPDATE_SQL = (
    'update occurrence set eventId = :eventId, venueId = :venueId, "start" = :start, "end" = :end '
    "where id = :id"
)
DELETE_SQL = "delete from occurrence where id = :id"
DELETE_ATTENDEES_SQL = "delete from occurrence_attendee where occurrenceId = :occurrenceId"
DELETE_COMMENTS_SQL = "delete from occurrence_comment where occurrenceId = :occurrenceId"
COUNT_SQL = "select count(*) from occurrence"

REGISTER_ATTENDEE_SQL = (
    "insert into occurrence_attendee (occurrenceId, userId) values (:occurrenceId, :userId)"
)
UNREGISTER_ATTENDEE_SQL = (
    "delete from occurrence_attendee where occurrenceId = :occurrenceId and userId = :userId"
)


def cascade_delete_occurrences_sql(owner_column: str) -> List[str]:
    """Statements deleting every occurrence owned by one event or venue.

    The owner id is bound under the column name, e.g. ``:venueId``. Attendees
    and comments go first.
    """
    owned = f"select id from occurrence where {owner_column} = :{owner_column}"
    return [
        f"delete from occurrence_attendee where occurrenceId in ({owned})",
        f"delete from occurrence_comment where occurrenceId in ({owned})",
        f"delete from occurrence where {owner_column} = :{owner_column}",
    ]


class EventOccurrenceDao(CommentDaoMixin, BaseDao):
    """Data access for event occurrences, their attendees and comments.

    An occurrence is one scheduled instance of an event at a venue. Finders
    join the event, its owner and the venue so every occurrence comes back
    fully populated.
    """

    resource_type = "event occurrence"
    comment_table = "occurrence_comment"
    comment_owner_column = "occurrenceId"

    def _params(self, occurrence: EventOccurrence) -> dict:
        if occurrence.event.id is None or occurrence.venue.id is None:
            raise validation_error(
                "An event occurrence needs a stored event and venue",
                field="event/venue",
            )
        return {
            "id": occurrence.id,
            "eventId": occurrence.event.id,
            "venueId": occurrence.venue.id,
            "start": self.timestamp(occurrence.start),
            "end": self.timestamp(occurrence.end),
        }

    def _not_found(self, occurrence_id: Optional[int]):
        return resource_not_found_error(
            f"No such event occurrence: {occurrence_id}",
            resource_type="event_occurrence",
            resource_id=occurrence_id,
        )

    def _select_occurrences(self) -> QueryBuilder:
        alias = self.settings.location_alias
        return (
            self.query_builder()
            .select("o.id as id", 'o."start" as occurrenceStart', 'o."end" as occurrenceEnd',
                    *aliased_columns("e", EVENT_COLUMNS, "event"),
                    *aliased_columns("u", USER_COLUMNS, "owner"),
                    *aliased_columns(alias, VENUE_COLUMNS, "venue"))
            .from_("occurrence o")
            .join_on("event e", "o.eventId = e.id")
            .join_on("user u", "e.ownerId = u.id")
            .join_on(f"venue {alias}", f"o.venueId = {alias}.id")
        )

    def create_event_occurrence(self, occurrence: EventOccurrence) -> int:
        """Insert an occurrence, assigning the next free id when it has none.

        Returns:
            The id of the stored occurrence
        """
        params = self._params(occurrence)
        with self.transaction() as conn:
            if params["id"] is None:
                params["id"] = self.next_id(conn, "occurrence")
            self._run(conn, CREATE_SQL, params)
        logger.info(f"Created event occurrence #{params['id']}")
        return params["id"]

    def find_event_occurrence_by_id(self, occurrence_id: int) -> EventOccurrence:
        rows = self.fetch_built(self._select_occurrences().where("o.id = :id", occurrence_id))
        if not rows:
            raise self._not_found(occurrence_id)
        return map_event_occurrence(rows[0])

    def update_event_occurrence(self, occurrence: EventOccurrence) -> None:
        if self.execute(UPDATE_SQL, self._params(occurrence)) == 0:
            raise self._not_found(occurrence.id)
        logger.info(f"Updated event occurrence #{occurrence.id}")

    def delete_event_occurrence(self, occurrence_id: int) -> None:
        with self.transaction() as conn:
            self._run(conn, DELETE_ATTENDEES_SQL, {"occurrenceId": occurrence_id})
            self._run(conn, DELETE_COMMENTS_SQL, {"occurrenceId": occurrence_id})
            if self._run(conn, DELETE_SQL, {"id": occurrence_id}).rowcount == 0:
                raise self._not_found(occurrence_id)
        logger.info(f"Deleted event occurrence #{occurrence_id}")

    def find_number_of_event_occurrences(self) -> int:
        return int(self.scalar(COUNT_SQL))

    @traced("wutup.dao.find_event_occurrences")
    def find_event_occurrences(
        self,
        attendee_id: Optional[int] = None,
        circle: Optional[Circle] = None,
        interval: Optional[Interval] = None,
        event_id: Optional[int] = None,
        venue_id: Optional[int] = None,
        pagination: Optional[PaginationData] = None,
    ) -> List[EventOccurrence]:
        """Find occurrences matching every filter that is given.

        Args:
            attendee_id: Only occurrences this user attends
            circle: Only occurrences at venues inside the circle
            interval: Only occurrences starting and ending inside the interval
            event_id: Only occurrences of this event
            venue_id: Only occurrences at this venue
            pagination: Page to return, ordered by start time

        Returns:
            The requested page of occurrences
        """
        builder = self._select_occurrences()
        if attendee_id is not None:
            builder.inner_join_on(
                "occurrence_attendee a",
                f"a.occurrenceId = o.id and a.userId = {int(attendee_id)}",
            )
        builder = (
            builder
            .where("o.eventId = :eventId", event_id)
            .where("o.venueId = :venueId", venue_id)
            .where_circle(circle)
            .where_interval(interval, start_column='o."start"', end_column='o."end"')
            .order('o."start", o.id')
            .add_pagination(self.resolve_pagination(pagination))
        )
        return [map_event_occurrence(row) for row in self.fetch_built(builder)]

    def register_attendee(self, occurrence_id: int, user_id: int) -> None:
        """Add a user to an occurrence's attendees.

        Raises:
            WutupError: DUPLICATE_KEY_ERROR if the user is already attending
        """
        self.execute(REGISTER_ATTENDEE_SQL, {"occurrenceId": occurrence_id, "userId": user_id})
        logger.info(f"User #{user_id} attends occurrence #{occurrence_id}")

    def unregister_attendee(self, occurrence_id: int, user_id: int) -> None:
        removed = self.execute(
            UNREGISTER_ATTENDEE_SQL, {"occurrenceId": occurrence_id, "userId": user_id}
        )
        if removed == 0:
            raise resource_not_found_error(
                f"User {user_id} does not attend event occurrence {occurrence_id}",
                resource_type="attendee",
                resource_id=user_id,
            )

    def find_attendees(
        self,
        occurrence_id: int,
        pagination: Optional[PaginationData] = None,
    ) -> List[User]:
        builder = (
            self.query_builder()
            .select(*aliased_columns("u", USER_COLUMNS))
            .from_("user u")
            .inner_join_on("occurrence_attendee a", "a.userId = u.id")
            .where("a.occurrenceId = :occurrenceId", occurrence_id)
            .order("u.id")
            .add_pagination(self.resolve_pagination(pagination))
        )
        return [map_user(row) for row in self.fetch_built(builder)]
