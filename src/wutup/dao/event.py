from typing import List, Optional

from wutup.common.exceptions import resource_not_found_error, validation_error
from wutup.dao.base import LIKE_ESCAPE, BaseDao
from wutup.dao.comments import CommentDaoMixin
from wutup.dao.event_occurrence import cascade_delete_occurrences_sql
from wutup.dao.mappers import EVENT_COLUMNS, USER_COLUMNS, aliased_columns, map_event
from wutup.logging import get_logger
from wutup.query_builder import QueryBuilder
from wutup.types.entities import Event
from wutup.types.query import PaginationData

logger = get_logger(__name__)

CREATE_SQL = (
    "insert into event (id, name, description, ownerId) "
    "values (:id, :name, :description, :ownerId)"
)
UPDATE_SQL = (
    "update event set name = :name, description = :description, ownerId = :ownerId "
    "where id = :id"
)
DELETE_SQL = "delete from event where id = :id"
DELETE_COMMENTS_SQL = "delete from event_comment where eventId = :eventId"
COUNT_SQL = "select count(*) from event"


class EventDao(CommentDaoMixin, BaseDao):
    """Data access for events and their comments."""

    resource_type = "event"
    comment_table = "event_comment"
    comment_owner_column = "eventId"

    def _params(self, event: Event) -> dict:
        if event.owner is None or event.owner.id is None:
            raise validation_error("An event needs an owner with an id", field="owner")
        return {
            "id": event.id,
            "name": event.name,
            "description": event.description,
            "ownerId": event.owner.id,
        }

    def _select_events(self) -> QueryBuilder:
        return (
            self.query_builder()
            .select(*aliased_columns("e", EVENT_COLUMNS),
                    *aliased_columns("u", USER_COLUMNS, "owner"))
            .from_("event e")
            .join_on("user u", "e.ownerId = u.id")
        )

    def create_event(self, event: Event) -> int:
        params = self._params(event)
        with self.transaction() as conn:
            if params["id"] is None:
                params["id"] = self.next_id(conn, "event")
            self._run(conn, CREATE_SQL, params)
        logger.info(f"Created event #{params['id']}")
        return params["id"]

    def find_event_by_id(self, event_id: int) -> Event:
        rows = self.fetch_built(self._select_events().where("e.id = :id", event_id))
        if not rows:
            raise resource_not_found_error(
                f"No such event: {event_id}", resource_type="event", resource_id=event_id
            )
        return map_event(rows[0])

    def update_event(self, event: Event) -> None:
        if self.execute(UPDATE_SQL, self._params(event)) == 0:
            raise resource_not_found_error(
                f"No such event: {event.id}", resource_type="event", resource_id=event.id
            )
        logger.info(f"Updated event #{event.id}")

    def delete_event(self, event_id: int) -> None:
        """Delete an event with its comments and occurrences."""
        with self.transaction() as conn:
            for sql in [DELETE_COMMENTS_SQL, *cascade_delete_occurrences_sql("eventId")]:
                self._run(conn, sql, {"eventId": event_id})
            if self._run(conn, DELETE_SQL, {"id": event_id}).rowcount == 0:
                raise resource_not_found_error(
                    f"No such event: {event_id}", resource_type="event", resource_id=event_id
                )
        logger.info(f"Deleted event #{event_id}")

    def find_events(
        self,
        name: Optional[str] = None,
        owner_id: Optional[int] = None,
        pagination: Optional[PaginationData] = None,
    ) -> List[Event]:
        """Find events by name prefix and owner, ordered by id."""
        builder = (
            self._select_events()
            .like(f"e.name like :name {LIKE_ESCAPE}", self.like_prefix(name))
            .where("e.ownerId = :ownerId", owner_id)
            .order("e.id")
            .add_pagination(self.resolve_pagination(pagination))
        )
        return [map_event(row) for row in self.fetch_built(builder)]

    def find_number_of_events(self) -> int:
        return int(self.scalar(COUNT_SQL))
