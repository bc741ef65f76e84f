from typing import Dict, List, Optional

from wutup.common.exceptions import resource_not_found_error
from wutup.dao.base import LIKE_ESCAPE, BaseDao
from wutup.dao.comments import CommentDaoMixin
from wutup.dao.event_occurrence import cascade_delete_occurrences_sql
from wutup.dao.mappers import VENUE_COLUMNS, aliased_columns, map_venue
from wutup.logging import get_logger
from wutup.query_builder import QueryBuilder
from wutup.types.entities import Venue
from wutup.types.query import Circle, PaginationData

logger = get_logger(__name__)

CREATE_SQL = (
    "insert into venue (id, name, address, latitude, longitude) "
    "values (:id, :name, :address, :latitude, :longitude)"
)
UPDATE_SQL = (
    "update venue set name = :name, address = :address, "
    "latitude = :latitude, longitude = :longitude where id = :id"
)
DELETE_SQL = "delete from venue where id = :id"
DELETE_PROPERTIES_SQL = "delete from venue_property where venueId = :venueId"
DELETE_COMMENTS_SQL = "delete from venue_comment where venueId = :venueId"
COUNT_SQL = "select count(*) from venue"

FIND_PROPERTIES_SQL = (
    "select propertyName, propertyValue from venue_property "
    "where venueId = :venueId order by propertyName"
)
INSERT_PROPERTY_SQL = (
    "insert into venue_property (venueId, propertyName, propertyValue) "
    "values (:venueId, :propertyName, :propertyValue)"
)
UPDATE_PROPERTY_SQL = (
    "update venue_property set propertyValue = :propertyValue "
    "where venueId = :venueId and propertyName = :propertyName"
)
DELETE_PROPERTY_SQL = (
    "delete from venue_property where venueId = :venueId and propertyName = :propertyName"
)


class VenueDao(CommentDaoMixin, BaseDao):
    """Data access for venues, their free-form properties and comments."""

    resource_type = "venue"
    comment_table = "venue_comment"
    comment_owner_column = "venueId"

    @staticmethod
    def _params(venue: Venue) -> dict:
        return {
            "id": venue.id,
            "name": venue.name,
            "address": venue.address,
            "latitude": venue.latitude,
            "longitude": venue.longitude,
        }

    def _select_venues(self) -> QueryBuilder:
        # The circle filter reads latitude/longitude through the configured alias.
        alias = self.settings.location_alias
        return (
            self.query_builder()
            .select(*aliased_columns(alias, VENUE_COLUMNS))
            .from_(f"venue {alias}")
        )

    def _not_found(self, venue_id: Optional[int]):
        return resource_not_found_error(
            f"No such venue: {venue_id}", resource_type="venue", resource_id=venue_id
        )

    def create_venue(self, venue: Venue) -> int:
        """Insert a venue and its properties.

        Returns:
            The id of the stored venue
        """
        params = self._params(venue)
        with self.transaction() as conn:
            if params["id"] is None:
                params["id"] = self.next_id(conn, "venue")
            self._run(conn, CREATE_SQL, params)
            for name, value in venue.property_map.items():
                self._run(conn, INSERT_PROPERTY_SQL, {
                    "venueId": params["id"], "propertyName": name, "propertyValue": value,
                })
        logger.info(f"Created venue #{params['id']}")
        return params["id"]

    def find_venue_by_id(self, venue_id: int) -> Venue:
        alias = self.settings.location_alias
        rows = self.fetch_built(self._select_venues().where(f"{alias}.id = :id", venue_id))
        if not rows:
            raise self._not_found(venue_id)
        venue = map_venue(rows[0])
        venue.property_map = self.find_properties(venue_id)
        return venue

    def update_venue(self, venue: Venue) -> None:
        """Update the venue row. Properties are managed separately."""
        if self.execute(UPDATE_SQL, self._params(venue)) == 0:
            raise self._not_found(venue.id)
        logger.info(f"Updated venue #{venue.id}")

    def delete_venue(self, venue_id: int) -> None:
        """Delete a venue together with everything attached to it."""
        dependents = [DELETE_PROPERTIES_SQL, DELETE_COMMENTS_SQL, *cascade_delete_occurrences_sql("venueId")]
        with self.transaction() as conn:
            for sql in dependents:
                self._run(conn, sql, {"venueId": venue_id})
            if self._run(conn, DELETE_SQL, {"id": venue_id}).rowcount == 0:
                raise self._not_found(venue_id)
        logger.info(f"Deleted venue #{venue_id}")

    def find_venues(
        self,
        name: Optional[str] = None,
        circle: Optional[Circle] = None,
        pagination: Optional[PaginationData] = None,
    ) -> List[Venue]:
        """Find venues by name prefix and distance from a point."""
        alias = self.settings.location_alias
        builder = (
            self._select_venues()
            .like(f"{alias}.name like :name {LIKE_ESCAPE}", self.like_prefix(name))
            .where_circle(circle)
            .order(f"{alias}.id")
            .add_pagination(self.resolve_pagination(pagination))
        )
        venues = [map_venue(row) for row in self.fetch_built(builder)]
        for venue in venues:
            venue.property_map = self.find_properties(venue.id)
        return venues

    def find_number_of_venues(self) -> int:
        return int(self.scalar(COUNT_SQL))

    def find_properties(self, venue_id: int) -> Dict[str, str]:
        rows = self.fetch_all(FIND_PROPERTIES_SQL, {"venueId": venue_id})
        return {row["propertyName"]: row["propertyValue"] for row in rows}

    def add_property(self, venue_id: int, name: str, value: str) -> None:
        """Add a property; raises DUPLICATE_KEY_ERROR if the venue already has it."""
        self.execute(INSERT_PROPERTY_SQL, {
            "venueId": venue_id, "propertyName": name, "propertyValue": value,
        })

    def update_property(self, venue_id: int, name: str, value: str) -> None:
        updated = self.execute(UPDATE_PROPERTY_SQL, {
            "venueId": venue_id, "propertyName": name, "propertyValue": value,
        })
        if updated == 0:
            raise resource_not_found_error(
                f"Venue {venue_id} has no property '{name}'",
                resource_type="venue_property",
                resource_id=name,
            )

    def delete_property(self, venue_id: int, name: str) -> None:
        deleted = self.execute(DELETE_PROPERTY_SQL, {"venueId": venue_id, "propertyName": name})
        if deleted == 0:
            raise resource_not_found_error(
                f"Venue {venue_id} has no property '{name}'",
                resource_type="venue_property",
                resource_id=name,
            )
