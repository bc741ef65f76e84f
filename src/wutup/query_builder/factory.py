"""Query Builder Factory.

Creates query builders configured from the ``query`` settings, so callers
do not repeat the time zone, location alias and distance function.
"""

from typing import TYPE_CHECKING, Optional

from wutup.query_builder.builder import QueryBuilder

if TYPE_CHECKING:
    from wutup.settings.query import QuerySettings


class QueryBuilderFactory:
    """Factory for creating configured query builders.

    Example:
        >>> builder = QueryBuilderFactory.create()
        >>> sql = builder.from_("venue v").where_circle(circle).build()
    """

    @staticmethod
    def create(settings: Optional['QuerySettings'] = None) -> QueryBuilder:
        """Create a builder from query settings.

        Args:
            settings: Query settings; the application settings are used
                when omitted.

        Returns:
            A fresh QueryBuilder. Builders are single-use, so call this once
            per query.
        """
        if settings is None:
            from wutup.settings import get_settings
            settings = get_settings().query

        return QueryBuilder(
            time_zone=settings.time_zone,
            location_alias=settings.location_alias,
            distance_function=settings.distance_function,
        )


def get_query_builder(settings: Optional['QuerySettings'] = None) -> QueryBuilder:
    """Get a new query builder configured from settings."""
    return QueryBuilderFactory.create(settings)
