from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, List, Optional, Union

from wutup.common.exceptions import (
    incomplete_query_error,
    query_already_built_error,
    validation_error,
)
from wutup.constants.sql import SELECT_ALL, JoinType
from wutup.logging import get_logger
from wutup.query_builder.template import find_placeholder, format_value, substitute
from wutup.types.query import Circle, Interval, PaginationData

logger = get_logger(__name__)


@dataclass(frozen=True)
class JoinClause:
    """One join: kind, joined table and the condition inside ``on (...)``."""
    join_type: JoinType
    table: str
    condition: str

    def render(self) -> str:
        return f" {self.join_type.value} {self.table} on ({self.condition})"


class QueryBuilder:
    """Fluent, single-use builder for select statements.

    Filter clauses carry at most one named parameter in the ``:name`` form.
    Parameter values are substituted directly into the query text when the
    query is built; nothing is sent as a bind parameter. Values are not
    escaped, so string literals must be quoted by the caller (``like`` does
    this for prefix matches).

    Every method raises a ``QUERY_ALREADY_BUILT`` error once ``build()`` has
    run. Optional inputs given as None (filter values, circles, intervals,
    pagination, join arguments) are ignored.

    Example:
        >>> QueryBuilder().select("id", "name").from_("user") \\
        ...     .where("age > :age", 21).order("name") \\
        ...     .add_pagination(2, 0).build()
        'select id, name from user where age > 21 order by name limit 2 offset 0'
    """

    def __init__(
        self,
        time_zone: Optional[str] = None,
        location_alias: str = "v",
        distance_function: str = "get_distance_miles",
    ):
        """Create an empty builder.

        Args:
            time_zone: Zone used to render timezone-aware datetimes (UTC if None)
            location_alias: Table alias holding latitude/longitude for ``where_circle``
            distance_function: SQL function computing distance in miles
        """
        self.time_zone = time_zone
        self.location_alias = location_alias
        self.distance_function = distance_function

        self._select: Optional[str] = None
        self._from: Optional[str] = None
        self._order: Optional[str] = None
        self._pagination: Optional[str] = None
        self._joins: List[JoinClause] = []
        self._clauses: List[str] = []
        self._parameters: Dict[str, Any] = {}
        self._appended: List[str] = []
        self._interval_index: Optional[int] = None
        self._query_string: Optional[str] = None

    def _assert_not_built(self) -> None:
        if self._query_string is not None:
            raise query_already_built_error()

    def _assert_valid_query(self) -> None:
        if self._from is None:
            raise incomplete_query_error("from")

    @property
    def is_built(self) -> bool:
        return self._query_string is not None

    def append(self, text: str) -> "QueryBuilder":
        """Append raw text emitted after everything else, pagination included."""
        self._assert_not_built()
        self._appended.append(text)
        return self

    def select(self, *fields: str) -> "QueryBuilder":
        self._assert_not_built()
        if not fields:
            raise validation_error("select() requires at least one field", field="fields")
        self._select = ", ".join(fields)
        return self

    def from_(self, table_name: str) -> "QueryBuilder":
        self._assert_not_built()
        self._from = table_name
        return self

    def _add_join(self, join_type: JoinType, table_name: Optional[str], condition: Optional[str]) -> None:
        self._assert_not_built()
        if table_name is not None and condition is not None:
            self._joins.append(JoinClause(join_type, table_name, condition))

    def join_on(self, table_name: Optional[str], condition: Optional[str]) -> "QueryBuilder":
        self._add_join(JoinType.JOIN, table_name, condition)
        return self

    def inner_join_on(self, table_name: Optional[str], condition: Optional[str]) -> "QueryBuilder":
        self._add_join(JoinType.INNER_JOIN, table_name, condition)
        return self

    def order(self, order: str) -> "QueryBuilder":
        self._assert_not_built()
        self._order = order
        return self

    def where(self, condition: str, value: Any) -> "QueryBuilder":
        """Add a clause and bind the first placeholder it contains.

        For example ``where("age > :age", 21)`` adds the clause ``age > :age``
        and binds ``age`` to 21. A value of None skips the clause entirely,
        which lets callers pass optional filters without branching.
        """
        self._assert_not_built()
        if value is not None:
            self._clauses.append(condition)
            name = find_placeholder(condition)
            if name is not None:
                self._parameters[name] = value
        return self

    def like(self, condition: str, value: Any) -> "QueryBuilder":
        """Prefix match: binds ``'value%'`` to the clause's placeholder."""
        if value is None:
            return self.where(condition, None)
        return self.where(condition, f"'{value}%'")

    def where_circle(self, circle: Optional[Circle]) -> "QueryBuilder":
        """Keep rows whose location lies within ``circle.radius`` miles of its center."""
        self._assert_not_built()
        if circle is None:
            return self
        alias = self.location_alias
        return self.where(
            f"{self.distance_function}({alias}.latitude, {circle.center_latitude}, "
            f"{alias}.longitude, {circle.center_longitude}) <= :radius",
            circle.radius,
        )

    def where_interval(
        self,
        interval: Optional[Interval],
        start_column: str = "start",
        end_column: str = "end",
    ) -> "QueryBuilder":
        """Keep rows whose start and end both fall inside ``interval``.

        The interval occupies two clauses bound to ``start1``/``end1`` and
        ``start2``/``end2``. A later call replaces those clauses in place.
        """
        self._assert_not_built()
        if interval is None:
            return self
        clauses = [
            f"{start_column} between ':start1' and ':end1'",
            f"{end_column} between ':start2' and ':end2'",
        ]
        if self._interval_index is None:
            self._interval_index = len(self._clauses)
            self._clauses.extend(clauses)
        else:
            self._clauses[self._interval_index:self._interval_index + 2] = clauses
        self._parameters["start1"] = interval.start
        self._parameters["end1"] = interval.end
        self._parameters["start2"] = interval.start
        self._parameters["end2"] = interval.end
        return self

    def add_pagination(
        self,
        pagination: Union[PaginationData, int, None],
        page_number: Optional[int] = None,
    ) -> "QueryBuilder":
        """Add a ``limit ... offset ...`` suffix.

        Accepts a PaginationData, or a page size followed by a zero-based
        page number (default 0). Sizes and numbers are rendered as given, so
        ``add_pagination(0, 0)`` yields ``limit 0 offset 0``. None leaves the
        query unpaginated.
        """
        self._assert_not_built()
        if isinstance(pagination, PaginationData):
            if page_number is not None:
                raise validation_error(
                    "Page number is already part of the pagination data",
                    field="page_number",
                    value=page_number,
                )
            size, number = pagination.page_size, pagination.page_number
        elif pagination is None:
            return self
        else:
            size, number = int(pagination), int(page_number or 0)
        self._pagination = f"limit {size} offset {size * number}"
        return self

    def _render_joins(self) -> str:
        # Group by kind, kinds ordered by first appearance; stable within a kind.
        kinds: List[JoinType] = []
        for join in self._joins:
            if join.join_type not in kinds:
                kinds.append(join.join_type)
        return "".join(
            join.render()
            for kind in kinds
            for join in self._joins
            if join.join_type == kind
        )

    def build(self) -> str:
        """Render the query. May be called once per builder.

        Raises:
            WutupError: QUERY_ALREADY_BUILT on a second call,
                QUERY_INCOMPLETE when no table was given to ``from_``.
        """
        self._assert_not_built()
        self._assert_valid_query()

        query = f"select {self._select or SELECT_ALL} from {self._from}"
        query += self._render_joins()

        for index, clause in enumerate(self._clauses):
            query += (" where " if index == 0 else " and ") + clause

        if self._order is not None:
            query += f" order by {self._order}"

        query = substitute(
            query,
            self._parameters,
            partial(format_value, time_zone=self.time_zone),
        )

        if self._pagination is not None:
            query += f" {self._pagination}"
        query += "".join(self._appended)

        self._query_string = query
        logger.debug(
            "Built query",
            extra={"query": query, "parameter_count": len(self._parameters)},
        )
        return query

    @property
    def query_string(self) -> str:
        """The built query, or an empty string before ``build()``."""
        return self._query_string or ""

    @property
    def parameters(self) -> Dict[str, Any]:
        """Bound parameters by placeholder name (without the colon)."""
        return dict(self._parameters)
