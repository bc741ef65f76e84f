"""Query builder module for SQL generation.

Builders only generate SQL strings; executing them is the job of the
data-access layer (``wutup.dao``).

Placeholders:
    Filter clauses name their parameter with a colon token that starts with
    a lowercase ASCII letter (``:age``, ``:venueId``). When the query is
    built, the first occurrence of each bound token is replaced by the
    value's text form. Values are inlined as-is, not escaped.

Example:
    >>> from wutup.query_builder import QueryBuilder
    >>> QueryBuilder().from_("user").where("age > :age", 21).build()
    'select * from user where age > 21'

See Also:
    - wutup.query_builder.template: placeholder parsing and rendering
    - wutup.dao: finders that execute built queries
"""

from wutup.query_builder.builder import JoinClause, QueryBuilder
from wutup.query_builder.factory import QueryBuilderFactory, get_query_builder
from wutup.query_builder.template import (
    Placeholder,
    find_placeholder,
    format_value,
    parse_segments,
    render_segments,
    substitute,
)

__all__ = [
    "QueryBuilder",
    "JoinClause",
    "QueryBuilderFactory",
    "get_query_builder",
    "Placeholder",
    "find_placeholder",
    "format_value",
    "parse_segments",
    "render_segments",
    "substitute",
]
