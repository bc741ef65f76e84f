"""SQL and query-related constants.

Shared by the query builder and the data-access layer.
"""

import re
from enum import Enum


class JoinType(str, Enum):
    """Join kinds the query builder can render.

    The value is the SQL keyword emitted before the joined table.
    """
    JOIN = "join"
    INNER_JOIN = "inner join"


# Parameters must start with a lowercase ASCII letter.
PARAMETER_PATTERN = re.compile(r":([a-z]\w*)", re.ASCII)

SELECT_ALL = "*"
