from wutup.constants.sql import PARAMETER_PATTERN, SELECT_ALL, JoinType

__all__ = [
    "JoinType",
    "PARAMETER_PATTERN",
    "SELECT_ALL",
]
