from wutup.utils.datetime import format_timestamp
from wutup.utils.decorators import traced

__all__ = [
    "format_timestamp",
    "traced",
]
