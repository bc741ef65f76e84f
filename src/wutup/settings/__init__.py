"""Settings module providing configuration management for wutup.

Built on Pydantic Settings, with each domain in its own file:

    - base.py: WutupBaseSettings, shared model config and common fields
    - database.py: DatabaseSettings (DATABASE_ prefix)
    - query.py: QuerySettings (QUERY_ prefix)
    - main.py: WutupSettings aggregator and the get_settings() singleton

Configuration Sources (precedence order):
    1. Environment Variables (highest priority)
    2. ``.env`` file
    3. Default Values in code (lowest priority)

Quick Start:
    >>> from wutup.settings import get_settings
    >>> settings = get_settings()
    >>> settings.query.max_page_size
    100
"""

from .main import WutupSettings, get_settings, _reload_settings
from .base import WutupBaseSettings
from .database import DatabaseSettings
from .query import QuerySettings

__all__ = [
    "get_settings",
    "WutupSettings",
    "WutupBaseSettings",
    "DatabaseSettings",
    "QuerySettings",
]
