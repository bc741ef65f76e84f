from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .base import WutupBaseSettings
from .database import DatabaseSettings
from .query import QuerySettings


class WutupSettings(WutupBaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    database: DatabaseSettings = Field(
        default_factory=DatabaseSettings,
        description="Relational store configuration"
    )
    query: QuerySettings = Field(
        default_factory=QuerySettings,
        description="Query construction defaults"
    )


_settings: Optional[WutupSettings] = None


def get_settings(force_reload: bool = False) -> WutupSettings:
    """Get the singleton settings instance for the application.

    Settings are loaded from environment variables (and a ``.env`` file)
    on first access and reused afterwards.

    Args:
        force_reload: If True, creates a new instance even if one already
                     exists. Useful for testing or when environment
                     variables have changed.

    Returns:
        WutupSettings: The singleton settings instance

    Example:
        ```python
        settings = get_settings()
        page_size = settings.query.default_page_size
        ```
    """
    global _settings

    if _settings is None or force_reload:
        _settings = WutupSettings()

    return _settings


def _reload_settings() -> WutupSettings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
