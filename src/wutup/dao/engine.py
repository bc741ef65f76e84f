"""SQLAlchemy engine creation for the data-access layer."""

import math
from typing import Any, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from wutup.logging import get_logger
from wutup.settings.database import DatabaseSettings

logger = get_logger(__name__)

EARTH_RADIUS_MILES = 3958.8


def distance_miles(
    latitude1: Optional[float],
    latitude2: Optional[float],
    longitude1: Optional[float],
    longitude2: Optional[float],
) -> Optional[float]:
    """Great-circle (haversine) distance between two points, in miles.

    Argument order matches the SQL function used by ``where_circle``:
    both latitudes first, then both longitudes. Returns None when any
    coordinate is NULL.
    """
    if None in (latitude1, latitude2, longitude1, longitude2):
        return None
    phi1 = math.radians(latitude1)
    phi2 = math.radians(latitude2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(longitude2 - longitude1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_MILES * math.asin(min(1.0, math.sqrt(a)))


def register_sqlite_functions(engine: Engine, distance_function: str = "get_distance_miles") -> None:
    """Install the distance function on every new SQLite connection.

    Other databases are expected to provide the function themselves.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.create_function(distance_function, 4, distance_miles)


def create_database_engine(
    settings: Optional[DatabaseSettings] = None,
    distance_function: str = "get_distance_miles",
    **engine_kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine from database settings.

    Args:
        settings: Database settings; the application settings are used when omitted
        distance_function: Name under which SQLite gets the distance function
        **engine_kwargs: Extra ``create_engine`` arguments (poolclass, connect_args, ...)

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    if settings is None:
        from wutup.settings import get_settings
        app_settings = get_settings()
        settings = app_settings.database
        distance_function = app_settings.query.distance_function

    engine = create_engine(settings.url, echo=settings.echo, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        register_sqlite_functions(engine, distance_function)

    logger.info(f"Created {engine.dialect.name} engine")
    return engine
