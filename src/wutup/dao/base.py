from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from wutup.common.exceptions import (
    data_integrity_error,
    duplicate_key_error,
    query_execution_error,
    validation_error,
)
from wutup.logging import get_logger
from wutup.query_builder import QueryBuilder, QueryBuilderFactory
from wutup.settings.query import QuerySettings
from wutup.types.query import PaginationData
from wutup.utils.datetime import format_timestamp
from wutup.utils.decorators import traced

logger = get_logger(__name__)

# Appended to ``like`` conditions whose value comes from ``BaseDao.like_prefix``.
LIKE_ESCAPE = "escape '\\'"

_UNIQUE_VIOLATION_MARKERS = ("unique", "duplicate", "primary key")


class BaseDao:
    """SQLAlchemy-backed base class for the data-access objects.

    Two kinds of SQL go through this class:

    - CRUD statements written with SQLAlchemy bind parameters
      (``:id`` style) and run through ``text()``.
    - Finder queries produced by the QueryBuilder. Their values are already
      inlined, so they are sent to the driver as-is (no bind processing).

    A connection is opened per call: ``engine.connect()`` for reads and
    ``engine.begin()`` for writes. DAOs hold no per-call state and can be
    shared.

    Attributes:
        resource_type: Entity name used in error details
    """

    resource_type: str = "resource"

    def __init__(self, engine: Engine, settings: Optional[QuerySettings] = None):
        """Initialize the DAO.

        Args:
            engine: SQLAlchemy engine
            settings: Query settings; the application settings are used when omitted
        """
        self.engine = engine
        self._settings = settings

    @property
    def settings(self) -> QuerySettings:
        if self._settings is None:
            from wutup.settings import get_settings
            self._settings = get_settings().query
        return self._settings

    def query_builder(self) -> QueryBuilder:
        """A fresh builder configured from this DAO's settings."""
        return QueryBuilderFactory.create(self.settings)

    def timestamp(self, value: Optional[datetime]) -> Optional[str]:
        """Render a datetime for storage in the configured time zone."""
        if value is None:
            return None
        return format_timestamp(value, self.settings.time_zone)

    def resolve_pagination(self, pagination: Optional[PaginationData]) -> PaginationData:
        """Apply the default page size and enforce the maximum one."""
        if pagination is None:
            return PaginationData(page_number=0, page_size=self.settings.default_page_size)
        if pagination.page_size > self.settings.max_page_size:
            raise validation_error(
                f"Page size {pagination.page_size} exceeds maximum of {self.settings.max_page_size}",
                field="page_size",
                value=pagination.page_size,
            )
        return pagination

    @staticmethod
    def quote(value: Optional[str]) -> Optional[str]:
        """Render a string as a SQL literal for a builder condition.

        Embedded single quotes are doubled so the value cannot end the literal.
        None stays None, which the builder treats as "no filter".
        """
        if value is None:
            return None
        return "'" + value.replace("'", "''") + "'"

    @staticmethod
    def like_prefix(value: Optional[str]) -> Optional[str]:
        """Escape a prefix for ``QueryBuilder.like``.

        ``%`` and ``_`` match literally and quotes are doubled. The condition
        must end with ``LIKE_ESCAPE``.
        """
        if value is None:
            return None
        escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return escaped.replace("'", "''")

    @contextmanager
    def _translate_errors(self, sql: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            reason = str(e.orig).lower()
            if any(marker in reason for marker in _UNIQUE_VIOLATION_MARKERS):
                raise duplicate_key_error(
                    f"Duplicate {self.resource_type}",
                    resource_type=self.resource_type,
                    cause=e,
                )
            raise data_integrity_error(
                f"Constraint violated while writing {self.resource_type}",
                resource_type=self.resource_type,
                cause=e,
            )
        except SQLAlchemyError as e:
            raise query_execution_error(sql, e)

    def _run(self, conn: Connection, sql: str, params: Optional[Mapping[str, Any]]):
        return conn.execute(text(sql), dict(params or {}))

    def fetch_all(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        with self._translate_errors(sql):
            with self.engine.connect() as conn:
                return [dict(row) for row in self._run(conn, sql, params).mappings()]

    def fetch_one(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        with self._translate_errors(sql):
            with self.engine.connect() as conn:
                row = self._run(conn, sql, params).mappings().first()
                return dict(row) if row is not None else None

    def scalar(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        with self._translate_errors(sql):
            with self.engine.connect() as conn:
                return self._run(conn, sql, params).scalar()

    def execute(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """Run a write statement in its own transaction.

        Returns:
            Number of rows affected
        """
        with self._translate_errors(sql):
            with self.engine.begin() as conn:
                return self._run(conn, sql, params).rowcount

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection inside a transaction for multi-statement writes."""
        with self._translate_errors(f"{self.resource_type} transaction"):
            with self.engine.begin() as conn:
                yield conn

    def next_id(self, conn: Connection, table: str) -> int:
        """Next free primary key of ``table``: one past the current maximum."""
        return int(self._run(conn, f"select coalesce(max(id), 0) + 1 from {table}", None).scalar())

    @traced("wutup.dao.fetch_built")
    def fetch_built(self, builder: QueryBuilder) -> List[Dict[str, Any]]:
        """Build the builder's query and return all rows as dictionaries."""
        sql = builder.build()
        logger.debug("Running built query", extra={"query": sql})
        with self._translate_errors(sql):
            with self.engine.connect() as conn:
                result = conn.execution_options(no_parameters=True).exec_driver_sql(sql)
                return [dict(row) for row in result.mappings()]
