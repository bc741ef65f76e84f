from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for wutup operations.

    The error code identifies the error category so callers can branch on
    it without a dedicated exception class per case. Each category has its
    own prefix.

    Attributes:
        QUERY_*: Query construction misuse (builder state errors)
        VALIDATION_*: Input validation errors
        EXECUTION_*: Errors raised while running SQL
        RESOURCE_*: Missing rows or objects
        DATA_*: Data integrity errors
    """
    # Query construction errors
    QUERY_ALREADY_BUILT = "QUERY_001"
    QUERY_INCOMPLETE = "QUERY_002"

    # Validation errors
    INVALID_ARGUMENT = "VALIDATION_002"

    # Execution errors
    EXECUTION_ERROR = "EXECUTION_001"
    QUERY_EXECUTION_ERROR = "EXECUTION_002"

    # Resource errors
    RESOURCE_NOT_FOUND = "RESOURCE_001"

    # Data errors
    DUPLICATE_KEY_ERROR = "DATA_001"
    DATA_INTEGRITY_ERROR = "DATA_002"


class WutupError(Exception):
    """Base exception for all wutup errors.

    A single exception class categorized by error code instead of a deep
    hierarchy of exception types.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXECUTION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize wutup error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from wutup.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": error_code.value,
                "error_details": self.details,
            },
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


# Helper functions for common error scenarios
def query_already_built_error() -> WutupError:
    """Create the error raised when a builder is used after ``build()``."""
    return WutupError(
        message="The query has already been built",
        error_code=ErrorCode.QUERY_ALREADY_BUILT,
    )


def incomplete_query_error(missing: str = "from") -> WutupError:
    """Create the error raised when ``build()`` lacks a target table.

    Args:
        missing: Name of the builder call that was never made

    Returns:
        WutupError with QUERY_INCOMPLETE code
    """
    return WutupError(
        message="The query does not have minimum query arguments",
        error_code=ErrorCode.QUERY_INCOMPLETE,
        details={"missing": missing},
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> WutupError:
    """Create a validation error.

    Args:
        message: Error message
        field: Field that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        WutupError with INVALID_ARGUMENT code
    """
    details = kwargs.get('details', {})
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)

    return WutupError(
        message=message,
        error_code=ErrorCode.INVALID_ARGUMENT,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def query_execution_error(
    query: str,
    original_error: Exception,
    **kwargs
) -> WutupError:
    """Create a query execution error.

    Args:
        query: SQL query that failed
        original_error: The underlying exception
        **kwargs: Additional error details

    Returns:
        WutupError with QUERY_EXECUTION_ERROR code
    """
    details = kwargs.get('details', {})
    details["query"] = query[:500] + "..." if len(query) > 500 else query

    return WutupError(
        message=f"Query execution failed: {str(original_error)}",
        error_code=ErrorCode.QUERY_EXECUTION_ERROR,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def duplicate_key_error(
    message: str,
    resource_type: Optional[str] = None,
    resource_id: Any = None,
    **kwargs
) -> WutupError:
    """Create a duplicate key error.

    Args:
        message: Error message
        resource_type: Type of entity being created (user, event, ...)
        resource_id: Conflicting key
        **kwargs: Additional error details

    Returns:
        WutupError with DUPLICATE_KEY_ERROR code
    """
    details = kwargs.get('details', {})
    if resource_type:
        details["resource_type"] = resource_type
    if resource_id is not None:
        details["resource_id"] = str(resource_id)

    return WutupError(
        message=message,
        error_code=ErrorCode.DUPLICATE_KEY_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def resource_not_found_error(
    message: str,
    resource_type: Optional[str] = None,
    resource_id: Any = None,
    **kwargs
) -> WutupError:
    """Create a resource not found error.

    Args:
        message: Error message
        resource_type: Type of entity (user, event, venue, ...)
        resource_id: Key of the missing entity
        **kwargs: Additional error details

    Returns:
        WutupError with RESOURCE_NOT_FOUND code
    """
    details = kwargs.get('details', {})
    if resource_type:
        details["resource_type"] = resource_type
    if resource_id is not None:
        details["resource_id"] = str(resource_id)

    return WutupError(
        message=message,
        error_code=ErrorCode.RESOURCE_NOT_FOUND,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def data_integrity_error(
    message: str,
    resource_type: Optional[str] = None,
    **kwargs
) -> WutupError:
    """Create a data integrity error for constraint violations other than duplicates.

    Args:
        message: Error message
        resource_type: Type of entity being written
        **kwargs: Additional error details

    Returns:
        WutupError with DATA_INTEGRITY_ERROR code
    """
    details = kwargs.get('details', {})
    if resource_type:
        details["resource_type"] = resource_type

    return WutupError(
        message=message,
        error_code=ErrorCode.DATA_INTEGRITY_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
