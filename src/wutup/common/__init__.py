"""Common exceptions for wutup.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. Every error is a WutupError and
    carries structured details for logging and serialization.
"""

from wutup.common.exceptions import (
    WutupError,
    ErrorCode,
    # Helper functions
    query_already_built_error,
    incomplete_query_error,
    validation_error,
    query_execution_error,
    duplicate_key_error,
    data_integrity_error,
    resource_not_found_error,
)

__all__ = [
    # Base Exception and Error Codes
    "WutupError",
    "ErrorCode",
    # Helper functions
    "query_already_built_error",
    "incomplete_query_error",
    "validation_error",
    "query_execution_error",
    "duplicate_key_error",
    "data_integrity_error",
    "resource_not_found_error",
]
