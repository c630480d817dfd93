"""Formatting of raised errors into protocol-level error entries."""
import traceback
from typing import Any

from pydantic import ValidationError

from .exceptions import DirectoryError
from .schemas import describe_validation_error

INTERNAL_ERROR_MESSAGE = "Internal server error."


def format_error(exc: BaseException, operation: str, include_trace: bool = False) -> dict[str, Any]:
    """Build the `errors` entry for a failed operation.

    Stack traces are internal detail and are attached only when explicitly
    enabled. Unexpected exceptions are reported with a generic message unless
    traces are on.
    """

    if isinstance(exc, ValidationError):
        message = describe_validation_error(exc)
    elif isinstance(exc, DirectoryError):
        message = exc.message
    elif include_trace:
        message = str(exc) or exc.__class__.__name__
    else:
        message = INTERNAL_ERROR_MESSAGE

    entry: dict[str, Any] = {"message": message, "path": [operation]}
    if include_trace:
        entry["extensions"] = {"stacktrace": traceback.format_exception(exc)}
    return entry
