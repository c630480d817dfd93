"""Outcome of a resolver operation and its two renderings.

Mutations render a Result as an envelope (`success`, payload, `message`);
read queries unwrap it and raise on failure. Exceptions are turned into
failures in exactly one place, `capture`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from .exceptions import DirectoryError, OperationError
from .schemas import describe_validation_error

logger = logging.getLogger("employee_directory.result")

T = TypeVar("T")
EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)

# Errors that describe a bad request or a store failure. Anything else is a bug:
# envelopes still report it, but unwrap re-raises it unchanged.
EXPECTED_ERRORS = (DirectoryError, SQLAlchemyError, ValueError)


@dataclass(frozen=True)
class Failure:
    message: str
    error: BaseException | None = None


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    message: str | None = None
    failure: Failure | None = None

    @classmethod
    def ok(cls, value: T | None = None, message: str | None = None) -> "Result[T]":
        return cls(value=value, message=message)

    @classmethod
    def fail(cls, message: str, error: BaseException | None = None) -> "Result[T]":
        return cls(failure=Failure(message, error), message=message)

    @property
    def success(self) -> bool:
        return self.failure is None

    def to_envelope(self, envelope: type[EnvelopeT], payload_field: str | None = None) -> EnvelopeT:
        """Render as `{success, <payload_field>, message}`."""

        fields = {"success": self.success, "message": self.message}
        if payload_field is not None and self.success:
            fields[payload_field] = self.value
        return envelope(**fields)

    def unwrap(self) -> T | None:
        """Return the value or raise OperationError carrying the failure message."""

        if self.failure is None:
            return self.value
        if self.failure.error is not None and not isinstance(self.failure.error, EXPECTED_ERRORS):
            raise self.failure.error
        raise OperationError(self.failure.message) from self.failure.error


def error_message(exc: BaseException) -> str:
    if isinstance(exc, ValidationError):
        return describe_validation_error(exc)
    if isinstance(exc, DirectoryError):
        return exc.message
    if isinstance(exc, SQLAlchemyError):
        return str(getattr(exc, "orig", None) or exc)
    return str(exc)


async def capture(operation: str, run: Callable[[], Awaitable[Result[T]]]) -> Result[T]:
    """Run `run` and turn any exception into a failed Result."""

    try:
        return await run()
    except EXPECTED_ERRORS as exc:
        logger.warning("%s failed: %s", operation, error_message(exc))
        return Result.fail(error_message(exc), exc)
    except Exception as exc:
        logger.exception("%s raised an unexpected error", operation)
        return Result.fail(error_message(exc), exc)
