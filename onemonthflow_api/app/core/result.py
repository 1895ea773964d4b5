"""
Outcome envelope returned by every service operation.

A ``Result`` is one of four immutable variants:

* :class:`Success` carries the payload and an optional message,
* :class:`ValidationError` means the caller sent bad input,
* :class:`NotFoundError` means the addressed row does not exist,
* :class:`Failure` wraps an unexpected infrastructure error.

The three error variants never carry a payload, and ``Success`` always
reports ``ErrorKind.NONE``, so an inconsistent combination cannot be
constructed.  Build results through the factory methods on
:class:`Result`::

    return Result.not_found(f"Project with ID {project_id} not found.")

Callers branch on ``is_success`` and use ``error_kind`` to tell client
mistakes from server faults without parsing the message.

Note that the variants are plain values, not exceptions.  Expected
conditions are returned; only :func:`service_call` turns stray
exceptions into ``Failure``.
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, ClassVar, Generic, Optional, TypeVar


T = TypeVar("T")


class ErrorKind(str, Enum):
    NONE = "none"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


class ResultError(Exception):
    """Raised by :meth:`Result.unwrap` on a non-success result."""

    def __init__(self, result: "Result[Any]") -> None:
        super().__init__(result.message)
        self.result = result


class Result(Generic[T]):
    """Common interface of the four variants."""

    is_success: ClassVar[bool] = False
    error_kind: ClassVar[ErrorKind]
    message: Optional[str]

    @property
    def data(self) -> Optional[T]:
        return None

    @staticmethod
    def success(data: Any = None, message: Optional[str] = None) -> "Success[Any]":
        return Success(data, message)

    @staticmethod
    def validation_error(message: str) -> "ValidationError":
        return ValidationError(message)

    @staticmethod
    def not_found(message: str = "Resource not found.") -> "NotFoundError":
        return NotFoundError(message)

    @staticmethod
    def failure(message: str) -> "Failure":
        return Failure(message)

    def unwrap(self) -> T:
        """Return the payload or raise :class:`ResultError`."""
        if not self.is_success:
            raise ResultError(self)
        return self.data


@dataclass(frozen=True)
class Success(Result[T]):
    payload: Optional[T] = None
    message: Optional[str] = None

    is_success: ClassVar[bool] = True
    error_kind: ClassVar[ErrorKind] = ErrorKind.NONE

    @property
    def data(self) -> Optional[T]:
        return self.payload


@dataclass(frozen=True)
class ValidationError(Result[Any]):
    message: str

    error_kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION


@dataclass(frozen=True)
class NotFoundError(Result[Any]):
    message: str = "Resource not found."

    error_kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND


@dataclass(frozen=True)
class Failure(Result[Any]):
    message: str

    error_kind: ClassVar[ErrorKind] = ErrorKind.FAILURE


def service_call(action: str) -> Callable[[Callable[..., Awaitable[Result[Any]]]], Callable[..., Awaitable[Result[Any]]]]:
    """Convert any exception escaping a service coroutine into ``Failure``.

    ``action`` prefixes the failure message, e.g. ``"Error creating
    project"`` gives ``"Error creating project: <exception text>"``.
    """

    def decorator(func: Callable[..., Awaitable[Result[Any]]]) -> Callable[..., Awaitable[Result[Any]]]:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Result[Any]:
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                logger.exception("%s", action)
                return Result.failure(f"{action}: {exc}")

        return wrapper

    return decorator
