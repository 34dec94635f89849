"""
Centralized error handling for the application.
"""

import functools
from typing import Any, Awaitable, Callable, Optional, Set, TypeVar

from pydantic import ValidationError

from yt_normalizer.models.schemas import OperationParams
from yt_normalizer.utils.logger import logging

T = TypeVar("T")

NO_TRANSCRIPT_MESSAGE = "No transcript available for this video"


def describe_error(error: BaseException) -> str:
    """Return the message of an exception, or its class name when it has none."""
    message = str(error)
    return message if message else type(error).__name__


class YouTubeServiceError(Exception):
    """Base class for every error raised by the service."""


class InitializationError(YouTubeServiceError):
    """The shared YouTube client could not be constructed."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Failed to initialize YouTube service: {describe_error(cause)}")


class OperationError(YouTubeServiceError):
    """An operation failed; tagged with the operation name and the original message."""

    def __init__(self, operation: str, cause: Any):
        self.operation = operation
        self.cause = cause
        detail = describe_error(cause) if isinstance(cause, BaseException) else str(cause)
        super().__init__(f"Failed to {operation}: {detail}")


class TranscriptUnavailableError(OperationError):
    """The video has no caption tracks at all."""

    def __init__(self, video_id: Optional[str] = None):
        self.video_id = video_id
        super().__init__("get transcript", NO_TRANSCRIPT_MESSAGE)


def _input_model_names() -> Set[str]:
    names, pending = set(), [OperationParams]
    while pending:
        model = pending.pop()
        names.add(model.__name__)
        pending.extend(model.__subclasses__())
    return names


def is_input_error(error: ValidationError) -> bool:
    """True when the validation error comes from an operation input model."""
    return error.title in _input_model_names()


def operation(name: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Wrap an async service method so unexpected failures surface as OperationError.

    Errors already raised by the service and validation errors of the input
    models pass through unchanged. A result model that fails to build from
    upstream data is an operation failure like any other.

    Args:
        name: Human readable operation name used in the message prefix

    Returns:
        Decorator for coroutine functions
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except YouTubeServiceError:
                raise
            except Exception as e:
                if isinstance(e, ValidationError) and is_input_error(e):
                    raise
                logging.error(f"Failed to {name}: {describe_error(e)}")
                raise OperationError(name, e) from e

        wrapper.operation_name = name
        return wrapper

    return decorator
