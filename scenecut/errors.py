# scenecut/errors.py
from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Optional


class ErrorCode(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    VIDEO_NOT_READY = "VIDEO_NOT_READY"
    PROCESSING_ERROR = "PROCESSING_ERROR"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    SEEK_FAILED = "SEEK_FAILED"
    ENCODING_ERROR = "ENCODING_ERROR"


class SceneDetectionError(Exception):
    """Base error for everything raised by scenecut. Carries a code and optional details."""

    default_code: ErrorCode = ErrorCode.PROCESSING_ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code.value}] {self.message} ({self.details})"
        return f"[{self.code.value}] {self.message}"


class InvalidInputError(SceneDetectionError):
    default_code = ErrorCode.INVALID_INPUT


class VideoNotReadyError(SceneDetectionError):
    default_code = ErrorCode.VIDEO_NOT_READY


class FrameExtractionError(SceneDetectionError):
    default_code = ErrorCode.SEEK_FAILED


def coerce_option(value: Any, cast: Callable[[Any], Any], name: str) -> Any:
    """cast(value), or InvalidInputError naming the option when it cannot be converted."""
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"Option '{name}' has an invalid value: {value!r}",
            details={name: value, "expected": getattr(cast, "__name__", str(cast))},
        ) from e


class ProcessingError(SceneDetectionError):
    """Wraps an unexpected internal failure; the original exception is kept in `cause`."""

    default_code = ErrorCode.PROCESSING_ERROR

    def __init__(self, message: str, cause: Optional[BaseException] = None, details: Any = None) -> None:
        super().__init__(message, ErrorCode.PROCESSING_ERROR, details)
        self.cause = cause
