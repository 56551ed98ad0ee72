"""Таксономия ошибок обработки.

Сервисы бросают исключения; на границе `BorderService` они превращаются
в неуспешный `ProcessResult` с соответствующим `ErrorKind`.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_BLUR_RADIUS = "invalid_blur_radius"
    DECODE_ERROR = "decode_error"
    PROCESSING_FAILED = "processing_failed"
    SESSION_BUSY = "session_busy"


class BlurframeError(Exception):
    """Базовое исключение проекта."""
    kind: ErrorKind = ErrorKind.PROCESSING_FAILED


class InvalidBlurRadius(BlurframeError, ValueError):
    kind = ErrorKind.INVALID_BLUR_RADIUS

    def __init__(self, value: object, minimum: int, maximum: int) -> None:
        super().__init__(f"Blur radius out of bounds: {value!r} (expected {minimum}..{maximum})")
        self.value = value


class DecodeError(BlurframeError, ValueError):
    """Данные не являются поддерживаемым изображением."""
    kind = ErrorKind.DECODE_ERROR


class ProcessingFailed(BlurframeError):
    kind = ErrorKind.PROCESSING_FAILED


class SessionBusy(BlurframeError):
    """В сессии уже выполняется обработка."""
    kind = ErrorKind.SESSION_BUSY
