from __future__ import annotations
from typing import Any, Optional


class WattpadException(Exception):
    """Base class for every error raised by this package."""


class APIException(WattpadException):
    """Non-2xx HTTP status or an error payload returned by the API."""

    def __init__(self, message: str, response: Any = None):
        if response is not None:
            message = f"{message} (API Response: {response})"
        super().__init__(message)
        self.response = response


class NotFoundException(WattpadException):

    def __init__(self, url: str):
        super().__init__(f"Error 404: The requested resource was not found. URL: {url}")
        self.url = url


class NotJsonException(WattpadException):
    """Response body could not be read as a JSON object."""

    BODY_PREVIEW = 500

    def __init__(self, message: str, body: Optional[str] = None):
        self.body = body
        preview = body if body is not None else "<Response body not available>"
        if len(preview) > self.BODY_PREVIEW:
            preview = preview[:self.BODY_PREVIEW] + "..."
        super().__init__(f"{message} | Response Body: {preview}")


class ParseException(WattpadException):
    """JSON payload is missing fields a model requires."""


class CacheInitializationException(WattpadException):
    pass


__all__ = [
    "WattpadException",
    "APIException",
    "NotFoundException",
    "NotJsonException",
    "ParseException",
    "CacheInitializationException",
]
