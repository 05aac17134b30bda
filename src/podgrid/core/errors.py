"""Custom exceptions for podgrid."""

from __future__ import annotations


class PodgridError(Exception):
    """Base exception for all podgrid errors."""

    pass


class ConfigError(PodgridError):
    """Configuration-related errors."""

    pass


class FetchError(PodgridError):
    """A catalog or detail request did not produce usable data.

    Attributes:
        reason: Short machine-readable cause ("network", "http" or "parse").
    """

    reason = "fetch"

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """The request never got a response (DNS, connect, timeout...)."""

    reason = "network"


class HttpError(FetchError):
    """The API answered with a non-2xx status."""

    reason = "http"

    def __init__(self, message: str, status_code: int, url: str | None = None) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code


class ParseError(FetchError):
    """The response body was not valid JSON or had the wrong shape."""

    reason = "parse"
