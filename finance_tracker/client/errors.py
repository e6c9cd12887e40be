"""
API Client Errors

Two kinds of failure, one base class:

- ApiTransportError: no usable response (connection refused, DNS, timeout,
  a success status with a body that is not JSON)
- ApiResponseError: the server answered with a non-2xx status

Callers that only need a message catch ApiError and show str(error).
Callers that care about the status look at ApiResponseError.status_code.
"""

from typing import Any, Optional


class ApiError(Exception):
    """Base exception for every failed API call."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.method = method
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ApiTransportError(ApiError):
    """The request did not produce a usable response."""
    pass


class ApiResponseError(ApiError):
    """
    The server responded with an error status.

    The message is the server's `error` field when it sent one, otherwise
    the HTTP status line.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        status_text: str = "",
        body: Any = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.status_text = status_text
        self.body = body
        super().__init__(message, method=method, url=url, status_code=status_code)

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404
