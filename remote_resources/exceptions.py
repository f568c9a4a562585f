"""
Exception hierarchy for the remote_resources client.

This module provides custom exceptions and the error mapping utilities used to
turn aiohttp failures and HTTP status codes into typed errors. The CRUD client
converts transport errors into ``ResourceResult`` values; everything else
propagates to the caller.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Union

import aiohttp


class ResourceError(Exception):
    """
    Base exception for all remote resource operations.

    Attributes:
        message: Human-readable error message
        url: URL that caused the error (if applicable)
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


class InvalidInputError(ResourceError):
    """Raised when an identifier or payload is rejected before any request."""

    def __init__(
        self, message: str, value: Any = None, resource_type: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.value = value
        self.resource_type = resource_type


class ConfigurationError(ResourceError):
    """Raised for unreadable configuration files or missing credentials."""

    pass


class TransportError(ResourceError):
    """
    Base class for failures talking to the remote API.

    Anything raised by a transport implementation must derive from this class
    so the client can report it as a transport failure.
    """

    pass


class NetworkError(TransportError):
    """
    Raised for network-related errors.

    Covers DNS resolution failures and other low-level problems that prevent
    a request from completing.
    """

    pass


class TimeoutError(TransportError):
    """
    Raised when a request times out.

    Attributes:
        timeout_value: The timeout value that was exceeded (in seconds)
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout_value: Optional[float] = None,
    ) -> None:
        super().__init__(message, url)
        self.timeout_value = timeout_value


class ConnectionError(TransportError):
    """Raised when the client cannot establish a connection to the API."""

    pass


class ContentError(TransportError):
    """Raised when a response body is not a JSON object."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> None:
        super().__init__(message, url)
        self.content_type = content_type


class HTTPError(TransportError):
    """Raised for unsuccessful HTTP status codes."""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        response_text: Optional[str] = None,
    ) -> None:
        super().__init__(message, url)
        self.status_code = status_code
        self.headers = headers or {}
        self.response_text = response_text


class RateLimitError(HTTPError):
    """Raised when the API rate limits the client."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        retry_after: Optional[Union[int, float]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message, 429, url, headers)
        self.retry_after = retry_after


class AuthenticationError(HTTPError):
    """Raised for authentication-related errors (401, 403)."""

    pass


class NotFoundError(HTTPError):
    """Raised when a resource does not exist or was deleted (404)."""

    pass


class ServerError(HTTPError):
    """Raised for server errors (5xx)."""

    pass


class ErrorHandler:
    """
    Utility class for categorizing transport errors.

    Converts aiohttp exceptions and HTTP status codes to the exceptions above.
    """

    @staticmethod
    def handle_aiohttp_error(
        error: Exception, url: Optional[str] = None
    ) -> TransportError:
        """
        Convert aiohttp exceptions to TransportError subclasses.

        Args:
            error: The original aiohttp exception
            url: The URL that caused the error

        Returns:
            Appropriate TransportError subclass
        """
        if isinstance(error, asyncio.TimeoutError):
            return TimeoutError(f"Request timed out: {error}", url=url)

        elif isinstance(error, aiohttp.ClientResponseError):
            return ErrorHandler.handle_http_status_error(
                error.status, error.message or str(error), url
            )

        elif isinstance(error, aiohttp.ClientSSLError):
            return ConnectionError(f"SSL error: {error}", url=url)

        elif isinstance(error, aiohttp.ClientConnectionError):
            return ConnectionError(f"Connection error: {error}", url=url)

        elif isinstance(error, aiohttp.ClientPayloadError):
            return ContentError(f"Payload error: {error}", url=url)

        else:
            return NetworkError(f"Unexpected network error: {error}", url=url)

    @staticmethod
    def handle_http_status_error(
        status_code: int,
        message: str,
        url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        response_text: Optional[str] = None,
    ) -> HTTPError:
        """
        Create the HTTPError subclass matching a status code.

        Args:
            status_code: HTTP status code
            message: Error message
            url: The URL that caused the error
            headers: Response headers
            response_text: Response body text

        Returns:
            Appropriate HTTPError subclass
        """
        if status_code == 401:
            return AuthenticationError(
                f"Authentication required: {message}",
                status_code,
                url,
                headers,
                response_text,
            )

        elif status_code == 403:
            return AuthenticationError(
                f"Access forbidden: {message}", status_code, url, headers, response_text
            )

        elif status_code == 404:
            return NotFoundError(
                f"Resource not found: {message}",
                status_code,
                url,
                headers,
                response_text,
            )

        elif status_code == 429:
            retry_after = None
            if headers:
                retry_after_header = headers.get("Retry-After") or headers.get(
                    "retry-after"
                )
                if retry_after_header:
                    try:
                        retry_after = float(retry_after_header)
                    except ValueError:
                        pass

            return RateLimitError(
                f"Rate limit exceeded: {message}", url, retry_after, headers
            )

        elif 500 <= status_code < 600:
            return ServerError(
                f"Server error: {message}", status_code, url, headers, response_text
            )

        else:
            return HTTPError(message, status_code, url, headers, response_text)


__all__ = [
    "ResourceError",
    "InvalidInputError",
    "ConfigurationError",
    "TransportError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "ContentError",
    "HTTPError",
    "RateLimitError",
    "AuthenticationError",
    "NotFoundError",
    "ServerError",
    "ErrorHandler",
]
