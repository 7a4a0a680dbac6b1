from __future__ import annotations


class YhtClientError(Exception):
    """Base client error."""


class ArgumentError(YhtClientError, ValueError):
    """Required input is missing or empty."""


class EncodingError(YhtClientError, ValueError):
    """Request could not be serialized."""


class NetworkError(YhtClientError):
    """Transport/network layer error."""


class DecodeError(YhtClientError):
    """Response body is not the expected JSON envelope."""


class ApiError(YhtClientError):
    def __init__(
            self,
            status_code: int,
            message: str,
            details: str | None = None,
            *,
            sub_code: int | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.sub_code = sub_code
        self.details = details


class AuthError(ApiError):
    """Platform token could not be obtained."""
