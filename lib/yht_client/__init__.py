from .client import YhtClient, init_client
from .config_types import ClientConfig
from .errors import (
    ApiError,
    ArgumentError,
    AuthError,
    DecodeError,
    EncodingError,
    NetworkError,
    YhtClientError,
)
from .notify import AsyncNotifyResult, answer_notification, parse_notification
from .token_manager import TokenManager

__all__ = [
    "YhtClient",
    "init_client",
    "ClientConfig",
    "TokenManager",
    "AsyncNotifyResult",
    "parse_notification",
    "answer_notification",
    "YhtClientError",
    "ArgumentError",
    "EncodingError",
    "NetworkError",
    "DecodeError",
    "ApiError",
    "AuthError",
]
