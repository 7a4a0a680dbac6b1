from __future__ import annotations
from dataclasses import dataclass

from .constants import AUTH_GATEWAY, API_GATEWAY, API_GATEWAY_V4, TOKEN_REFRESH_INTERVAL_S


@dataclass(frozen=True)
class ClientConfig:
    app_id: str
    app_key: str = ""
    password: str = ""
    api_gateway: str = API_GATEWAY
    api_gateway_v4: str = API_GATEWAY_V4
    auth_gateway: str = AUTH_GATEWAY
    auth_id: str = ""
    auth_pwd: str = ""
    timeout_s: float = 15.0
    token_refresh_interval_s: float = TOKEN_REFRESH_INTERVAL_S
