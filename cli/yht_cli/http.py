from __future__ import annotations

from yht_client import YhtClient
from yht_client.config_types import ClientConfig

from .config import AppConfig


def make_client(cfg: AppConfig) -> YhtClient:
    return YhtClient(
        ClientConfig(
            app_id=cfg.app_id,
            app_key=cfg.auth.app_key,
            password=cfg.auth.password,
            api_gateway=cfg.gateways.api,
            api_gateway_v4=cfg.gateways.api_v4,
            auth_gateway=cfg.gateways.auth,
            auth_id=cfg.auth.auth_id,
            auth_pwd=cfg.auth.auth_pwd,
            timeout_s=cfg.timeout_s,
        )
    )
