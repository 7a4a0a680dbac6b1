from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir
from yht_client.constants import API_GATEWAY, API_GATEWAY_V4, AUTH_GATEWAY

APP_NAME = "yht"
CONFIG_FILENAME = "config.toml"
ENV_APP_ID = "YHT_APP_ID"
ENV_APP_KEY = "YHT_APP_KEY"
ENV_PASSWORD = "YHT_PASSWORD"
DEFAULT_TIMEOUT_S = 15.0


@dataclass
class GatewayConfig:
    api: str = API_GATEWAY
    api_v4: str = API_GATEWAY_V4
    auth: str = AUTH_GATEWAY


@dataclass
class AuthConfig:
    app_key: str = ""
    password: str = ""
    auth_id: str = ""
    auth_pwd: str = ""


@dataclass
class AppConfig:
    app_id: str = ""
    gateways: GatewayConfig = field(default_factory=GatewayConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    timeout_s: float = DEFAULT_TIMEOUT_S


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_base_url(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        return f"http://{value}"
    return f"https://{value}"


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "app_id": cfg.app_id,
        "timeout_s": float(cfg.timeout_s),
        "gateways": {
            "api": cfg.gateways.api,
            "api_v4": cfg.gateways.api_v4,
            "auth": cfg.gateways.auth,
        },
        "auth": {
            "app_key": cfg.auth.app_key,
            "password": cfg.auth.password,
            "auth_id": cfg.auth.auth_id,
            "auth_pwd": cfg.auth.auth_pwd,
        },
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    cfg.app_id = str(data.get("app_id") or "").strip()
    timeout = data.get("timeout_s")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        cfg.timeout_s = float(timeout)

    gateways_raw = data.get("gateways") or {}
    if isinstance(gateways_raw, dict):
        cfg.gateways.api = normalize_base_url(str(gateways_raw.get("api") or "")) or API_GATEWAY
        cfg.gateways.api_v4 = normalize_base_url(str(gateways_raw.get("api_v4") or "")) or API_GATEWAY_V4
        cfg.gateways.auth = normalize_base_url(str(gateways_raw.get("auth") or "")) or AUTH_GATEWAY

    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth.app_key = str(auth_raw.get("app_key") or "")
        cfg.auth.password = str(auth_raw.get("password") or "")
        cfg.auth.auth_id = str(auth_raw.get("auth_id") or "")
        cfg.auth.auth_pwd = str(auth_raw.get("auth_pwd") or "")
    return cfg


def apply_env(cfg: AppConfig) -> AppConfig:
    app_id = os.getenv(ENV_APP_ID, "").strip()
    app_key = os.getenv(ENV_APP_KEY, "").strip()
    password = os.getenv(ENV_PASSWORD, "").strip()
    if app_id:
        cfg.app_id = app_id
    if app_key:
        cfg.auth.app_key = app_key
    if password:
        cfg.auth.password = password
    return cfg


def load_config(*, env: bool = True) -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        cfg = from_toml(data)
    except FileNotFoundError:
        cfg = default_config()
    return apply_env(cfg) if env else cfg


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
