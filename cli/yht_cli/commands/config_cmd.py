from __future__ import annotations

import typer

from .. import console
from ..config import config_path, load_config, normalize_base_url, save_config

app = typer.Typer(help="Show or update SDK credentials and gateways.")


def _mask(value: str) -> str:
    return "(set)" if value else "(empty)"


@app.command("show")
def show_config():
    cfg = load_config()
    console.print(f"config: {config_path()}")
    console.print(f"app_id={cfg.app_id or '-'} timeout_s={cfg.timeout_s}")
    console.print(f"gateways.api={cfg.gateways.api}")
    console.print(f"gateways.api_v4={cfg.gateways.api_v4}")
    console.print(f"gateways.auth={cfg.gateways.auth}")
    console.print(
        f"app_key={_mask(cfg.auth.app_key)} password={_mask(cfg.auth.password)} "
        f"auth_id={_mask(cfg.auth.auth_id)} auth_pwd={_mask(cfg.auth.auth_pwd)}"
    )


@app.command("set")
def set_config(
        app_id: str | None = typer.Option(None, "--app-id", help="Application ID."),
        app_key: str | None = typer.Option(None, "--app-key", help="Application key (V4 API)."),
        password: str | None = typer.Option(None, "--password", help="Application password (legacy API)."),
        auth_id: str | None = typer.Option(None, "--auth-id", help="Verification service key."),
        auth_pwd: str | None = typer.Option(None, "--auth-pwd", help="Verification service secret."),
        api_gateway: str | None = typer.Option(None, "--api-gateway", help="Legacy API gateway URL."),
        api_gateway_v4: str | None = typer.Option(None, "--api-gateway-v4", help="V4 API gateway URL."),
        auth_gateway: str | None = typer.Option(None, "--auth-gateway", help="Verification gateway URL."),
        timeout_s: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds."),
):
    cfg = load_config(env=False)

    if app_id is not None:
        cfg.app_id = app_id.strip()
    if app_key is not None:
        cfg.auth.app_key = app_key
    if password is not None:
        cfg.auth.password = password
    if auth_id is not None:
        cfg.auth.auth_id = auth_id
    if auth_pwd is not None:
        cfg.auth.auth_pwd = auth_pwd
    if api_gateway is not None:
        cfg.gateways.api = normalize_base_url(api_gateway)
    if api_gateway_v4 is not None:
        cfg.gateways.api_v4 = normalize_base_url(api_gateway_v4)
    if auth_gateway is not None:
        cfg.gateways.auth = normalize_base_url(auth_gateway)
    if timeout_s is not None:
        if timeout_s <= 0:
            console.err("--timeout must be positive.")
            raise typer.Exit(code=2)
        cfg.timeout_s = timeout_s

    path = save_config(cfg)
    console.ok(f"Config saved to {path}.")
