from __future__ import annotations

import typer
from yht_client import YhtClientError

from .. import console
from ..config import load_config
from ..http import make_client

app = typer.Typer(help="Identity verification and platform tokens.")


def _print_verdict(resp) -> None:
    console.ok("Verification passed.")
    console.print(f"  status: {resp.status or '-'}")
    console.print(f"  message: {resp.message or '-'}")


@app.command("realname")
def realname(
        id_no: str = typer.Option(..., "--id-no", help="ID card number."),
        name: str = typer.Option(..., "--name", help="Real name."),
        portrait: bool = typer.Option(False, "--portrait", help="Also compare the ID portrait."),
):
    cfg = load_config()
    client = make_client(cfg)
    try:
        resp = client.auth_real_name(id_no, name, portrait)
    except YhtClientError as e:
        console.err(f"Verification failed: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()
    _print_verdict(resp)


@app.command("bank")
def bank(
        id_no: str = typer.Option(..., "--id-no", help="ID card number."),
        name: str = typer.Option(..., "--name", help="Real name."),
        card: str = typer.Option(..., "--card", help="Bank card number."),
        mobile: str = typer.Option("", "--mobile", help="Reserved phone number (four-factor check)."),
):
    cfg = load_config()
    client = make_client(cfg)
    try:
        resp = client.auth_real_name_bank(id_no, name, card, mobile)
    except YhtClientError as e:
        console.err(f"Verification failed: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()
    _print_verdict(resp)


@app.command("platform-token")
def platform_token():
    cfg = load_config()
    if not cfg.app_id or not cfg.auth.app_key:
        console.err("app_id and app_key are required. Run: yht config set --app-id ... --app-key ...")
        raise typer.Exit(code=2)
    client = make_client(cfg)
    try:
        refreshed = client.refresh_platform_token()
        token = client.platform_token
    finally:
        client.close()
    if not refreshed:
        console.err("Failed to obtain platform token. Re-run with -v for details.")
        raise typer.Exit(code=2)
    console.print(token)
