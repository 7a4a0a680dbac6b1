from __future__ import annotations

import typer
from yht_client import YhtClientError
from yht_client.constants import CERT_TYPE_ID_CARD, USER_TYPE_PERSONAL

from .. import console
from ..config import load_config
from ..http import make_client

app = typer.Typer(help="Legacy user commands.")


@app.command("add")
def add_user(
        user_id: str = typer.Option(..., "--user-id", help="Your application's user ID."),
        phone: str = typer.Option(..., "--phone", help="Cell phone number."),
        name: str = typer.Option(..., "--name", help="User name."),
        cert_num: str = typer.Option(..., "--cert-num", help="Certificate number."),
        user_type: str = typer.Option(USER_TYPE_PERSONAL, "--user-type", help="1 personal, 2 enterprise, 4 platform."),
        cert_type: str = typer.Option(CERT_TYPE_ID_CARD, "--cert-type", help="Certificate type code."),
        auto_sign: bool = typer.Option(False, "--auto-sign", help="Create a signature for the user."),
):
    cfg = load_config()
    client = make_client(cfg)
    try:
        client.add_user(user_id, phone, name, cert_num, user_type, cert_type, auto_sign)
    except YhtClientError as e:
        console.err(f"Failed to add user: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()
    console.ok(f"User {user_id} added.")


@app.command("token")
def user_token(user_id: str = typer.Argument(..., help="Your application's user ID.")):
    cfg = load_config()
    client = make_client(cfg)
    try:
        resp = client.user_token(user_id)
    except YhtClientError as e:
        console.err(f"Failed to get token: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()
    console.print(resp.token)
