from __future__ import annotations

import dataclasses
from pathlib import Path

import typer
from rich.table import Table
from yht_client import YhtClientError

from .. import console
from ..config import load_config
from ..http import make_client

app = typer.Typer(help="Legacy contract commands (user token required).")


@app.command("list")
def list_contracts(
        token: str = typer.Option(..., "--token", help="User token (yht users token)."),
        page: int = typer.Option(1, "--page", help="Page number, from 1."),
        size: int = typer.Option(20, "--size", help="Page size."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg)
    try:
        resp = client.list_contracts(page, size, token)
    except YhtClientError as e:
        console.err(f"Failed to list contracts: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()

    if json_out:
        console.print_json([dataclasses.asdict(c) for c in resp.contracts])
        return

    table = Table(title="Contracts")
    table.add_column("id", style="bold")
    table.add_column("title")
    table.add_column("status")
    table.add_column("modified")
    for c in resp.contracts:
        table.add_row(c.id or "-", c.title or "-", c.status or "-", c.gmt_modify or "-")
    console.print(table)


@app.command("show")
def show_contract(
        contract_id: str = typer.Argument(..., help="Contract ID."),
        token: str = typer.Option(..., "--token", help="User token."),
):
    cfg = load_config()
    client = make_client(cfg)
    try:
        resp = client.lookup_contract_detail(contract_id, token)
    except YhtClientError as e:
        console.err(f"Failed to fetch contract: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()

    console.ok("Contract:")
    console.print(f"  id: {contract_id}")
    console.print(f"  title: {resp.title or '-'}")
    console.print(f"  status: {resp.status or '-'}")
    for p in resp.partners:
        console.print(f"  partner: {p.user_id} sign_status={p.sign_status or '-'}")


@app.command("invalidate")
def invalidate_contract(
        contract_id: str = typer.Argument(..., help="Contract ID."),
        token: str = typer.Option(..., "--token", help="User token."),
):
    cfg = load_config()
    client = make_client(cfg)
    try:
        client.invalidate_contract(contract_id, token)
    except YhtClientError as e:
        console.err(f"Failed to invalidate contract: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()
    console.ok(f"Contract {contract_id} invalidated.")


@app.command("download")
def download_contract(
        contract_id: str = typer.Argument(..., help="Contract ID."),
        token: str = typer.Option(..., "--token", help="User token."),
        out: Path | None = typer.Option(None, "--out", "-o", help="Output file (default: contract-<id>.pdf)."),
):
    cfg = load_config()
    client = make_client(cfg)
    try:
        data = client.download_contract(contract_id, token)
    except YhtClientError as e:
        console.err(f"Failed to download contract: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()

    path = out or Path(f"contract-{contract_id}.pdf")
    path.write_bytes(data)
    console.ok(f"Saved {len(data)} bytes to {path}.")
