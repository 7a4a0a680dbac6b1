from __future__ import annotations

import dataclasses
import sys

import typer
from yht_client import DecodeError, answer_notification, parse_notification

from .. import console

app = typer.Typer(help="Asynchronous notification helpers.")


@app.command("decode")
def decode_notification(
        path: str = typer.Argument(..., help="File with the raw callback body, or - for stdin."),
):
    if path == "-":
        body = sys.stdin.buffer.read()
    else:
        try:
            with open(path, "rb") as f:
                body = f.read()
        except OSError as e:
            console.err(f"Cannot read {path}: {e}")
            raise typer.Exit(code=2)

    try:
        result = parse_notification(body)
    except DecodeError as e:
        console.err(f"Invalid notification: {e}")
        console.print(answer_notification(False, str(e)), markup=False, soft_wrap=True)
        raise typer.Exit(code=2)

    console.print_json(dataclasses.asdict(result))
    console.print(answer_notification(True, "success"), markup=False, soft_wrap=True)
