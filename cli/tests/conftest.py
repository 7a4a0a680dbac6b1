from __future__ import annotations

import json

import httpx
import pytest
from yht_client import ClientConfig, YhtClient


class Recorder:
    """httpx mock handler that records requests and replays queued replies."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._replies: list[httpx.Response | Exception] = []

    def reply(self, body, *, status: int = 200, headers: dict[str, str] | None = None) -> None:
        if isinstance(body, (dict, list)):
            content = json.dumps(body, ensure_ascii=False).encode("utf-8")
        elif isinstance(body, str):
            content = body.encode("utf-8")
        else:
            content = body
        self._replies.append(httpx.Response(status, content=content, headers=headers or {}))

    def fail(self, exc: Exception) -> None:
        self._replies.append(exc)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            return httpx.Response(200, json={"code": 200, "subCode": 0, "message": "ok"})
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def client_cfg() -> ClientConfig:
    return ClientConfig(
        app_id="app-1",
        app_key="key-1",
        password="pwd-1",
        api_gateway="https://sdk.example.test/sdk",
        api_gateway_v4="https://api.example.test/api",
        auth_gateway="https://authentic.example.test",
        auth_id="auth-id",
        auth_pwd="auth-pwd",
    )


@pytest.fixture
def client(client_cfg: ClientConfig, recorder: Recorder):
    c = YhtClient(client_cfg, transport=httpx.MockTransport(recorder))
    yield c
    c.close()
