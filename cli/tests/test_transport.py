from __future__ import annotations

import json
from urllib.parse import parse_qs

import httpx
import pytest
from yht_client.errors import DecodeError, NetworkError
from yht_client.models import LegacyResponse
from yht_client.transport import Transport, decode, extract_token


@pytest.fixture
def transport(client_cfg, recorder):
    t = Transport(client_cfg, transport=httpx.MockTransport(recorder))
    yield t
    t.close()


def test_extract_token_moves_token_to_query() -> None:
    uri, fields = extract_token("/contract/list", {"token": "abc", "pageNum": "1"})
    assert uri == "/contract/list?token=abc"
    assert fields == {"pageNum": "1"}


def test_extract_token_does_not_mutate_input() -> None:
    params = {"token": "abc"}
    extract_token("/x", params)
    assert params == {"token": "abc"}


def test_form_post_sends_token_as_query_only(transport, recorder) -> None:
    transport.post_form("/contract/invalid", {"token": "tk-9", "contractId": "55"})

    req = recorder.last
    assert req.method == "POST"
    assert str(req.url).startswith("https://sdk.example.test/sdk/contract/invalid?")
    assert req.url.params["token"] == "tk-9"
    assert req.headers["Content-Type"].startswith("application/x-www-form-urlencoded")
    body = parse_qs(req.content.decode("utf-8"))
    assert body == {"contractId": ["55"]}


def test_multipart_post_writes_file_field(transport, recorder) -> None:
    transport.post_multipart("/contract/fileContract", {"token": "tk", "title": "lease"}, b"%PDF-1.4")

    req = recorder.last
    assert req.url.params["token"] == "tk"
    assert req.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="file"' in req.content
    assert b"%PDF-1.4" in req.content
    assert b'name="title"' in req.content
    assert b'name="token"' not in req.content


def test_authentic_uris_go_to_auth_gateway(transport, recorder) -> None:
    transport.post_form("/authentic/authentication", {"idNo": "1"})
    assert recorder.last.url.host == "authentic.example.test"

    transport.post_form("/userInfo/addUser", {"appId": "a"})
    assert recorder.last.url.host == "sdk.example.test"


def test_json_post_sends_token_header(transport, recorder) -> None:
    transport.post_json("/user/person", {"userName": "x"}, token="ltt")

    req = recorder.last
    assert str(req.url) == "https://api.example.test/api/user/person"
    assert req.headers["token"] == "ltt"
    assert req.headers["Content-Type"].startswith("application/json")
    assert json.loads(req.content) == {"userName": "x"}


def test_json_post_without_token_has_no_header(transport, recorder) -> None:
    transport.post_json("/user/person", {})
    assert "token" not in recorder.last.headers


def test_login_returns_token_header(transport, recorder) -> None:
    recorder.reply({"code": 200, "msg": {}}, headers={"token": "new-ltt"})
    body, token = transport.post_json("/auth/login", {"appId": "a"})
    assert token == "new-ltt"
    assert json.loads(body)["code"] == 200


def test_non_login_ignores_token_header(transport, recorder) -> None:
    recorder.reply({"code": 200}, headers={"token": "ignored"})
    _, token = transport.post_json("/user/person", {})
    assert token is None


def test_http_status_is_not_checked(transport, recorder) -> None:
    recorder.reply({"code": 200, "subCode": 0, "message": "ok"}, status=500)
    body = transport.post_form("/userInfo/addUser", {})
    assert decode(body, LegacyResponse).ok


def test_connection_error_becomes_network_error(transport, recorder) -> None:
    recorder.fail(httpx.ConnectError("boom"))
    with pytest.raises(NetworkError):
        transport.post_form("/userInfo/addUser", {})


def test_decode_rejects_invalid_json() -> None:
    with pytest.raises(DecodeError):
        decode(b"<html>bad gateway</html>", LegacyResponse)


def test_decode_rejects_non_object() -> None:
    with pytest.raises(DecodeError):
        decode(b"[1, 2]", LegacyResponse)


def test_decode_rejects_wrong_code_type() -> None:
    with pytest.raises(DecodeError):
        decode(b'{"code": "abc"}', LegacyResponse)
