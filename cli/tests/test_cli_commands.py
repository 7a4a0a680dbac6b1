from __future__ import annotations

import json

from typer.testing import CliRunner
from yht_cli import config, main
from yht_cli.commands import auth_cmd, contracts_cmd, users_cmd
from yht_client import ApiError
from yht_client.models import AuthResponse, ContractSummary, ListContractsResponse, UserTokenResponse


class _DummyClient:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.closed = False

    def add_user(self, *args):
        self.calls.append(("add_user", args))
        if args[1] == "dup":
            raise ApiError(400, "duplicate user (code=400, subCode=12)", sub_code=12)

    def user_token(self, user_id: str) -> UserTokenResponse:
        return UserTokenResponse(code=200, message="ok", token=f"tk-{user_id}")

    def list_contracts(self, page: int, size: int, token: str) -> ListContractsResponse:
        self.calls.append(("list_contracts", (page, size, token)))
        return ListContractsResponse(
            code=200,
            contracts=[ContractSummary("1", "租赁合同", "finished", "demo", "2024-01-01", "u-1")],
        )

    def download_contract(self, contract_id: str, token: str) -> bytes:
        return b"%PDF"

    def auth_real_name(self, id_no: str, name: str, portrait: bool) -> AuthResponse:
        return AuthResponse(code=200, success=True, message="ok", status="PASS")

    def close(self) -> None:
        self.closed = True


def _patch(monkeypatch, module) -> _DummyClient:
    dummy = _DummyClient()
    monkeypatch.setattr(module, "make_client", lambda *args, **kwargs: dummy)
    return dummy


def test_users_add_passes_flags(monkeypatch) -> None:
    dummy = _patch(monkeypatch, users_cmd)
    runner = CliRunner()

    result = runner.invoke(
        main.app,
        ["users", "add", "--user-id", "u-1", "--phone", "13800000000", "--name", "张三",
         "--cert-num", "110101199001011234", "--auto-sign"],
    )

    assert result.exit_code == 0
    assert dummy.calls == [("add_user", ("u-1", "13800000000", "张三", "110101199001011234", "1", "1", True))]
    assert dummy.closed


def test_users_add_platform_error_exits_2(monkeypatch) -> None:
    _patch(monkeypatch, users_cmd)
    runner = CliRunner()

    result = runner.invoke(
        main.app,
        ["users", "add", "--user-id", "u-1", "--phone", "dup", "--name", "n", "--cert-num", "c"],
    )

    assert result.exit_code == 2
    assert "duplicate user" in result.output


def test_users_token_prints_token(monkeypatch) -> None:
    _patch(monkeypatch, users_cmd)
    result = CliRunner().invoke(main.app, ["users", "token", "u-9"])
    assert result.exit_code == 0
    assert "tk-u-9" in result.output


def test_contracts_list_json(monkeypatch) -> None:
    dummy = _patch(monkeypatch, contracts_cmd)

    result = CliRunner().invoke(main.app, ["contracts", "list", "--token", "tk", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output)[0]["title"] == "租赁合同"
    assert dummy.calls == [("list_contracts", (1, 20, "tk"))]


def test_contracts_download_writes_file(monkeypatch, tmp_path) -> None:
    _patch(monkeypatch, contracts_cmd)
    out = tmp_path / "c.pdf"

    result = CliRunner().invoke(main.app, ["contracts", "download", "12345", "--token", "abc", "--out", str(out)])

    assert result.exit_code == 0
    assert out.read_bytes() == b"%PDF"


def test_auth_realname_prints_status(monkeypatch) -> None:
    _patch(monkeypatch, auth_cmd)
    result = CliRunner().invoke(main.app, ["auth", "realname", "--id-no", "1101", "--name", "张三"])
    assert result.exit_code == 0
    assert "PASS" in result.output


def test_notify_decode_from_file(tmp_path) -> None:
    body = tmp_path / "notice.txt"
    body.write_text("notice=%7B%22content%22%3A%22done%22%2C%22noticeType%22%3A1%7D", encoding="utf-8")

    result = CliRunner().invoke(main.app, ["notify", "decode", str(body)])

    assert result.exit_code == 0
    assert '"content": "done"' in result.output
    assert '{"response": true, "msg": "success"}' in result.output


def test_notify_decode_rejects_garbage(tmp_path) -> None:
    body = tmp_path / "notice.txt"
    body.write_text("notice=oops", encoding="utf-8")

    result = CliRunner().invoke(main.app, ["notify", "decode", str(body)])

    assert result.exit_code == 2
    assert '"response": false' in result.output


def test_config_set_and_show(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _: str(tmp_path))
    for name in (config.ENV_APP_ID, config.ENV_APP_KEY, config.ENV_PASSWORD):
        monkeypatch.delenv(name, raising=False)
    runner = CliRunner()

    result = runner.invoke(main.app, ["config", "set", "--app-id", "app-1", "--app-key", "k"])
    assert result.exit_code == 0

    result = runner.invoke(main.app, ["config", "show"])
    assert result.exit_code == 0
    assert "app_id=app-1" in result.output
    assert "app_key=(set)" in result.output
    assert "password=(empty)" in result.output
