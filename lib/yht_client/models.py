from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .constants import SUCCESS_CODE
from .errors import DecodeError


def _int(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise DecodeError(f"expected integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"expected integer, got {value!r}") from e


def _str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _obj(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"expected object, got {type(value).__name__}")
    return value


def _list(value: Any) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"expected array, got {type(value).__name__}")
    return value


def _payload(data: dict[str, Any]) -> dict[str, Any]:
    # V4 error replies carry no usable data
    payload = data.get("data")
    return payload if isinstance(payload, dict) else {}


# --- legacy envelopes: code / subCode / message / value ---

@dataclass(frozen=True)
class LegacyResponse:
    code: int = 0
    sub_code: int = 0
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls(**cls._kwargs(data))

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        return {
            "code": _int(data.get("code")),
            "sub_code": _int(data.get("subCode")),
            "message": _str(data.get("message")),
        }

    @property
    def ok(self) -> bool:
        return self.code == SUCCESS_CODE


@dataclass(frozen=True)
class UserTokenResponse(LegacyResponse):
    token: str = ""

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        value = _obj(data.get("value"))
        return {**super()._kwargs(data), "token": _str(value.get("token"))}


@dataclass(frozen=True)
class CreateContractResponse(LegacyResponse):
    # numeric for template contracts, string for file contracts
    contract_id: str = ""

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        value = _obj(data.get("value"))
        return {**super()._kwargs(data), "contract_id": _str(value.get("contractId"))}


@dataclass(frozen=True)
class ContractSummary:
    id: str
    title: str
    status: str
    app_name: str
    gmt_modify: str
    partner_list: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContractSummary:
        return cls(
            id=_str(data.get("id")),
            title=_str(data.get("title")),
            status=_str(data.get("status")),
            app_name=_str(data.get("appName")),
            gmt_modify=_str(data.get("gmtModify")),
            partner_list=_str(data.get("partnerList")),
        )


@dataclass(frozen=True)
class ListContractsResponse(LegacyResponse):
    contracts: list[ContractSummary] = field(default_factory=list)

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        value = _obj(data.get("value"))
        items = [ContractSummary.from_dict(_obj(c)) for c in _list(value.get("contractList"))]
        return {**super()._kwargs(data), "contracts": items}


@dataclass(frozen=True)
class PartnerStatus:
    user_id: str
    sign_status: str


@dataclass(frozen=True)
class ContractDetailResponse(LegacyResponse):
    title: str = ""
    status: str = ""
    partners: list[PartnerStatus] = field(default_factory=list)

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        value = _obj(data.get("value"))
        partners = [
            PartnerStatus(user_id=_str(p.get("userId")), sign_status=_str(p.get("signStatus")))
            for p in map(_obj, _list(value.get("partnerList")))
        ]
        return {
            **super()._kwargs(data),
            "title": _str(value.get("title")),
            "status": _str(value.get("status")),
            "partners": partners,
        }


@dataclass(frozen=True)
class AuthResponse:
    """Identity verification reply.

    ``data`` is a JSON document encoded as a string; ``message`` and ``status``
    are filled from it by a second decode pass.
    """

    code: int = 0
    msg: str = ""
    success: bool = False
    data: str = ""
    message: str = ""
    status: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthResponse:
        return cls(
            code=_int(data.get("code")),
            msg=_str(data.get("msg")),
            success=bool(data.get("success")),
            data=_str(data.get("data")),
        )

    def with_verdict(self) -> AuthResponse:
        try:
            info = json.loads(self.data)
        except ValueError as e:
            raise DecodeError(f"verification payload is not JSON: {e}") from e
        info = _obj(info)
        return AuthResponse(
            code=self.code,
            msg=self.msg,
            success=self.success,
            data=self.data,
            message=_str(info.get("message")),
            status=_str(info.get("status")),
        )


# --- V4 envelopes: code / msg / data ---

@dataclass(frozen=True)
class V4Response:
    code: int = 0
    # string on error, object on success
    msg: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls(**cls._kwargs(data))

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        return {"code": _int(data.get("code")), "msg": data.get("msg")}

    @property
    def ok(self) -> bool:
        return self.code == SUCCESS_CODE

    @property
    def message(self) -> str:
        if self.ok:
            return "请求成功"
        if isinstance(self.msg, str):
            return self.msg
        return json.dumps(self.msg, ensure_ascii=False, separators=(",", ":"))


@dataclass(frozen=True)
class CreateUserResponse(V4Response):
    signer_id: int = 0

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        payload = _payload(data)
        return {**super()._kwargs(data), "signer_id": _int(payload.get("signerId"))}


@dataclass(frozen=True)
class QuerySignerIdResponse(V4Response):
    # one {certifyNum: signerId} mapping per queried certificate
    signer_ids: list[dict[str, int]] = field(default_factory=list)

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        raw = data.get("data")
        items = [
            {str(k): _int(v) for k, v in _obj(item).items()}
            for item in (raw if isinstance(raw, list) else [])
        ]
        return {**super()._kwargs(data), "signer_ids": items}


@dataclass(frozen=True)
class CreateMoulageResponse(V4Response):
    moulage_id: int = 0

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        payload = _payload(data)
        return {**super()._kwargs(data), "moulage_id": _int(payload.get("moulageId"))}


@dataclass(frozen=True)
class CreateTemplateContractV4Response(V4Response):
    contract_id: int = 0

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        payload = _payload(data)
        return {**super()._kwargs(data), "contract_id": _int(payload.get("contractId"))}


@dataclass(frozen=True)
class RealNameResponse(V4Response):
    serial_id: str = ""

    @classmethod
    def _kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        payload = _payload(data)
        return {**super()._kwargs(data), "serial_id": _str(payload.get("id"))}
