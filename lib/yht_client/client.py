from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

import httpx

from .config_types import ClientConfig
from .constants import (
    APP_ID_KEY,
    APP_KEY_KEY,
    PASSWORD_KEY,
    RCA_BANK_FOUR,
    RCA_BANK_THREE,
    RCA_PORTRAIT,
    RCA_TWO_FACTOR,
    SUCCESS_CODE,
    TOKEN_KEY,
)
from .errors import ApiError, ArgumentError, AuthError, EncodingError
from .models import (
    AuthResponse,
    ContractDetailResponse,
    CreateContractResponse,
    CreateMoulageResponse,
    CreateTemplateContractV4Response,
    CreateUserResponse,
    LegacyResponse,
    ListContractsResponse,
    QuerySignerIdResponse,
    RealNameResponse,
    UserTokenResponse,
    V4Response,
)
from .notify import AsyncNotifyResult, answer_notification, parse_notification
from .params import to_json_body, to_params
from .requests import (
    AddPartnerParams,
    AddSignerRequest,
    AddUserParams,
    AuthLoginRequest,
    AuthParams,
    CreateCompanyMoulageRequest,
    CreateCompanyRequest,
    CreateFileContractParams,
    CreatePersonMoulageRequest,
    CreatePersonRequest,
    CreateTemplateContractParams,
    CreateTemplateContractRequest,
    DownloadContractParams,
    InvalidateContractParams,
    ListContractsParams,
    LookupContractDetailParams,
    ModifyPhoneNumberParams,
    ModifyUserNameParams,
    Partner,
    QuerySignerIdRequest,
    RealNameBankParams,
    RealNameMobileParams,
    SignContractParams,
    SignContractRequest,
    UserTokenParams,
)
from .token_manager import TokenManager
from .transport import Transport, decode

logger = logging.getLogger(__name__)

L = TypeVar("L", bound=LegacyResponse)
V = TypeVar("V", bound=V4Response)


def _require(**values: Any) -> None:
    for name, value in values.items():
        if value is None or (isinstance(value, (str, bytes)) and not value.strip()):
            raise ArgumentError(f"{name} is required")


def _dumps(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise EncodingError(str(e)) from e


def check_legacy(resp: LegacyResponse) -> None:
    if resp.ok:
        return
    logger.debug("platform rejected request: %s", resp)
    msg = resp.message or "request failed"
    if resp.sub_code:
        text = f"{msg} (code={resp.code}, subCode={resp.sub_code})"
    else:
        text = f"{msg} (code={resp.code})"
    raise ApiError(resp.code, text, resp.message or None, sub_code=resp.sub_code)


def check_v4(resp: V4Response) -> None:
    if resp.ok:
        return
    logger.debug("platform rejected request: %s", resp)
    raise ApiError(resp.code, resp.message or "request failed", None)


def check_auth(resp: AuthResponse) -> None:
    if resp.success and resp.code in (0, SUCCESS_CODE):
        return
    logger.debug("verification rejected: %s", resp)
    raise ApiError(resp.code, resp.msg or "verification failed", resp.data or None)


class YhtClient:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._t = Transport(cfg, transport=transport)
        self._tokens = TokenManager(self._fetch_platform_token, interval_s=cfg.token_refresh_interval_s)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def close(self) -> None:
        self._tokens.stop(timeout=self._cfg.timeout_s)
        self._t.close()

    def __enter__(self) -> YhtClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # --- platform token ---

    @property
    def platform_token(self) -> str:
        return self._tokens.token

    def start_token_refresh(self) -> None:
        self._tokens.start()

    def refresh_platform_token(self) -> bool:
        return self._tokens.refresh()

    def _fetch_platform_token(self) -> str:
        req = AuthLoginRequest(app_id=self._cfg.app_id, app_key=self._cfg.app_key)
        body, token = self._t.post_json(req.uri, to_json_body(req))
        resp = decode(body, V4Response)
        if not resp.ok:
            raise AuthError(resp.code, resp.message, None)
        if not token:
            raise AuthError(resp.code, "login returned no token", None)
        return token

    # --- transport glue ---

    def _app_credentials(self) -> dict[str, str]:
        return {APP_ID_KEY: self._cfg.app_id, PASSWORD_KEY: self._cfg.password}

    def _call_legacy(self, req: Any, model: type[L], extra: dict[str, str], file_data: bytes | None = None) -> L:
        params = to_params(req, extra)
        if file_data is not None:
            body = self._t.post_multipart(req.uri, params, file_data)
        else:
            body = self._t.post_form(req.uri, params)
        resp = decode(body, model)
        check_legacy(resp)
        return resp

    def _call_v4(self, req: Any, model: type[V]) -> V:
        if req is None:
            raise ArgumentError("invalid parameter")
        body, _ = self._t.post_json(req.uri, to_json_body(req), token=self.platform_token)
        resp = decode(body, model)
        check_v4(resp)
        return resp

    def _verify(self, params: AuthParams, request_type: str) -> AuthResponse:
        extra = {"key": self._cfg.auth_id, "value": self._cfg.auth_pwd, "rcaRequestType": request_type}
        body = self._t.post_form(params.uri, to_params(params, extra))
        resp = decode(body, AuthResponse)
        check_auth(resp)
        return resp.with_verdict()

    # --- legacy API ---

    def auth_real_name(self, id_no: str, id_name: str, portrait: bool = False) -> AuthResponse:
        _require(id_no=id_no, id_name=id_name)
        request_type = RCA_PORTRAIT if portrait else RCA_TWO_FACTOR
        return self._verify(AuthParams(id_no=id_no, id_name=id_name), request_type)

    def auth_real_name_bank(self, id_no: str, id_name: str, bank_card: str, mobile: str = "") -> AuthResponse:
        _require(id_no=id_no, id_name=id_name, bank_card=bank_card)
        if mobile:
            params = AuthParams(id_no=id_no, id_name=id_name, bank_card_no=bank_card, mobile=mobile)
            return self._verify(params, RCA_BANK_FOUR)
        return self._verify(AuthParams(id_no=id_no, id_name=id_name, bank_card_no=bank_card), RCA_BANK_THREE)

    def add_user(
            self,
            user_id: str,
            phone: str,
            name: str,
            cert_num: str,
            user_type: str,
            cert_type: str,
            auto_sign: bool,
    ) -> LegacyResponse:
        _require(user_id=user_id, phone=phone, name=name, cert_num=cert_num, user_type=user_type, cert_type=cert_type)
        params = AddUserParams(
            app_user_id=user_id,
            cell_num=phone,
            user_type=user_type,
            user_name=name,
            certify_type=cert_type,
            certify_number=cert_num,
            create_signature=auto_sign,
        )
        return self._call_legacy(params, LegacyResponse, self._app_credentials())

    def modify_phone_number(self, phone: str, token: str) -> LegacyResponse:
        _require(phone=phone, token=token)
        return self._call_legacy(ModifyPhoneNumberParams(cell_num=phone), LegacyResponse, {TOKEN_KEY: token})

    def modify_user_name(self, name: str, token: str, auto_sign: bool = False) -> LegacyResponse:
        _require(name=name, token=token)
        params = ModifyUserNameParams(user_name=name, create_signature=True if auto_sign else None)
        return self._call_legacy(params, LegacyResponse, {TOKEN_KEY: token})

    def user_token(self, user_id: str) -> UserTokenResponse:
        _require(user_id=user_id)
        return self._call_legacy(UserTokenParams(app_user_id=user_id), UserTokenResponse, self._app_credentials())

    def create_template_contract(
            self,
            title: str,
            contract_no: str,
            template_id: str,
            token: str,
            use_cer: bool = False,
            placeholders: dict[str, Any] | None = None,
    ) -> CreateContractResponse:
        _require(title=title, template_id=template_id, token=token)
        params = CreateTemplateContractParams(
            title=title,
            def_contract_no=contract_no,
            template_id=template_id,
            param=_dumps(placeholders or {}),
            use_cer=True if use_cer else None,
        )
        return self._call_legacy(params, CreateContractResponse, {TOKEN_KEY: token})

    def create_file_contract(
            self,
            title: str,
            contract_no: str,
            token: str,
            use_cer: bool,
            data: bytes,
    ) -> CreateContractResponse:
        _require(title=title, token=token, data=data)
        params = CreateFileContractParams(
            title=title,
            def_contract_no=contract_no,
            use_cer=True if use_cer else None,
        )
        return self._call_legacy(params, CreateContractResponse, {TOKEN_KEY: token}, file_data=bytes(data))

    def add_partner(self, contract_id: int | str, token: str, *partners: Partner) -> LegacyResponse:
        _require(contract_id=contract_id, token=token)
        if not partners:
            raise ArgumentError("at least one partner is required")
        params = AddPartnerParams(
            contract_id=str(contract_id),
            partners=_dumps([to_json_body(p) for p in partners]),
        )
        return self._call_legacy(params, LegacyResponse, {TOKEN_KEY: token})

    def sign_contract(self, contract_id: int | str, token: str, *signers: str) -> LegacyResponse:
        _require(contract_id=contract_id, token=token)
        if not signers:
            raise ArgumentError("at least one signer is required")
        params = SignContractParams(contract_id=str(contract_id), signer=_dumps(list(signers)))
        return self._call_legacy(params, LegacyResponse, {TOKEN_KEY: token})

    def invalidate_contract(self, contract_id: int | str, token: str) -> LegacyResponse:
        _require(contract_id=contract_id, token=token)
        params = InvalidateContractParams(contract_id=str(contract_id))
        return self._call_legacy(params, LegacyResponse, {TOKEN_KEY: token})

    def list_contracts(self, page_num: int, page_size: int, token: str) -> ListContractsResponse:
        _require(token=token)
        if page_num < 1 or page_size < 1:
            raise ArgumentError("page_num and page_size must be positive")
        params = ListContractsParams(page_num=int(page_num), page_size=int(page_size))
        return self._call_legacy(params, ListContractsResponse, {TOKEN_KEY: token})

    def lookup_contract_detail(self, contract_id: int | str, token: str) -> ContractDetailResponse:
        _require(contract_id=contract_id, token=token)
        params = LookupContractDetailParams(contract_id=str(contract_id))
        return self._call_legacy(params, ContractDetailResponse, {TOKEN_KEY: token})

    def download_contract(self, contract_id: int | str, token: str) -> bytes:
        """Raw contract file; the platform answers with the document bytes."""
        _require(contract_id=contract_id, token=token)
        params = DownloadContractParams(contract_id=str(contract_id), token=token)
        return self._t.get(params.uri)

    def async_notify(self, body: bytes | str) -> AsyncNotifyResult:
        return parse_notification(body)

    def answer_async_notify(self, ok: bool, msg: str) -> str:
        return answer_notification(ok, msg)

    # --- V4 API ---

    def user_token_v4(self, signer_id: str) -> tuple[V4Response, str]:
        """Log a signer in; returns the envelope and the signer's token."""
        _require(signer_id=signer_id)
        req = AuthLoginRequest(app_id=self._cfg.app_id, app_key=self._cfg.app_key, signer_id=signer_id)
        body, token = self._t.post_json(req.uri, to_json_body(req))
        resp = decode(body, V4Response)
        check_v4(resp)
        return resp, token or ""

    def create_person_v4(self, req: CreatePersonRequest) -> CreateUserResponse:
        return self._call_v4(req, CreateUserResponse)

    def create_company_v4(self, req: CreateCompanyRequest) -> CreateUserResponse:
        return self._call_v4(req, CreateUserResponse)

    def query_signer_id(self, req: QuerySignerIdRequest) -> QuerySignerIdResponse:
        return self._call_v4(req, QuerySignerIdResponse)

    def create_person_moulage_v4(self, req: CreatePersonMoulageRequest) -> CreateMoulageResponse:
        return self._call_v4(req, CreateMoulageResponse)

    def create_company_moulage_v4(self, req: CreateCompanyMoulageRequest) -> CreateMoulageResponse:
        return self._call_v4(req, CreateMoulageResponse)

    def create_contract_from_template_v4(
            self, req: CreateTemplateContractRequest
    ) -> CreateTemplateContractV4Response:
        return self._call_v4(req, CreateTemplateContractV4Response)

    def add_signer_v4(self, req: AddSignerRequest) -> V4Response:
        return self._call_v4(req, V4Response)

    def sign_contract_v4(self, req: SignContractRequest) -> V4Response:
        return self._call_v4(req, V4Response)

    def _real_name_v4(self, params: Any) -> str:
        extra = {APP_ID_KEY: self._cfg.app_id, APP_KEY_KEY: self._cfg.app_key}
        body = self._t.post_form(params.uri, to_params(params, extra))
        resp = decode(body, RealNameResponse)
        check_v4(resp)
        return resp.serial_id

    def auth_real_name_mobile_v4(self, id_no: str, id_name: str, phone: str) -> str:
        """Carrier three-factor check. Returns the platform serial number."""
        _require(id_no=id_no, id_name=id_name, phone=phone)
        return self._real_name_v4(RealNameMobileParams(id_no=id_no, id_name=id_name, mobile=phone))

    def auth_real_name_bank_v4(self, id_no: str, id_name: str, phone: str, bank_card_no: str) -> str:
        """Bank four-factor check. Returns the platform serial number."""
        _require(id_no=id_no, id_name=id_name, phone=phone, bank_card_no=bank_card_no)
        params = RealNameBankParams(id_no=id_no, id_name=id_name, mobile=phone, bank_card_no=bank_card_no)
        return self._real_name_v4(params)


def init_client(
        app_id: str,
        app_key: str,
        *,
        transport: httpx.BaseTransport | None = None,
        **overrides: Any,
) -> YhtClient:
    """Build a V4 client and start its platform token refresh loop.

    The first refresh runs in the background; calls made before it completes
    go out without a token.
    """
    _require(app_id=app_id, app_key=app_key)
    client = YhtClient(ClientConfig(app_id=app_id, app_key=app_key, **overrides), transport=transport)
    client.start_token_refresh()
    return client
