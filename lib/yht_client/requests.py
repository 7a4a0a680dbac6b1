from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from .constants import CA_TYPE_DEFAULT, COMPANY_CERT_USCC, LOGIN_URI
from .params import wire


class _Request:
    URI = ""
    METHOD = "POST"

    @property
    def uri(self) -> str:
        return self.URI

    @property
    def method(self) -> str:
        return self.METHOD


# --- legacy form API ---

@dataclass(frozen=True)
class AuthParams(_Request):
    URI = "/authentic/authentication"

    id_no: str = wire("idNo")
    id_name: str = wire("idName")
    bank_card_no: str = wire("bankCardNo", "")
    mobile: str = wire("mobile", "")


@dataclass(frozen=True)
class AddUserParams(_Request):
    URI = "/userInfo/addUser"

    app_user_id: str = wire("appUserId")
    cell_num: str = wire("cellNum")
    user_type: str = wire("userType")
    user_name: str = wire("userName")
    certify_type: str = wire("certifyType")
    certify_number: str = wire("certifyNumber")
    create_signature: bool = wire("createSignature", False)


@dataclass(frozen=True)
class ModifyPhoneNumberParams(_Request):
    URI = "/userInfo/modifyCellNum"

    cell_num: str = wire("cellNum")


@dataclass(frozen=True)
class ModifyUserNameParams(_Request):
    URI = "/userInfo/modifyUserName"

    user_name: str = wire("userName")
    create_signature: bool | None = wire("createSignature", None)


@dataclass(frozen=True)
class UserTokenParams(_Request):
    URI = "/token/getToken"

    app_user_id: str = wire("appUserId")


@dataclass(frozen=True)
class CreateTemplateContractParams(_Request):
    URI = "/contract/templateContract"

    title: str = wire("title")
    def_contract_no: str = wire("defContractNo")
    template_id: str = wire("templateId")
    param: str = wire("param")
    use_cer: bool | None = wire("useCer", None)


@dataclass(frozen=True)
class CreateFileContractParams(_Request):
    URI = "/contract/fileContract"

    title: str = wire("title")
    def_contract_no: str = wire("defContractNo")
    use_cer: bool | None = wire("useCer", None)


@dataclass(frozen=True)
class Partner:
    """A participant of a legacy contract; one of location_name/keyword is required."""

    app_user_id: str = wire("appUserId")
    location_name: str | None = wire("locationName", None)
    keyword: str | None = wire("keyWord", None)


@dataclass(frozen=True)
class AddPartnerParams(_Request):
    URI = "/contract/addPartner"

    contract_id: str = wire("contractId")
    partners: str = wire("partners")


@dataclass(frozen=True)
class SignContractParams(_Request):
    URI = "/contract/signContract"

    contract_id: str = wire("contractId")
    signer: str = wire("signer")


@dataclass(frozen=True)
class InvalidateContractParams(_Request):
    URI = "/contract/invalid"

    contract_id: str = wire("contractId")


@dataclass(frozen=True)
class ListContractsParams(_Request):
    URI = "/contract/list"

    page_num: int = wire("pageNum")
    page_size: int = wire("pageSize")


@dataclass(frozen=True)
class LookupContractDetailParams(_Request):
    URI = "/contract/detail"

    contract_id: str = wire("contractId")


@dataclass(frozen=True)
class DownloadContractParams(_Request):
    URI = "/contract/download"
    METHOD = "GET"

    contract_id: str = wire("contractId")
    token: str = ""

    @property
    def uri(self) -> str:
        query = urlencode({"token": self.token, "contractId": self.contract_id})
        return f"{self.URI}?{query}"


@dataclass(frozen=True)
class RealNameMobileParams(_Request):
    URI = "/authentic/personal/mobile/realName"

    id_no: str = wire("idNo")
    id_name: str = wire("idName")
    mobile: str = wire("mobile")


@dataclass(frozen=True)
class RealNameBankParams(_Request):
    URI = "/authentic/personal/bankFour"

    id_no: str = wire("idNo")
    id_name: str = wire("idName")
    mobile: str = wire("mobile")
    bank_card_no: str = wire("bankCardNo")


# --- V4 JSON API ---

@dataclass(frozen=True)
class AuthLoginRequest(_Request):
    """Without signer_id the platform issues its own long-lived token."""

    URI = LOGIN_URI

    app_id: str = wire("appId")
    app_key: str = wire("appKey")
    signer_id: str = wire("signerId", "")


@dataclass(frozen=True)
class CreatePersonRequest(_Request):
    URI = "/user/person"

    user_name: str = wire("userName")
    identity_region: str = wire("identityRegion")
    certify_type: str = wire("certifyType")
    certify_num: str = wire("certifyNum")
    phone_region: str = wire("phoneRegion")
    phone_no: str = wire("phoneNo")
    ca_type: str = wire("caType", CA_TYPE_DEFAULT)


@dataclass(frozen=True)
class CreateCompanyRequest(_Request):
    URI = "/user/company"

    user_name: str = wire("userName")
    certify_num: str = wire("certifyNum")
    phone_no: str = wire("phoneNo")
    certify_type: str = wire("certifyType", COMPANY_CERT_USCC)
    ca_type: str = wire("caType", CA_TYPE_DEFAULT)


@dataclass(frozen=True)
class QuerySignerIdRequest(_Request):
    URI = "/user/signerId/certifyNums"

    certify_num_list: tuple[str, ...] = wire("certifyNumList")


@dataclass(frozen=True)
class CreatePersonMoulageRequest(_Request):
    URI = "/user/personMoulage"

    signer_id: str = wire("signerId")
    border_type: str = wire("borderType")
    font_family: str = wire("fontFamily")
    color: str = wire("color")
    mode: str = wire("mode")
    zoom_code: str = wire("zoomCode")


@dataclass(frozen=True)
class CreateCompanyMoulageRequest(_Request):
    URI = "/user/companyMoulage"

    signer_id: str = wire("signerId")
    style_type: str = wire("styleType")
    text_content: str = wire("textContent")
    # anti-counterfeit code, 13 digits
    key_content: str = wire("keyContent")
    color: str = wire("color")
    mode: str = wire("mode")


@dataclass(frozen=True)
class CreateTemplateContractRequest(_Request):
    URI = "/contract/templateContract"

    contract_title: str = wire("contractTitle")
    contract_no: str = wire("contractNo")
    template_id: str = wire("templateId")
    contract_data: Any = wire("contractData", None)


@dataclass(frozen=True)
class Signer:
    signer_id: str = wire("signerId")
    sign_position_type: str = wire("signPositionType")
    position_content: str = wire("positionContent")
    sign_validate_type: str = wire("signValidateType")
    sign_mode: str = wire("signMode")
    sign_form: str = wire("signForm")


@dataclass(frozen=True)
class AddSignerRequest(_Request):
    URI = "/contract/signer"

    id_type: str = wire("idType")
    id_content: str = wire("idContent")
    signers: tuple[Signer, ...] = wire("signers")


@dataclass(frozen=True)
class SignContractRequest(_Request):
    URI = "/contract/sign"

    id_type: str = wire("idType")
    id_content: str = wire("idContent")
    signer_id: str = wire("signerId")
    moulage_id: str = wire("moulageId")
    seal_class: str | None = wire("sealClass", None)
