from __future__ import annotations

API_GATEWAY = "https://sdk.yunhetong.com/sdk"
API_GATEWAY_V4 = "https://api.yunhetong.com/api"
AUTH_GATEWAY = "https://authentic.yunhetong.com"

APP_ID_KEY = "appId"
APP_KEY_KEY = "appKey"
PASSWORD_KEY = "password"
TOKEN_KEY = "token"

SUCCESS_CODE = 200
LOGIN_URI = "/auth/login"
AUTH_ROUTE_MARKER = "authentic"

# platform token lives ~15 minutes
TOKEN_REFRESH_INTERVAL_S = 14 * 60

# user types
USER_TYPE_PERSONAL = "1"
USER_TYPE_ENTERPRISE = "2"
USER_TYPE_PLATFORM = "4"

# legacy certificate types
CERT_TYPE_ID_CARD = "1"
CERT_TYPE_PASSPORT = "2"
CERT_TYPE_OFFICER = "3"
CERT_TYPE_LICENCE = "4"
CERT_TYPE_ORGAN = "5"
CERT_TYPE_SOCIAL = "6"

# legacy verification request types
RCA_TWO_FACTOR = "1"
RCA_PORTRAIT = "2"
RCA_BANK_THREE = "3"
RCA_BANK_FOUR = "4"

# V4 identity regions
IDENTITY_REGION_MAINLAND = "0"
IDENTITY_REGION_HK = "1"
IDENTITY_REGION_TAIWAN = "2"
IDENTITY_REGION_MACAO = "3"
IDENTITY_REGION_FOREIGN = "4"

# V4 person certificate types
PERSON_CERT_ID_CARD = "a"
PERSON_CERT_PASSPORT = "b"
PERSON_CERT_EEP = "d"
PERSON_CERT_MTP_TW = "e"
PERSON_CERT_MTP_HM = "f"
PERSON_CERT_OTHER = "z"

# V4 company certificate type (unified social credit code)
COMPANY_CERT_USCC = "1"

# V4 phone regions
PHONE_REGION_MAINLAND = "0"
PHONE_REGION_HK_MACAO = "1"
PHONE_REGION_TAIWAN = "2"

CA_TYPE_DEFAULT = "B2"

# person moulage
MOULAGE_BORDER = "B1"
MOULAGE_BORDERLESS = "B2"

MOULAGE_FONT_KAITI = "F1"
MOULAGE_FONT_HWFS = "F2"
MOULAGE_FONT_HWKT = "F3"
MOULAGE_FONT_MSYH = "F4"

MOULAGE_COLOR_RED = "C1"
MOULAGE_COLOR_BLUE = "C2"
MOULAGE_COLOR_BLACK = "C3"

MOULAGE_MODE_NORMAL = "0"
MOULAGE_MODE_TRANSPARENT = "1"
MOULAGE_MODE_MASKED = "2"

MOULAGE_ZOOM_LARGE = "0"
MOULAGE_ZOOM_NORMAL = "1"
MOULAGE_ZOOM_SMALL = "2"

# company moulage
MOULAGE_STYLE_CIRCLE = "1"
MOULAGE_STYLE_ELLIPSE = "2"

# contract id types
ID_TYPE_SYSTEM = "0"
ID_TYPE_CUSTOM = "1"

SIGN_POSITION_KEYWORD = "0"
SIGN_POSITION_PLACEHOLDER = "1"
SIGN_POSITION_COORD = "2"

SIGN_VALIDATE_NONE = "0"
SIGN_VALIDATE_SMS = "1"

SIGN_MODE_SPECIFY = "0"
SIGN_MODE_RENDER = "1"

SIGN_FORM_JS = "0"
SIGN_FORM_H5 = "1"

SEAL_CLASS_NORMAL = "0"
SEAL_CLASS_PAGING = "1"
SEAL_CLASS_WITH_ABSTRACT = "2"
SEAL_CLASS_WITH_SIGN_TIME = "3"
SEAL_CLASS_NORMAL_WITH_PAGING = "4"
