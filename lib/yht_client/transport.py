from __future__ import annotations

import json
import logging
from typing import Any, Protocol, TypeVar
from urllib.parse import urlencode

import httpx

from .config_types import ClientConfig
from .constants import AUTH_ROUTE_MARKER, LOGIN_URI, TOKEN_KEY
from .errors import DecodeError, EncodingError, NetworkError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=utf-8"
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"
FILE_FIELD = "file"


class Envelope(Protocol):
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Any: ...


T = TypeVar("T", bound=Envelope)


def decode(body: bytes, model: type[T]) -> T:
    """Decode a platform reply into ``model``."""
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"invalid JSON reply: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"expected JSON object, got {type(data).__name__}")
    try:
        return model.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise DecodeError(f"cannot decode {model.__name__}: {e}") from e


def extract_token(uri: str, params: dict[str, str]) -> tuple[str, dict[str, str]]:
    """Move a ``token`` entry from the form body into the query string."""
    if TOKEN_KEY not in params:
        return uri, dict(params)
    rest = dict(params)
    token = rest.pop(TOKEN_KEY)
    sep = "&" if "?" in uri else "?"
    return f"{uri}{sep}{urlencode({TOKEN_KEY: token})}", rest


class Transport:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._client = httpx.Client(
            timeout=cfg.timeout_s,
            headers={"User-Agent": "yht-client/0.1.0"},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def legacy_url(self, uri: str) -> str:
        if AUTH_ROUTE_MARKER in uri:
            return self._cfg.auth_gateway.rstrip("/") + uri
        return self._cfg.api_gateway.rstrip("/") + uri

    def v4_url(self, uri: str) -> str:
        return self._cfg.api_gateway_v4.rstrip("/") + uri

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            r = self._client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e
        # status codes are not checked here; the embedded envelope code decides
        logger.debug("%s %s -> %s", method, url.split("?", 1)[0], r.status_code)
        return r

    def post_json(self, uri: str, body: dict[str, Any], *, token: str | None = None) -> tuple[bytes, str | None]:
        """V4 call. Returns the raw reply and, for login, the issued token header."""
        try:
            content = json.dumps(body, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError(str(e)) from e
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if token:
            headers["token"] = token
        r = self._send("POST", self.v4_url(uri), content=content, headers=headers)
        issued = None
        if uri == LOGIN_URI:
            issued = r.headers.get("token")
        return r.content, issued

    def post_form(self, uri: str, params: dict[str, str]) -> bytes:
        uri, fields = extract_token(uri, params)
        r = self._send(
            "POST",
            self.legacy_url(uri),
            content=urlencode(fields).encode("utf-8"),
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )
        return r.content

    def post_multipart(self, uri: str, params: dict[str, str], file_data: bytes) -> bytes:
        uri, fields = extract_token(uri, params)
        r = self._send(
            "POST",
            self.legacy_url(uri),
            data=fields,
            files={FILE_FIELD: (None, file_data)},
        )
        return r.content

    def get(self, uri: str) -> bytes:
        r = self._send("GET", self.legacy_url(uri), headers={"Content-Type": FORM_CONTENT_TYPE})
        return r.content
