from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import unquote_plus

from .errors import DecodeError

NOTICE_PREFIX = "notice="


@dataclass(frozen=True)
class AsyncNotifyResult:
    content: str = ""
    notice_type: int = 0
    notice_params: str = ""
    info_map: dict[str, Any] = field(default_factory=dict)


def parse_notification(body: bytes | str) -> AsyncNotifyResult:
    """Decode a platform callback body: url-encoded ``notice=<json>``."""
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"notification is not utf-8: {e}") from e
    text = unquote_plus(body).strip()
    if text.startswith(NOTICE_PREFIX):
        text = text[len(NOTICE_PREFIX):]
    try:
        data = json.loads(text)
    except ValueError as e:
        raise DecodeError(f"notification is not JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError("notification is not a JSON object")

    notice_type = data.get("noticeType")
    try:
        notice_type = int(notice_type or 0)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"invalid noticeType: {notice_type!r}") from e
    info_map = data.get("map")
    params = data.get("noticeParams")
    if isinstance(params, (dict, list)):
        params = json.dumps(params, ensure_ascii=False)
    return AsyncNotifyResult(
        content=str(data.get("content") or ""),
        notice_type=notice_type,
        notice_params=str(params or ""),
        info_map=info_map if isinstance(info_map, dict) else {},
    )


def answer_notification(ok: bool, msg: str) -> str:
    return json.dumps({"response": bool(ok), "msg": msg}, ensure_ascii=False)
