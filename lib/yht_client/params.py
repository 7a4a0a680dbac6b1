from __future__ import annotations

import dataclasses
from typing import Any

from .errors import EncodingError

_WIRE = "wire"


def wire(name: str, default: Any = dataclasses.MISSING, **kwargs: Any) -> Any:
    """Declare a dataclass field that is sent to the platform as ``name``."""
    return dataclasses.field(default=default, metadata={_WIRE: name}, **kwargs)


def _wire_fields(obj: Any):
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise EncodingError(f"cannot marshal {type(obj).__name__}: not a request descriptor")
    for f in dataclasses.fields(obj):
        name = f.metadata.get(_WIRE)
        if name:
            yield name, getattr(obj, f.name)


def param_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    raise EncodingError(f"unsupported parameter type: {type(value).__name__}")


def to_params(obj: Any, extra: dict[str, str] | None = None) -> dict[str, str]:
    """Flatten one level of wire fields into form parameters.

    ``None`` fields are left out. Entries of ``extra`` are merged last and win
    over request fields with the same wire name.
    """
    params: dict[str, str] = {}
    for name, value in _wire_fields(obj):
        if value is None:
            continue
        try:
            params[name] = param_str(value)
        except EncodingError as e:
            raise EncodingError(f"{type(obj).__name__}.{name}: {e}") from e
    for key, value in (extra or {}).items():
        params[str(key)] = param_str(value)
    return params


def _json_value(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_json_body(value)
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _json_value(v) for k, v in value.items()}
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    raise EncodingError(f"unsupported JSON value: {type(value).__name__}")


def to_json_body(obj: Any) -> dict[str, Any]:
    """JSON body for V4 requests. Nested descriptors are encoded recursively."""
    body: dict[str, Any] = {}
    for name, value in _wire_fields(obj):
        if value is None:
            continue
        body[name] = _json_value(value)
    return body
