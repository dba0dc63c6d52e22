"""Vault レスポンスの変換ヘルパー"""

from __future__ import annotations

import json
from typing import Any

import httpx

from .exceptions import VaultKvError, VaultKvErrorCodes
from .models import VaultResponse


def unwrap(body: str) -> VaultResponse:
    """生の JSON ボディを VaultResponse に変換する。"""
    try:
        data: Any = json.loads(body)
    except ValueError as e:
        raise VaultKvError(
            code=VaultKvErrorCodes.INVALID_RESPONSE,
            message=f"Failed to parse response body: {e}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise VaultKvError(
            code=VaultKvErrorCodes.INVALID_RESPONSE,
            message="Response body is not a JSON object",
        )
    return VaultResponse.from_dict(data)


def _error_messages(resp: httpx.Response) -> str:
    try:
        body: Any = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        return "; ".join(str(e) for e in body["errors"])
    return resp.text


def build_exception(
    resp: httpx.Response, path: str, cause: Exception | None = None
) -> VaultKvError:
    """失敗したレスポンスを BACKEND_ERROR に変換する。"""
    message = f"Status {resp.status_code} {resp.reason_phrase} [{path}]"
    errors = _error_messages(resp)
    if errors:
        message = f"{message}: {errors}"
    return VaultKvError(
        code=VaultKvErrorCodes.BACKEND_ERROR,
        message=message,
        cause=cause,
        path=path,
        status_code=resp.status_code,
    )
