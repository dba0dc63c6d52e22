"""レスポンス変換ヘルパーのユニットテスト"""

import httpx
import pytest
from k1s0_versioned_kv.exceptions import VaultKvError, VaultKvErrorCodes
from k1s0_versioned_kv.responses import build_exception, unwrap


def test_unwrap() -> None:
    response = unwrap('{"request_id": "r", "data": {"data": null, "metadata": {}}}')
    assert response.request_id == "r"
    assert response.required_data() == {"data": None, "metadata": {}}


def test_unwrap_invalid_json() -> None:
    """JSON でないボディは INVALID_RESPONSE。"""
    with pytest.raises(VaultKvError) as exc_info:
        unwrap("not json")
    assert exc_info.value.code == VaultKvErrorCodes.INVALID_RESPONSE


def test_unwrap_non_object() -> None:
    with pytest.raises(VaultKvError) as exc_info:
        unwrap("[1, 2]")
    assert exc_info.value.code == VaultKvErrorCodes.INVALID_RESPONSE


def test_build_exception_with_vault_errors() -> None:
    """Vault の errors 配列がメッセージに含まれること。"""
    resp = httpx.Response(403, json={"errors": ["permission denied"]})
    err = build_exception(resp, "app")
    assert err.code == VaultKvErrorCodes.BACKEND_ERROR
    assert err.path == "app"
    assert err.status_code == 403
    assert str(err) == "BACKEND_ERROR: Status 403 Forbidden [app]: permission denied"


def test_build_exception_joins_multiple_errors() -> None:
    resp = httpx.Response(400, json={"errors": ["first", "second"]})
    err = build_exception(resp, "app")
    assert "first; second" in str(err)


def test_build_exception_plain_text_body() -> None:
    resp = httpx.Response(500, text="Internal Server Error")
    err = build_exception(resp, "db/primary")
    assert err.status_code == 500
    assert "[db/primary]: Internal Server Error" in str(err)


def test_build_exception_empty_body() -> None:
    resp = httpx.Response(502)
    err = build_exception(resp, "app")
    assert str(err) == "BACKEND_ERROR: Status 502 Bad Gateway [app]"


def test_build_exception_keeps_cause() -> None:
    cause = RuntimeError("boom")
    err = build_exception(httpx.Response(500), "app", cause=cause)
    assert err.__cause__ is cause
