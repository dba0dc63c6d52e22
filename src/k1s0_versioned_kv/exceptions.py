"""versioned_kv ライブラリの例外型定義"""

from __future__ import annotations


class VaultKvError(Exception):
    """versioned_kv ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
        path: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.path = path
        self.status_code = status_code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class VaultKvErrorCodes:
    """VaultKvError のエラーコード定数。"""

    BACKEND_ERROR: str = "BACKEND_ERROR"
    HTTP_ERROR: str = "HTTP_ERROR"
    INVALID_RESPONSE: str = "INVALID_RESPONSE"
