"""VaultOperations 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from .models import VaultResponse


class VaultOperations(ABC):
    """認証済みの汎用 Vault リクエスト実行インターフェース。

    パスはすべて /v1/ からの相対パス（例: "secret/data/app"）。
    """

    @abstractmethod
    def list(self, path: str) -> list[str] | None:
        """パス配下のキー一覧を取得する。存在しなければ None。"""
        ...

    @abstractmethod
    def read(self, path: str) -> VaultResponse | None:
        """パスを読み取る。存在しなければ None。"""
        ...

    @abstractmethod
    def write(self, path: str, body: dict[str, Any] | None = None) -> VaultResponse | None:
        """パスに書き込む。レスポンスボディが無ければ None。"""
        ...

    @abstractmethod
    def delete(self, path: str) -> None:
        """パスを削除する。"""
        ...

    @abstractmethod
    def get_raw(self, path: str) -> httpx.Response:
        """ステータスを検査せずに GET の生レスポンスを返す。"""
        ...
