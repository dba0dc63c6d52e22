"""KV v2 (versioned key/value) シークレットエンジン操作"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .client import VaultOperations
from .exceptions import VaultKvError, VaultKvErrorCodes
from .http_client import HttpVaultOperations
from .models import UNVERSIONED, Metadata, VaultConfig, VaultResponse, Version, Versioned
from .responses import build_exception, unwrap

logger = logging.getLogger(__name__)

DELETION_MARKER = "deletion_time"


def _require_path(path: str | None) -> str:
    if not path:
        raise ValueError("path must not be empty")
    return path


def _to_version_list(versions: Sequence[Version] | None) -> list[int]:
    if versions is None:
        raise ValueError("versions must not be None")
    if any(v is None for v in versions):
        raise ValueError("versions must not contain None")
    return [v.number for v in versions if v.number is not None]


class VersionedKeyValueOperations:
    """マウントパス配下の KV v2 シークレットを操作する。

    ネットワーク I/O はすべて VaultOperations に委譲し、ここではパスの組み立てと
    リクエスト/レスポンスの形の変換のみを行う。状態を持たないため複数スレッドから
    共有できる。
    """

    def __init__(self, vault_operations: VaultOperations, path: str) -> None:
        if vault_operations is None:
            raise ValueError("vault_operations must not be None")
        if not path:
            raise ValueError("mount path must not be empty")
        self._vault_operations = vault_operations
        self._path = path

    @classmethod
    def from_config(cls, config: VaultConfig) -> VersionedKeyValueOperations:
        return cls(HttpVaultOperations(config), config.kv_mount)

    @property
    def mount_path(self) -> str:
        return self._path

    def list(self, path: str) -> list[str] | None:
        """metadata/<path> 配下のキー一覧。空文字はマウント直下を表す。"""
        if path is None:
            raise ValueError("path must not be None")
        return self._vault_operations.list(self._backend_path("metadata", path))

    def read(self, path: str, version: Version = UNVERSIONED) -> Versioned[dict[str, Any]] | None:
        """シークレットを読み取る。存在しなければ None。

        論理削除されたバージョンはバックエンドが 404 を返すが、ボディに
        deletion_time を含むメタデータが入っているため data=None の結果として返す。
        """
        _require_path(path)
        if version is None:
            raise ValueError("version must not be None")

        secret_path = self._data_path(path)
        if version.is_versioned():
            secret_path = f"{secret_path}?version={version.number}"

        resp = self._vault_operations.get_raw(secret_path)
        response: VaultResponse
        if resp.status_code == 404:
            if DELETION_MARKER not in resp.text:
                logger.debug("Secret not found", extra={"path": secret_path})
                return None
            logger.debug("Secret version is deleted", extra={"path": secret_path})
            response = unwrap(resp.text)
        elif resp.status_code >= 400:
            raise build_exception(resp, path)
        else:
            response = unwrap(resp.text)

        data = response.required_data()
        metadata = Metadata.from_dict(data.get("metadata"))
        return Versioned.from_metadata(data.get("data"), metadata)

    def write(self, path: str, data: Mapping[str, Any]) -> Metadata:
        """CAS 制約なしで新しいバージョンを書き込む。"""
        _require_path(path)
        return self._write(path, {"data": dict(data)})

    def write_versioned(self, path: str, versioned: Versioned[Any]) -> Metadata:
        """versioned.version を CAS 値として書き込む。

        現在のバージョンが一致しない場合、バックエンドは書き込みを拒否する。
        """
        _require_path(path)
        if versioned is None:
            raise ValueError("versioned must not be None")
        body = {"data": versioned.data, "options": {"cas": versioned.version.cas}}
        return self._write(path, body)

    def _write(self, path: str, body: dict[str, Any]) -> Metadata:
        response = self._vault_operations.write(self._data_path(path), body)
        if response is None:
            raise VaultKvError(
                code=VaultKvErrorCodes.INVALID_RESPONSE,
                message=f"Write to {path} returned no metadata",
                path=path,
            )
        return Metadata.from_dict(response.required_data())

    def delete(self, path: str, versions: Sequence[Version] = ()) -> None:
        """バージョン指定が無ければ最新のみを論理削除する。"""
        _require_path(path)
        version_list = _to_version_list(versions)
        if len(versions) == 0:
            self._vault_operations.delete(self._data_path(path))
            return
        self._vault_operations.write(
            self._backend_path("delete", path), {"versions": version_list}
        )

    def undelete(self, path: str, versions: Sequence[Version]) -> None:
        """論理削除されたバージョンを復元する。"""
        _require_path(path)
        self._vault_operations.write(
            self._backend_path("undelete", path), {"versions": _to_version_list(versions)}
        )

    def destroy(self, path: str, versions: Sequence[Version]) -> None:
        """バージョンのデータを完全に削除する。取り消しはできない。"""
        _require_path(path)
        self._vault_operations.write(
            self._backend_path("destroy", path), {"versions": _to_version_list(versions)}
        )

    def _data_path(self, path: str) -> str:
        return self._backend_path("data", path)

    def _backend_path(self, segment: str, path: str) -> str:
        return f"{self._path}/{segment}/{path}"
