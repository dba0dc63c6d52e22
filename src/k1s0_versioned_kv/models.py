"""KV v2 クライアントデータモデル"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from .exceptions import VaultKvError, VaultKvErrorCodes

T = TypeVar("T")

DEFAULT_ADDRESS = "http://127.0.0.1:8200"
DEFAULT_KV_MOUNT = "secret"


@dataclass(frozen=True)
class Version:
    """シークレットのリビジョン番号。number が None の場合は最新を表す。"""

    number: int | None = None

    def __post_init__(self) -> None:
        if self.number is not None and self.number < 0:
            raise ValueError(f"version must be >= 0: {self.number}")

    @classmethod
    def unversioned(cls) -> Version:
        return UNVERSIONED

    @classmethod
    def of(cls, number: int) -> Version:
        return cls(number=number)

    def is_versioned(self) -> bool:
        return self.number is not None

    @property
    def cas(self) -> int:
        """CAS オプションに送る値。unversioned は 0（未作成時のみ書き込み）。"""
        return self.number if self.number is not None else 0


UNVERSIONED = Version()


def _parse_time(data: dict[str, Any], key: str) -> datetime | None:
    value = data.get(key) or ""
    if not value:
        return None
    if not isinstance(value, str):
        raise VaultKvError(
            code=VaultKvErrorCodes.INVALID_RESPONSE,
            message=f"{key} is not a string: {value!r}",
        )
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise VaultKvError(
            code=VaultKvErrorCodes.INVALID_RESPONSE,
            message=f"Failed to parse {key}: {value}",
            cause=e,
        ) from e
    if parsed.tzinfo is None:
        raise VaultKvError(
            code=VaultKvErrorCodes.INVALID_RESPONSE,
            message=f"{key} has no UTC offset: {value}",
        )
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class Metadata:
    """バージョンのメタデータ。バックエンドのレスポンスからのみ生成される。"""

    version: Version
    created_at: datetime
    deleted_at: datetime | None = None
    destroyed: bool = False

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Metadata:
        """レスポンスの metadata 辞書から Metadata を生成する。

        read と write のどちらのレスポンスにも同じ解析を適用する。
        created_time と version は必須で、欠けている場合は INVALID_RESPONSE。
        """
        if not isinstance(data, dict):
            raise VaultKvError(
                code=VaultKvErrorCodes.INVALID_RESPONSE,
                message="Response does not contain version metadata",
            )
        created_at = _parse_time(data, "created_time")
        if created_at is None:
            raise VaultKvError(
                code=VaultKvErrorCodes.INVALID_RESPONSE,
                message="created_time is missing from version metadata",
            )
        version = data.get("version")
        if isinstance(version, bool) or not isinstance(version, int):
            raise VaultKvError(
                code=VaultKvErrorCodes.INVALID_RESPONSE,
                message=f"version is not an integer: {version!r}",
            )
        return cls(
            version=Version.of(version),
            created_at=created_at,
            deleted_at=_parse_time(data, "deletion_time"),
            destroyed=data.get("destroyed") is True,
        )


@dataclass(frozen=True)
class Versioned(Generic[T]):
    """シークレットデータとそのバージョン情報の組。

    読み取り結果としては metadata を持ち、CAS 書き込みの入力としては
    version のみを持つ。
    """

    data: T | None
    version: Version = UNVERSIONED
    metadata: Metadata | None = None

    @classmethod
    def create(cls, data: T | None, version: Version = UNVERSIONED) -> Versioned[T]:
        if version is None:
            raise ValueError("version must not be None")
        return cls(data=data, version=version)

    @classmethod
    def from_metadata(cls, data: T | None, metadata: Metadata) -> Versioned[T]:
        return cls(data=data, version=metadata.version, metadata=metadata)

    def is_versioned(self) -> bool:
        return self.version.is_versioned()

    def has_data(self) -> bool:
        return self.data is not None

    def required_data(self) -> T:
        if self.data is None:
            raise ValueError(f"No data available for version {self.version.number}")
        return self.data


@dataclass
class VaultResponse:
    """Vault の標準レスポンスエンベロープ。"""

    data: dict[str, Any] | None = None
    request_id: str = ""
    lease_id: str = ""
    renewable: bool = False
    lease_duration: int = 0
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VaultResponse:
        """API レスポンス辞書から VaultResponse を生成する。"""
        return cls(
            data=data.get("data"),
            request_id=data.get("request_id") or "",
            lease_id=data.get("lease_id") or "",
            renewable=bool(data.get("renewable", False)),
            lease_duration=data.get("lease_duration") or 0,
            warnings=list(data.get("warnings") or []),
        )

    def required_data(self) -> dict[str, Any]:
        if self.data is None:
            raise VaultKvError(
                code=VaultKvErrorCodes.INVALID_RESPONSE,
                message="Response does not contain data",
            )
        return self.data


@dataclass
class VaultConfig:
    """Vault クライアント設定。"""

    address: str = DEFAULT_ADDRESS
    token: str = ""
    namespace: str = ""
    kv_mount: str = DEFAULT_KV_MOUNT
    timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> VaultConfig:
        """VAULT_* 環境変数から設定を読み込む。"""
        return cls(
            address=os.environ.get("VAULT_ADDR", DEFAULT_ADDRESS),
            token=os.environ.get("VAULT_TOKEN", ""),
            namespace=os.environ.get("VAULT_NAMESPACE", ""),
            kv_mount=os.environ.get("VAULT_KV_MOUNT", DEFAULT_KV_MOUNT),
        )
