"""k1s0 versioned key/value (Vault KV v2) library."""

from .client import VaultOperations
from .exceptions import VaultKvError, VaultKvErrorCodes
from .http_client import HttpVaultOperations
from .models import (
    UNVERSIONED,
    Metadata,
    VaultConfig,
    VaultResponse,
    Version,
    Versioned,
)
from .responses import build_exception, unwrap
from .versioned_kv import VersionedKeyValueOperations

__all__ = [
    "VersionedKeyValueOperations",
    "VaultOperations",
    "HttpVaultOperations",
    "Version",
    "UNVERSIONED",
    "Metadata",
    "Versioned",
    "VaultResponse",
    "VaultConfig",
    "VaultKvError",
    "VaultKvErrorCodes",
    "build_exception",
    "unwrap",
]
