"""Vault HTTP クライアント実装"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .client import VaultOperations
from .exceptions import VaultKvError, VaultKvErrorCodes
from .models import VaultConfig, VaultResponse
from .responses import build_exception, unwrap

logger = logging.getLogger(__name__)


class HttpVaultOperations(VaultOperations):
    """httpx を使った Vault HTTP クライアント。"""

    def __init__(self, config: VaultConfig) -> None:
        self._config = config
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if config.token:
            headers["X-Vault-Token"] = config.token
        if config.namespace:
            headers["X-Vault-Namespace"] = config.namespace
        self._headers = headers

    @property
    def config(self) -> VaultConfig:
        return self._config

    def _make_client(self) -> httpx.Client:
        return httpx.Client(
            base_url=f"{self._config.address.rstrip('/')}/v1/",
            headers=self._headers,
            timeout=self._config.timeout_seconds,
        )

    def _send(self, method: str, path: str, json: dict[str, Any] | None = None) -> httpx.Response:
        try:
            with self._make_client() as client:
                resp = client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise VaultKvError(
                code=VaultKvErrorCodes.HTTP_ERROR,
                message=f"{method} {path} failed: {e}",
                cause=e,
                path=path,
            ) from e
        logger.debug(
            "Vault request completed",
            extra={"method": method, "path": path, "status": resp.status_code},
        )
        return resp

    def _handle_error(self, resp: httpx.Response, path: str) -> None:
        if resp.status_code >= 400:
            logger.warning(
                "Vault request failed",
                extra={"path": path, "status": resp.status_code},
            )
            raise build_exception(resp, path)

    def list(self, path: str) -> list[str] | None:
        resp = self._send("LIST", path)
        if resp.status_code == 404:
            return None
        self._handle_error(resp, path)
        data = unwrap(resp.text).required_data()
        return [str(key) for key in data.get("keys") or []]

    def read(self, path: str) -> VaultResponse | None:
        resp = self._send("GET", path)
        if resp.status_code == 404:
            return None
        self._handle_error(resp, path)
        return unwrap(resp.text)

    def write(self, path: str, body: dict[str, Any] | None = None) -> VaultResponse | None:
        resp = self._send("POST", path, json=body)
        self._handle_error(resp, path)
        if resp.status_code == 204 or not resp.content:
            return None
        return unwrap(resp.text)

    def delete(self, path: str) -> None:
        resp = self._send("DELETE", path)
        self._handle_error(resp, path)

    def get_raw(self, path: str) -> httpx.Response:
        return self._send("GET", path)
