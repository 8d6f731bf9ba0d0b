"""
Vault Client - Minimal HTTP client for the Vault system backend.

Covers the listing, enable and disable calls used by the top-level
configurations. Every failure is raised as a VaultAPIError.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from config import VaultConfig
from diff import normalize_path
from errors import VaultAPIError

logger = logging.getLogger(__name__)


class VaultClient:
    """Client for the Vault HTTP API."""

    def __init__(
        self,
        addr: str,
        token: str,
        namespace: Optional[str] = None,
        timeout: int = 30,
        verify: Any = True,
        session: Optional[requests.Session] = None,
    ):
        self.addr = addr.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = verify
        self.session.headers["X-Vault-Token"] = token
        if namespace:
            self.session.headers["X-Vault-Namespace"] = namespace

    @classmethod
    def from_config(cls, cfg: VaultConfig) -> "VaultClient":
        """Build a client from Vault configuration."""
        verify: Any = True
        if cfg.skip_verify:
            verify = False
        elif cfg.ca_cert:
            verify = cfg.ca_cert
        return cls(
            addr=cfg.addr,
            token=cfg.token,
            namespace=cfg.namespace,
            timeout=cfg.timeout,
            verify=verify,
        )

    def _request(
        self, method: str, path: str, json: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """Make a request to /v1/<path> and return the decoded body, if any."""
        url = f"{self.addr}/v1/{path.lstrip('/')}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method, url, json=json, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise VaultAPIError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            errors: List[Any] = []
            try:
                errors = response.json().get("errors", [])
            except ValueError:
                if response.text:
                    errors = [response.text]
            raise VaultAPIError(
                f"{method} {path} failed",
                status_code=response.status_code,
                errors=errors,
            )

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise VaultAPIError(f"{method} {path} returned invalid JSON") from e

    @staticmethod
    def _mounts(body: Optional[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        """Extract the path -> mount mapping from a sys listing."""
        if not body:
            return {}
        data = body.get("data")
        if isinstance(data, dict) and data:
            return data
        return {k: v for k, v in body.items() if isinstance(v, dict) and "type" in v}

    # Audit devices

    def list_audit(self) -> Dict[str, Dict[str, Any]]:
        return self._mounts(self._request("GET", "sys/audit"))

    def enable_audit(
        self, path: str, mount_type: str, description: str, options: Dict[str, Any]
    ) -> None:
        self._request(
            "PUT",
            f"sys/audit/{normalize_path(path)}",
            json={"type": mount_type, "description": description, "options": options},
        )

    def disable_audit(self, path: str) -> None:
        self._request("DELETE", f"sys/audit/{normalize_path(path)}")

    # Auth methods

    def list_auth(self) -> Dict[str, Dict[str, Any]]:
        return self._mounts(self._request("GET", "sys/auth"))

    def enable_auth(
        self, path: str, mount_type: str, description: str, options: Dict[str, Any]
    ) -> None:
        self._request(
            "POST",
            f"sys/auth/{normalize_path(path)}",
            json={"type": mount_type, "description": description, "options": options},
        )

    def disable_auth(self, path: str) -> None:
        self._request("DELETE", f"sys/auth/{normalize_path(path)}")

    # Secrets engines

    def list_mounts(self) -> Dict[str, Dict[str, Any]]:
        return self._mounts(self._request("GET", "sys/mounts"))

    def mount(
        self, path: str, mount_type: str, description: str, options: Dict[str, Any]
    ) -> None:
        self._request(
            "POST",
            f"sys/mounts/{normalize_path(path)}",
            json={"type": mount_type, "description": description, "options": options},
        )

    def unmount(self, path: str) -> None:
        self._request("DELETE", f"sys/mounts/{normalize_path(path)}")

    # ACL policies

    def list_policies(self) -> List[str]:
        try:
            body = self._request("LIST", "sys/policies/acl")
        except VaultAPIError as e:
            if e.status_code == 404:
                return []
            raise
        if not body:
            return []
        return list(body.get("data", {}).get("keys", []))

    def read_policy(self, name: str) -> str:
        body = self._request("GET", f"sys/policies/acl/{name}") or {}
        return body.get("data", {}).get("policy", "")

    def put_policy(self, name: str, rules: str) -> None:
        self._request("PUT", f"sys/policies/acl/{name}", json={"policy": rules})

    def delete_policy(self, name: str) -> None:
        self._request("DELETE", f"sys/policies/acl/{name}")
