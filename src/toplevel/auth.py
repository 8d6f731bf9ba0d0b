"""
Auth Methods - Declarative configuration for Vault auth methods.

The token auth method is always mounted by Vault and is never managed.
"""

from typing import Any, Dict

from toplevel.mounts import MountConfiguration, MountEntry


class AuthEntry(MountEntry):
    """An auth method enabled at a path."""


class AuthConfiguration(MountConfiguration):
    """
    Ensures a Vault instance's auth methods are configured exactly as
    provided.
    """

    entry_class = AuthEntry
    builtin_paths = frozenset({"token"})
    kind = "auth method"

    @property
    def name(self) -> str:
        return "vault_auth_backends"

    @property
    def package(self) -> str:
        return "auth"

    def _list(self) -> Dict[str, Dict[str, Any]]:
        return self.client.list_auth()

    def _enable(self, entry: MountEntry) -> None:
        self.client.enable_auth(
            entry.path, entry.type, entry.description, entry.options
        )

    def _disable(self, entry: MountEntry) -> None:
        self.client.disable_auth(entry.path)
