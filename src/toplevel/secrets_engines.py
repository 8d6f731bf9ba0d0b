"""
Secrets Engines - Declarative configuration for Vault secrets engines.

System mounts (sys, cubbyhole, identity) cannot be disabled and are left
out of the observed state.
"""

from typing import Any, Dict

from toplevel.mounts import MountConfiguration, MountEntry


class SecretsEngineEntry(MountEntry):
    """A secrets engine mounted at a path."""


class SecretsEngineConfiguration(MountConfiguration):
    """
    Ensures a Vault instance's secrets engines are mounted exactly as
    provided.
    """

    entry_class = SecretsEngineEntry
    builtin_paths = frozenset({"sys", "cubbyhole", "identity"})
    kind = "secrets engine"

    @property
    def name(self) -> str:
        return "vault_secret_engines"

    @property
    def package(self) -> str:
        return "secretsengine"

    def _list(self) -> Dict[str, Dict[str, Any]]:
        return self.client.list_mounts()

    def _enable(self, entry: MountEntry) -> None:
        self.client.mount(entry.path, entry.type, entry.description, entry.options)

    def _disable(self, entry: MountEntry) -> None:
        self.client.unmount(entry.path)
