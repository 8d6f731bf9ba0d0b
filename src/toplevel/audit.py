"""
Audit Devices - Declarative configuration for Vault audit devices.
"""

from typing import Any, Dict

from toplevel.mounts import MountConfiguration, MountEntry


class AuditEntry(MountEntry):
    """An audit device enabled at a path."""


class AuditConfiguration(MountConfiguration):
    """
    Ensures a Vault instance's audit devices are configured exactly as
    provided.
    """

    entry_class = AuditEntry
    kind = "audit device"

    @property
    def name(self) -> str:
        return "vault_audit_backends"

    @property
    def package(self) -> str:
        return "audit"

    def _list(self) -> Dict[str, Dict[str, Any]]:
        return self.client.list_audit()

    def _enable(self, entry: MountEntry) -> None:
        self.client.enable_audit(
            entry.path, entry.type, entry.description, entry.options
        )

    def _disable(self, entry: MountEntry) -> None:
        self.client.disable_audit(entry.path)
