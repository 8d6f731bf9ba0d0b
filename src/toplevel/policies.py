"""
Policies - Declarative configuration for Vault ACL policies.

The root and default policies always exist and are never managed.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from diff import Item
from toplevel.base import ItemConfiguration, logger

BUILTIN_POLICIES = frozenset({"root", "default"})

POLICY_ENTRY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "rules"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "rules": {"type": "string"},
    },
}


@dataclass
class PolicyEntry(Item):
    """A named ACL policy and its HCL rules."""

    name: str
    rules: str

    def key(self) -> str:
        # Vault stores policy names lower-cased
        return self.name.lower()

    def equals(self, other: Any) -> bool:
        if not isinstance(other, PolicyEntry):
            return False
        return (
            self.key() == other.key() and self.rules.strip() == other.rules.strip()
        )


class PolicyConfiguration(ItemConfiguration):
    """Ensures a Vault instance's ACL policies are exactly as provided."""

    schema = POLICY_ENTRY_SCHEMA

    @property
    def name(self) -> str:
        return "vault_policies"

    @property
    def package(self) -> str:
        return "policies"

    def entry_from_config(self, entry: Dict[str, Any]) -> PolicyEntry:
        return PolicyEntry(name=entry["name"], rules=entry["rules"])

    def list_observed(self) -> List[Item]:
        observed: List[Item] = []
        for name in self.client.list_policies():
            if name.lower() in BUILTIN_POLICIES:
                continue
            observed.append(PolicyEntry(name=name, rules=self.client.read_policy(name)))
        return observed

    def write(self, item: PolicyEntry) -> None:
        self.client.put_policy(item.name, item.rules)
        logger.info(f"policy successfully written: name={item.name}")

    def delete(self, item: PolicyEntry) -> None:
        self.client.delete_policy(item.name)
        logger.info(f"policy successfully deleted: name={item.name}")

    def describe(self, item: PolicyEntry) -> str:
        return f"name={item.name}"
