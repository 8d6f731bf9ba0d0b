"""
Mount-style configurations shared by audit devices, auth methods and
secrets engines.

All three are enabled at a path with a type, a description and a map of
options, and are listed by Vault as a path -> mount mapping.
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List

from diff import (
    Item,
    canonical_value,
    equal_path_names,
    normalize_path,
    options_equal,
)
from toplevel.base import ItemConfiguration, logger

MOUNT_ENTRY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["_path", "type"],
    "properties": {
        "_path": {"type": "string", "minLength": 1},
        "type": {"type": "string", "minLength": 1},
        "description": {"type": ["string", "null"]},
        "options": {
            "type": ["object", "null"],
            "additionalProperties": {"type": ["string", "number", "boolean"]},
        },
    },
}


@dataclass
class MountEntry(Item):
    """A path-mounted Vault backend."""

    path: str
    type: str
    description: str = ""
    options: Dict[str, Any] = field(default_factory=dict)

    def key(self) -> str:
        return normalize_path(self.path)

    def equals(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        return (
            equal_path_names(self.path, other.path)
            and self.type == other.type
            and self.description == other.description
            and options_equal(self.options, other.options)
        )

    @classmethod
    def from_config(cls, entry: Dict[str, Any]) -> "MountEntry":
        options = entry.get("options") or {}
        return cls(
            path=entry["_path"],
            type=entry["type"],
            description=entry.get("description") or "",
            options={k: canonical_value(v) for k, v in options.items()},
        )

    @classmethod
    def from_listing(cls, path: str, mount: Dict[str, Any]) -> "MountEntry":
        return cls(
            path=mount.get("path") or path,
            type=mount.get("type", ""),
            description=mount.get("description") or "",
            options=dict(mount.get("options") or {}),
        )


class MountConfiguration(ItemConfiguration):
    """Base configuration for backends Vault lists as path -> mount."""

    schema = MOUNT_ENTRY_SCHEMA
    entry_class = MountEntry

    # Paths Vault mounts itself and which cannot be disabled
    builtin_paths: FrozenSet[str] = frozenset()

    # Log label, e.g. "audit device"
    kind = "mount"

    @abstractmethod
    def _list(self) -> Dict[str, Dict[str, Any]]:
        pass

    @abstractmethod
    def _enable(self, entry: MountEntry) -> None:
        pass

    @abstractmethod
    def _disable(self, entry: MountEntry) -> None:
        pass

    def entry_from_config(self, entry: Dict[str, Any]) -> MountEntry:
        return self.entry_class.from_config(entry)

    def list_observed(self) -> List[Item]:
        observed: List[Item] = []
        for path, mount in self._list().items():
            if normalize_path(path) in self.builtin_paths:
                continue
            observed.append(self.entry_class.from_listing(path, mount))
        return observed

    def write(self, item: MountEntry) -> None:
        self._enable(item)
        logger.info(f"{self.kind} successfully enabled: path={item.path}")

    def delete(self, item: MountEntry) -> None:
        self._disable(item)
        logger.info(f"{self.kind} successfully disabled: path={item.path}")

    def describe(self, item: MountEntry) -> str:
        return (
            f"path={item.path} type={item.type} "
            f"description={item.description!r} options={item.options}"
        )
