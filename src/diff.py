"""
Item Diffing - Compute the writes and deletes needed to converge.

Any domain entity that participates in reconciliation implements the Item
contract: a stable key and a value-equality test. diff_items pairs desired
items with observed items by key and reports what must be written and what
must be deleted.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence


class Item(ABC):
    """
    Abstract base class for a declarative resource.

    Items are built twice per pass: once from decoded configuration and once
    from the live listing returned by Vault.
    """

    @abstractmethod
    def key(self) -> str:
        """Identity used to pair desired items with observed items."""
        pass

    @abstractmethod
    def equals(self, other: Any) -> bool:
        """
        Value equality against another item.

        Must return False, never raise, when other is of a different type.
        """
        pass


class ItemDiff(NamedTuple):
    """Items to write and items to delete, in input order."""

    to_write: List[Item]
    to_delete: List[Item]


def diff_items(desired: Sequence[Item], observed: Sequence[Item]) -> ItemDiff:
    """
    Diff desired items against observed items.

    A desired item is written when no observed item shares its key or when
    the observed item with its key is not equal to it. An observed item is
    deleted unless some desired item has the same key and is equal to it, so
    a drifted key shows up in both lists.

    Args:
        desired: Items decoded from configuration
        observed: Items listed from the remote service

    Returns:
        ItemDiff of (to_write, to_delete). Neither input is modified.
    """
    to_write: List[Item] = []
    for d in desired:
        match: Optional[Item] = None
        for o in observed:
            if o.key() == d.key():
                match = o
                break
        if match is None or not d.equals(match):
            to_write.append(d)

    to_delete: List[Item] = []
    for o in observed:
        if not any(d.key() == o.key() and d.equals(o) for d in desired):
            to_delete.append(o)

    return ItemDiff(to_write, to_delete)


# ==================== Equality helpers ====================


def canonical_value(value: Any) -> str:
    """
    Canonical string form of an option value.

    Configuration decodes option values as strings while Vault may return
    booleans, numbers or nested structures for the same option.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


def options_equal(
    a: Optional[Mapping[str, Any]], b: Optional[Mapping[str, Any]]
) -> bool:
    """Compare two option mappings by their canonicalized values."""
    a = a or {}
    b = b or {}
    if len(a) != len(b):
        return False
    for k, v in a.items():
        if k not in b:
            return False
        if canonical_value(v) != canonical_value(b[k]):
            return False
    return True


def normalize_path(path: str) -> str:
    """Strip the leading and trailing slashes Vault adds or drops."""
    return (path or "").strip("/")


def equal_path_names(a: str, b: str) -> bool:
    """Check whether two Vault mount paths name the same mount."""
    return normalize_path(a) == normalize_path(b)
