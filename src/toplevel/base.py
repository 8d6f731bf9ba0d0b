"""
Configuration Base - Abstract interface for top-level configuration blocks.

A Configuration applies one domain of declarative configuration (audit
devices, auth methods, ...) to a Vault instance. ItemConfiguration implements
the decode, list, diff, apply-or-report sequence shared by every domain.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from diff import Item, diff_items
from errors import DecodeError, RegistrationError, ValidationError
from validation import validate_entry, validate_entry_schema
from vault import VaultClient

logger = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """Outcome of applying one configuration block."""

    name: str
    dry_run: bool = False
    to_write: List[Item] = field(default_factory=list)
    to_delete: List[Item] = field(default_factory=list)
    written: int = 0
    deleted: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.to_write or self.to_delete)


class Configuration(ABC):
    """
    Abstract base class for a block of declarative configuration.

    Any failure while applying raises a VaultManagerError; the caller decides
    whether to abort.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name the configuration is registered under."""
        pass

    @abstractmethod
    def validate(self, config_bytes: bytes) -> int:
        """
        Decode and validate configuration without contacting Vault.

        Args:
            config_bytes: Raw configuration

        Returns:
            Number of entries decoded
        """
        pass

    @abstractmethod
    def apply(self, config_bytes: bytes, dry_run: bool) -> ApplyResult:
        """
        Ensure the Vault instance is configured exactly as provided.

        Args:
            config_bytes: Raw configuration for this block
            dry_run: Report planned changes instead of making them

        Returns:
            ApplyResult describing the planned or applied changes
        """
        pass

    def describe(self, item: Item) -> str:
        """Human readable form of an item for dry-run reports."""
        return repr(item)


class ItemConfiguration(Configuration):
    """
    Configuration whose entries are keyed Items.

    Subclasses describe their entry schema and how to build, list, write and
    delete items; this class owns decoding and the reconciliation sequence.
    Deletes are issued before writes so a drifted item is removed before it
    is recreated.
    """

    # JSON schema of a single entry
    schema: Dict[str, Any] = {"type": "object"}

    def __init__(self, client: Optional[VaultClient] = None):
        is_valid, error = validate_entry_schema(self.schema)
        if not is_valid:
            raise RegistrationError(f"{self.name}: {error}")
        self.client = client

    @property
    def package(self) -> str:
        """Short label used in log lines."""
        return self.name

    @abstractmethod
    def entry_from_config(self, entry: Dict[str, Any]) -> Item:
        """Build an item from one validated configuration entry."""
        pass

    @abstractmethod
    def list_observed(self) -> List[Item]:
        """List the items currently present in Vault."""
        pass

    @abstractmethod
    def write(self, item: Item) -> None:
        """Create or enable an item in Vault."""
        pass

    @abstractmethod
    def delete(self, item: Item) -> None:
        """Delete or disable an item in Vault."""
        pass

    def decode(self, config_bytes: bytes) -> List[Item]:
        """
        Decode raw configuration into items.

        Raises:
            DecodeError: If the bytes are not a YAML list of entries
            ValidationError: If an entry violates the schema or a key repeats
        """
        try:
            entries = yaml.safe_load(config_bytes)
        except yaml.YAMLError as e:
            raise DecodeError(self.name, str(e)) from e

        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise DecodeError(
                self.name, f"expected a list of entries, got {type(entries).__name__}"
            )

        items: List[Item] = []
        seen: Dict[str, int] = {}
        for index, entry in enumerate(entries):
            is_valid, error = validate_entry(entry, self.schema)
            if not is_valid:
                raise ValidationError(self.name, f"entry {index}: {error}")

            item = self.entry_from_config(entry)
            key = item.key()
            if key in seen:
                raise ValidationError(
                    self.name,
                    f"entry {index}: duplicate key '{key}' (first seen at entry "
                    f"{seen[key]})",
                )
            seen[key] = index
            items.append(item)

        return items

    def validate(self, config_bytes: bytes) -> int:
        return len(self.decode(config_bytes))

    def apply(self, config_bytes: bytes, dry_run: bool) -> ApplyResult:
        desired = self.decode(config_bytes)
        observed = self.list_observed()

        to_write, to_delete = diff_items(desired, observed)
        result = ApplyResult(
            name=self.name,
            dry_run=dry_run,
            to_write=to_write,
            to_delete=to_delete,
        )

        if dry_run:
            for item in to_write:
                logger.info(
                    f"[Dry Run]\tpackage={self.package}\t"
                    f"entry to be written='{self.describe(item)}'"
                )
            for item in to_delete:
                logger.info(
                    f"[Dry Run]\tpackage={self.package}\t"
                    f"entry to be deleted='{self.describe(item)}'"
                )
            return result

        for item in to_delete:
            self.delete(item)
            result.deleted += 1

        for item in to_write:
            self.write(item)
            result.written += 1

        if not result.has_changes:
            logger.debug(f"{self.name}: already up to date")

        return result
