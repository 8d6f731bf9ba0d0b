"""
Configuration Registry - Registration and dispatch of top-level configurations.

The registry maps a case-insensitive name to the Configuration that applies
it. It is built once at startup and handed to whatever drives the
reconciliation.
"""

import threading
from typing import Dict, List

from errors import ConfigurationNotFoundError, RegistrationError
from toplevel.base import ApplyResult, Configuration, logger


class ConfigurationRegistry:
    """
    Central registry of top-level configurations.

    Entries are never removed. The lock covers map access only, never a
    configuration's apply.
    """

    def __init__(self):
        self._configurations: Dict[str, Configuration] = {}
        self._lock = threading.Lock()

    def register(self, name: str, configuration: Configuration) -> None:
        """
        Make a configuration available under a name.

        Args:
            name: Registration name, stored lower-cased
            configuration: The configuration to register

        Raises:
            RegistrationError: If the name is empty, the configuration is
                None, or the name is already registered
        """
        if not name:
            raise RegistrationError(
                "could not register a configuration with an empty name"
            )
        if configuration is None:
            raise RegistrationError("could not register a None configuration")

        name = name.lower()
        with self._lock:
            if name in self._configurations:
                raise RegistrationError(f"register called twice for {name}")
            self._configurations[name] = configuration

        logger.debug(f"Registered configuration: {name}")

    def get(self, name: str) -> Configuration:
        """
        Look up a configuration by name.

        Raises:
            ConfigurationNotFoundError: If nothing is registered under name
        """
        with self._lock:
            configuration = self._configurations.get(name.lower())
            available = sorted(self._configurations)

        if configuration is None:
            raise ConfigurationNotFoundError(name, available)
        return configuration

    def apply(self, name: str, config_bytes: bytes, dry_run: bool) -> ApplyResult:
        """
        Apply a registered configuration.

        The bytes and dry-run flag are passed through unchanged.

        Args:
            name: Registered configuration name
            config_bytes: Raw configuration for the block
            dry_run: Report planned changes instead of making them

        Returns:
            The configuration's ApplyResult
        """
        return self.get(name).apply(config_bytes, dry_run)

    def names(self) -> List[str]:
        """List registered configuration names."""
        with self._lock:
            return sorted(self._configurations)

    def has(self, name: str) -> bool:
        """Check if a configuration is registered."""
        with self._lock:
            return name.lower() in self._configurations
