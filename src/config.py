"""
Configuration module for the Vault manager.

Loads configuration from environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class VaultConfig:
    """Connection settings for the Vault instance being managed."""

    addr: str = "http://127.0.0.1:8200"
    token: str = field(default="", repr=False)  # Never log token
    namespace: Optional[str] = None
    timeout: int = 30  # seconds
    skip_verify: bool = False
    ca_cert: Optional[str] = None

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        token = os.getenv("VAULT_TOKEN", "")
        if not token:
            raise ValueError(
                "VAULT_TOKEN environment variable must be set. "
                "Vault token cannot be empty."
            )

        return cls(
            addr=os.getenv("VAULT_ADDR", "http://127.0.0.1:8200"),
            token=token,
            namespace=os.getenv("VAULT_NAMESPACE") or None,
            timeout=int(os.getenv("VAULT_TIMEOUT", "30")),
            skip_verify=os.getenv("VAULT_SKIP_VERIFY", "false").lower() == "true",
            ca_cert=os.getenv("VAULT_CACERT") or None,
        )


@dataclass
class ManagerConfig:
    """Reconciliation run configuration."""

    log_level: str = "INFO"
    dry_run: bool = False

    # Configuration names to apply (empty = every registered configuration)
    enabled_configurations: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        enabled_str = os.getenv("ENABLED_CONFIGURATIONS", "")
        enabled = (
            [c.strip().lower() for c in enabled_str.split(",") if c.strip()]
            if enabled_str
            else []
        )

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            dry_run=os.getenv("DRY_RUN", "false").lower() == "true",
            enabled_configurations=enabled,
        )

    def is_enabled(self, name: str) -> bool:
        """Check whether a configuration name should be applied."""
        if not self.enabled_configurations:
            return True
        return name.lower() in self.enabled_configurations


@dataclass
class Config:
    """Main configuration object."""

    vault: VaultConfig
    manager: ManagerConfig

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            vault=VaultConfig.from_env(),
            manager=ManagerConfig.from_env(),
        )

    @classmethod
    def default(cls):
        """Return default configuration."""
        return cls(
            vault=VaultConfig(),
            manager=ManagerConfig(),
        )


# Global config instance
config: Optional[Config] = None


def load_config() -> Config:
    """Load configuration (singleton pattern)."""
    global config
    if config is None:
        config = Config.from_env()
    return config


def get_config() -> Config:
    """Get the current configuration."""
    if config is None:
        return load_config()
    return config


def reset_config() -> None:
    """Reset configuration (mainly for testing)."""
    global config
    config = None
