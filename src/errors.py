"""
Error types for the Vault manager.

Runtime failures derive from VaultManagerError so the CLI can decide in one
place whether to abort. RegistrationError is a programmer error and is kept
outside that hierarchy.
"""

from typing import Any, List, Optional


class VaultManagerError(Exception):
    """Base class for failures that abort a reconciliation pass."""


class DecodeError(VaultManagerError):
    """Raised when configuration bytes cannot be decoded."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(f"failed to decode {name} configuration: {message}")


class ValidationError(VaultManagerError):
    """Raised when decoded configuration entries are invalid."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(f"invalid {name} configuration: {message}")


class VaultAPIError(VaultManagerError):
    """Raised when a request to Vault fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Any]] = None,
    ):
        self.status_code = status_code
        self.errors = errors or []
        detail = message
        if status_code is not None:
            detail = f"{detail} (status {status_code})"
        if self.errors:
            detail = f"{detail}: {'; '.join(str(e) for e in self.errors)}"
        super().__init__(detail)


class ConfigurationNotFoundError(VaultManagerError):
    """Raised when no configuration is registered under the requested name."""

    def __init__(self, name: str, available: Optional[List[str]] = None):
        self.name = name
        self.available = available or []
        super().__init__(
            f"failed to find top-level configuration: {name}. "
            f"Available configurations: {', '.join(self.available) or 'none'}"
        )


class RegistrationError(RuntimeError):
    """Raised when a configuration is registered incorrectly."""
