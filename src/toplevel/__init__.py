"""
Top-level configuration blocks used to declaratively manage a Vault instance.

Each block is a Configuration registered by name in a ConfigurationRegistry.
"""

from toplevel.base import ApplyResult, Configuration, ItemConfiguration
from toplevel.registry import ConfigurationRegistry

__all__ = [
    "ApplyResult",
    "Configuration",
    "ItemConfiguration",
    "ConfigurationRegistry",
]
