"""
Startup composition for the Vault manager.

Builds the configuration registry and drives a reconciliation run over a
YAML document whose top-level keys name registered configurations.
"""

import logging
from typing import Dict, List, Optional

import yaml

from config import ManagerConfig
from errors import ConfigurationNotFoundError, DecodeError
from toplevel.audit import AuditConfiguration
from toplevel.auth import AuthConfiguration
from toplevel.base import ApplyResult
from toplevel.policies import PolicyConfiguration
from toplevel.registry import ConfigurationRegistry
from toplevel.secrets_engines import SecretsEngineConfiguration
from vault import VaultClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def register_builtin_configurations(
    registry: ConfigurationRegistry, client: Optional[VaultClient]
) -> None:
    """
    Register all built-in configurations.

    Args:
        registry: Registry to populate
        client: Vault client shared by the configurations; may be None when
            configuration is only validated
    """
    for configuration in (
        AuditConfiguration(client),
        AuthConfiguration(client),
        SecretsEngineConfiguration(client),
        PolicyConfiguration(client),
    ):
        registry.register(configuration.name, configuration)


def build_registry(client: Optional[VaultClient]) -> ConfigurationRegistry:
    """Construct a registry with every built-in configuration registered."""
    registry = ConfigurationRegistry()
    register_builtin_configurations(registry, client)
    return registry


def split_sections(document: bytes) -> Dict[str, bytes]:
    """
    Split a YAML document into per-configuration sections.

    Each top-level value is re-serialized so a configuration only ever sees
    its own raw bytes. Section order follows the document.

    Raises:
        DecodeError: If the document is not a YAML mapping
    """
    try:
        data = yaml.safe_load(document)
    except yaml.YAMLError as e:
        raise DecodeError("top-level", str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DecodeError(
            "top-level", f"expected a mapping of sections, got {type(data).__name__}"
        )

    sections: Dict[str, bytes] = {}
    for name, section in data.items():
        sections[str(name)] = yaml.safe_dump(
            section, default_flow_style=False, sort_keys=False
        ).encode("utf-8")
    return sections


def run(
    registry: ConfigurationRegistry,
    document: bytes,
    dry_run: bool,
    manager_config: Optional[ManagerConfig] = None,
    only: Optional[List[str]] = None,
) -> List[ApplyResult]:
    """
    Apply every selected section of a document through the registry.

    The first failure propagates and stops the run; sections already applied
    stay applied.

    Raises:
        ConfigurationNotFoundError: If a name in only is not registered
    """
    manager_config = manager_config or ManagerConfig()
    selected = {name.lower() for name in only or []}
    for name in sorted(selected):
        if not registry.has(name):
            raise ConfigurationNotFoundError(name, registry.names())

    sections = split_sections(document)
    for name in sorted(selected - {s.lower() for s in sections}):
        logger.warning(f"Selected configuration {name} is not in the document")

    results: List[ApplyResult] = []
    for name, section in sections.items():
        if selected and name.lower() not in selected:
            logger.debug(f"Skipping {name}: not selected")
            continue
        if not manager_config.is_enabled(name):
            logger.debug(f"Skipping {name}: not enabled")
            continue

        logger.info(f"Applying {name}" + (" (dry run)" if dry_run else ""))
        results.append(registry.apply(name, section, dry_run))
    return results


def validate(registry: ConfigurationRegistry, document: bytes) -> Dict[str, int]:
    """Decode and validate every section, returning entry counts by name."""
    counts: Dict[str, int] = {}
    for name, section in split_sections(document).items():
        counts[name] = registry.get(name).validate(section)
    return counts
