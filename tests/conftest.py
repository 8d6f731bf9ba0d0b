"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest

from config import reset_config
from vault import VaultClient


@pytest.fixture(autouse=True)
def fresh_config():
    """Reset the configuration singleton around each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def mock_client():
    """Create a mock Vault client."""
    client = MagicMock(spec=VaultClient)
    client.list_audit.return_value = {}
    client.list_auth.return_value = {}
    client.list_mounts.return_value = {}
    client.list_policies.return_value = []
    return client


@pytest.fixture
def audit_listing():
    """Audit devices as returned by GET /v1/sys/audit."""
    return {
        "audit1/": {
            "path": "audit1/",
            "type": "file",
            "description": "",
            "options": {"file_path": "/tmp/a", "log_raw": "true"},
        },
        "audit2/": {
            "path": "audit2/",
            "type": "file",
            "description": "",
            "options": {},
        },
    }


@pytest.fixture
def sample_document():
    """A configuration document covering every built-in configuration."""
    return b"""
vault_audit_backends:
  - _path: audit1/
    type: file
    options:
      file_path: /tmp/a
      log_raw: true
vault_auth_backends:
  - _path: approle/
    type: approle
    description: machine auth
vault_secret_engines:
  - _path: secret/
    type: kv
    options:
      version: 2
vault_policies:
  - name: readers
    rules: |
      path "secret/*" {
        capabilities = ["read"]
      }
"""
