"""Unit tests for the configuration registry."""

import threading
import pytest

from errors import ConfigurationNotFoundError, RegistrationError, VaultManagerError
from toplevel.base import ApplyResult, Configuration
from toplevel.registry import ConfigurationRegistry

# ==================== Test Helpers ====================


class RecordingConfiguration(Configuration):
    """Configuration that records the arguments it was applied with."""

    def __init__(self, name: str = "recording"):
        self._name = name
        self.calls = []

    @property
    def name(self) -> str:
        return self._name

    def validate(self, config_bytes: bytes) -> int:
        return 0

    def apply(self, config_bytes: bytes, dry_run: bool) -> ApplyResult:
        self.calls.append((config_bytes, dry_run))
        return ApplyResult(name=self._name, dry_run=dry_run)


@pytest.fixture
def registry():
    return ConfigurationRegistry()


# ==================== Configuration Base Tests ====================


class TestConfiguration:
    """Tests for the Configuration abstract base class."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            Configuration()

    def test_concrete_subclass(self):
        configuration = RecordingConfiguration("audit")
        assert configuration.name == "audit"


# ==================== Registration Tests ====================


class TestRegister:
    """Tests for ConfigurationRegistry.register."""

    def test_register_and_list(self, registry):
        registry.register("vault_policies", RecordingConfiguration())
        registry.register("vault_audit_backends", RecordingConfiguration())

        assert registry.names() == ["vault_audit_backends", "vault_policies"]

    def test_name_stored_lower_case(self, registry):
        registry.register("Vault_Policies", RecordingConfiguration())

        assert registry.names() == ["vault_policies"]
        assert registry.has("vault_policies") is True
        assert registry.has("VAULT_POLICIES") is True

    def test_empty_name_raises(self, registry):
        with pytest.raises(RegistrationError, match="empty name"):
            registry.register("", RecordingConfiguration())

    def test_none_configuration_raises(self, registry):
        with pytest.raises(RegistrationError, match="None configuration"):
            registry.register("a", None)

    def test_duplicate_name_is_case_insensitive(self, registry):
        registry.register("A", RecordingConfiguration())

        with pytest.raises(RegistrationError, match="twice for a"):
            registry.register("a", RecordingConfiguration())

    def test_failed_registration_keeps_first_entry(self, registry):
        first = RecordingConfiguration()
        registry.register("a", first)

        with pytest.raises(RegistrationError):
            registry.register("A", RecordingConfiguration())

        assert registry.get("a") is first

    def test_registration_error_is_not_a_runtime_failure(self):
        assert not issubclass(RegistrationError, VaultManagerError)


# ==================== Dispatch Tests ====================


class TestApply:
    """Tests for ConfigurationRegistry.apply and get."""

    def test_apply_passes_arguments_through(self, registry):
        configuration = RecordingConfiguration("a")
        registry.register("A", configuration)

        result = registry.apply("a", b"- name: x\n", True)

        assert configuration.calls == [(b"- name: x\n", True)]
        assert result.name == "a"
        assert result.dry_run is True

    def test_apply_lookup_is_case_insensitive(self, registry):
        configuration = RecordingConfiguration()
        registry.register("a", configuration)

        registry.apply("A", b"", False)

        assert configuration.calls == [(b"", False)]

    def test_apply_missing_raises_with_name(self, registry):
        registry.register("present", RecordingConfiguration())

        with pytest.raises(ConfigurationNotFoundError) as exc_info:
            registry.apply("missing", b"", False)

        assert exc_info.value.name == "missing"
        assert exc_info.value.available == ["present"]
        assert "missing" in str(exc_info.value)

    def test_get_missing_raises(self, registry):
        with pytest.raises(ConfigurationNotFoundError, match="none"):
            registry.get("anything")

    def test_dry_run_never_mutates(self, registry, mock_client):
        from toplevel.audit import AuditConfiguration

        mock_client.list_audit.return_value = {
            "old/": {"path": "old/", "type": "file", "description": "", "options": {}}
        }
        registry.register("A", AuditConfiguration(mock_client))

        registry.apply("A", b"- _path: new/\n  type: file\n", True)

        mock_client.enable_audit.assert_not_called()
        mock_client.disable_audit.assert_not_called()

    def test_lock_not_held_during_apply(self, registry):
        observed = {}

        class Reentrant(RecordingConfiguration):
            def apply(self, config_bytes, dry_run):
                # Would deadlock if the registry lock were still held
                observed["names"] = registry.names()
                return super().apply(config_bytes, dry_run)

        registry.register("reentrant", Reentrant())
        registry.apply("reentrant", b"", False)

        assert observed["names"] == ["reentrant"]

    def test_concurrent_lookups(self, registry):
        configuration = RecordingConfiguration()
        registry.register("shared", configuration)
        errors = []

        def worker():
            try:
                for _ in range(100):
                    registry.apply("shared", b"", True)
            except Exception as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(configuration.calls) == 400
