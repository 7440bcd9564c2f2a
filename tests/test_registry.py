# ==============================================
# Tests for Registry Module
# ==============================================
#
# Registration, duplicate detection, discovery and module scanning.
# ==============================================

import sys
import types

import pytest

from src.declaration.descriptor import PreferenceDescriptor
from src.declaration.markers import EditorPreference, SessionPreference
from src.declaration.scope import PreferenceScope
from src.errors import DuplicatePreferenceError, PreferenceKeyError
from src.registry.preference_registry import PreferenceRegistry, get_default_registry


class TestRegister:

    def test_slot_starts_at_default(self, registry):
        slot = registry.register(PreferenceDescriptor(key="K", default_value=4))
        assert slot.value == 4
        assert not slot.hydrated

    def test_register_same_descriptor_twice(self, registry):
        d = PreferenceDescriptor(key="K", default_value=4)
        assert registry.register(d) is registry.register(d)
        assert len(registry) == 1

    def test_duplicate_key_from_other_owner(self, registry):
        class First:
            flag = EditorPreference(key="Shared", default_value=True, registry=registry)

        with pytest.raises(DuplicatePreferenceError):
            class Second:
                flag = EditorPreference(key="Shared", default_value=True, registry=registry)

    def test_same_key_different_scope_allowed(self, registry):
        class Owner:
            durable = EditorPreference(key="K", default_value=1, registry=registry)
            session = SessionPreference(key="K", default_value=1, registry=registry)

        assert len(registry) == 2

    def test_same_key_different_prefix_allowed(self, registry):
        class Owner:
            plain = EditorPreference(key="K", default_value=1, registry=registry)
            prefixed = EditorPreference(key="K", default_value=1, application_prefix=True, registry=registry)

        assert len(registry) == 2

    def test_redefined_owner_replaces_slot(self, registry):
        def define():
            class Owner:
                flag = EditorPreference(key="Flag", default_value=True, registry=registry)
            return Owner

        first = define()
        second = define()
        assert len(registry) == 1
        assert second.flag.descriptor in registry
        assert first.flag.descriptor not in registry

    def test_blank_keys_do_not_collide(self, registry):
        class Owner:
            a = EditorPreference(key="", default_value=1, registry=registry)
            b = EditorPreference(key="  ", default_value=2, registry=registry)

        assert len(registry) == 2
        assert Owner().a == 1
        assert Owner().b == 2

    def test_blank_key_write_fails_fast(self, registry, store):
        registry.bind_store(store)

        class Owner:
            a = EditorPreference(key="", default_value=1, registry=registry)

        with pytest.raises(PreferenceKeyError):
            Owner().a = 2

    def test_unregistered_descriptor(self, registry):
        with pytest.raises(KeyError):
            registry.get_value(PreferenceDescriptor(key="K", default_value=1))


class TestDiscoverDeclarations:

    def test_yields_keyed_declarations(self, registry):
        class Owner:
            a = EditorPreference(key="A", default_value=1, registry=registry)
            b = SessionPreference(key="B", default_value=2, registry=registry)
            blank = EditorPreference(key=" ", default_value=3, registry=registry)

        keys = {d.key for d, _ in registry.discover_declarations()}
        assert keys == {"A", "B"}

    def test_pairs_descriptor_with_its_slot(self, registry):
        class Owner:
            a = EditorPreference(key="A", default_value=1, registry=registry)

        (descriptor, slot), = list(registry.discover_declarations())
        assert descriptor is Owner.a.descriptor
        assert slot is registry.slot_for(descriptor)

    def test_is_lazy(self, registry):
        assert isinstance(registry.discover_declarations(), types.GeneratorType)

    def test_registration_during_iteration_is_safe(self, registry):
        registry.register(PreferenceDescriptor(key="A", default_value=1))
        seen = []
        for descriptor, _ in registry.discover_declarations():
            seen.append(descriptor.key)
            registry.register(PreferenceDescriptor(key=descriptor.key + "x", default_value=1))

        assert seen == ["A"]
        assert {d.key for d, _ in registry.discover_declarations()} == {"A", "Ax"}

    def test_undeclared_attributes_not_discovered(self, registry):
        class Owner:
            plain = 5
            a = EditorPreference(key="A", default_value=1, registry=registry)

        assert [d.name for d, _ in registry.discover_declarations()] == ["a"]
        assert Owner.plain == 5


class TestFind:

    def test_find_by_key_prefix_and_scope(self, registry):
        class Owner:
            plain = EditorPreference(key="K", default_value=1, registry=registry)
            prefixed = EditorPreference(key="K", default_value=2, application_prefix=True, registry=registry)
            session = SessionPreference(key="K", default_value=3, registry=registry)

        assert len(registry.find("K")) == 3
        assert [s.value for s in registry.find("K", application_prefix=True)] == [2]
        assert [s.value for s in registry.find("K", scope=PreferenceScope.SESSION)] == [3]
        assert registry.find("missing") == []


class TestScanModules:

    @pytest.fixture
    def declaring_module(self):
        module = types.ModuleType("scan_fixture_prefs")
        sys.modules[module.__name__] = module
        exec(
            "from src.declaration.markers import EditorPreference, SessionPreference\n"
            "class Panel:\n"
            "    width: int = EditorPreference(key='PanelWidth', default_value=300)\n"
            "    docked: bool = SessionPreference(key='PanelDocked', default_value=True)\n",
            module.__dict__,
        )
        yield module
        sys.modules.pop(module.__name__, None)

    def test_scan_collects_markers(self, registry, declaring_module):
        assert registry.scan_modules([declaring_module]) == 2
        assert {d.key for d, _ in registry.discover_declarations()} == {"PanelWidth", "PanelDocked"}

    def test_scan_rebinds_accessors(self, registry, declaring_module):
        registry.scan_modules([declaring_module])
        panel = declaring_module.Panel()
        registry.slot_for(declaring_module.Panel.width.descriptor).value = 640
        assert panel.width == 640

    def test_markers_first_register_with_default_registry(self, declaring_module):
        assert declaring_module.Panel.width.descriptor in get_default_registry()

    def test_scan_moves_slots_out_of_previous_registry(self, registry, declaring_module):
        width = declaring_module.Panel.width.descriptor
        registry.scan_modules([declaring_module])

        assert width in registry
        assert width not in get_default_registry()
        with pytest.raises(KeyError):
            get_default_registry().slot_for(width)

    def test_scan_ignores_imported_classes(self, registry, declaring_module):
        declaring_module.Imported = type("Imported", (), {})
        declaring_module.Imported.__module__ = "elsewhere"
        assert registry.scan_modules([declaring_module]) == 2

    def test_scan_is_idempotent(self, registry, declaring_module):
        registry.scan_modules([declaring_module])
        registry.scan_modules([declaring_module])
        assert len(registry) == 2

    def test_scan_package_imports_module(self):
        registry = PreferenceRegistry()
        found = registry.scan_package("src.toolkit_preferences")
        assert found == 4
        assert {d.key for d, _ in registry.discover_declarations()} == {
            "EnablePackageDebug",
            "_AutoLoadSymbolicLinks",
            "_MixedRealityToolkit_Editor_IgnoreSettingsPrompts",
            "XRTK_SettingsGUID",
        }
