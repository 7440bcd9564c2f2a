# ==============================================
# Tests for Toolkit Preferences
# ==============================================
#
# The toolkit's own declarations and the project settings locator
# that waits for hydration before loading.
# ==============================================

import pytest

from src.hydration.hydrator import PreferenceHydrator
from src.registry.preference_registry import PreferenceRegistry
from src import toolkit_preferences as toolkit
from src.toolkit_preferences import (
    ProjectSettings,
    ProjectSettingsLocator,
    ToolkitPreferences,
)


@pytest.fixture
def toolkit_registry():
    registry = PreferenceRegistry()
    registry.scan_modules([toolkit])
    return registry


@pytest.fixture
def toolkit_hydrator(toolkit_registry, store, scheduler):
    return PreferenceHydrator(toolkit_registry, store, scheduler)


class TestToolkitPreferences:

    def test_defaults_seeded_on_first_run(self, toolkit_hydrator, memory_backend):
        toolkit_hydrator.hydrate()
        prefs = ToolkitPreferences()
        assert prefs.debug_symbolic_info is False
        assert prefs.autoload_symbolic_links is True
        assert prefs.ignore_settings_dialog is False
        assert memory_backend.snapshot() == {
            "EnablePackageDebug": False,
            "_AutoLoadSymbolicLinks": True,
            "_MixedRealityToolkit_Editor_IgnoreSettingsPrompts": False,
            "App_XRTK_SettingsGUID": "Assets/ProjectSettings.asset",
        }

    def test_stored_values_win(self, toolkit_hydrator, memory_backend):
        memory_backend.set_bool("_AutoLoadSymbolicLinks", False)
        toolkit_hydrator.hydrate()
        assert ToolkitPreferences().autoload_symbolic_links is False

    def test_setter_persists(self, toolkit_hydrator, memory_backend):
        toolkit_hydrator.hydrate()
        toolkit.toolkit_preferences.debug_symbolic_info = True
        assert memory_backend.get_bool("EnablePackageDebug") is True

    def test_project_settings_reference_is_application_prefixed(self, toolkit_hydrator, memory_backend):
        toolkit_hydrator.hydrate()
        toolkit.project_settings.project_settings_guid = "abc123"
        assert memory_backend.get_string("App_XRTK_SettingsGUID") == "abc123"


class TestProjectSettingsLocator:

    def test_waits_for_preferences_loaded(self, toolkit_hydrator, memory_backend, scheduler):
        memory_backend.set_string("App_XRTK_SettingsGUID", "guid-1")
        requested = []

        def loader(reference):
            requested.append(reference)
            return {"reference": reference}

        locator = ProjectSettingsLocator(ProjectSettings(), loader)
        locator.attach(toolkit_hydrator)

        toolkit_hydrator.hydrate()
        assert requested == []

        scheduler.run_pending()
        assert requested == ["guid-1"]
        assert locator.project_settings == {"reference": "guid-1"}

    def test_missing_asset_reported(self, toolkit_hydrator, scheduler, capsys):
        locator = ProjectSettingsLocator(ProjectSettings(), lambda reference: None)
        locator.attach(toolkit_hydrator)

        toolkit_hydrator.hydrate()
        scheduler.run_pending()

        assert locator.project_settings is None
        assert "Project settings not found" in capsys.readouterr().out

    def test_empty_reference_skips_loading(self, toolkit_hydrator, memory_backend, scheduler):
        memory_backend.set_string("App_XRTK_SettingsGUID", "")
        locator = ProjectSettingsLocator(ProjectSettings(), pytest.fail)
        locator.attach(toolkit_hydrator)

        toolkit_hydrator.hydrate()
        scheduler.run_pending()
        assert locator.project_settings is None

    def test_select_and_clear(self, toolkit_hydrator, memory_backend):
        toolkit_hydrator.hydrate()
        locator = ProjectSettingsLocator(ProjectSettings(), lambda reference: None)

        locator.select("guid-2", object())
        assert memory_backend.get_string("App_XRTK_SettingsGUID") == "guid-2"

        locator.select("ignored", None)
        assert memory_backend.get_string("App_XRTK_SettingsGUID") == ""
        assert locator.project_settings is None
