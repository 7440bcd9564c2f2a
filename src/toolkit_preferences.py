# ==============================================
# Toolkit Preferences
# ==============================================
#
# PURPOSE:
#   The preferences the editor toolkit itself declares, and the
#   project-settings locator that waits for them to load.
#
# CLASSES:
# --------
# - ToolkitPreferences
#     debug_symbolic_info      ("EnablePackageDebug", False)
#     autoload_symbolic_links  ("_AutoLoadSymbolicLinks", True)
#     ignore_settings_dialog   ("_MixedRealityToolkit_Editor_IgnoreSettingsPrompts", False)
#
# - ProjectSettings
#     project_settings_guid    ("XRTK_SettingsGUID", "Assets/ProjectSettings.asset",
#                               application prefix)
#
# - ProjectSettingsLocator
#     Subscribes to the hydrator's completion signal. Once preferences
#     are loaded, resolves the stored reference to a project settings
#     object through an injected loader.
#
# USAGE:
# ------
#   from src.toolkit_preferences import toolkit_preferences
#   if toolkit_preferences.debug_symbolic_info:
#       ...
#   toolkit_preferences.autoload_symbolic_links = False   # persisted
#
# ==============================================

from typing import Any, Callable, Optional

from src.declaration.markers import EditorPreference
from src.hydration.hydrator import PreferenceHydrator


DEBUG_SYMBOLIC_INFO_KEY = "EnablePackageDebug"
AUTOLOAD_SYMBOLIC_LINKS_KEY = "_AutoLoadSymbolicLinks"
IGNORE_SETTINGS_DIALOG_KEY = "_MixedRealityToolkit_Editor_IgnoreSettingsPrompts"
PROJECT_SETTINGS_GUID_KEY = "XRTK_SettingsGUID"


class ToolkitPreferences:
    """User-scope toolkit switches shown in the editor preferences window."""

    # Enables debugging info for symbolic linking.
    debug_symbolic_info: bool = EditorPreference(key=DEBUG_SYMBOLIC_INFO_KEY, default_value=False)

    # Should the project automatically load symbolic links?
    autoload_symbolic_links: bool = EditorPreference(key=AUTOLOAD_SYMBOLIC_LINKS_KEY, default_value=True)

    # Should the settings prompt be suppressed on startup? Applies to every project.
    ignore_settings_dialog: bool = EditorPreference(key=IGNORE_SETTINGS_DIALOG_KEY, default_value=False)


class ProjectSettings:
    # Reference to the project settings asset, per application.
    project_settings_guid: str = EditorPreference(
        key=PROJECT_SETTINGS_GUID_KEY,
        default_value="Assets/ProjectSettings.asset",
        application_prefix=True,
    )


class ProjectSettingsLocator:
    """
    Loads the project settings object once preferences are hydrated.

    Preferences are not guaranteed to be hydrated when this object is
    constructed, so loading waits for the completion signal.
    """

    def __init__(self, settings: ProjectSettings, loader: Callable[[str], Optional[Any]]):
        """
        Args:
            settings: Owner of the project_settings_guid preference
            loader: Resolves a stored reference to a settings object,
                    returning None when nothing is found
        """
        self._settings = settings
        self._loader = loader
        self.project_settings: Optional[Any] = None

    def attach(self, hydrator: PreferenceHydrator) -> None:
        hydrator.on_preferences_loaded.subscribe(self._on_preferences_loaded)

    def select(self, reference: str, project_settings: Optional[Any]) -> None:
        """Point the project at another settings object (or none, with an empty reference)."""
        self.project_settings = project_settings
        self._settings.project_settings_guid = reference if project_settings is not None else ""

    def _on_preferences_loaded(self) -> None:
        reference = self._settings.project_settings_guid
        if self.project_settings is not None or not reference.strip():
            return

        print(f"Trying to load project asset... ({reference})")
        loaded = self._loader(reference)
        if loaded is None:
            print("✗ Project settings not found, please create a new settings object and select it")
            return

        print(f"✓ Project asset loaded! ({reference})")
        self.project_settings = loaded


toolkit_preferences = ToolkitPreferences()
project_settings = ProjectSettings()
