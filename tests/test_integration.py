# ==============================================
# Integration Tests
# ==============================================
#
# Two "process runs" against the same preferences file: configuration,
# store, registry, hydration and the completion signal together.
# ==============================================

import json

from src.config import AppConfig, StoreConfig
from src.declaration.markers import EditorPreference
from src.hydration.hydrator import HydrationState
from src.hydration.scheduler import DeferredScheduler
from src.registry.preference_registry import PreferenceRegistry
from src.startup import initialize_preferences
from src.store.preference_store import PreferenceStore


def _run(prefs_path, configure=None):
    """One process start: declare, hydrate, tick, return the owner instance."""
    registry = PreferenceRegistry()

    class EditorFlags:
        foo = EditorPreference(key="Foo", default_value=True, registry=registry)
        theme = EditorPreference(key="Theme", default_value="dark", application_prefix=True, registry=registry)

    config = AppConfig(store=StoreConfig(backend="json", path=str(prefs_path)), application_name="App")
    scheduler = DeferredScheduler()
    hydrator = initialize_preferences(config=config, packages=(), registry=registry, scheduler=scheduler)

    loaded = []
    hydrator.on_preferences_loaded.subscribe(lambda: loaded.append(True))
    scheduler.run_pending()
    assert loaded == [True]
    assert hydrator.state is HydrationState.DONE

    flags = EditorFlags()
    if configure is not None:
        configure(flags)
    return flags


class TestRestart:

    def test_first_run_seeds_file(self, prefs_path):
        flags = _run(prefs_path)
        assert flags.foo is True
        assert json.loads(prefs_path.read_text()) == {"Foo": True, "App_Theme": "dark"}

    def test_second_run_reads_previous_values(self, prefs_path):
        def change(flags):
            flags.foo = False
            flags.theme = "light"

        _run(prefs_path, configure=change)
        flags = _run(prefs_path)

        assert flags.foo is False
        assert flags.theme == "light"

    def test_store_built_from_memory_config(self):
        config = AppConfig(store=StoreConfig(backend="memory"), application_name="Editor")
        store = PreferenceStore.from_config(config)
        assert store.namespaced_key("K") == "Editor_K"
        assert store.get("K", 1) == 1
