# ==============================================
# Startup
# ==============================================
#
# PURPOSE:
#   One call the host makes during initialization:
#     1. build the store from configuration
#     2. scan the packages that declare preferences
#     3. run the hydration pass
#
#   The completion signal is delivered on the host's next scheduler
#   tick, not inside this call.
#
# ==============================================

from typing import Iterable, Optional

from src.config import AppConfig
from src.hydration.hydrator import PreferenceHydrator
from src.hydration.scheduler import Scheduler
from src.registry.preference_registry import PreferenceRegistry, get_default_registry
from src.store.preference_store import PreferenceStore


DEFAULT_PREFERENCE_PACKAGES = ("src.toolkit_preferences",)


def initialize_preferences(
    config: Optional[AppConfig] = None,
    packages: Iterable[str] = DEFAULT_PREFERENCE_PACKAGES,
    registry: Optional[PreferenceRegistry] = None,
    store: Optional[PreferenceStore] = None,
    scheduler: Optional[Scheduler] = None,
) -> PreferenceHydrator:
    """
    Build, scan and hydrate.

    Args:
        config: Application configuration. If None, loads from environment.
        packages: Dotted names of modules/packages declaring preferences
        registry: Registry to collect into (default registry if None)
        store: Store to hydrate from (built from config if None)
        scheduler: Deferred scheduler for the completion signal

    Returns:
        The hydrator, whose on_preferences_loaded signal is pending.
    """
    store = store or PreferenceStore.from_config(config)
    if registry is None:
        registry = get_default_registry()

    for package_name in packages:
        registry.scan_package(package_name)

    hydrator = PreferenceHydrator(registry, store, scheduler)
    hydrator.hydrate()
    return hydrator
