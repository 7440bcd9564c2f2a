# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - memory_backend   → empty MemoryBackend
# - identity         → StaticIdentity("App")
# - store            → PreferenceStore over memory_backend, named "App"
# - registry         → fresh PreferenceRegistry (never the default one)
# - scheduler        → DeferredScheduler, drained manually by tests
# - hydrator         → PreferenceHydrator(registry, store, scheduler)
# - prefs_path       → JSON preferences file location under tmp_path
#
# NOTES:
# ------
# - Classes declaring preferences in tests pass registry=registry so
#   they never touch the process-wide default registry.
# ==============================================

import pytest

from src.hydration.hydrator import PreferenceHydrator
from src.hydration.scheduler import DeferredScheduler
from src.registry.preference_registry import PreferenceRegistry
from src.store.backends import MemoryBackend
from src.store.identity import StaticIdentity
from src.store.preference_store import PreferenceStore


@pytest.fixture
def memory_backend():
    return MemoryBackend()


@pytest.fixture
def identity():
    return StaticIdentity("App")


@pytest.fixture
def store(memory_backend, identity):
    return PreferenceStore(memory_backend, identity)


@pytest.fixture
def registry():
    return PreferenceRegistry()


@pytest.fixture
def scheduler():
    return DeferredScheduler()


@pytest.fixture
def hydrator(registry, store, scheduler):
    return PreferenceHydrator(registry, store, scheduler)


@pytest.fixture
def prefs_path(tmp_path):
    return tmp_path / "prefs" / "editor_prefs.json"
