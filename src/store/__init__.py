# ==============================================
# TOPIC 1: STORE (Scalar key-value persistence)
# ==============================================
#
# This package handles reading and writing scalar preferences
# against a backing medium, with application-name namespacing
# and write-on-miss defaults.
#
# Modules:
# --------
# - backends.py          → PreferenceBackend ABC, memory + JSON file media
# - identity.py          → Application name used for key prefixes
# - preference_store.py  → PreferenceStore: typed get/set, namespacing
#
# ==============================================

from .backends import PreferenceBackend, MemoryBackend, JsonFileBackend
from .identity import ApplicationIdentity, StaticIdentity, default_identity
from .preference_store import PreferenceStore, SUPPORTED_TYPES, is_supported_type, require_key

__all__ = [
    "PreferenceBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "ApplicationIdentity",
    "StaticIdentity",
    "default_identity",
    "PreferenceStore",
    "SUPPORTED_TYPES",
    "is_supported_type",
    "require_key",
]
