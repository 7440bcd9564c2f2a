# ==============================================
# TOPIC 3: REGISTRY (Declared preferences)
# ==============================================
#
# This package collects every preference declaration and owns
# the live value of each one.
#
# Modules:
# --------
# - preference_registry.py  → PreferenceRegistry, PreferenceSlot,
#                              default registry accessor
#
# ==============================================

from .preference_registry import PreferenceRegistry, PreferenceSlot, get_default_registry

__all__ = [
    "PreferenceRegistry",
    "PreferenceSlot",
    "get_default_registry",
]
