# ==============================================
# TOPIC 2: DECLARATION (Preference markers)
# ==============================================
#
# This package handles how a class attribute is declared as a
# preference and what the resulting descriptor looks like.
#
# Modules:
# --------
# - scope.py       → PreferenceScope enum (DURABLE, SESSION)
# - descriptor.py  → PreferenceDescriptor data class
# - markers.py     → EditorPreference / SessionPreference data descriptors
#
# ==============================================

from .scope import PreferenceScope
from .descriptor import PreferenceDescriptor
from .markers import KeyPreference, EditorPreference, SessionPreference

__all__ = [
    "PreferenceScope",
    "PreferenceDescriptor",
    "KeyPreference",
    "EditorPreference",
    "SessionPreference",
]
