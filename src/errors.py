# ==============================================
# Preference Errors
# ==============================================
#
# Every failure raised by the preference layer is a programming error
# in a declaration or a call site. Configuration gaps (missing store
# file, missing key, unsupported field type during hydration) never
# raise; they fall back to the declared default.
#
# HIERARCHY:
# ----------
# - PreferenceError
#     ├── PreferenceKeyError        (also ValueError)  → blank key
#     ├── DuplicatePreferenceError                     → key declared twice
#     └── UnsupportedPreferenceType (also TypeError)   → non-scalar value
#                                                        passed to the store
# ==============================================


class PreferenceError(Exception):
    """Base class for preference layer errors."""


class PreferenceKeyError(PreferenceError, ValueError):
    """Raised when a preference key is empty or whitespace."""


class DuplicatePreferenceError(PreferenceError):
    """Raised when two different declarations claim the same key."""


class UnsupportedPreferenceType(PreferenceError, TypeError):
    """Raised when the store is asked to persist a non-scalar value."""
