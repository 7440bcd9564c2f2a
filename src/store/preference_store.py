# ==============================================
# PreferenceStore
# ==============================================
#
# PURPOSE:
#   Typed get/set of scalar preferences against a backend, with
#   optional application-name namespacing and write-on-miss.
#
# WHY THIS CLASS EXISTS:
#   Every preference read in the editor goes through the same three
#   rules, and they must be applied identically everywhere:
#     1. Key must be non-blank (fail fast).
#     2. Namespaced key = "{application}_{key}" if application_prefix
#        else "{key}".
#     3. A get on a missing key writes the default, so every later
#        read returns the same value regardless of its default.
#
# CLASS: PreferenceStore
# ----------------------
#   Constructor:
#   ------------
#   - __init__(backend: PreferenceBackend, identity: ApplicationIdentity)
#   - from_config(config: AppConfig | None) (classmethod)
#
#   Methods:
#   --------
#   - get(key, default, application_prefix=True) -> bool | int | float | str
#       Dispatches on type(default). bool is checked before int.
#   - set(key, value, application_prefix=True) -> None
#       Unconditional overwrite. Dispatches on type(value).
#   - get_bool / get_int / get_float / get_str
#   - set_bool / set_int / set_float / set_str
#   - has_key(key, application_prefix=True) -> bool
#   - delete(key, application_prefix=True) -> None
#   - namespaced_key(key, application_prefix=True) -> str
#
# SHARP EDGE:
#   With application name "App", get("K", d, application_prefix=True)
#   and get("App_K", d, application_prefix=False) address the SAME entry.
#
# ==============================================

from typing import Any, Callable, Dict, Optional, Tuple

from src.config import AppConfig, get_config
from src.errors import PreferenceKeyError, UnsupportedPreferenceType
from src.store.backends import JsonFileBackend, MemoryBackend, PreferenceBackend
from src.store.identity import ApplicationIdentity, default_identity


SUPPORTED_TYPES: Tuple[type, ...] = (bool, int, float, str)


def is_supported_type(value_type: Any) -> bool:
    """True for the four scalar types the store can persist."""
    return value_type in SUPPORTED_TYPES


def require_key(key: str) -> None:
    """Fail fast on a blank preference key."""
    if not isinstance(key, str) or not key.strip():
        raise PreferenceKeyError(f"Preference key must be a non-empty string, got {key!r}")


class PreferenceStore:
    """Namespaced, self-initializing scalar preference store."""

    def __init__(self, backend: PreferenceBackend, identity: ApplicationIdentity):
        self.backend = backend
        self.identity = identity

        # type -> (reader, writer)
        self._accessors: Dict[type, Tuple[Callable[[str], Any], Callable[[str, Any], None]]] = {
            bool: (backend.get_bool, backend.set_bool),
            int: (backend.get_int, backend.set_int),
            float: (backend.get_float, backend.set_float),
            str: (backend.get_string, backend.set_string),
        }

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "PreferenceStore":
        """
        Build a store from application configuration.

        Args:
            config: Application configuration. If None, loads from environment.
        """
        config = config or get_config()
        if config.store.backend == "memory":
            backend: PreferenceBackend = MemoryBackend()
        else:
            backend = JsonFileBackend(config.store.path)
        return cls(backend, default_identity(config))

    def namespaced_key(self, key: str, application_prefix: bool = True) -> str:
        require_key(key)
        return f"{self.identity.name}_{key}" if application_prefix else key

    def has_key(self, key: str, application_prefix: bool = True) -> bool:
        return self.backend.has_key(self.namespaced_key(key, application_prefix))

    def get(self, key: str, default: Any, application_prefix: bool = True) -> Any:
        """
        Read a preference, seeding it with `default` if absent.

        Args:
            key: Raw preference key (non-blank)
            default: Value returned and persisted when the key is missing.
                     Its type selects the backend accessor.
            application_prefix: Prefix the key with the application name

        Returns:
            The stored value, or `default` after writing it.
        """
        return self._typed_get(self._type_of(default), key, default, application_prefix)

    def set(self, key: str, value: Any, application_prefix: bool = True) -> None:
        self._typed_set(self._type_of(value), key, value, application_prefix)

    def delete(self, key: str, application_prefix: bool = True) -> None:
        self.backend.delete_key(self.namespaced_key(key, application_prefix))

    # Typed forms --------------------------------------------------------

    def get_bool(self, key: str, default: bool, application_prefix: bool = True) -> bool:
        return self._typed_get(bool, key, default, application_prefix)

    def get_int(self, key: str, default: int, application_prefix: bool = True) -> int:
        return self._typed_get(int, key, default, application_prefix)

    def get_float(self, key: str, default: float, application_prefix: bool = True) -> float:
        return self._typed_get(float, key, default, application_prefix)

    def get_str(self, key: str, default: str, application_prefix: bool = True) -> str:
        return self._typed_get(str, key, default, application_prefix)

    def set_bool(self, key: str, value: bool, application_prefix: bool = True) -> None:
        self._typed_set(bool, key, value, application_prefix)

    def set_int(self, key: str, value: int, application_prefix: bool = True) -> None:
        self._typed_set(int, key, value, application_prefix)

    def set_float(self, key: str, value: float, application_prefix: bool = True) -> None:
        self._typed_set(float, key, value, application_prefix)

    def set_str(self, key: str, value: str, application_prefix: bool = True) -> None:
        self._typed_set(str, key, value, application_prefix)

    def _typed_get(self, value_type: type, key: str, default: Any, application_prefix: bool) -> Any:
        pref_key = self.namespaced_key(key, application_prefix)
        reader, writer = self._accessors[value_type]
        if self.backend.has_key(pref_key):
            return reader(pref_key)

        writer(pref_key, default)
        return default

    def _typed_set(self, value_type: type, key: str, value: Any, application_prefix: bool) -> None:
        pref_key = self.namespaced_key(key, application_prefix)
        _, writer = self._accessors[value_type]
        writer(pref_key, value)

    def _type_of(self, value: Any) -> type:
        # Exact type lookup: bool is a subclass of int and must not fall through to int.
        value_type = type(value)
        if value_type not in self._accessors:
            raise UnsupportedPreferenceType(
                f"Preference values must be bool, int, float or str, got {value_type.__name__}"
            )
        return value_type
