# ==============================================
# Preference Backends
# ==============================================
#
# PURPOSE:
#   The backing medium behind PreferenceStore. A backend is a flat
#   string-keyed map of scalars with the same shape as an editor's
#   platform preference store: HasKey plus a typed getter/setter pair
#   for bool, int, float and string.
#
# WHY THIS FILE EXISTS:
#   PreferenceStore owns the namespacing and write-on-miss rules; it
#   must not care where the bytes live. Tests run against the memory
#   backend, the editor runs against the JSON file backend.
#
# CLASSES:
# --------
# - PreferenceBackend (ABC)
#     has_key, get_bool/set_bool, get_int/set_int, get_float/set_float,
#     get_string/set_string, delete_key, delete_all
#
# - MemoryBackend
#     dict-backed, lives for the current process only.
#
# - JsonFileBackend
#     one JSON object on disk. Loaded lazily on first access, rewritten
#     atomically (temp file + os.replace) on every set.
#     Missing file → every key is absent.
#     Corrupt file → backed up next to itself, then treated as empty.
#     Unwritable file → warning printed, entries kept in memory.
#
# NOTE:
#   Typed getters never convert. A key stored as int and read with
#   get_bool returns the int; that is a caller bug, not a backend concern.
#
# ==============================================

import json
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional


class PreferenceBackend(ABC):
    """Flat scalar key-value medium."""

    @abstractmethod
    def has_key(self, key: str) -> bool:
        ...

    @abstractmethod
    def _read(self, key: str) -> Any:
        ...

    @abstractmethod
    def _write(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def delete_key(self, key: str) -> None:
        ...

    @abstractmethod
    def delete_all(self) -> None:
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        ...

    def get_bool(self, key: str) -> bool:
        return self._read(key)

    def set_bool(self, key: str, value: bool) -> None:
        self._write(key, bool(value))

    def get_int(self, key: str) -> int:
        return self._read(key)

    def set_int(self, key: str, value: int) -> None:
        self._write(key, int(value))

    def get_float(self, key: str) -> float:
        return self._read(key)

    def set_float(self, key: str, value: float) -> None:
        self._write(key, float(value))

    def get_string(self, key: str) -> str:
        return self._read(key)

    def set_string(self, key: str, value: str) -> None:
        self._write(key, str(value))


class MemoryBackend(PreferenceBackend):
    """In-process backend. Also used as the session store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def has_key(self, key: str) -> bool:
        return key in self._data

    def _read(self, key: str) -> Any:
        return self._data[key]

    def _write(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete_key(self, key: str) -> None:
        self._data.pop(key, None)

    def delete_all(self) -> None:
        self._data.clear()

    def keys(self) -> list[str]:
        return list(self._data)

    def snapshot(self) -> Dict[str, Any]:
        """Copy of the stored entries (for inspection and tests)."""
        return dict(self._data)


class JsonFileBackend(PreferenceBackend):
    """
    Backend persisted as a single JSON object file.

    File layout:
        {"MyEditor_XRTK_SettingsGUID": "Assets/ProjectSettings.asset",
         "EnablePackageDebug": false}
    """

    def __init__(self, path: str = "preferences/editor_prefs.json"):
        """
        Args:
            path: Location of the preferences file. Parent directories
                  are created on first write.
        """
        self.path = Path(path)
        self._data: Optional[Dict[str, Any]] = None

    def has_key(self, key: str) -> bool:
        return key in self._entries()

    def _read(self, key: str) -> Any:
        return self._entries()[key]

    def _write(self, key: str, value: Any) -> None:
        entries = self._entries()
        entries[key] = value
        self._save(entries)

    def delete_key(self, key: str) -> None:
        entries = self._entries()
        if key in entries:
            del entries[key]
            self._save(entries)

    def delete_all(self) -> None:
        self._data = {}
        if self.path.exists():
            self.path.unlink()
            print(f"🗑️  Deleted {self.path}")

    def keys(self) -> list[str]:
        return list(self._entries())

    def reload(self) -> None:
        """Forget the cached entries; the next access re-reads the file."""
        self._data = None

    def _entries(self) -> Dict[str, Any]:
        if self._data is None:
            self._data = self._load()
        return self._data

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("preferences file root is not an object")
            return data
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            backup = self._backup_corrupt_file()
            print(f"⚠ Could not read preferences from {self.path}: {e}")
            if backup is not None:
                print(f"⚠ Corrupt preferences backed up to {backup}")
            return {}

    def _save(self, entries: Dict[str, Any]) -> None:
        # On failure the cached entries stay in place.
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(entries, f, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except OSError as e:
            print(f"⚠ Could not save preferences to {self.path}: {e}")
            if tmp.exists():
                tmp.unlink()

    def _backup_corrupt_file(self) -> Optional[Path]:
        ts = time.strftime("%Y%m%d_%H%M%S")
        backup = self.path.with_name(f"{self.path.name}.bak.{ts}")
        try:
            backup.write_bytes(self.path.read_bytes())
        except OSError as e:
            print(f"⚠ Could not back up {self.path}: {e}")
            return None
        return backup
