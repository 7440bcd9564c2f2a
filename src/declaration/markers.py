# ==============================================
# Preference Markers
# ==============================================
#
# PURPOSE:
#   Declare a class attribute as a preference:
#
#       class ToolkitPreferences:
#           debug_symbolic_info: bool = EditorPreference(
#               key="EnablePackageDebug", default_value=False)
#
#   The marker is a data descriptor. When the owner class is created,
#   __set_name__ builds a PreferenceDescriptor and registers it with a
#   PreferenceRegistry. That registration replaces whole-program
#   scanning: a declaration is discoverable as soon as its module has
#   been imported.
#
# CLASSES:
# --------
# - KeyPreference       → shared layout (key, default, prefix)
# - EditorPreference    → DURABLE scope, hydrated from the store
# - SessionPreference   → SESSION scope, default-only for the current run
#
# ACCESS:
# -------
#   instance.attr          → live slot value from the registry
#   instance.attr = value  → slot update, written through to the store
#                            for durable preferences
#   Owner.attr             → the marker itself
#
# FIELD TYPE:
# -----------
#   value_type=... if given, else the owner's class annotation for the
#   attribute, else type(default_value).
#
# ==============================================

import inspect
from typing import Any, Optional, TYPE_CHECKING

from src.declaration.descriptor import PreferenceDescriptor
from src.declaration.scope import PreferenceScope

if TYPE_CHECKING:
    from src.registry.preference_registry import PreferenceRegistry


# String annotations (from __future__ import annotations) for the scalar types.
_ANNOTATION_NAMES = {"bool": bool, "int": int, "float": float, "str": str}


def _resolve_annotation(owner: type, name: str) -> Optional[type]:
    annotation = inspect.get_annotations(owner).get(name)
    if annotation is None:
        return None
    if isinstance(annotation, str):
        return _ANNOTATION_NAMES.get(annotation.strip(), object)
    return annotation if isinstance(annotation, type) else object


class KeyPreference:
    """Base marker. Use EditorPreference or SessionPreference."""

    scope: Optional[PreferenceScope] = None

    def __init__(
        self,
        key: str = "",
        default_value: Any = None,
        application_prefix: bool = False,
        *,
        value_type: Optional[type] = None,
        registry: Optional["PreferenceRegistry"] = None,
    ):
        if self.scope is None:
            raise TypeError("KeyPreference is abstract; use EditorPreference or SessionPreference")
        self.key = key
        self.default_value = default_value
        self.application_prefix = application_prefix
        self.value_type = value_type
        self.descriptor: Optional[PreferenceDescriptor] = None
        self._registry = registry

    def __set_name__(self, owner: type, name: str) -> None:
        value_type = self.value_type or _resolve_annotation(owner, name)
        self.descriptor = PreferenceDescriptor(
            key=self.key,
            default_value=self.default_value,
            application_prefix=self.application_prefix,
            scope=self.scope,
            value_type=value_type,
            name=name,
            owner=owner,
        )
        if self._registry is None:
            # Deferred: the registry module imports this one.
            from src.registry.preference_registry import get_default_registry
            self._registry = get_default_registry()
        self._registry.register(self.descriptor)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return self.registry.get_value(self.descriptor)

    def __set__(self, instance: Any, value: Any) -> None:
        self.registry.set_value(self.descriptor, value)

    @property
    def registry(self) -> "PreferenceRegistry":
        if self._registry is None or self.descriptor is None:
            raise AttributeError(f"{type(self).__name__}({self.key!r}) is not bound to a class")
        return self._registry

    def bind(self, registry: "PreferenceRegistry") -> None:
        """Move this declaration to another registry, leaving no slot behind."""
        if self.descriptor is None:
            raise AttributeError(f"{type(self).__name__}({self.key!r}) is not bound to a class")
        if registry is self._registry:
            return
        registry.register(self.descriptor)
        if self._registry is not None:
            self._registry.unregister(self.descriptor)
        self._registry = registry

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(key={self.key!r}, default_value={self.default_value!r}, "
            f"application_prefix={self.application_prefix!r})"
        )


class EditorPreference(KeyPreference):
    """Durable preference, persisted across restarts."""
    scope = PreferenceScope.DURABLE


class SessionPreference(KeyPreference):
    """Session preference, default-only for the current run."""
    scope = PreferenceScope.SESSION
