# ==============================================
# PreferenceRegistry
# ==============================================
#
# PURPOSE:
#   Collects every declared preference and owns one slot per
#   declaration. A slot holds the live value; accessors on the owner
#   class read and write through it instead of through class globals.
#
# WHY THIS CLASS EXISTS:
#   Declarations register themselves when their owner class is created.
#   The hydration pass then asks the registry for "everything declared
#   so far" in one go, and dependent code can fetch or update any
#   preference by key without importing its owner.
#
# CLASS: PreferenceSlot (dataclass)
# ---------------------------------
#   - descriptor: PreferenceDescriptor
#   - value: Any           → starts as descriptor.default_value
#   - hydrated: bool       → True once a hydration pass assigned it
#
# CLASS: PreferenceRegistry
# -------------------------
#   Constructor:
#   ------------
#   - __init__(store: PreferenceStore | None = None, store_factory=None)
#       store_factory builds a store on the first durable write made
#       before any hydrator bound one. The default registry uses
#       PreferenceStore.from_config.
#
#   Methods:
#   --------
#   - register(descriptor) -> PreferenceSlot
#       Idempotent for the same descriptor. A different declaration for
#       an already-registered (scope, application_prefix, key) raises
#       DuplicatePreferenceError, unless it comes from a redefinition of
#       the same owner attribute (module reload), which replaces it.
#
#   - unregister(descriptor)
#       Drops its slot. Used when a marker moves to another registry.
#
#   - discover_declarations() -> Iterator[(descriptor, slot)]
#       Lazy walk over a snapshot of the registered slots. Blank keys are
#       skipped. Order is not part of the contract.
#
#   - get_value(descriptor) / set_value(descriptor, value)
#       set_value writes durable preferences through to the bound store.
#
#   - find(key, ...) -> list[PreferenceSlot]
#   - scan_modules(modules) / scan_package(name) -> int
#       Import-driven discovery across modules: collects every marker
#       found on classes defined in those modules into this registry.
#
# ==============================================

import importlib
import inspect
import pkgutil
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from src.declaration.descriptor import PreferenceDescriptor
from src.declaration.markers import KeyPreference
from src.declaration.scope import PreferenceScope
from src.errors import DuplicatePreferenceError, PreferenceError, UnsupportedPreferenceType
from src.store.preference_store import PreferenceStore, is_supported_type, require_key


SlotId = Tuple[Any, ...]


@dataclass
class PreferenceSlot:
    """Arena cell for one declared preference."""
    descriptor: PreferenceDescriptor
    value: Any
    hydrated: bool = False

    @property
    def owner(self) -> Optional[type]:
        return self.descriptor.owner


def _slot_id(descriptor: PreferenceDescriptor) -> SlotId:
    if descriptor.is_blank:
        # Blank keys never reach the store; keep them apart per attribute.
        return ("unkeyed", descriptor.qualified_name, id(descriptor))
    return (descriptor.scope, descriptor.application_prefix, descriptor.key)


def _same_attribute(a: PreferenceDescriptor, b: PreferenceDescriptor) -> bool:
    if a.owner is None or b.owner is None:
        return False
    return (
        a.name == b.name
        and a.owner.__module__ == b.owner.__module__
        and a.owner.__qualname__ == b.owner.__qualname__
    )


class PreferenceRegistry:
    """Registration list and slot arena for declared preferences."""

    def __init__(
        self,
        store: Optional[PreferenceStore] = None,
        store_factory: Optional[Callable[[], PreferenceStore]] = None,
    ):
        self.store = store
        self._store_factory = store_factory
        self._slots: Dict[SlotId, PreferenceSlot] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, descriptor: PreferenceDescriptor) -> bool:
        slot = self._slots.get(_slot_id(descriptor))
        return slot is not None and slot.descriptor is descriptor

    def bind_store(self, store: PreferenceStore) -> None:
        self.store = store

    def register(self, descriptor: PreferenceDescriptor) -> PreferenceSlot:
        slot_id = _slot_id(descriptor)
        existing = self._slots.get(slot_id)

        if existing is not None:
            if existing.descriptor is descriptor:
                return existing
            if not _same_attribute(existing.descriptor, descriptor):
                raise DuplicatePreferenceError(
                    f"Preference key '{descriptor.key}' ({descriptor.scope.value}) is declared by both "
                    f"{existing.descriptor.qualified_name} and {descriptor.qualified_name}"
                )

        slot = PreferenceSlot(descriptor=descriptor, value=descriptor.default_value)
        self._slots[slot_id] = slot
        return slot

    def unregister(self, descriptor: PreferenceDescriptor) -> None:
        """Drop the slot of `descriptor`; a slot held by another descriptor is kept."""
        slot_id = _slot_id(descriptor)
        slot = self._slots.get(slot_id)
        if slot is not None and slot.descriptor is descriptor:
            del self._slots[slot_id]

    def slot_for(self, descriptor: PreferenceDescriptor) -> PreferenceSlot:
        slot = self._slots.get(_slot_id(descriptor))
        if slot is None or slot.descriptor is not descriptor:
            raise KeyError(f"{descriptor.qualified_name} is not registered")
        return slot

    def slots(self) -> List[PreferenceSlot]:
        return list(self._slots.values())

    def find(
        self,
        key: str,
        application_prefix: Optional[bool] = None,
        scope: Optional[PreferenceScope] = None,
    ) -> List[PreferenceSlot]:
        """All slots declared under `key`, optionally narrowed by prefix and scope."""
        return [
            slot for slot in self._slots.values()
            if slot.descriptor.key == key
            and (application_prefix is None or slot.descriptor.application_prefix == application_prefix)
            and (scope is None or slot.descriptor.scope is scope)
        ]

    def discover_declarations(self) -> Iterator[Tuple[PreferenceDescriptor, PreferenceSlot]]:
        """
        Yield (descriptor, slot) for every keyed declaration.

        Iterates a snapshot, so registrations made by the consumer while
        iterating are picked up by the next call, not this one.
        """
        snapshot = list(self._slots.values())
        for slot in snapshot:
            if slot.descriptor.is_blank:
                continue
            yield slot.descriptor, slot

    def get_value(self, descriptor: PreferenceDescriptor) -> Any:
        return self.slot_for(descriptor).value

    def set_value(self, descriptor: PreferenceDescriptor, value: Any) -> None:
        """
        Update a slot. Durable scalar preferences are written straight
        through to the store; session and opaque preferences stay in memory.
        """
        slot = self.slot_for(descriptor)
        value_type = descriptor.value_type

        if is_supported_type(value_type):
            if value_type is float and type(value) is int:
                value = float(value)
            if type(value) is not value_type:
                raise UnsupportedPreferenceType(
                    f"{descriptor.qualified_name} expects {value_type.__name__}, "
                    f"got {type(value).__name__}"
                )
            if descriptor.is_durable:
                require_key(descriptor.key)
                if self.store is None and self._store_factory is not None:
                    self.store = self._store_factory()
                if self.store is None:
                    raise PreferenceError(
                        f"Cannot persist {descriptor.qualified_name}: no store bound to the registry"
                    )
                self.store.set(descriptor.key, value, descriptor.application_prefix)

        slot.value = value

    # Module scanning ----------------------------------------------------

    def scan_modules(self, modules: Iterable[ModuleType]) -> int:
        """
        Collect the markers declared on classes of the given modules.

        Returns:
            Number of declarations found
        """
        found = 0
        for module in modules:
            for _, cls in inspect.getmembers(module, inspect.isclass):
                if cls.__module__ != module.__name__:
                    continue
                for attr in vars(cls).values():
                    if isinstance(attr, KeyPreference) and attr.descriptor is not None:
                        attr.bind(self)
                        found += 1
        return found

    def scan_package(self, package_name: str) -> int:
        """
        Import a module, and every submodule if it is a package, then scan them.

        Args:
            package_name: Dotted module or package name, e.g. "src.toolkit_preferences"
        """
        package = importlib.import_module(package_name)
        modules = [package]
        if hasattr(package, "__path__"):
            for info in pkgutil.walk_packages(package.__path__, prefix=f"{package.__name__}."):
                modules.append(importlib.import_module(info.name))

        found = self.scan_modules(modules)
        print(f"✓ Scanned {len(modules)} module(s) in '{package_name}', {found} preference(s) declared")
        return found


_default_registry = PreferenceRegistry(store_factory=PreferenceStore.from_config)


def get_default_registry() -> PreferenceRegistry:
    """Registry used by markers declared without an explicit registry."""
    return _default_registry
