# ==============================================
# PreferenceHydrator — Startup Hydration Pass
# ==============================================
#
# PURPOSE:
#   At process start, walk every declared preference, resolve its value
#   against the store, assign it into its registry slot, and announce
#   completion once.
#
# HOW IT CONNECTS THE 3 OTHER TOPICS:
#
#   Declarations ──register──▶ PreferenceRegistry
#                                    │ discover_declarations()
#                                    ▼
#                            PreferenceHydrator
#                                    │ store.get(key, default, prefix)
#                                    ▼
#                             PreferenceStore ──▶ backend
#
# RESOLUTION (durable declarations only):
# ---------------------------------------
#   value_type in (bool, int, float, str), default of that exact type
#       → store.get(key, default, application_prefix)   (write-on-miss)
#   value_type in (bool, int, float, str), default of another type
#       → raw default, warning printed, store untouched
#   any other value_type
#       → raw default, store untouched
#
#   Session declarations keep their default and are never read from or
#   written to the store by this pass. seed_session_preferences() exists
#   for hosts that want a session store seeded, but hydrate() does not
#   call it.
#
# STATE MACHINE:
# --------------
#   NOT_STARTED → SCANNING → HYDRATING → NOTIFICATION_PENDING → DONE
#
#   A first pass that raises goes back to NOT_STARTED, so a retry still
#   schedules the notification.
#
#   DONE never regresses. Calling hydrate() again re-assigns every slot
#   from the store but schedules no second notification. A nested call
#   made while a pass is running (from a callback) does its own
#   assignment pass and leaves the state to the outer call.
#
# ==============================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from src.declaration.descriptor import PreferenceDescriptor
from src.registry.preference_registry import PreferenceRegistry
from src.store.backends import PreferenceBackend
from src.store.preference_store import PreferenceStore, is_supported_type
from src.hydration.completion import CompletionSignal
from src.hydration.scheduler import DeferredScheduler, Scheduler


class HydrationState(Enum):
    NOT_STARTED = "not_started"
    SCANNING = "scanning"
    HYDRATING = "hydrating"
    NOTIFICATION_PENDING = "notification_pending"
    DONE = "done"


@dataclass
class HydrationResult:
    """Counts from one hydration pass."""
    hydrated: int = 0          # resolved through the store
    fallbacks: int = 0         # unsupported or mismatched type, raw default kept
    session_skipped: int = 0   # session scope, left at default
    blank_skipped: int = 0     # blank key, never discovered

    @property
    def total(self) -> int:
        """Declarations visited by the pass; blank keys are not."""
        return self.hydrated + self.fallbacks + self.session_skipped


class PreferenceHydrator:
    """
    Runs the startup hydration pass for one registry/store pair.

    Attributes:
        on_preferences_loaded: CompletionSignal fired once, on the
            scheduler tick after the first complete pass.
    """

    def __init__(
        self,
        registry: PreferenceRegistry,
        store: PreferenceStore,
        scheduler: Optional[Scheduler] = None,
    ):
        self.registry = registry
        self.store = store
        self.scheduler = scheduler or DeferredScheduler()
        self.on_preferences_loaded = CompletionSignal(self.scheduler)
        self.state = HydrationState.NOT_STARTED
        self._notification_scheduled = False
        self._depth = 0

    def hydrate(self) -> HydrationResult:
        """
        Hydrate every durable declaration from the store.

        Returns:
            HydrationResult with per-outcome counts.
        """
        self.registry.bind_store(self.store)
        outer = self._depth == 0
        first_pass = outer and not self._notification_scheduled
        self._depth += 1

        try:
            if first_pass:
                self.state = HydrationState.SCANNING
            declarations = self.registry.discover_declarations()

            if first_pass:
                self.state = HydrationState.HYDRATING
            result = HydrationResult(blank_skipped=self._count_blank())
            for descriptor, slot in declarations:
                if not descriptor.is_durable:
                    result.session_skipped += 1
                    continue

                value, from_store = self.resolve(descriptor)
                slot.value = value
                slot.hydrated = True
                if from_store:
                    result.hydrated += 1
                else:
                    result.fallbacks += 1
        except Exception:
            # a failed first pass can be retried
            if first_pass:
                self.state = HydrationState.NOT_STARTED
            raise
        finally:
            self._depth -= 1

        if first_pass:
            self.state = HydrationState.NOTIFICATION_PENDING
            self._notification_scheduled = True
            self.scheduler.call_later(self._complete)

        print(f"✓ Hydrated {result.hydrated} preferences "
              f"({result.fallbacks} default fallbacks, {result.session_skipped} session, "
              f"{result.blank_skipped} blank)")
        return result

    def _count_blank(self) -> int:
        return sum(1 for slot in self.registry.slots() if slot.descriptor.is_blank)

    def resolve(self, descriptor: PreferenceDescriptor) -> tuple[Any, bool]:
        """
        Resolve one durable declaration.

        Returns:
            (value, True) when read through the store,
            (raw default, False) when the type falls back.
        """
        if not is_supported_type(descriptor.value_type):
            return descriptor.default_value, False

        if not descriptor.default_matches_type:
            print(f"⚠ {descriptor.qualified_name}: default {descriptor.default_value!r} is not a "
                  f"{descriptor.value_type.__name__}, using it without the store")
            return descriptor.default_value, False

        value = self.store.get(descriptor.key, descriptor.default_value, descriptor.application_prefix)
        return value, True

    def seed_session_preferences(self, session_backend: PreferenceBackend) -> int:
        """
        Write the default of every scalar session declaration into a
        session-lifetime backend. Not part of hydrate().

        Returns:
            Number of session entries written
        """
        session_store = PreferenceStore(session_backend, self.store.identity)
        seeded = 0
        for descriptor, _ in self.registry.discover_declarations():
            if descriptor.is_durable:
                continue
            if not is_supported_type(descriptor.value_type) or not descriptor.default_matches_type:
                continue
            session_store.set(descriptor.key, descriptor.default_value, descriptor.application_prefix)
            seeded += 1
        return seeded

    @property
    def is_done(self) -> bool:
        return self.state is HydrationState.DONE

    def _complete(self) -> None:
        self.state = HydrationState.DONE
        self.on_preferences_loaded.fire()
