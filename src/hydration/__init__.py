# ==============================================
# TOPIC 4: HYDRATION (Startup load + completion)
# ==============================================
#
# This package runs the one-shot startup pass that loads declared
# preferences from the store and tells the rest of the editor when
# their values are ready.
#
# Modules:
# --------
# - scheduler.py   → DeferredScheduler / AsyncioScheduler ("next tick")
# - completion.py  → CompletionSignal (one-shot, late subscribers served)
# - hydrator.py    → PreferenceHydrator, HydrationState, HydrationResult
#
# ==============================================

from .scheduler import Scheduler, DeferredScheduler, AsyncioScheduler
from .completion import CompletionSignal
from .hydrator import PreferenceHydrator, HydrationState, HydrationResult

__all__ = [
    "Scheduler",
    "DeferredScheduler",
    "AsyncioScheduler",
    "CompletionSignal",
    "PreferenceHydrator",
    "HydrationState",
    "HydrationResult",
]
