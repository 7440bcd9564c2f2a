from enum import Enum


class PreferenceScope(Enum):
    """
    Lifetime of a declared preference.

    - DURABLE: persisted in the backing store across process restarts
    - SESSION: lives for the current run only, seeded from its default
    """
    DURABLE = "durable"
    SESSION = "session"
