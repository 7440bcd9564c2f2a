# ==============================================
# PreferenceDescriptor (Data Class)
# ==============================================
#
# PURPOSE:
#   Describes how one declared field maps to a store entry.
#   Built by a preference marker when its owner class is created,
#   then handed to the registry.
#
# CLASS: PreferenceDescriptor (frozen dataclass)
# ----------------------------------------------
#   - key: str                  → raw store key (may be blank; blank keys
#                                  are never hydrated)
#   - default_value: Any        → bool, int, float, str or any opaque object
#   - application_prefix: bool  → prefix key with the application name
#   - scope: PreferenceScope    → DURABLE or SESSION
#   - value_type: type | None   → the field's declared type;
#                                  None means type(default_value)
#   - name: str                 → attribute name on the owner
#   - owner: type | None        → class that declares the field
#
#   Computed Properties:
#   --------------------
#   - is_blank -> bool
#   - is_durable -> bool
#   - default_matches_type -> bool
#   - qualified_name -> str     → "Owner.attribute"
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Optional

from src.declaration.scope import PreferenceScope


@dataclass(frozen=True)
class PreferenceDescriptor:
    key: str
    default_value: Any
    application_prefix: bool = False
    scope: PreferenceScope = PreferenceScope.DURABLE
    value_type: Optional[type] = None
    name: str = ""
    owner: Optional[type] = None

    def __post_init__(self):
        if self.value_type is None:
            object.__setattr__(self, "value_type", type(self.default_value))

    @property
    def is_blank(self) -> bool:
        return not isinstance(self.key, str) or not self.key.strip()

    @property
    def is_durable(self) -> bool:
        return self.scope is PreferenceScope.DURABLE

    @property
    def default_matches_type(self) -> bool:
        """Exact match: a bool default does not satisfy an int field."""
        return type(self.default_value) is self.value_type

    @property
    def qualified_name(self) -> str:
        owner = self.owner.__qualname__ if self.owner is not None else "<unbound>"
        return f"{owner}.{self.name}" if self.name else owner
