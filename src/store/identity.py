# ==============================================
# Application Identity
# ==============================================
#
# PURPOSE:
#   Supplies the application (process) name used to build
#   namespaced keys: "{name}_{key}" when a preference asks
#   for the application prefix.
#
# CLASSES:
# --------
# - ApplicationIdentity (Protocol)   → anything with a `name` attribute
# - StaticIdentity                   → fixed name, used by tests and hosts
#
# FUNCTION:
# ---------
# - default_identity(config) -> StaticIdentity
#     config.application_name if set, else the running script's stem.
#
# ==============================================

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from src.config import AppConfig, get_config


class ApplicationIdentity(Protocol):
    name: str


@dataclass(frozen=True)
class StaticIdentity:
    """An application identity with a fixed name."""
    name: str


def default_identity(config: Optional[AppConfig] = None) -> StaticIdentity:
    config = config or get_config()
    if config.application_name:
        return StaticIdentity(config.application_name)
    script = Path(sys.argv[0]).stem if sys.argv and sys.argv[0] else ""
    return StaticIdentity(script or "python")
