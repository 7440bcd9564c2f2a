# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Inspect and edit stored editor preferences without the editor.
#
# COMMANDS:
# ---------
# 1. List declared preferences with their hydrated values:
#    python -m src.cli list
#
# 2. Read one preference:
#    python -m src.cli get EnablePackageDebug
#
# 3. Write one preference (parsed by its declared type):
#    python -m src.cli set EnablePackageDebug true
#
# 4. Delete every stored entry:
#    python -m src.cli reset --confirm
#
#   --module NAME (repeatable) scans extra modules/packages for
#   declarations besides src.toolkit_preferences.
#
# ==============================================

import argparse
import sys
from typing import Any, List, Optional

from src.hydration.hydrator import PreferenceHydrator
from src.registry.preference_registry import PreferenceRegistry, PreferenceSlot
from src.startup import DEFAULT_PREFERENCE_PACKAGES, initialize_preferences


TRUE_VALUES = {"true", "yes", "on", "1"}
FALSE_VALUES = {"false", "no", "off", "0"}


def parse_value(raw: str, value_type: type) -> Any:
    """Parse a command line string into a preference's declared type."""
    if value_type is bool:
        lowered = raw.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise ValueError(f"'{raw}' is not a boolean")
    if value_type is int:
        return int(raw)
    if value_type is float:
        return float(raw)
    if value_type is str:
        return raw
    raise ValueError(f"{value_type.__name__} preferences cannot be set from the command line")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m src.cli", description="Editor preference store")
    parser.add_argument(
        "--module", action="append", default=[], metavar="NAME",
        help="extra module or package declaring preferences (repeatable)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="list declared preferences")

    get_cmd = commands.add_parser("get", help="print one preference")
    get_cmd.add_argument("key")

    set_cmd = commands.add_parser("set", help="store one preference")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")

    reset_cmd = commands.add_parser("reset", help="delete every stored entry")
    reset_cmd.add_argument("--confirm", action="store_true")
    return parser


def _lookup(registry: PreferenceRegistry, key: str) -> Optional[PreferenceSlot]:
    matches = registry.find(key)
    if not matches:
        print(f"✗ No preference declared with key '{key}'")
        return None
    if len(matches) > 1:
        print(f"✗ Key '{key}' is declared more than once: "
              + ", ".join(slot.descriptor.qualified_name for slot in matches))
        return None
    return matches[0]


def _list(registry: PreferenceRegistry, hydrator: PreferenceHydrator) -> int:
    slots = sorted(registry.slots(), key=lambda s: (s.descriptor.qualified_name, s.descriptor.key))
    for slot in slots:
        d = slot.descriptor
        stored_as = hydrator.store.namespaced_key(d.key, d.application_prefix) if not d.is_blank else "-"
        print(f"{d.qualified_name:<48} {d.scope.value:<8} {stored_as:<56} = {slot.value!r}")
    print(f"{len(slots)} preference(s)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    registry = PreferenceRegistry()
    packages = list(DEFAULT_PREFERENCE_PACKAGES) + list(args.module)
    hydrator = initialize_preferences(packages=packages, registry=registry)
    hydrator.scheduler.run_pending()

    if args.command == "list":
        return _list(registry, hydrator)

    if args.command == "get":
        slot = _lookup(registry, args.key)
        if slot is None:
            return 1
        print(repr(slot.value))
        return 0

    if args.command == "set":
        slot = _lookup(registry, args.key)
        if slot is None:
            return 1
        try:
            value = parse_value(args.value, slot.descriptor.value_type)
        except ValueError as e:
            print(f"✗ {e}")
            return 1
        registry.set_value(slot.descriptor, value)
        print(f"✓ {slot.descriptor.qualified_name} = {value!r}")
        return 0

    if args.command == "reset":
        if not args.confirm:
            print("✗ Refusing to delete preferences without --confirm")
            return 1
        hydrator.store.backend.delete_all()
        print("✓ All preferences cleared")
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
