# ==============================================
# Editor Preference Persistence
# ==============================================
#
# Package Structure (4 Topics + Toolkit Preferences):
#
# src/
# ├── store/          # Topic 1: Key-value store, backends, namespacing
# ├── declaration/    # Topic 2: Preference markers and descriptors
# ├── registry/       # Topic 3: Registration list and slot arena
# ├── hydration/      # Topic 4: Startup hydration + completion signal
# ├── toolkit_preferences.py  # Preferences declared by the editor toolkit
# ├── startup.py      # Build store, scan declarations, hydrate
# ├── config.py       # Configuration management
# ├── errors.py       # Exception types
# └── cli.py          # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
