"""Pokedex Package — catalog of uniquely-numbered Pokemon over pluggable storage.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Only the version lives here: explicit imports only, no star exports
"""

__version__ = "1.0.0"
