"""Services Layer — one module per catalog use-case.

Invariants:
    - Each module exposes Request (where it takes input) and async execute(repo, ...)
    - Repository errors are mapped to use-case errors here and nowhere else

Design Decisions:
    - Module-per-use-case over a service class: callers import exactly what they run
"""
