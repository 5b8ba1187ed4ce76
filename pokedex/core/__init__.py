"""Core Layer — value objects, the repository contract, and the error hierarchy.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Nothing here performs IO; the contract is a Protocol, backends live elsewhere

Design Decisions:
    - Validation lives in the value objects, so every entry point (HTTP, shell)
      hits the same gate
"""
