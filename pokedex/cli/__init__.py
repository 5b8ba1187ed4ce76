"""CLI Layer — typer entry point and the interactive shell.

Invariants:
    - Shell actions go through services.* only, never a repository method directly
"""
