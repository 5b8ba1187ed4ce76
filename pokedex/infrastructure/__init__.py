"""Infrastructure Layer — storage backends, logging, and backend selection.

Invariants:
    - Every backend satisfies core.repository_protocols.PokemonRepository
    - Driver, HTTP and lock failures leave this layer only as StorageError

Design Decisions:
    - One module per backend; repository_factory is the only place that picks one
"""
