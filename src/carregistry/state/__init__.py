"""State/store layer.

This package owns the in-memory car registry. Nothing outside of it reads
or writes the underlying mapping directly.
"""

from carregistry.state.store import CarStore, Record

__all__ = ["CarStore", "Record"]
