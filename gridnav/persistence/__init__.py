"""Session-scoped persistence for the grid navigation store."""
from .adapter import PersistenceAdapter
from .serialization import decode_payload, dump_payload, encode_payload, load_payload
from .storage import (
    JsonFileSessionStorage,
    MemorySessionStorage,
    SessionStorage,
    SqlSessionStorage,
    build_storage,
)

__all__ = [
    "PersistenceAdapter",
    "decode_payload",
    "dump_payload",
    "encode_payload",
    "load_payload",
    "JsonFileSessionStorage",
    "MemorySessionStorage",
    "SessionStorage",
    "SqlSessionStorage",
    "build_storage",
]
