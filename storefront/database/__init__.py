# Storage modules

from .storage import KeyValueStorage, MemoryStorage, JsonFileStorage, create_storage
from .carts import CartStore

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "create_storage",
    "CartStore",
]
