"""
Storage package.

Public API:
- KeyValueStore (interface), InMemoryStore, JsonFileStore
- StorageCorruptError
- persisted key names
"""
from .backends import KeyValueStore, InMemoryStore, JsonFileStore, StorageCorruptError
from .keys import (
    ALL_ORDERS_KEY,
    CUSTOM_HOSPITALS_KEY,
    USER_KEY,
    IS_LOGGED_IN_KEY,
    CURRENT_ORDER_KEY,
)

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "StorageCorruptError",
    "ALL_ORDERS_KEY",
    "CUSTOM_HOSPITALS_KEY",
    "USER_KEY",
    "IS_LOGGED_IN_KEY",
    "CURRENT_ORDER_KEY",
]
