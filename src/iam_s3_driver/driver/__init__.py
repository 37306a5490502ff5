"""Key-value storage driver interface, key helpers and errors."""

from .base import StorageDriver, StorageValue, Unwatch, WatchCallback, WatchEvent
from .exceptions import (
    DriverConnectionError,
    DriverError,
    DriverPermissionError,
    MissingRequiredOptionError,
    StorageError,
)
from .keys import SEPARATOR, join_keys, normalize_base_key, normalize_key

__all__ = [
    "StorageDriver",
    "StorageValue",
    "Unwatch",
    "WatchCallback",
    "WatchEvent",
    "StorageError",
    "MissingRequiredOptionError",
    "DriverError",
    "DriverPermissionError",
    "DriverConnectionError",
    "SEPARATOR",
    "join_keys",
    "normalize_base_key",
    "normalize_key",
]
