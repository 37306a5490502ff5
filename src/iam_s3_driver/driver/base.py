"""Abstract base class for key-value storage drivers."""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Literal, Optional, Union

StorageValue = Union[str, int, float, bool, dict, list, None]
WatchEvent = Literal["update", "remove"]
WatchCallback = Callable[[WatchEvent, str], Any]
Unwatch = Callable[[], Awaitable[None]]


async def _noop_unwatch() -> None:
    return None


class StorageDriver(ABC):
    """Backend-agnostic interface a key-value host mounts.

    Keys handed to a driver are already normalized. Reads of missing keys
    return ``None``; they never raise.
    """

    name: str = "driver"

    @property
    def options(self) -> Any:
        """Configuration the driver was created with."""
        return None

    @abstractmethod
    async def has_item(self, key: str) -> bool:
        """Return True when *key* exists."""

    @abstractmethod
    async def get_item(self, key: str) -> StorageValue:
        """Return the stored value for *key*, or None if missing."""

    @abstractmethod
    async def get_item_raw(self, key: str) -> Optional[bytes]:
        """Return the stored bytes for *key*, or None if missing."""

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store text under *key*, replacing any existing value."""

    @abstractmethod
    async def set_item_raw(self, key: str, value: bytes) -> None:
        """Store bytes under *key*, replacing any existing value."""

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Delete *key*. No-op if it doesn't exist."""

    @abstractmethod
    async def get_keys(self, base: str = "") -> list[str]:
        """List every key under *base*."""

    @abstractmethod
    async def clear(self, base: str = "") -> None:
        """Delete every key under *base*."""

    async def dispose(self) -> None:
        """Release driver resources."""

    async def watch(self, callback: WatchCallback) -> Unwatch:
        """Subscribe to changes. Drivers without change feeds return a no-op."""
        return _noop_unwatch
