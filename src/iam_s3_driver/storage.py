"""Host front-end that mounts a single storage driver.

Keys are normalized before they reach the driver, and structured values are
stored as JSON text.
"""

import json
import logging
from typing import Any, Optional

from .driver.base import StorageDriver, StorageValue, Unwatch, WatchCallback
from .driver.keys import normalize_base_key, normalize_key

log = logging.getLogger(__name__)


def _serialize(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _deserialize(value: StorageValue) -> StorageValue:
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if not stripped or stripped[0] not in "{[":
        return value
    try:
        return json.loads(stripped)
    except ValueError:
        return value


class Storage:
    """Key-value storage over one mounted driver."""

    def __init__(self, driver: StorageDriver):
        self.driver = driver

    async def has_item(self, key: str) -> bool:
        return await self.driver.has_item(normalize_key(key))

    async def get_item(self, key: str) -> StorageValue:
        return _deserialize(await self.driver.get_item(normalize_key(key)))

    async def get_item_raw(self, key: str) -> Optional[bytes]:
        return await self.driver.get_item_raw(normalize_key(key))

    async def set_item(self, key: str, value: Any) -> None:
        if value is None:
            await self.remove_item(key)
            return
        await self.driver.set_item(normalize_key(key), _serialize(value))

    async def set_item_raw(self, key: str, value: bytes) -> None:
        if value is None:
            await self.remove_item(key)
            return
        await self.driver.set_item_raw(normalize_key(key), value)

    async def remove_item(self, key: str) -> None:
        await self.driver.remove_item(normalize_key(key))

    async def get_keys(self, base: Optional[str] = None) -> list[str]:
        base_key = normalize_base_key(base)
        keys = await self.driver.get_keys(base_key)
        return [k for k in keys if k.startswith(base_key)]

    async def clear(self, base: Optional[str] = None) -> None:
        await self.driver.clear(normalize_base_key(base))

    async def dispose(self) -> None:
        log.debug("Disposing storage driver %s", self.driver.name)
        await self.driver.dispose()

    async def watch(self, callback: WatchCallback) -> Unwatch:
        return await self.driver.watch(callback)
