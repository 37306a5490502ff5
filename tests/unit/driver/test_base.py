"""Tests for StorageDriver default behavior."""

from unittest.mock import MagicMock

import pytest

from iam_s3_driver.driver.base import StorageDriver


class _MemoryDriver(StorageDriver):
    name = "memory"

    def __init__(self):
        self.data: dict = {}

    async def has_item(self, key):
        return key in self.data

    async def get_item(self, key):
        return self.data.get(key)

    async def get_item_raw(self, key):
        return self.data.get(key)

    async def set_item(self, key, value):
        self.data[key] = value

    async def set_item_raw(self, key, value):
        self.data[key] = value

    async def remove_item(self, key):
        self.data.pop(key, None)

    async def get_keys(self, base=""):
        return [k for k in self.data if k.startswith(base)]

    async def clear(self, base=""):
        for key in await self.get_keys(base):
            del self.data[key]


class TestStorageDriverDefaults:
    def test_cannot_instantiate_abstract_base(self):
        with pytest.raises(TypeError):
            StorageDriver()

    def test_options_default_to_none(self):
        assert _MemoryDriver().options is None

    @pytest.mark.asyncio
    async def test_dispose_is_noop(self):
        driver = _MemoryDriver()
        driver.data["k"] = "v"

        await driver.dispose()

        assert driver.data == {"k": "v"}

    @pytest.mark.asyncio
    async def test_watch_returns_awaitable_unwatch(self):
        callback = MagicMock()

        unwatch = await _MemoryDriver().watch(callback)

        assert await unwatch() is None
        callback.assert_not_called()
