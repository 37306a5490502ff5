"""Async key-value storage driver for S3-compatible object storage."""

from .driver import (
    DriverConnectionError,
    DriverError,
    DriverPermissionError,
    MissingRequiredOptionError,
    StorageDriver,
    StorageError,
    join_keys,
    normalize_key,
)
from .s3 import DRIVER_NAME, S3Driver, S3DriverOptions, create_s3_driver
from .storage import Storage

__all__ = [
    "DRIVER_NAME",
    "DriverConnectionError",
    "DriverError",
    "DriverPermissionError",
    "MissingRequiredOptionError",
    "S3Driver",
    "S3DriverOptions",
    "Storage",
    "StorageDriver",
    "StorageError",
    "create_s3_driver",
    "join_keys",
    "normalize_key",
]
