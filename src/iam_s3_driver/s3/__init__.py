"""S3-compatible key-value storage driver."""

from .factory import create_s3_driver
from .keymap import ObjectKeyMapper
from .options import S3DriverOptions
from .s3_driver import DRIVER_NAME, MAX_DELETE_KEYS, S3Driver

__all__ = [
    "DRIVER_NAME",
    "MAX_DELETE_KEYS",
    "ObjectKeyMapper",
    "S3Driver",
    "S3DriverOptions",
    "create_s3_driver",
]
