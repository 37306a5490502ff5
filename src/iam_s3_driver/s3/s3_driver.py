"""Key-value storage driver backed by S3-compatible object storage (AWS S3, MinIO)."""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotoConnectionError

from ..driver.base import StorageDriver, StorageValue
from ..driver.exceptions import (
    DriverConnectionError,
    DriverError,
    DriverPermissionError,
    MissingRequiredOptionError,
)
from .keymap import ObjectKeyMapper
from .options import S3DriverOptions

log = logging.getLogger(__name__)

DRIVER_NAME = "iam-s3"
LOG_IDENTIFIER = f"[{DRIVER_NAME}]"

# DeleteObjects accepts at most 1000 keys per request.
MAX_DELETE_KEYS = 1000

TEXT_CONTENT_TYPE = "text/plain"
RAW_CONTENT_TYPE = "application/octet-stream"
JSON_CONTENT_TYPE = "application/json"

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}

_ERROR_CODE_MAP = {
    "AccessDenied": DriverPermissionError,
    "403": DriverPermissionError,
    "InvalidAccessKeyId": DriverPermissionError,
    "SignatureDoesNotMatch": DriverPermissionError,
    "ExpiredToken": DriverPermissionError,
    "EndpointConnectionError": DriverConnectionError,
}


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def _is_not_found(error: ClientError) -> bool:
    return _error_code(error) in _NOT_FOUND_CODES


@dataclass(frozen=True)
class _ListingState:
    """Accumulated object keys and the token for the next listing page."""

    object_keys: tuple[str, ...] = ()
    continuation_token: Optional[str] = None


def _next_state(state: _ListingState, page: dict) -> _ListingState:
    new_keys = tuple(obj["Key"] for obj in page.get("Contents") or [] if obj.get("Key"))
    return _ListingState(
        object_keys=state.object_keys + new_keys,
        continuation_token=page.get("NextContinuationToken") or None,
    )


def _create_client(options: S3DriverOptions) -> Any:
    kwargs: dict = {
        "config": Config(
            region_name=options.region,
            signature_version="s3v4",
            retries={"max_attempts": 3, "mode": "standard"},
        ),
    }
    if options.endpoint:
        kwargs["endpoint_url"] = options.endpoint
    return boto3.client("s3", **kwargs)


class S3Driver(StorageDriver):
    """Stores each item as one object in a bucket, optionally under a prefix.

    Every blocking boto3 call runs in a worker thread so the event loop is
    never blocked. The client and the key mapper are read-only after
    construction; concurrent calls on the same key race at the object store.
    """

    name = DRIVER_NAME

    def __init__(self, options: S3DriverOptions):
        self._options = options
        self.owns_client = options.client is None
        self._client = _create_client(options) if self.owns_client else options.client
        self._keys = ObjectKeyMapper(options.prefix)
        log.debug(
            "%s Driver initialized. Bucket: %s, Prefix: %s, Client: %s",
            LOG_IDENTIFIER,
            options.bucket,
            self._keys.resolved_prefix or "(none)",
            "internal" if self.owns_client else "caller-supplied",
        )

    @property
    def options(self) -> S3DriverOptions:
        return self._options

    @property
    def client(self) -> Any:
        return self._client

    def to_object_key(self, key: Optional[str]) -> str:
        return self._keys.to_object_key(key)

    def from_object_key(self, object_key: Optional[str]) -> str:
        return self._keys.from_object_key(object_key)

    async def has_item(self, key: str) -> bool:
        bucket = self._require_bucket()
        object_key = self.to_object_key(key)
        try:
            await asyncio.to_thread(self._client.head_object, Bucket=bucket, Key=object_key)
            return True
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise self._fail(f"Error checking key {object_key}", e, object_key) from e
        except BotoCoreError as e:
            raise self._fail(f"Error checking key {object_key}", e, object_key) from e

    async def get_item(self, key: str) -> StorageValue:
        bucket = self._require_bucket()
        object_key = self.to_object_key(key)
        try:
            content, content_type = await asyncio.to_thread(self._get_object, bucket, object_key)
        except ClientError as e:
            if _is_not_found(e):
                return None
            raise self._fail(f"Error getting key {object_key}", e, object_key) from e
        except BotoCoreError as e:
            raise self._fail(f"Error getting key {object_key}", e, object_key) from e
        return self._decode_text(content.decode("utf-8", errors="replace"), content_type, object_key)

    async def get_item_raw(self, key: str) -> Optional[bytes]:
        bucket = self._require_bucket()
        object_key = self.to_object_key(key)
        try:
            content, _ = await asyncio.to_thread(self._get_object, bucket, object_key)
            return content
        except ClientError as e:
            if _is_not_found(e):
                return None
            raise self._fail(f"Error getting raw key {object_key}", e, object_key) from e
        except BotoCoreError as e:
            raise self._fail(f"Error getting raw key {object_key}", e, object_key) from e

    async def set_item(self, key: str, value: str) -> None:
        bucket = self._require_bucket()
        object_key = self.to_object_key(key)
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=bucket,
                Key=object_key,
                Body=value.encode("utf-8"),
                ContentType=TEXT_CONTENT_TYPE,
            )
        except (ClientError, BotoCoreError) as e:
            raise self._fail(f"Error setting key {object_key}", e, object_key) from e

    async def set_item_raw(self, key: str, value: bytes) -> None:
        bucket = self._require_bucket()
        object_key = self.to_object_key(key)
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Raw value for key {object_key} must be bytes, bytearray or memoryview, "
                f"not {type(value).__name__}"
            )
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=bucket,
                Key=object_key,
                Body=memoryview(value).tobytes(),
                ContentType=RAW_CONTENT_TYPE,
            )
        except (ClientError, BotoCoreError) as e:
            raise self._fail(f"Error setting raw key {object_key}", e, object_key) from e

    async def remove_item(self, key: str) -> None:
        bucket = self._require_bucket()
        object_key = self.to_object_key(key)
        try:
            await asyncio.to_thread(self._client.delete_object, Bucket=bucket, Key=object_key)
        except (ClientError, BotoCoreError) as e:
            raise self._fail(f"Error removing key {object_key}", e, object_key) from e

    async def get_keys(self, base: Optional[str] = "") -> list[str]:
        """List application keys under *base*, in the store's listing order.

        *base* is a namespace boundary: `get_keys("a")` lists `a/...` and never
        `ab/...`. A leaf key passed as *base* (`get_keys("a/1")`) therefore
        matches nothing; use `has_item` for a single key.
        """
        object_keys = await self._list_object_keys(base)
        return [self.from_object_key(k) for k in object_keys]

    async def clear(self, base: Optional[str] = "") -> None:
        bucket = self._require_bucket()
        # Delete by the listed object keys rather than re-prefixing application keys.
        object_keys = await self._list_object_keys(base)
        if not object_keys:
            return

        log.info(
            "%s Clearing %d keys with base '%s'...",
            LOG_IDENTIFIER,
            len(object_keys),
            base or "",
        )
        for start in range(0, len(object_keys), MAX_DELETE_KEYS):
            batch = object_keys[start : start + MAX_DELETE_KEYS]
            try:
                output = await asyncio.to_thread(self._delete_batch, bucket, batch)
            except (ClientError, BotoCoreError) as e:
                raise self._fail(
                    f"Error clearing keys with base '{base or ''}' (batch starting index {start})",
                    e,
                    base or "",
                ) from e

            errors = output.get("Errors") or []
            if errors:
                log.error(
                    "%s Errors during batch delete (batch starting index %d): %s",
                    LOG_IDENTIFIER,
                    start,
                    errors,
                )

    async def dispose(self) -> None:
        # Nothing is released, not even an internally created client.
        log.debug("%s Dispose called; nothing to release.", LOG_IDENTIFIER)

    def _require_bucket(self) -> str:
        if not self._options.bucket:
            raise MissingRequiredOptionError(DRIVER_NAME, "bucket")
        return self._options.bucket

    def _get_object(self, bucket: str, object_key: str) -> tuple[bytes, str]:
        response = self._client.get_object(Bucket=bucket, Key=object_key)
        body = response.get("Body")
        content = body.read() if body is not None else b""
        return content, response.get("ContentType") or ""

    def _list_page(self, bucket: str, prefix: str, token: Optional[str]) -> dict:
        params: dict = {"Bucket": bucket, "Prefix": prefix}
        if token:
            params["ContinuationToken"] = token
        return self._client.list_objects_v2(**params)

    def _delete_batch(self, bucket: str, object_keys: list[str]) -> dict:
        return self._client.delete_objects(
            Bucket=bucket,
            Delete={
                "Objects": [{"Key": k} for k in object_keys],
                "Quiet": False,
            },
        )

    async def _list_object_keys(self, base: Optional[str]) -> list[str]:
        """Return every object key under *base* whose application key is non-empty."""
        bucket = self._require_bucket()
        prefix = self._keys.to_list_prefix(base)
        state = _ListingState()
        try:
            while True:
                page = await asyncio.to_thread(
                    self._list_page, bucket, prefix, state.continuation_token
                )
                state = _next_state(state, page)
                if state.continuation_token is None:
                    break
        except (ClientError, BotoCoreError) as e:
            raise self._fail(f"Error listing keys with base {prefix}", e, prefix) from e
        return [k for k in state.object_keys if self.from_object_key(k)]

    def _decode_text(self, text: str, content_type: str, object_key: str) -> StorageValue:
        if JSON_CONTENT_TYPE not in content_type:
            return text
        try:
            return json.loads(text)
        except ValueError:
            log.warning(
                "%s Failed to parse JSON for key %s, returning raw string.",
                LOG_IDENTIFIER,
                object_key,
            )
            return text

    def _fail(self, message: str, error: Exception, key: Optional[str]) -> DriverError:
        log.error("%s %s: %s", LOG_IDENTIFIER, message, error)
        if isinstance(error, ClientError):
            exc_cls = _ERROR_CODE_MAP.get(_error_code(error), DriverError)
        elif isinstance(error, (BotoConnectionError, HTTPClientError)):
            exc_cls = DriverConnectionError
        else:
            exc_cls = DriverError
        return exc_cls(message, driver=DRIVER_NAME, key=key, cause=error)
