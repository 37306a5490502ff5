"""Factory for creating the S3 driver from a config dict or environment variables."""

import logging
import os
from typing import Any, Dict, Optional

from .options import S3DriverOptions
from .s3_driver import S3Driver

log = logging.getLogger(__name__)


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value and value.strip():
            return value.strip()
    return None


def create_s3_driver(config: Optional[Dict[str, Any]] = None) -> S3Driver:
    """Create an S3Driver from *config*, falling back to environment variables.

    Configuration format:
    ```yaml
    bucket: my-cache-bucket   # or S3_BUCKET_NAME / OBJECT_STORAGE_BUCKET_NAME
    region: us-east-1         # or S3_REGION / AWS_REGION
    endpoint: null            # or S3_ENDPOINT_URL, e.g. http://minio:9000
    prefix: "nitro-cache/"    # or S3_KEY_PREFIX
    ```

    A missing bucket is not rejected here; every driver operation raises
    MissingRequiredOptionError until one is configured.

    Args:
        config: Driver configuration. A pre-built boto3 client may be passed as ``client``.

    Returns:
        Configured S3Driver instance.
    """
    config = config or {}

    options = S3DriverOptions(
        bucket=config.get("bucket") or _first_env("S3_BUCKET_NAME", "OBJECT_STORAGE_BUCKET_NAME"),
        region=config.get("region") or _first_env("S3_REGION", "AWS_REGION"),
        endpoint=config.get("endpoint") or _first_env("S3_ENDPOINT_URL"),
        prefix=config.get("prefix") or _first_env("S3_KEY_PREFIX"),
        client=config.get("client"),
    )
    if not options.bucket:
        log.warning("S3 driver created without a bucket; operations will fail until one is set.")
    return S3Driver(options)
