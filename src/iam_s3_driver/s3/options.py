"""Configuration model for the S3 driver."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class S3DriverOptions(BaseModel):
    """Options accepted by :class:`~iam_s3_driver.s3.s3_driver.S3Driver`.

    ``bucket`` is required but validated lazily: a driver built without one
    fails every operation with ``MissingRequiredOptionError`` before any
    request is sent.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    bucket: Optional[str] = Field(
        default=None,
        description="Name of the bucket holding the items.",
    )
    region: Optional[str] = Field(
        default=None,
        description="AWS region. Falls back to the boto3 default resolution when unset.",
    )
    endpoint: Optional[str] = Field(
        default=None,
        description="Endpoint URL override for S3-compatible services (MinIO, LocalStack).",
    )
    prefix: Optional[str] = Field(
        default=None,
        description="Namespace prefix every key is placed under, e.g. 'nitro-cache/'.",
    )
    client: Optional[Any] = Field(
        default=None,
        description="Pre-built boto3 S3 client. The driver never closes a client it did not create.",
    )

    @field_validator("bucket", "region", "endpoint", "prefix", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value
