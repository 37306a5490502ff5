"""In-memory stand-in for a boto3 S3 client, plus shared fixtures."""

from io import BytesIO
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from iam_s3_driver.s3.options import S3DriverOptions
from iam_s3_driver.s3.s3_driver import S3Driver


def make_client_error(code: str, operation: str = "TestOp", message: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeS3Client:
    """Single-bucket object store implementing the client calls the driver uses.

    Listing is lexicographic and paginated with ``page_size`` keys per page;
    continuation tokens are the string offset of the next page.
    """

    def __init__(self, page_size: int = 1000):
        self.page_size = page_size
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.undeletable: set[str] = set()
        self.calls: list[tuple[str, dict]] = []

    def calls_to(self, operation: str) -> list[dict]:
        return [kwargs for op, kwargs in self.calls if op == operation]

    def seed(self, key: str, content: bytes = b"x", content_type: str = "text/plain") -> None:
        self.objects[key] = (content, content_type)

    def head_object(self, **kwargs):
        self.calls.append(("head_object", kwargs))
        if kwargs["Key"] not in self.objects:
            raise make_client_error("404", "HeadObject", "Not Found")
        content, content_type = self.objects[kwargs["Key"]]
        return {"ContentLength": len(content), "ContentType": content_type}

    def get_object(self, **kwargs):
        self.calls.append(("get_object", kwargs))
        if kwargs["Key"] not in self.objects:
            raise make_client_error("NoSuchKey", "GetObject", "The specified key does not exist.")
        content, content_type = self.objects[kwargs["Key"]]
        return {"Body": BytesIO(content), "ContentType": content_type}

    def put_object(self, **kwargs):
        self.calls.append(("put_object", kwargs))
        body = kwargs["Body"]
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.objects[kwargs["Key"]] = (bytes(body), kwargs.get("ContentType", "binary/octet-stream"))
        return {"ETag": '"etag"'}

    def delete_object(self, **kwargs):
        self.calls.append(("delete_object", kwargs))
        self.objects.pop(kwargs["Key"], None)
        return {}

    def list_objects_v2(self, **kwargs):
        self.calls.append(("list_objects_v2", kwargs))
        prefix = kwargs.get("Prefix", "")
        keys = sorted(k for k in self.objects if k.startswith(prefix))
        start = int(kwargs.get("ContinuationToken") or 0)
        page = keys[start : start + self.page_size]
        response: dict = {"KeyCount": len(page), "IsTruncated": start + self.page_size < len(keys)}
        if page:
            response["Contents"] = [{"Key": k, "Size": len(self.objects[k][0])} for k in page]
        if response["IsTruncated"]:
            response["NextContinuationToken"] = str(start + self.page_size)
        return response

    def delete_objects(self, **kwargs):
        self.calls.append(("delete_objects", kwargs))
        deleted, errors = [], []
        for obj in kwargs["Delete"]["Objects"]:
            key = obj["Key"]
            if key in self.undeletable:
                errors.append({"Key": key, "Code": "AccessDenied", "Message": "Access Denied"})
                continue
            self.objects.pop(key, None)
            deleted.append({"Key": key})
        response: dict = {"Deleted": deleted}
        if errors:
            response["Errors"] = errors
        return response


@pytest.fixture
def fake_s3() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def make_driver():
    def _make(client, prefix: str | None = None, bucket: str | None = "test-bucket") -> S3Driver:
        return S3Driver(S3DriverOptions(bucket=bucket, prefix=prefix, client=client))

    return _make


@pytest.fixture
def mock_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def client_error():
    """Factory for botocore ClientErrors carrying an S3 error code."""
    return make_client_error
