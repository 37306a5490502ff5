"""Tests for the storage driver exception hierarchy."""

from iam_s3_driver.driver.exceptions import (
    DriverConnectionError,
    DriverError,
    DriverPermissionError,
    MissingRequiredOptionError,
    StorageError,
)


class TestStorageError:
    def test_message_is_tagged_with_driver(self):
        error = StorageError("boom", driver="iam-s3", key="ns/a")

        assert str(error) == "[iam-s3] boom"
        assert error.key == "ns/a"

    def test_message_without_driver(self):
        assert str(StorageError("boom")) == "boom"

    def test_preserves_cause(self):
        cause = RuntimeError("network")
        error = DriverError("failed", driver="iam-s3", cause=cause)

        assert error.cause is cause


class TestMissingRequiredOptionError:
    def test_names_driver_and_option(self):
        error = MissingRequiredOptionError("iam-s3", "bucket")

        assert error.option == "bucket"
        assert error.driver == "iam-s3"
        assert "Missing required option `bucket`" in str(error)
        assert str(error).startswith("[iam-s3]")

    def test_is_not_a_driver_error(self):
        assert not issubclass(MissingRequiredOptionError, DriverError)
        assert issubclass(MissingRequiredOptionError, StorageError)


class TestHierarchy:
    def test_driver_error_subclasses(self):
        assert issubclass(DriverPermissionError, DriverError)
        assert issubclass(DriverConnectionError, DriverError)
        assert issubclass(DriverError, StorageError)
