"""Common exception hierarchy for storage drivers."""


class StorageError(Exception):
    """Base exception for all storage driver operations."""

    def __init__(
        self,
        message: str,
        driver: str | None = None,
        key: str | None = None,
        cause: Exception | None = None,
    ):
        self.driver = driver
        self.key = key
        self.cause = cause
        super().__init__(f"[{driver}] {message}" if driver else message)


class MissingRequiredOptionError(StorageError):
    """Raised before any remote call when a required driver option is unset."""

    def __init__(self, driver: str, option: str):
        self.option = option
        super().__init__(f"Missing required option `{option}`.", driver=driver)


class DriverError(StorageError):
    """Raised when a call to the backing service fails."""


class DriverPermissionError(DriverError):
    """Raised when credentials are invalid or access is denied."""


class DriverConnectionError(DriverError):
    """Raised when the backing service is unreachable."""
