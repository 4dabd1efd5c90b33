"""Custom SDK exceptions."""


class SdkError(Exception):
    """Base exception for all SDK errors."""

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class ConfigError(SdkError):
    """Exception raised when the op environment is incomplete.

    This typically occurs when:
    - SDK_STATE_DIR or SDK_CONFIG_DIR is not set
    - SDK_SPEAK_PORT is not set or is not a valid port number
    """

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class DaemonRequestError(SdkError):
    """Exception raised for daemon transport errors.

    This typically occurs when:
    - The daemon is not listening on the configured port
    - The daemon URL is malformed
    - The daemon answers with a non-success status
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.status_code = status_code


class DaemonResponseError(SdkError):
    """Exception raised when a daemon response lacks an expected field."""

    pass


class KVStoreError(SdkError):
    """Exception raised when a state or config file cannot be read or written."""

    def __init__(
        self, message: str, path: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)
        self.path = path
