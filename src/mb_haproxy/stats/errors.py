"""Error taxonomy for the HAProxy stats socket client."""


class HaproxyError(Exception):
    """Base error raised by stats socket operations."""

    code = "haproxy_error"

    def __init__(self, message: str) -> None:
        """Initialize with a human-readable message.

        Args:
            message: Human-readable error description.

        """
        super().__init__(message)
        self.message = message


class ParseFailureError(HaproxyError):
    """Response text was malformed or not what the command expects."""

    code = "parse_failure"


class UnknownIdError(HaproxyError):
    """HAProxy reported that the referenced ACL id does not exist."""

    code = "unknown_id"


class MissingParametersError(HaproxyError):
    """HAProxy reported that required command parameters were omitted."""

    code = "missing_parameters"


class IoError(HaproxyError):
    """Transport failure while connecting, writing, or reading."""

    code = "io_error"

    def __init__(self, error: OSError) -> None:
        """Wrap a transport error.

        Args:
            error: The underlying OS-level error.

        """
        super().__init__(str(error) or type(error).__name__)
        self.error = error


class ConnectionConsumedError(RuntimeError):
    """A command was issued on a connection that already ran one."""
