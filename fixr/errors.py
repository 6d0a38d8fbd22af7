"""Errors raised by the FIXR client."""
import copy


class FixrError(Exception):
    """Base error with a human-readable message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def wrap(self, context: str) -> "FixrError":
        """Return a copy of this error with `context` prefixed to the message."""
        wrapped = copy.copy(self)
        wrapped.message = f"{context}: {self.message}"
        wrapped.args = (wrapped.message,)
        return wrapped


class RequestConstructionError(FixrError):
    """The request could not be built (bad URL or method)."""


class TransportError(FixrError):
    """The request could not be executed (connection failure, timeout)."""


class EncodingError(FixrError):
    """A request payload could not be serialized."""


class DecodeError(FixrError):
    """A response body was not valid JSON for the expected shape."""


class ServerReportedError(FixrError):
    """A well-formed response carried an error message in its body."""


class ValidationError(FixrError):
    """A booking precondition failed before anything was sent."""


class SoldOutError(ValidationError):
    def __init__(self):
        super().__init__("ticket selection has sold out")


class ExpiredError(ValidationError):
    def __init__(self):
        super().__init__("ticket selection has expired")


class MaximumExceededError(ValidationError):
    def __init__(self, maximum: int):
        super().__init__(f"cannot purchase more than the maximum ({maximum})")
        self.maximum = maximum
