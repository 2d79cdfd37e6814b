"""Errors raised while handling an RDS instance event.

Skipped events are not errors and never raise; everything below fails the
invocation and is reported back to the Lambda runtime.
"""

from __future__ import annotations
from botocore.exceptions import ClientError


class TagSetterError(Exception):
    """Base class for all tag setter failures."""


class ConfigurationError(TagSetterError):
    """A required setting is missing or empty."""


class ParsingError(TagSetterError):
    """Input could not be parsed into the expected shape."""


class EventParseError(ParsingError):
    """The event payload does not carry a usable instance identifier."""


class TagsParseError(ParsingError):
    """The TAGS setting is not a JSON object of string values."""


class InstanceNotFoundError(TagSetterError):
    """The instance does not exist or is missing its cluster/ARN details."""

    def __init__(self, instance_id: str, message: str):
        super().__init__(message)
        self.instance_id = instance_id


class UpstreamError(TagSetterError):
    """An AWS API call failed.

    The original botocore exception is kept as ``__cause__``.
    """

    def __init__(self, operation: str, message: str, cause: Exception | None = None):
        super().__init__(f"{message}: {cause}" if cause else message)
        self.operation = operation
        self.error_code = None
        if isinstance(cause, ClientError):
            self.error_code = cause.response.get("Error", {}).get("Code")


class InvocationCancelledError(TagSetterError):
    """Not enough invocation time left to start the next AWS call."""

    def __init__(self, stage: str, remaining_ms: int):
        super().__init__(
            f"Invocation cancelled before {stage}: {remaining_ms}ms remaining"
        )
        self.stage = stage
        self.remaining_ms = remaining_ms
