"""
Error taxonomy for the quotes pipeline.

UpstreamRejected, NetworkFailure and ParseFailure propagate to the pipeline
boundary. UnexpectedShape is only ever logged by the client, which then
degrades to an empty result.
"""

from typing import Any, List, Optional


class ConfigError(Exception):
    """Missing or placeholder configuration (e.g. the API key)."""


class ApiError(Exception):
    kind = "api_error"


class UpstreamRejected(ApiError):
    """The provider answered with an error or rate-limit notice in the body."""
    kind = "upstream_rejected"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class UnexpectedShape(ApiError):
    kind = "unexpected_shape"

    def __init__(self, keys: Optional[List[str]] = None, raw_type: Optional[str] = None):
        self.keys = keys or []
        self.raw_type = raw_type
        super().__init__(
            f"response missing top_gainers/top_losers (type={raw_type}, keys={self.keys})"
        )


class NetworkFailure(ApiError):
    kind = "network_failure"


class ParseFailure(ApiError):
    """A field of the response could not be parsed."""
    kind = "parse_failure"

    def __init__(self, field: str, value: Any, reason: str = "not a number"):
        self.field = field
        self.value = value
        super().__init__(f"could not parse {field}={value!r}: {reason}")
