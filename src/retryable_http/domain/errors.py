"""Error taxonomy for retryable HTTP execution.

Configuration errors are raised while an executor is being built and never
afterwards. Acceptability errors are produced by response checks during
execution and handed back to the caller as the outcome's error.
"""

from __future__ import annotations

from typing import Any, Optional


class RetryableHTTPError(Exception):
    """Base class for all errors raised or returned by retryable_http."""

    pass


class ConfigurationError(RetryableHTTPError, ValueError):
    """Executor configuration is invalid."""

    pass


class MissingTransportError(ConfigurationError):
    """Transport is None or cannot send requests."""

    def __init__(self, message: str = "transport is None"):
        super().__init__(message)


class InvalidAttemptBudgetError(ConfigurationError):
    """Maximum attempt count is not a positive integer."""

    def __init__(self, max_attempts: Any):
        self.max_attempts = max_attempts
        super().__init__(f"max_attempts must be an integer >= 1, got {max_attempts!r}")


class InvalidDelayError(ConfigurationError):
    """Delay between attempts is negative, non-finite or not a duration."""

    def __init__(self, delay: Any):
        self.delay = delay
        super().__init__(f"delay must be a finite non-negative number of seconds, got {delay!r}")


class MissingAcceptabilityCheckError(ConfigurationError):
    """Acceptability check is None or not callable."""

    def __init__(self, message: str = "acceptability check is None"):
        super().__init__(message)


class ConfigFileError(ConfigurationError):
    """Configuration file or environment overrides failed validation."""

    pass


class UnacceptableResponseError(RetryableHTTPError):
    """Response did not pass the acceptability check.

    Attributes:
        response: The rejected response (None if there was no response)
    """

    def __init__(self, message: str, response: Optional[Any] = None):
        super().__init__(message)
        self.response = response


class MissingResponseError(UnacceptableResponseError):
    """Transport reported success but produced no response."""

    def __init__(self):
        super().__init__("response is None")


class UnsuccessfulStatusCodeError(UnacceptableResponseError):
    """Response status code is outside the accepted range."""

    def __init__(self, status_code: int, response: Optional[Any] = None):
        super().__init__(f"unsuccessful status code: {status_code}", response=response)
        self.status_code = status_code


class RejectedResponseError(UnacceptableResponseError):
    """Custom acceptability check rejected the response.

    Raised by ``RetryingExecutor.send`` when the check returned an error
    outside this hierarchy; that error is chained as ``__cause__``.

    Attributes:
        reason: The error returned by the check
    """

    def __init__(self, reason: Exception, response: Optional[Any] = None):
        super().__init__(f"response rejected: {reason}", response=response)
        self.reason = reason
