"""Retrying wrapper for HTTP transports with a fixed delay between attempts."""

from retryable_http.domain.checks import AcceptabilityCheck, default_acceptability_check, status_code_check
from retryable_http.domain.errors import (
    ConfigFileError,
    ConfigurationError,
    InvalidAttemptBudgetError,
    InvalidDelayError,
    MissingAcceptabilityCheckError,
    MissingResponseError,
    MissingTransportError,
    RejectedResponseError,
    RetryableHTTPError,
    UnacceptableResponseError,
    UnsuccessfulStatusCodeError,
)
from retryable_http.domain.models.outcome import AttemptOutcome
from retryable_http.infrastructure.executor import (
    Option,
    RetryingExecutor,
    new_executor,
    with_acceptability_check,
    with_delay,
    with_max_attempts,
    with_transport,
)
from retryable_http.infrastructure.transport import Transport, default_transport, prepare_request

__all__ = [
    # Executor
    "RetryingExecutor",
    "Option",
    "new_executor",
    "with_transport",
    "with_max_attempts",
    "with_delay",
    "with_acceptability_check",
    "AttemptOutcome",
    # Checks
    "AcceptabilityCheck",
    "default_acceptability_check",
    "status_code_check",
    # Transport
    "Transport",
    "default_transport",
    "prepare_request",
    # Errors
    "RetryableHTTPError",
    "ConfigurationError",
    "ConfigFileError",
    "MissingTransportError",
    "InvalidAttemptBudgetError",
    "InvalidDelayError",
    "MissingAcceptabilityCheckError",
    "UnacceptableResponseError",
    "MissingResponseError",
    "RejectedResponseError",
    "UnsuccessfulStatusCodeError",
]

__version__ = "0.1.0"
