"""Retrying HTTP executor with a fixed delay between attempts.

The executor wraps a transport and keeps sending the same request until the
acceptability check passes or the attempt budget runs out. The outcome of
the final attempt is returned either way.
"""

from __future__ import annotations

import logging
import math
import numbers
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Optional, Union

import requests
from tenacity import RetryCallState, Retrying, retry_if_result, stop_after_attempt, wait_fixed

from retryable_http.domain.checks import AcceptabilityCheck, default_acceptability_check, status_code_check
from retryable_http.domain.config import AppConfig
from retryable_http.domain.errors import (
    InvalidAttemptBudgetError,
    InvalidDelayError,
    MissingAcceptabilityCheckError,
    MissingTransportError,
    RejectedResponseError,
)
from retryable_http.domain.models.outcome import AttemptOutcome
from retryable_http.infrastructure.transport import TRANSPORT_ERRORS, Transport, default_transport

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1
DEFAULT_DELAY = 0.0

Delay = Union[float, int, timedelta]


def _validate_transport(transport: Any) -> Transport:
    if transport is None:
        raise MissingTransportError()
    if not callable(getattr(transport, "send", None)):
        raise MissingTransportError(f"transport {transport!r} has no send() method")
    return transport


def _validate_max_attempts(max_attempts: Any) -> int:
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
        raise InvalidAttemptBudgetError(max_attempts)
    return max_attempts


def _validate_delay(delay: Any) -> float:
    if isinstance(delay, timedelta):
        seconds = delay.total_seconds()
    elif isinstance(delay, numbers.Real) and not isinstance(delay, bool):
        try:
            seconds = float(delay)
        except OverflowError:
            raise InvalidDelayError(delay) from None
    else:
        raise InvalidDelayError(delay)
    if not math.isfinite(seconds) or seconds < 0:
        raise InvalidDelayError(delay)
    return seconds


def _validate_acceptability_check(check: Any) -> AcceptabilityCheck:
    if check is None:
        raise MissingAcceptabilityCheckError()
    if not callable(check):
        raise MissingAcceptabilityCheckError(f"acceptability check {check!r} is not callable")
    return check


def _describe(request: Any) -> str:
    method = getattr(request, "method", None)
    url = getattr(request, "url", None)
    if method and url:
        return f"{method} {url}"
    return repr(request)


def _is_rejected(outcome: AttemptOutcome) -> bool:
    return outcome.error is not None


@dataclass(frozen=True)
class RetryingExecutor:
    """Send requests through a transport, retrying unacceptable outcomes.

    Instances are immutable and may be shared between threads, provided the
    wrapped transport is itself thread-safe. Prefer ``new_executor`` for
    construction; building the dataclass directly runs the same validation.

    Attributes:
        transport: Transport performing a single request/response exchange
        max_attempts: Maximum number of transport invocations per request
        delay: Fixed pause between attempts in seconds
        acceptability_check: Decides whether a response counts as success
    """

    transport: Transport
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: float = DEFAULT_DELAY
    acceptability_check: AcceptabilityCheck = field(default=default_acceptability_check)

    def __post_init__(self):
        _validate_transport(self.transport)
        _validate_max_attempts(self.max_attempts)
        object.__setattr__(self, "delay", _validate_delay(self.delay))
        _validate_acceptability_check(self.acceptability_check)

    @classmethod
    def from_config(cls, config: AppConfig, transport: Optional[Transport] = None) -> "RetryingExecutor":
        """Create executor from application configuration

        Args:
            config: Validated application configuration
            transport: Transport to wrap (default: new requests session)

        Returns:
            RetryingExecutor instance
        """
        options = [
            with_max_attempts(config.retry.max_attempts),
            with_delay(config.retry.delay),
            with_acceptability_check(
                status_code_check(config.acceptance.min_status, config.acceptance.max_status)
            ),
        ]
        if transport is not None:
            options.insert(0, with_transport(transport))
        return new_executor(*options)

    def execute(self, request: Any, **kwargs: Any) -> AttemptOutcome:
        """Send request, retrying until accepted or out of attempts.

        The request is passed verbatim to every attempt. Keyword arguments
        (e.g. ``timeout``) are forwarded to ``transport.send``.

        Args:
            request: Request to send (a ``requests.PreparedRequest`` for the default transport)
            **kwargs: Extra arguments for the transport

        Returns:
            Outcome of the first accepted attempt, or of the final attempt
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.delay),
            retry=retry_if_result(_is_rejected),
            before_sleep=self._log_before_sleep,
            retry_error_callback=self._give_up,
            sleep=time.sleep,
        )
        return retrying(self._attempt, request, **kwargs)

    def send(self, request: Any, **kwargs: Any) -> requests.Response:
        """Send request with retries, raising the final error.

        Same shape as ``Transport.send``, so an executor can stand in for
        the transport it wraps.

        Returns:
            The accepted response

        Raises:
            OSError: The transport failure of the final attempt, unchanged
            UnacceptableResponseError: The final response was rejected. Errors
                returned by a custom check are wrapped in ``RejectedResponseError``
                so that an outer executor retries them too.
        """
        response, error = self.execute(request, **kwargs)
        if error is None:
            return response
        if isinstance(error, TRANSPORT_ERRORS):
            raise error
        raise RejectedResponseError(error, response=response) from error

    def _attempt(self, request: Any, **kwargs: Any) -> AttemptOutcome:
        logger.debug(f"HTTP {_describe(request)}")
        try:
            response = self.transport.send(request, **kwargs)
        except TRANSPORT_ERRORS as e:
            return AttemptOutcome(None, e)
        return AttemptOutcome(response, self.acceptability_check(response))

    def _log_before_sleep(self, retry_state: RetryCallState) -> None:
        if retry_state.outcome is None:
            return
        error = retry_state.outcome.result().error
        attempt = retry_state.attempt_number
        logger.warning(
            f"Attempt {attempt}/{self.max_attempts} failed: {error}. Retrying in {self.delay}s..."
        )

    def _give_up(self, retry_state: RetryCallState) -> AttemptOutcome:
        outcome = retry_state.outcome.result()
        if self.max_attempts > 1:
            logger.warning(f"Giving up after {self.max_attempts} attempts: {outcome.error}")
        return outcome


@dataclass
class _ExecutorSettings:
    transport: Optional[Transport] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: float = DEFAULT_DELAY
    acceptability_check: AcceptabilityCheck = field(default=default_acceptability_check)


Option = Callable[[_ExecutorSettings], None]


def with_transport(transport: Transport) -> Option:
    """Set the wrapped transport. Default is a new ``requests.Session``."""

    def apply(settings: _ExecutorSettings) -> None:
        settings.transport = _validate_transport(transport)

    return apply


def with_max_attempts(max_attempts: int) -> Option:
    """Set the maximum number of attempts. Default is 1 (no retry)."""

    def apply(settings: _ExecutorSettings) -> None:
        settings.max_attempts = _validate_max_attempts(max_attempts)

    return apply


def with_delay(delay: Delay) -> Option:
    """Set the pause between attempts, in seconds or as a timedelta. Default is 0."""

    def apply(settings: _ExecutorSettings) -> None:
        settings.delay = _validate_delay(delay)

    return apply


def with_acceptability_check(check: AcceptabilityCheck) -> Option:
    """Set the response acceptability check.

    Default check rejects a missing response and any status outside 200-299.
    """

    def apply(settings: _ExecutorSettings) -> None:
        settings.acceptability_check = _validate_acceptability_check(check)

    return apply


def new_executor(*options: Option) -> RetryingExecutor:
    """Create a retrying executor from defaults and options.

    Options are applied in order; the first invalid option raises and the
    remaining ones are not applied.

    Raises:
        ConfigurationError: If an option value is invalid
    """
    settings = _ExecutorSettings()
    for option in options:
        option(settings)

    return RetryingExecutor(
        transport=settings.transport if settings.transport is not None else default_transport(),
        max_attempts=settings.max_attempts,
        delay=settings.delay,
        acceptability_check=settings.acceptability_check,
    )
