"""Response acceptability checks.

A check takes the response of one attempt (or None) and returns an error
describing why the response is unacceptable, or None to accept it.
"""

from __future__ import annotations

from typing import Callable, Optional

import requests

from retryable_http.domain.errors import MissingResponseError, UnsuccessfulStatusCodeError

AcceptabilityCheck = Callable[[Optional[requests.Response]], Optional[Exception]]

MIN_SUCCESS_STATUS = 200
MAX_SUCCESS_STATUS = 299


def _check_status_range(
    response: Optional[requests.Response], min_status: int, max_status: int
) -> Optional[Exception]:
    if response is None:
        return MissingResponseError()

    status_code = response.status_code
    if status_code < min_status or status_code > max_status:
        return UnsuccessfulStatusCodeError(status_code, response=response)

    return None


def default_acceptability_check(response: Optional[requests.Response]) -> Optional[Exception]:
    """Accept any 2xx response, reject a missing response or any other status."""
    return _check_status_range(response, MIN_SUCCESS_STATUS, MAX_SUCCESS_STATUS)


def status_code_check(
    min_status: int = MIN_SUCCESS_STATUS,
    max_status: int = MAX_SUCCESS_STATUS,
) -> AcceptabilityCheck:
    """Create a check accepting status codes in an inclusive range.

    Args:
        min_status: Lowest accepted status code
        max_status: Highest accepted status code

    Returns:
        Acceptability check function

    Raises:
        ValueError: If the range is empty or outside 100-599
    """
    if not (100 <= min_status <= max_status <= 599):
        raise ValueError(f"Invalid status code range: {min_status}-{max_status}")

    if (min_status, max_status) == (MIN_SUCCESS_STATUS, MAX_SUCCESS_STATUS):
        return default_acceptability_check

    def check_status_code(response: Optional[requests.Response]) -> Optional[Exception]:
        return _check_status_range(response, min_status, max_status)

    check_status_code.__name__ = f"check_status_code_{min_status}_{max_status}"
    return check_status_code
