"""Attempt outcome model"""

from typing import NamedTuple, Optional

import requests


class AttemptOutcome(NamedTuple):
    """Response and error produced by one attempt.

    Unpacks like a pair: ``response, error = executor.execute(request)``.
    """

    response: Optional[requests.Response]  # None when the transport failed
    error: Optional[Exception]  # None when the attempt was accepted

    @property
    def ok(self) -> bool:
        """Check if the attempt was accepted"""
        return self.error is None
