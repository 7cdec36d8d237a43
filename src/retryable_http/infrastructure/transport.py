"""HTTP transport interface and the default requests-based transport."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import requests

from retryable_http.domain.errors import UnacceptableResponseError

logger = logging.getLogger(__name__)

# Transport-level failures. requests.RequestException derives from OSError;
# UnacceptableResponseError is raised by a wrapped RetryingExecutor.
TRANSPORT_ERRORS = (OSError, UnacceptableResponseError)


class Transport(Protocol):
    """Anything that can send a prepared request and return a response.

    ``requests.Session``, ``requests.adapters.HTTPAdapter`` and
    ``RetryingExecutor`` all satisfy this interface. Transport-level
    failures are raised as ``OSError`` subclasses (every
    ``requests.RequestException`` is one).
    """

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        ...


def default_transport() -> requests.Session:
    """Create the default transport (a new requests session)"""
    logger.debug("Creating default requests.Session transport")
    return requests.Session()


def prepare_request(
    method: str,
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    data: Optional[Any] = None,
    json: Optional[Any] = None,
    params: Optional[Dict[str, str]] = None,
    transport: Optional[Any] = None,
) -> requests.PreparedRequest:
    """Build a prepared request ready to be passed to a transport.

    When the transport is a requests session, its default headers, cookies
    and auth are merged in the same way ``Session.request`` does.

    Args:
        method: HTTP method
        url: Target URL
        headers: Optional request headers
        data: Optional raw body (bytes, str or form dict)
        json: Optional JSON body
        params: Optional query parameters
        transport: Optional transport whose session settings should apply

    Returns:
        Prepared request
    """
    request = requests.Request(
        method=method.upper(),
        url=url,
        headers=headers or {},
        data=data,
        json=json,
        params=params or {},
    )
    if isinstance(transport, requests.Session):
        return transport.prepare_request(request)
    return request.prepare()
