"""Shared HTTP transport utilities for the Typekit REST adapter.

This module provides a thin wrapper around ``requests.Session`` so the adapter
shares one timeout policy, retry behavior, and token header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``kitinfo.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed by ``kitinfo/adapters/typekit_rest.py``.
    - Used only inside adapter layer methods; the menu flow talks to ports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from requests import exceptions as req_exc

from kitinfo.adapters.api_errors import ApiError, ApiTimeoutError

TOKEN_HEADER = "X-Typekit-Token"

# Exceptions worth resending per method. POST is resent only when the
# connection was never made.
_RETRY_ON = {
    "GET": (req_exc.Timeout, req_exc.ConnectionError),
    "DELETE": (req_exc.Timeout, req_exc.ConnectionError),
    "POST": (req_exc.ConnectTimeout,),
}

_log = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for API calls.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """Shared requests wrapper with token headers and retry loops.

    This class is transport-only. Callers provide endpoint URLs and decide how
    to map non-2xx responses into gateway results.
    """

    def __init__(self, api_token: Optional[str], cfg: HttpConfig) -> None:
        """Create a retry-enabled session.

        Args:
            api_token: Value for the ``X-Typekit-Token`` header, or ``None``.
            cfg: Shared timeout and retry settings.
        """
        self.session = requests.Session()
        self.api_token = api_token
        self.cfg = cfg

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers[TOKEN_HEADER] = self.api_token
        return headers

    def get(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        """Send a GET request with retries on timeout/connectivity failures.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
            ApiError: For any other transport failure (bad URL, redirects).
        """
        return self._send(
            "GET",
            url,
            lambda: self.session.get(
                url,
                headers=self._headers(),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def post(
        self,
        url: str,
        *,
        form: Optional[Mapping[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a form-encoded POST request.

        Only connect timeouts are retried; a read timeout may follow a
        request the server already handled.

        Raises:
            ApiTimeoutError: On timeout or connection failure.
            ApiError: For any other transport failure.
        """
        data = dict(form) if form else None
        return self._send(
            "POST",
            url,
            lambda: self.session.post(
                url,
                data=data,
                headers=self._headers(),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def delete(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        """Send a DELETE request with retries on transport failures.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
        """
        return self._send(
            "DELETE",
            url,
            lambda: self.session.delete(
                url,
                headers=self._headers(),
                timeout=timeout or self.cfg.request_timeout_s,
            ),
        )

    def _send(
        self, method: str, url: str, call: Callable[[], requests.Response]
    ) -> requests.Response:
        context = f"{method} {url}"
        retry_on = _RETRY_ON.get(method, (req_exc.ConnectTimeout,))
        attempt = 0
        while True:
            attempt += 1
            try:
                resp = call()
            except req_exc.RequestException as exc:
                if isinstance(exc, retry_on) and attempt <= self.cfg.retries:
                    _log.debug("%s attempt %d failed, retrying: %s", context, attempt, exc)
                    continue
                _log.debug("%s failed after %d attempt(s): %s", context, attempt, exc)
                raise _transport_error(exc, url, context) from exc
            _log.debug("%s -> %s", context, resp.status_code)
            return resp


def _transport_error(exc: req_exc.RequestException, url: str, context: str) -> ApiError:
    if isinstance(exc, (req_exc.Timeout, req_exc.ConnectionError)):
        return ApiTimeoutError(f"Timeout contacting {url}", context=context)
    return ApiError(f"Request to {url} failed: {type(exc).__name__}", context=context)


__all__ = ["HttpConfig", "RetryingSession", "TOKEN_HEADER"]
