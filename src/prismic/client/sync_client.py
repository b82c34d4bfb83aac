"""Synchronous HTTP client with access-token injection, retry and error mapping.

This module provides :class:`HttpClient`, the blocking transport used by
:class:`~prismic.api.Api`. It wraps :class:`httpx.Client` and layers on:

- **Access token** -- appended as the ``access_token`` query parameter.
- **Retry with backoff** -- retries on 5xx and network errors with
  exponential delay (1 s, 2 s, 4 s, ...).
- **Error mapping** -- HTTP error statuses become typed
  :class:`~prismic.exceptions.PrismicError` subclasses.

Response caching is not done here: :meth:`~prismic.api.SearchForm.submit`
wraps :meth:`HttpClient.get_json` in the response cache as the producer of
a miss.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx

from prismic.client.response import decode_json, error_message
from prismic.exceptions import AuthError, ConnectionError_, NotFoundError, ServerError
from prismic.models import RequestConfig

logger = logging.getLogger(__name__)


class HttpClient:
    """Synchronous HTTP client for API calls.

    The underlying :class:`httpx.Client` is opened on first use, or on
    entering the context manager, and closed by :meth:`close`.

    Args:
        config: Timeout, retry and SSL settings.
        access_token: Token sent with every request, for private repositories.
        transport: Optional httpx transport (e.g. :class:`httpx.MockTransport`
            in tests).

    Example::

        with HttpClient(RequestConfig(), access_token="secret") as client:
            data = client.get_json("https://repo.prismic.io/api")
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        access_token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._access_token = access_token
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def open(self) -> httpx.Client:
        """Return the underlying httpx client, creating it if needed."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> HttpClient:
        self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def with_token(self, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Return *params* with the access token added, if there is one."""
        merged: dict[str, Any] = dict(params or {})
        if self._access_token and "access_token" not in merged:
            merged["access_token"] = self._access_token
        return merged

    def get_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET *url* and return its decoded JSON body.

        Args:
            url: Absolute URL. Query parameters already in the URL are kept.
            params: Extra query parameters.

        Returns:
            The decoded JSON value.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ServerError: On other error statuses, or 5xx after all retries.
            ConnectionError_: On network / timeout errors after all retries.
            ParseError: If the body is not JSON.
        """
        # Search URLs built by SearchForm already carry the token.
        if "access_token" in httpx.URL(url).params:
            params = dict(params or {})
        else:
            params = self.with_token(params)
        response = self._execute_with_retry(url, params)
        self._map_response_error(response)
        return decode_json(response)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _execute_with_retry(self, url: str, params: dict[str, Any]) -> httpx.Response:
        """Execute the GET with exponential-backoff retry.

        Retries on 5xx status codes and connection / timeout errors up to
        ``max_retries`` times. The delay doubles each attempt: 1 s, 2 s, 4 s, ...
        """
        client = self.open()
        max_retries = self._config.max_retries

        for attempt in range(max_retries + 1):
            try:
                response = client.get(
                    url, params=params or None, headers={"Accept": "application/json"}
                )
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                if attempt < max_retries:
                    delay = 2 ** attempt
                    logger.debug(
                        "Connection error: %s, retrying in %ss (attempt %d/%d)",
                        exc, delay, attempt + 1, max_retries,
                    )
                    time.sleep(delay)
                    continue
                raise ConnectionError_(
                    f"Connection failed after {max_retries + 1} attempts: {exc}"
                ) from exc

            if response.status_code >= 500 and attempt < max_retries:
                delay = 2 ** attempt
                logger.debug(
                    "Server error %d, retrying in %ss (attempt %d/%d)",
                    response.status_code, delay, attempt + 1, max_retries,
                )
                time.sleep(delay)
                continue

            return response

        raise ServerError("Request failed after all retries")  # pragma: no cover

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        msg = error_message(response)
        if status in (401, 403):
            raise AuthError(msg)
        if status == 404:
            raise NotFoundError(msg)
        raise ServerError(msg)
