"""
HTTP client implementations for strapi_client.

This module exposes a minimal typed interface `StrapiHTTPClient` used by the
API mixins and a concrete httpx-based adapter `HttpxStrapiHTTPClient`.

Notes:
- `HttpxStrapiHTTPClient` is a synchronous adapter using `httpx.Client`.
- Unlike a raising client, the adapter never lets transport, status or
  decoding failures escape: every call returns a `Result`.
- Each call performs exactly one request attempt; no retries.
- `timeout` and redirect following (on, like fetch) only configure a client
  the adapter creates itself. An injected `httpx.Client` keeps its own
  settings.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from strapi_client.api.core.authentication import build_headers, normalize_base_url
from strapi_client.api.core.results import Ok, Result, api_error

logger = logging.getLogger(__name__)

JSON = Dict[str, Any]


class StrapiHTTPClient:
    """
    Minimal HTTP client interface used by API mixins.

    Implementations return `Ok(parsed_json)` or `Err(ServiceError)` and must
    not raise for failed requests.
    """

    base_url: str

    @property
    def headers(self) -> Dict[str, str]:
        raise NotImplementedError("StrapiHTTPClient.headers must be implemented by the runtime client")

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Result[Any]:
        raise NotImplementedError("StrapiHTTPClient.request must be implemented by the runtime client")


# Concrete httpx adapter ----------------------------------------------------

class HttpxStrapiHTTPClient(StrapiHTTPClient):
    """
    Synchronous httpx-based implementation of StrapiHTTPClient.

    Example:
        http = HttpxStrapiHTTPClient("http://localhost:1337", token="...")
        err, body = http.request("GET", "articles?locale=fr")
        http.close()

    Outcomes of `request`:
        - transport failure      -> Err(message, status=None)
        - non-2xx status         -> Err("<status> <reason>", status)
        - 2xx, body not JSON     -> Ok({"data": None}) for DELETE, else Err(..., status)
        - 2xx, JSON body         -> Ok(body)
        - client already closed  -> Err(message, status=None)
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        *,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = normalize_base_url(base_url)
        self._headers = build_headers(token)
        # An injected client is shared with the caller and keeps its own
        # timeout and redirect settings; only close our own.
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(timeout=timeout, follow_redirects=True, transport=transport)
        self._client = client

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Result[Any]:
        method = method.upper()
        url = self.url_for(endpoint)
        merged = {**self._headers, **(headers or {})}

        logger.debug("%s %s", method, url)

        if self._client.is_closed:
            logger.warning("%s %s on a closed client", method, url)
            return api_error("HTTP client has been closed")

        try:
            resp = self._client.request(method, url, json=json, headers=merged)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            return api_error(str(exc))

        if not resp.is_success:
            logger.warning("%s %s returned %s", method, url, resp.status_code)
            return api_error(f"{resp.status_code} {resp.reason_phrase}", resp.status_code)

        try:
            body = resp.json()
        except ValueError as exc:
            if method == "DELETE":
                # DELETE commonly answers 204 or an empty 200.
                return Ok({"data": None})
            logger.warning("%s %s returned an unparsable body: %s", method, url, exc)
            return api_error(f"Failed to parse JSON response - {exc}", resp.status_code)

        return Ok(body)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxStrapiHTTPClient":
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Optional[Any]) -> None:
        self.close()


__all__ = ["StrapiHTTPClient", "HttpxStrapiHTTPClient"]
