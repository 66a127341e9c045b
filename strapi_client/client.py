from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

import httpx

from strapi_client.api.collections import CollectionMixin
from strapi_client.api.core.authentication import ClientConfig
from strapi_client.api.core.locale import LocalePolicy
from strapi_client.http_client import HttpxStrapiHTTPClient

T = TypeVar("T")

class StrapiClient(CollectionMixin[T]):
    """
    Client bound to one Strapi collection.

        articles = StrapiClient("http://localhost:1337", "articles", token="...")
        err, entries = articles.find_many({"filters": {"title": {"$containsi": "news"}}})

    Pass `http` to reuse an existing `httpx.Client` (connection pool, proxies,
    mock transports). `timeout` and `transport` only configure the client built
    when `http` is omitted. `record_factory` converts each entry's JSON into a typed
    record, e.g. a dataclass `from_dict`.
    """

    _http: HttpxStrapiHTTPClient

    def __init__(
        self,
        base_url: str,
        resource: str,
        token: Optional[str] = None,
        *,
        http: Optional[httpx.Client] = None,
        locale_policy: Optional[LocalePolicy] = None,
        record_factory: Optional[Callable[[Mapping[str, Any]], T]] = None,
        timeout: Optional[float] = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._http = HttpxStrapiHTTPClient(
            base_url, token, client=http, timeout=timeout, transport=transport,
        )
        self._resource = resource
        self._locale_policy = locale_policy or LocalePolicy()
        self._record_factory = record_factory

    @classmethod
    def from_config(cls, config: ClientConfig, resource: str, **kwargs: Any) -> "StrapiClient[T]":
        return cls(config.base_url, resource, config.token, **kwargs)

    @classmethod
    def from_env(cls, resource: str, **kwargs: Any) -> "StrapiClient[T]":
        """Build a client from STRAPI_URL / STRAPI_TOKEN."""
        return cls.from_config(ClientConfig.from_env(), resource, **kwargs)

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def headers(self) -> Dict[str, str]:
        return self._http.headers

    @property
    def resource(self) -> str:
        return self._resource

    @property
    def locale_policy(self) -> LocalePolicy:
        return self._locale_policy

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "StrapiClient[T]":
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Optional[Any]) -> None:
        self.close()
