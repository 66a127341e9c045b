"""
Collections API
===============

CRUD operations on a single Strapi collection type.

Endpoints
---------
GET    /api/{resource}                → list entries (find_many, find_page, find without id)
GET    /api/{resource}/{id}           → retrieve an entry
POST   /api/{resource}                → create an entry in the default locale
POST   /api/{resource}/{documentId}   → attach a localized variant (?locale=<tag>)
PUT    /api/{resource}/{id}           → update an entry
DELETE /api/{resource}/{id}           → delete an entry

Design notes
------------

- Every method returns a Result (`Ok` / `Err`) and never raises for API,
  transport or decoding failures. Errors from inner steps are returned
  unchanged by composed operations (find → find_many, upsert → update/create).
- Creating in a non-default locale runs up to three requests:
    1. search the collection for a base entry (filters applied),
    2. create the base entry in the default locale if none was found,
    3. write the localized variant against the base entry's `documentId`.
  Neither this nor `upsert` is atomic; two callers racing on the same
  filters can both create a base entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar, Union

from strapi_client.api.core.locale import LocalePolicy
from strapi_client.api.core.results import Err, Ok, Result, api_error
from strapi_client.api.query import (
    Filters,
    PaginationMeta,
    ParamsLike,
    to_query_dict,
    with_query,
)
from strapi_client.http_client import StrapiHTTPClient

logger = logging.getLogger(__name__)

JSON = Dict[str, Any]
EntryId = Union[int, str]
T = TypeVar("T")


# ───────────────────────────────────────────────────────────────
# Dataclasses
# ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a collection plus the server's pagination metadata."""

    data: List[T]
    pagination: Optional[PaginationMeta] = None


def _envelope_data(body: Any) -> Any:
    """The `data` member of a response envelope, or None."""
    if isinstance(body, Mapping):
        return body.get("data")
    return None


def _document_id(entry: Any) -> Optional[str]:
    if isinstance(entry, Mapping):
        return entry.get("documentId") or None
    return None


# ───────────────────────────────────────────────────────────────
# CollectionMixin
# ───────────────────────────────────────────────────────────────

class CollectionMixin(Generic[T]):
    """
    High-level wrapper for one collection type:

        client.find_many(params, locale="fr")
        client.find(id=1)
        client.create(payload={"data": {...}}, locale="fr", filters={...})
        client.update(id="abc123", payload={"data": {...}})
        client.delete(id="abc123")
        client.upsert(payload={"data": {...}}, filters={...})

    Assumes the consuming client defines `_http`, `_resource`,
    `_locale_policy` and `_record_factory`.
    """

    _http: StrapiHTTPClient
    _resource: str
    _locale_policy: LocalePolicy
    _record_factory: Optional[Callable[[Mapping[str, Any]], T]]

    # ── Helpers ─────────────────────────────────────────────────

    def _record(self, raw: Any) -> Optional[T]:
        if raw is None:
            return None
        if self._record_factory is None:
            return raw
        return self._record_factory(raw)

    def _records(self, raws: List[Any]) -> Result[List[Optional[T]]]:
        # record_factory is caller code; its failures must not escape as exceptions.
        try:
            return Ok([self._record(raw) for raw in raws])
        except Exception as exc:
            logger.warning("record_factory failed on %s entry: %s", self._resource, exc)
            return api_error(f"Failed to build record - {exc}")

    def _localized(self, params: Optional[ParamsLike], locale: Optional[str]) -> JSON:
        query = to_query_dict(params)
        wire_locale = self._locale_policy.query_locale(locale)
        if wire_locale is not None:
            query["locale"] = wire_locale
        return query

    def _entry_path(self, entry_id: EntryId) -> str:
        return f"{self._resource}/{entry_id}"

    def _single(self, result: Result[Any]) -> Result[Optional[T]]:
        if isinstance(result, Err):
            return result
        built = self._records([_envelope_data(result.data)])
        if isinstance(built, Err):
            return built
        return Ok(built.data[0])

    def _search(self, query: Mapping[str, Any]) -> Result[List[Any]]:
        result = self._http.request("GET", with_query(self._resource, query))
        if isinstance(result, Err):
            return result
        return Ok(list(_envelope_data(result.data) or []))

    # ── Core endpoints ──────────────────────────────────────────

    def find_many(
        self,
        params: Optional[ParamsLike] = None,
        locale: Optional[str] = None,
    ) -> Result[List[T]]:
        """
        List entries matching `params`.

        An empty or null `data` array is returned as [] (no matches is not an
        error). `locale` is sent only when it differs from the default locale.
        """
        result = self._search(self._localized(params, locale))
        if isinstance(result, Err):
            return result
        return self._records(result.data)

    def find_page(
        self,
        params: Optional[ParamsLike] = None,
        locale: Optional[str] = None,
    ) -> Result[Page[T]]:
        """
        Like `find_many`, but keeps `meta.pagination` from the response.
        """
        query = self._localized(params, locale)
        result = self._http.request("GET", with_query(self._resource, query))
        if isinstance(result, Err):
            return result

        body = result.data if isinstance(result.data, Mapping) else {}
        meta = body.get("meta") or {}
        pagination_raw = meta.get("pagination") if isinstance(meta, Mapping) else None
        try:
            pagination = (
                PaginationMeta.from_dict(pagination_raw)
                if isinstance(pagination_raw, Mapping)
                else None
            )
        except (TypeError, ValueError) as exc:
            return api_error(f"Failed to parse pagination - {exc}")

        entries = self._records(list(body.get("data") or []))
        if isinstance(entries, Err):
            return entries
        return Ok(Page(data=entries.data, pagination=pagination))

    def find(
        self,
        *,
        id: Optional[EntryId] = None,
        params: Optional[ParamsLike] = None,
        locale: Optional[str] = None,
    ) -> Result[Optional[T]]:
        """
        Retrieve one entry.

        With `id`: GET /{resource}/{id}. Without: the first entry of
        `find_many(params, locale)`, or None when nothing matches.
        """
        if id is None:
            result = self.find_many(params, locale)
            if isinstance(result, Err):
                return result
            return Ok(result.data[0] if result.data else None)

        path = with_query(self._entry_path(id), self._localized(params, locale))
        return self._single(self._http.request("GET", path))

    def create(
        self,
        *,
        payload: Mapping[str, Any],
        params: Optional[ParamsLike] = None,
        locale: Optional[str] = None,
        filters: Optional[Filters] = None,
    ) -> Result[Optional[T]]:
        """
        Create an entry.

        In the default locale this is a single POST. In any other locale the
        entry is attached to a base entry in the default locale, which is
        looked up with `filters` and created from `payload` when missing.
        """
        policy = self._locale_policy
        if policy.is_default(locale):
            path = with_query(self._resource, params)
            return self._single(self._http.request("POST", path, json=payload))

        search = to_query_dict(params)
        if filters:
            search["filters"] = filters
        if policy.search_in_requested_locale:
            search["locale"] = locale

        found = self._search(search)
        if isinstance(found, Err):
            return found

        document_id = next(
            (doc for doc in map(_document_id, found.data) if doc is not None),
            None,
        )

        if document_id is None:
            logger.debug(
                "No base entry in %s for locale %s, creating one in %s",
                self._resource, locale, policy.default_locale,
            )
            created = self._http.request("POST", with_query(self._resource, params), json=payload)
            if isinstance(created, Err):
                return created
            document_id = _document_id(_envelope_data(created.data))
            if document_id is None:
                return api_error("Created entry has no documentId")

        localized = to_query_dict(params)
        localized["locale"] = locale
        logger.debug("Attaching %s locale to %s/%s", locale, self._resource, document_id)
        path = with_query(self._entry_path(document_id), localized)
        return self._single(self._http.request(policy.attach_method, path, json=payload))

    def update(
        self,
        *,
        id: EntryId,
        payload: Mapping[str, Any],
        params: Optional[ParamsLike] = None,
        locale: Optional[str] = None,
    ) -> Result[Optional[T]]:
        """
        Update an entry by id (a `documentId` on Strapi v5).
        """
        path = with_query(self._entry_path(id), self._localized(params, locale))
        return self._single(self._http.request("PUT", path, json=payload))

    def delete(
        self,
        *,
        id: EntryId,
        locale: Optional[str] = None,
    ) -> Result[Optional[T]]:
        """
        Delete an entry.

        Returns the deleted entry when the server echoes it, otherwise None.
        An empty or non-JSON body counts as success.
        """
        query: JSON = {}
        if self._locale_policy.delete_honors_locale:
            query = self._localized(None, locale)
        path = with_query(self._entry_path(id), query)
        return self._single(self._http.request("DELETE", path))

    def upsert(
        self,
        *,
        payload: Mapping[str, Any],
        filters: Optional[Filters] = None,
        params: Optional[ParamsLike] = None,
        locale: Optional[str] = None,
    ) -> Result[Optional[T]]:
        """
        Update the first entry matching `filters`, or create one.

        The match is updated through its `documentId`; if it has none, its
        plain `id` is used unless the locale policy disables that fallback.
        Not atomic: a concurrent writer can create a duplicate between the
        search and the write.
        """
        search = to_query_dict(params)
        if filters:
            search["filters"] = filters
        search["pagination"] = {"pageSize": 1}

        found = self._search(self._localized(search, locale))
        if isinstance(found, Err):
            return found

        if not found.data:
            return self.create(payload=payload, params=params, filters=filters, locale=locale)

        match = found.data[0]
        target: Optional[EntryId] = _document_id(match)
        if target is None:
            if not self._locale_policy.upsert_id_fallback:
                return api_error("Matched entry has no documentId")
            target = match.get("id") if isinstance(match, Mapping) else None
            if target is None:
                return api_error("Matched entry has no documentId or id")
            logger.debug("Upserting %s by plain id %s", self._resource, target)

        return self.update(id=target, payload=payload, params=params, locale=locale)


__all__ = [
    "Page",
    "CollectionMixin",
]
