"""
Query Parameters
================

Typed view of Strapi's REST query parameters and the encoder that turns
them into a query string.

Strapi reads nested parameters in bracket notation with array indices:

    filters[title][$containsi]=news
    filters[$or][0][views][$gt]=10
    populate[0]=author&populate[1]=cover
    sort[0]=publishedAt:desc
    pagination[page]=2&pagination[pageSize]=25
    locale=fr
    publicationState=preview

`QueryParams` field names are snake_case and are converted to Strapi's wire
names by `to_query_dict`. Plain mappings are accepted everywhere and passed
through as-is, so callers can also write the wire form directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Tuple, Union

import httpx

JSON = Dict[str, Any]

Operator = Literal[
    "$eq", "$eqi", "$ne", "$nei",
    "$lt", "$lte", "$gt", "$gte",
    "$in", "$notIn",
    "$contains", "$notContains", "$containsi", "$notContainsi",
    "$null", "$notNull", "$between",
    "$startsWith", "$startsWithi", "$endsWith", "$endsWithi",
    "$or", "$and", "$not",
]

# field -> value | {operator: value}; logical combinators nest further filters.
Filters = Mapping[str, Any]

# "*", ["author", "cover"], or {"author": {"populate": "*"}}
Populate = Union[str, Sequence[str], Mapping[str, Any]]

SortDirection = Literal["asc", "desc"]
PublicationState = Literal["live", "preview", "draft"]


# ───────────────────────────────────────────────────────────────
# Dataclasses
# ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Pagination:
    """Page-based pagination controls."""

    page: Optional[int] = None
    page_size: Optional[int] = None
    page_count: Optional[int] = None
    with_count: Optional[bool] = None

    def to_dict(self) -> JSON:
        out: JSON = {}
        if self.page is not None:
            out["page"] = self.page
        if self.page_size is not None:
            out["pageSize"] = self.page_size
        if self.page_count is not None:
            out["pageCount"] = self.page_count
        if self.with_count is not None:
            out["withCount"] = self.with_count
        return out


@dataclass(frozen=True)
class PaginationMeta:
    """`meta.pagination` of a collection response."""

    page: int
    page_size: int
    page_count: int
    total: int
    raw: JSON = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "PaginationMeta":
        return cls(
            page=int(d.get("page", 1)),
            page_size=int(d.get("pageSize", 0)),
            page_count=int(d.get("pageCount", 0)),
            total=int(d.get("total", 0)),
            raw=dict(d),
        )


@dataclass(frozen=True)
class QueryParams:
    """
    Query parameters for collection and single-entry requests.

    All fields are optional; unset fields are left out of the query string.
    """

    filters: Optional[Filters] = None
    populate: Optional[Populate] = None
    fields: Optional[Sequence[str]] = None
    sort: Optional[Sequence[str]] = None
    pagination: Optional[Union[Pagination, Mapping[str, Any]]] = None
    locale: Optional[str] = None
    publication_state: Optional[PublicationState] = None

    def to_dict(self) -> JSON:
        out: JSON = {}
        if self.filters is not None:
            out["filters"] = self.filters
        if self.populate is not None:
            out["populate"] = self.populate
        if self.fields is not None:
            out["fields"] = list(self.fields)
        if self.sort is not None:
            out["sort"] = list(self.sort)
        if self.pagination is not None:
            if isinstance(self.pagination, Pagination):
                out["pagination"] = self.pagination.to_dict()
            else:
                out["pagination"] = dict(self.pagination)
        if self.locale is not None:
            out["locale"] = self.locale
        if self.publication_state is not None:
            out["publicationState"] = self.publication_state
        return out


ParamsLike = Union[QueryParams, Mapping[str, Any]]


# ───────────────────────────────────────────────────────────────
# Encoding
# ───────────────────────────────────────────────────────────────

def to_query_dict(params: Optional[ParamsLike]) -> JSON:
    """Wire-form dict for `params` (a fresh dict the caller may mutate)."""
    if params is None:
        return {}
    if isinstance(params, QueryParams):
        return params.to_dict()
    return dict(params)


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(prefix: str, value: Any, out: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Pagination):
        value = value.to_dict()
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]" if prefix else str(key), item, out)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, out)
    else:
        out.append((prefix, _scalar(value)))


def flatten_params(params: Optional[ParamsLike]) -> List[Tuple[str, str]]:
    """
    Flatten nested params into (key, value) pairs in bracket notation.

        {"populate": ["a", "b"]} -> [("populate[0]", "a"), ("populate[1]", "b")]
    """
    pairs: List[Tuple[str, str]] = []
    _flatten("", to_query_dict(params), pairs)
    return pairs


def build_query_string(params: Optional[ParamsLike]) -> str:
    """
    Percent-encoded query string for `params`, without the leading "?".

    Returns "" for None or empty params.
    """
    pairs = flatten_params(params)
    if not pairs:
        return ""
    return str(httpx.QueryParams(pairs))


def with_query(path: str, params: Optional[ParamsLike]) -> str:
    """Append `?<query>` to `path` when there is anything to encode."""
    query = build_query_string(params)
    return f"{path}?{query}" if query else path


__all__ = [
    "Operator",
    "Filters",
    "Populate",
    "SortDirection",
    "PublicationState",
    "Pagination",
    "PaginationMeta",
    "QueryParams",
    "ParamsLike",
    "to_query_dict",
    "flatten_params",
    "build_query_string",
    "with_query",
]
