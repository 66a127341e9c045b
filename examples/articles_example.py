"""
Example showing how to wire StrapiClient for an `articles` collection.

This is a small, non-running example (placeholder base_url and token).
Set STRAPI_URL / STRAPI_TOKEN to point it at a real instance.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from strapi_client.api.core.authentication import MissingBaseURLError
from strapi_client.api.query import Pagination, QueryParams
from strapi_client.client import StrapiClient


@dataclass(frozen=True)
class Article:
    id: int
    document_id: Optional[str]
    title: str

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Article":
        return cls(id=int(d["id"]), document_id=d.get("documentId"), title=d.get("title", ""))


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    try:
        client = StrapiClient.from_env("articles", record_factory=Article.from_dict)
    except MissingBaseURLError:
        client = StrapiClient(
            "http://localhost:1337",
            "articles",
            token="YOUR_API_TOKEN",
            record_factory=Article.from_dict,
        )

    with client:
        params = QueryParams(
            filters={"title": {"$containsi": "hello"}},
            sort=["publishedAt:desc"],
            pagination=Pagination(page=1, page_size=10),
        )
        err, articles = client.find_many(params)
        if err:
            print("Request failed:", err.message, err.status)
        else:
            for article in articles:
                print(article.id, article.title)

        err, article = client.upsert(
            payload={"data": {"title": "Bonjour"}},
            filters={"title": {"$eq": "Hello"}},
            locale="fr",
        )
        print("Upsert:", err or article)
