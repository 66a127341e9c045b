"""
Locale Policy
=============

Strapi keeps one entry per locale, linked together by a shared `documentId`.
Entries in the default locale are the "base"; every other locale is attached
to a base through `/{resource}/{documentId}?locale=<tag>`.

Deployments disagree on a few details of that workflow, so the client takes
them as an explicit policy instead of hard-coding one:

- default_locale:
    The tag that is never sent as `locale=` (Strapi's default is "en").
- search_in_requested_locale:
    When creating in a non-default locale, look for the base entry in the
    requested locale instead of the default one.
- attach_method:
    HTTP verb used to write the localized variant ("POST" or "PUT").
- delete_honors_locale:
    Send `locale=` on DELETE for non-default locales.
- upsert_id_fallback:
    Let upsert update a matched entry by its plain `id` when it carries no
    `documentId`. Plain ids are not valid cross-locale links, so disable this
    to have upsert fail instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_LOCALE = "en"

ATTACH_METHODS = ("POST", "PUT")


@dataclass(frozen=True)
class LocalePolicy:
    default_locale: str = DEFAULT_LOCALE
    search_in_requested_locale: bool = False
    attach_method: str = "POST"
    delete_honors_locale: bool = True
    upsert_id_fallback: bool = True

    def __post_init__(self) -> None:
        method = self.attach_method.upper()
        if method not in ATTACH_METHODS:
            raise ValueError(
                f"attach_method must be one of {ATTACH_METHODS}, got {self.attach_method!r}"
            )
        object.__setattr__(self, "attach_method", method)

    def is_default(self, locale: Optional[str]) -> bool:
        """True when `locale` is absent or equal to the default tag."""
        return not locale or locale == self.default_locale

    def query_locale(self, locale: Optional[str]) -> Optional[str]:
        """The locale to put on the wire, or None for the default locale."""
        if self.is_default(locale):
            return None
        return locale


__all__ = [
    "DEFAULT_LOCALE",
    "ATTACH_METHODS",
    "LocalePolicy",
]
