"""
Authentication
==============

Helpers for configuring the base URL and credentials of a Strapi client.

Strapi's REST API rules:

- Every content endpoint lives under `<host>/api`.
- API tokens are sent as an HTTP Bearer token:
      Authorization: Bearer STRAPI_TOKEN
- Public collections can be read without a token.

This module provides:

- ClientConfig: typed configuration for the base URL and token
- ClientConfig.from_env(): convenience loader for server-side usage
- normalize_base_url(): canonical `<host>/api` form of a base URL
- build_headers(): default headers for every request
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
import os

# Environment variable names (convention; you can change if desired).
ENV_BASE_URL = "STRAPI_URL"
ENV_TOKEN = "STRAPI_TOKEN"

API_PATH = "/api"

class MissingBaseURLError(RuntimeError):
    """Raised when no base URL can be found in the environment."""

@dataclass(frozen=True)
class ClientConfig:
    """
    Connection context for a Strapi client.

    Attributes:
        base_url:
            Strapi host, with or without the trailing `/api` segment.
        token:
            Optional API token. Without it only public permissions apply.
    """

    base_url: str
    token: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Load connection info from environment variables.

        Required:
            - STRAPI_URL

        Optional:
            - STRAPI_TOKEN

        Raises:
            MissingBaseURLError: if STRAPI_URL is not set.
        """
        base_url = os.getenv(ENV_BASE_URL)
        if not base_url:
            raise MissingBaseURLError(
                f"Missing base URL: set {ENV_BASE_URL} in your environment."
            )

        token = os.getenv(ENV_TOKEN) or None

        return cls(base_url=base_url, token=token)

def normalize_base_url(base_url: str) -> str:
    """
    Strip trailing slashes and make sure the URL ends with `/api`.

    Examples:
        "http://h"      -> "http://h/api"
        "http://h///"   -> "http://h/api"
        "http://h/api/" -> "http://h/api"
    """
    url = base_url.rstrip("/")
    if not url.endswith(API_PATH):
        url += API_PATH
    return url

def build_headers(token: Optional[str] = None) -> Dict[str, str]:
    """
    Build the default HTTP headers for a request.

    Returns a dict containing:
        - Content-Type: application/json
        - Authorization: Bearer <token>   (if provided)
    """
    headers: Dict[str, str] = {
        "Content-Type": "application/json",
    }

    if token:
        headers["Authorization"] = f"Bearer {token}"

    return headers

__all__ = [
    "ClientConfig",
    "MissingBaseURLError",
    "normalize_base_url",
    "build_headers",
    "ENV_BASE_URL",
    "ENV_TOKEN",
    "API_PATH",
]
